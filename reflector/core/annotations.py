# reflector/core/annotations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Declarative annotations attached to classes.

An annotation is any object; reflectors rebuild its arguments from its
constructor signature and public members::

    @annotate(Obsolete("use NewThing"), Table(name="things"))
    class Thing: ...
"""

from typing import Any, Callable, Tuple, TypeVar

ATTRIBUTES_SLOT = "__reflector_attributes__"

C = TypeVar("C", bound=type)


def annotate(*annotations: Any) -> Callable[[C], C]:
    """
    Class decorator attaching annotation instances to the decorated class.

    Stacked decorators keep top-to-bottom declaration order.
    """

    def decorator(cls: C) -> C:
        own = cls.__dict__.get(ATTRIBUTES_SLOT, ())
        setattr(cls, ATTRIBUTES_SLOT, tuple(annotations) + tuple(own))
        return cls

    return decorator


def type_annotations(cls: type) -> Tuple[Any, ...]:
    """Annotations declared on ``cls`` followed by those inherited from its bases."""
    collected = []
    for klass in cls.__mro__:
        collected.extend(klass.__dict__.get(ATTRIBUTES_SLOT, ()))
    return tuple(collected)
