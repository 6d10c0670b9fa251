# reflector/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Type rules shared by every reflector implementation and the codec.

Declared property types are classes or ``typing`` hints. Checks are shallow:
``List[int]`` accepts any ``list``; element types are only used by the codec.
"""

import types
from typing import (
    Annotated,
    Any,
    ClassVar,
    Final,
    Iterable,
    Literal,
    Optional,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from reflector.core.descriptors import PropertyDescriptor, canonical_key

NoneType = type(None)

# PEP 484 numeric tower: an int is acceptable where a float is declared, etc.
_NUMERIC_WIDENING = {
    float: (int,),
    complex: (int, float),
}

# bool subclasses int, but a flag is never accepted where a number is declared
_NUMBERS = (int, float, complex)

_ZERO_VALUES = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
}


def is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def strip_qualifiers(hint: Any) -> Any:
    """Unwrap Annotated/ClassVar/Final/NewType to the underlying hint."""
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            hint = get_args(hint)[0]
        elif origin in (ClassVar, Final):
            args = get_args(hint)
            hint = args[0] if args else Any
        elif hint in (ClassVar, Final):
            return Any
        elif hasattr(hint, "__supertype__"):
            hint = hint.__supertype__
        else:
            return hint


def is_any(hint: Any) -> bool:
    hint = strip_qualifiers(hint)
    return hint is Any or hint is object


def accepts_none(hint: Any) -> bool:
    """Return True if None is a valid value for the hint."""
    hint = strip_qualifiers(hint)
    if hint is Any or hint is object or hint is None or hint is NoneType:
        return True
    origin = get_origin(hint)
    if is_union(origin):
        return any(accepts_none(arg) for arg in get_args(hint))
    if origin is Literal:
        return None in get_args(hint)
    if isinstance(hint, TypeVar):
        return hint.__bound__ is None and not hint.__constraints__
    return False


def non_none_members(hint: Any) -> Iterable[Any]:
    """Members of a union hint other than NoneType (the hint itself otherwise)."""
    hint = strip_qualifiers(hint)
    if is_union(get_origin(hint)):
        return tuple(arg for arg in get_args(hint) if arg is not NoneType)
    return (hint,)


def is_instance_of(value: Any, hint: Any) -> bool:
    """
    Return True if ``value`` may be stored in a property declared as ``hint``.

    Follows isinstance semantics, including subclass-to-base assignment and the
    numeric widening rules, except that bool values never satisfy int, float or
    complex. Hints that cannot be checked at runtime (string forward
    references, non-runtime protocols) accept any value.
    """
    hint = strip_qualifiers(hint)
    if hint is Any or hint is object:
        return True
    if value is None:
        return accepts_none(hint)
    if hint is None or hint is NoneType:
        return False

    origin = get_origin(hint)
    if is_union(origin):
        return any(is_instance_of(value, arg) for arg in get_args(hint))
    if origin is Literal:
        return value in get_args(hint)
    if origin is not None:
        hint = origin

    if isinstance(hint, TypeVar):
        if hint.__bound__ is not None:
            return is_instance_of(value, hint.__bound__)
        if hint.__constraints__:
            return any(is_instance_of(value, c) for c in hint.__constraints__)
        return True

    if not isinstance(hint, type):
        return True

    if isinstance(value, bool) and hint in _NUMBERS:
        return False
    try:
        if isinstance(value, hint):
            return True
    except TypeError:
        # non-runtime-checkable protocol
        return True
    return isinstance(value, _NUMERIC_WIDENING.get(hint, ()))


def is_type_assignable(source: Any, hint: Any) -> bool:
    """
    Return True if values of type ``source`` may be stored in a property
    declared as ``hint``.
    """
    hint = strip_qualifiers(hint)
    source = strip_qualifiers(source)
    if hint is Any or hint is object:
        return True
    if source is None or source is NoneType:
        return accepts_none(hint)

    source_origin = get_origin(source)
    if is_union(source_origin):
        return all(is_type_assignable(arg, hint) for arg in get_args(source))
    if source_origin is not None:
        source = source_origin

    origin = get_origin(hint)
    if is_union(origin):
        return any(is_type_assignable(source, arg) for arg in get_args(hint))
    if origin is Literal:
        return False
    if origin is not None:
        hint = origin

    if isinstance(hint, TypeVar):
        if hint.__bound__ is not None:
            return is_type_assignable(source, hint.__bound__)
        return True

    if not isinstance(hint, type) or not isinstance(source, type):
        return source is hint
    if issubclass(source, bool) and hint in _NUMBERS:
        return False
    try:
        if issubclass(source, hint):
            return True
    except TypeError:
        return True
    return any(issubclass(source, widened) for widened in _NUMERIC_WIDENING.get(hint, ()))


def is_exact_type(value: Any, hint: Any) -> bool:
    """Return True if the runtime type of ``value`` is exactly ``hint``."""
    hint = strip_qualifiers(hint)
    target = get_origin(hint) or hint
    return isinstance(target, type) and type(value) is target


def coerce_value(value: Any, hint: Any) -> Any:
    """
    Apply implicit numeric widening: an int stored into a float property becomes
    a float. Any other value is returned unchanged.
    """
    if value is None or isinstance(value, bool):
        return value
    members = tuple(non_none_members(hint))
    if len(members) != 1:
        return value
    target = members[0]
    if target in _NUMERIC_WIDENING and not isinstance(value, target):
        if isinstance(value, _NUMERIC_WIDENING[target]):
            return target(value)
    return value


def default_value(hint: Any) -> Any:
    """Zero value for the hint: 0, 0.0, False, 0j, or None for everything else."""
    hint = strip_qualifiers(hint)
    if accepts_none(hint):
        return None
    return _ZERO_VALUES.get(hint)


def type_name(hint: Any) -> str:
    hint = strip_qualifiers(hint)
    if isinstance(hint, type) and get_origin(hint) is None:
        return hint.__name__
    return repr(hint).replace("typing.", "")


def find_descriptor(properties: Iterable[PropertyDescriptor], key: Any) -> Optional[PropertyDescriptor]:
    """Linear case-insensitive lookup of a descriptor by name."""
    if not isinstance(key, str):
        return None
    wanted = canonical_key(key)
    for descriptor in properties:
        if descriptor.key == wanted:
            return descriptor
    return None
