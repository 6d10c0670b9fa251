# reflector/core/descriptors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from dataclasses import dataclass
from typing import Any, Optional, Tuple


def canonical_key(name: str) -> str:
    """Return the lookup form of a property name."""
    return name.lower()


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    Metadata for one readable (and optionally writable) property.

    Runtime Invariants:
    - Created once per reflected type and never mutated.
    - ``name`` keeps its declared casing; lookups use ``key``.
    """

    name: str
    type: Any
    has_setter: bool

    @property
    def key(self) -> str:
        return canonical_key(self.name)

    def matches(self, key: str) -> bool:
        """Case-insensitive comparison against a requested key."""
        return self.key == canonical_key(key)


@dataclass(frozen=True)
class AttributeArgumentDescriptor:
    """
    One argument of an annotation attached to a reflected type.

    Positional (constructor) arguments are optional when the parameter declares
    a default; named arguments are always optional.
    """

    type: Any
    name: str
    value: Any = None
    is_optional: bool = False
    default_value: Any = None


@dataclass(frozen=True)
class AttributeDescriptor:
    """An annotation attached to a reflected type and its reconstructed arguments."""

    type: Any
    arguments: Tuple[AttributeArgumentDescriptor, ...] = ()

    def get_argument(self, name: str) -> Optional[AttributeArgumentDescriptor]:
        key = canonical_key(name)
        for argument in self.arguments:
            if canonical_key(argument.name) == key:
                return argument
        return None
