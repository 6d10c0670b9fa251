# reflector/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Protocol, Tuple, runtime_checkable

from reflector.core.descriptors import AttributeDescriptor, PropertyDescriptor
from reflector.interfaces.types import TokenType, TypeHint


@runtime_checkable
class ReflectorClass(Protocol):
    """
    Capability contract satisfied by every reflector, whatever backs it.

    Methods:
        get_value(key): Current value of a property, resolved case-insensitively.
        set_value(key, value): Assign a property, resolved case-insensitively.
        get_value_as(key, type_): Value if it is a ``type_``, else the zero value.
        set_value_as(key, value, type_): Typed form of set_value.

    Runtime Invariants:
    - ``reflected_object`` is the wrapped instance itself, never a copy.
    - ``properties`` is stable for a concrete type and deterministic in order.
    - ``attributes`` is computed lazily, cached, and empty rather than None.

    Error Handling:
    - UnknownPropertyError when a key matches no descriptor.
    - ReadOnlyPropertyError when assigning a descriptor without a setter.
    - TypeMismatchError when a non-None value is not assignable.
    """

    @property
    def reflected_object(self) -> Any: ...

    @property
    def properties(self) -> Tuple[PropertyDescriptor, ...]: ...

    @property
    def attributes(self) -> Tuple[AttributeDescriptor, ...]: ...

    def get_value(self, key: str) -> Any: ...

    def set_value(self, key: str, value: Any) -> None: ...

    def get_value_as(self, key: str, type_: TypeHint) -> Any: ...

    def set_value_as(self, key: str, value: Any, type_: TypeHint) -> None: ...

    def __getitem__(self, key: str) -> Any: ...

    def __setitem__(self, key: str, value: Any) -> None: ...


@runtime_checkable
class HasReflector(Protocol):
    """
    Objects carrying a precomputed reflector through the well-known accessor.

    The accessor creates the reflector lazily and returns the same instance on
    every subsequent request.
    """

    @property
    def reflector(self) -> ReflectorClass: ...


@runtime_checkable
class StructuredReader(Protocol):
    """
    Forward-only token reader driven by the codec.

    Runtime Invariants:
    - ``token_type`` is TokenType.NONE before the first read and at end of input.
    - ``skip`` leaves the reader on the last token of the current value.
    """

    @property
    def token_type(self) -> TokenType: ...

    def read(self) -> bool: ...

    def get_value(self) -> Any: ...

    def skip(self) -> None: ...


@runtime_checkable
class StructuredWriter(Protocol):
    """Token writer driven by the codec."""

    def write_start_object(self) -> None: ...

    def write_end_object(self) -> None: ...

    def write_start_array(self) -> None: ...

    def write_end_array(self) -> None: ...

    def write_property_name(self, name: str) -> None: ...

    def write_value(self, value: Any) -> None: ...

    def write_null(self) -> None: ...
