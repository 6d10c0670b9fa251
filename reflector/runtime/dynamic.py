# reflector/runtime/dynamic.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from reflector.core.descriptors import AttributeDescriptor, PropertyDescriptor, canonical_key
from reflector.core.errors import ReadOnlyPropertyError, TypeMismatchError, UnknownPropertyError
from reflector.core.validations import coerce_value, default_value, is_instance_of, type_name
from reflector.runtime.introspection import build_index, scan_instance, type_attributes, type_metadata


class DynamicReflector:
    """
    Reflector that needs no precomputed metadata.

    The wrapped object's type is scanned through native introspection once per
    type (shared, process-wide); public attributes set on the instance but not
    declared by its type are added per wrapper. Gets and sets go through the
    cached descriptors and plain getattr/setattr.
    """

    def __init__(self, obj: Any) -> None:
        if obj is None:
            raise ValueError("Cannot reflect None")
        self._obj = obj
        metadata = type_metadata(type(obj))
        extras = scan_instance(obj, metadata)
        if extras:
            self._properties: Tuple[PropertyDescriptor, ...] = metadata.properties + extras
            self._index: Dict[str, PropertyDescriptor] = build_index(self._properties)
        else:
            self._properties = metadata.properties
            self._index = metadata.index
        self._attributes: Optional[Tuple[AttributeDescriptor, ...]] = None

    @property
    def reflected_object(self) -> Any:
        return self._obj

    @property
    def properties(self) -> Tuple[PropertyDescriptor, ...]:
        return self._properties

    @property
    def attributes(self) -> Tuple[AttributeDescriptor, ...]:
        if self._attributes is None:
            self._attributes = type_attributes(type(self._obj))
        return self._attributes

    def _owner(self) -> str:
        return type(self._obj).__name__

    def _resolve(self, key: str) -> PropertyDescriptor:
        descriptor = self._index.get(canonical_key(key)) if isinstance(key, str) else None
        if descriptor is None:
            raise UnknownPropertyError(key, self._owner())
        return descriptor

    def get_value(self, key: str) -> Any:
        descriptor = self._resolve(key)
        return getattr(self._obj, descriptor.name)

    def set_value(self, key: str, value: Any) -> None:
        descriptor = self._resolve(key)
        if not descriptor.has_setter:
            raise ReadOnlyPropertyError(descriptor.name, self._owner())
        if value is not None and not is_instance_of(value, descriptor.type):
            raise TypeMismatchError(descriptor.name, type_name(descriptor.type), type(value).__name__, self._owner())
        try:
            setattr(self._obj, descriptor.name, coerce_value(value, descriptor.type))
        except AttributeError as e:
            # frozen instances and read-only slots refuse assignment
            raise ReadOnlyPropertyError(descriptor.name, self._owner()) from e

    def get_value_as(self, key: str, type_: Any) -> Any:
        value = self.get_value(key)
        if value is not None and is_instance_of(value, type_):
            return coerce_value(value, type_)
        return default_value(type_)

    def set_value_as(self, key: str, value: Any, type_: Any) -> None:
        if value is not None and not is_instance_of(value, type_):
            raise TypeMismatchError(key, type_name(type_), type(value).__name__, self._owner())
        self.set_value(key, value)

    def __getitem__(self, key: str) -> Any:
        return self.get_value(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set_value(key, value)

    def __repr__(self) -> str:
        return f"DynamicReflector({self._owner()}, properties={[p.name for p in self._properties]})"
