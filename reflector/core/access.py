# reflector/core/access.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Non-throwing helpers over any ReflectorClass.

The strict contract raises UnknownPropertyError, ReadOnlyPropertyError and
TypeMismatchError; these helpers report the same conditions as booleans and
found-flags instead.

Example:
    reflector = get_reflector(person, fallback_to_dynamic=True)
    if try_set_value(reflector, "age", 31):
        ...
"""

from typing import Any, Dict, Mapping, Optional, Tuple

from reflector.core.descriptors import PropertyDescriptor
from reflector.core.errors import ReflectorError
from reflector.core.validations import default_value, find_descriptor, is_exact_type, is_instance_of, is_type_assignable
from reflector.interfaces.protocols import HasReflector, ReflectorClass
from reflector.runtime.dynamic import DynamicReflector


def get_reflector(obj: Any, fallback_to_dynamic: bool = False) -> Optional[ReflectorClass]:
    """
    Return the object's own reflector if it has one, otherwise a DynamicReflector
    when ``fallback_to_dynamic`` is set, otherwise None.
    """
    if obj is None:
        return None
    if isinstance(obj, HasReflector):
        reflector = obj.reflector
        if isinstance(reflector, ReflectorClass):
            return reflector
    if fallback_to_dynamic:
        return DynamicReflector(obj)
    return None


def try_get_property_info(reflector: ReflectorClass, key: str) -> Optional[PropertyDescriptor]:
    """Descriptor matching ``key`` case-insensitively, or None."""
    return find_descriptor(reflector.properties, key)


def has_property(reflector: ReflectorClass, key: str) -> bool:
    """Case-insensitive existence check. Empty or blank keys are never found."""
    if not isinstance(key, str) or not key.strip():
        return False
    return try_get_property_info(reflector, key) is not None


def try_get_value(reflector: ReflectorClass, key: str) -> Tuple[Any, bool]:
    """Return ``(value, True)``, or ``(None, False)`` when there is no such property."""
    if not has_property(reflector, key):
        return None, False
    return reflector.get_value(key), True


def try_get_value_as(reflector: ReflectorClass, key: str, type_: Any) -> Tuple[Any, bool]:
    """
    Return ``(value, True)`` only when the value's runtime type is exactly
    ``type_``; subclasses and numeric widening do not count here, unlike
    try_set_value. Otherwise ``(zero value of type_, False)``.
    """
    if has_property(reflector, key):
        value = reflector.get_value(key)
        if is_exact_type(value, type_):
            return value, True
    return default_value(type_), False


def try_set_value(reflector: ReflectorClass, key: str, value: Any) -> bool:
    """
    Assign ``value`` if the property exists, has a setter and accepts the
    value's runtime type. Returns False without side effects otherwise.
    """
    descriptor = try_get_property_info(reflector, key)
    if descriptor is None or not descriptor.has_setter:
        return False
    if not is_instance_of(value, descriptor.type):
        return False
    try:
        reflector.set_value(descriptor.name, value)
    except ReflectorError:
        return False
    return True


def try_set_value_as(reflector: ReflectorClass, key: str, value: Any, type_: Any) -> bool:
    """
    Assign ``value`` declared as ``type_`` if the property exists, has a setter
    and ``type_`` is assignable to the declared property type.
    """
    descriptor = try_get_property_info(reflector, key)
    if descriptor is None or not descriptor.has_setter:
        return False
    if not is_type_assignable(type_, descriptor.type):
        return False
    try:
        reflector.set_value_as(descriptor.name, value, type_)
    except ReflectorError:
        return False
    return True


def to_dict(reflector: ReflectorClass) -> Dict[str, Any]:
    """
    Shallow snapshot of every non-None property value, in descriptor order.
    Nested objects are included as they are, not expanded.
    """
    snapshot: Dict[str, Any] = {}
    for descriptor in reflector.properties:
        value = reflector.get_value(descriptor.name)
        if value is not None:
            snapshot[descriptor.name] = value
    return snapshot


def apply_dict(reflector: ReflectorClass, values: Mapping[str, Any]) -> None:
    """
    Set each entry that try_set_value accepts; unknown, read-only and
    mismatched entries are skipped.
    """
    for key, value in values.items():
        try_set_value(reflector, key, value)
