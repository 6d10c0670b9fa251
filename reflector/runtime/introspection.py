# reflector/runtime/introspection.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Native introspection backing the dynamic reflector.

Scanning a type is the expensive step; results are stored in process-wide
DescriptorCache instances keyed by type so each type is scanned once.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Final, Iterable, List, Mapping, Tuple, get_origin, get_type_hints

from reflector.core.annotations import type_annotations
from reflector.core.descriptors import (
    AttributeArgumentDescriptor,
    AttributeDescriptor,
    PropertyDescriptor,
    canonical_key,
)
from reflector.runtime.cache import DescriptorCache

logger = logging.getLogger(__name__)

# well-known accessor of precomputed reflectors; never reflected as a property
ACCESSOR_NAME = "reflector"


@dataclass(frozen=True)
class TypeMetadata:
    """Scan result for one concrete type."""

    properties: Tuple[PropertyDescriptor, ...]
    index: Mapping[str, PropertyDescriptor]


property_cache: DescriptorCache[TypeMetadata] = DescriptorCache("property")
attribute_cache: DescriptorCache[Tuple[AttributeDescriptor, ...]] = DescriptorCache("attribute")


def build_index(properties: Iterable[PropertyDescriptor]) -> Dict[str, PropertyDescriptor]:
    """Map canonical keys to descriptors; the first declared name wins on collisions."""
    index: Dict[str, PropertyDescriptor] = {}
    for descriptor in properties:
        index.setdefault(descriptor.key, descriptor)
    return index


def _class_hints(cls: type) -> Dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError) as e:
        logger.debug(f"Falling back to raw annotations for {cls.__qualname__}: {e}")
        hints: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(inspect.get_annotations(klass))
        return hints


def _return_hint(func: Any) -> Any:
    try:
        return get_type_hints(func).get("return", Any)
    except (NameError, TypeError):
        return inspect.get_annotations(func).get("return", Any)


def _is_classvar(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar or isinstance(hint, dataclasses.InitVar)


def _is_final(hint: Any) -> bool:
    return hint is Final or get_origin(hint) is Final


def _slot_names(klass: type) -> Tuple[str, ...]:
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(slots)


def scan_type(cls: type) -> TypeMetadata:
    """
    Collect one descriptor per public readable member of ``cls``.

    Order: dataclass or NamedTuple fields, then annotations, slots and
    properties of each class in the MRO from the base down. A later definition
    of the same name replaces the descriptor but keeps its position.
    """
    hints = _class_hints(cls)
    found: Dict[str, PropertyDescriptor] = {}

    def add(name: str, hint: Any, has_setter: bool) -> None:
        if not name.startswith("_") and name != ACCESSOR_NAME:
            found[name] = PropertyDescriptor(name, hint, has_setter)

    is_named_tuple = issubclass(cls, tuple) and hasattr(cls, "_fields")
    read_only = is_named_tuple
    if dataclasses.is_dataclass(cls):
        read_only = cls.__dataclass_params__.frozen
        for f in dataclasses.fields(cls):
            add(f.name, hints.get(f.name, Any), not read_only and not _is_final(hints.get(f.name)))
    elif is_named_tuple:
        for name in cls._fields:
            add(name, hints.get(name, Any), False)

    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, raw in inspect.get_annotations(klass).items():
            if name in found:
                continue
            hint = hints.get(name, raw)
            if _is_classvar(hint):
                continue
            add(name, hint, not read_only and not _is_final(hint))
        for name in _slot_names(klass):
            if name not in found:
                add(name, hints.get(name, Any), True)
        for name, member in vars(klass).items():
            if isinstance(member, property) and member.fget is not None:
                add(name, _return_hint(member.fget), member.fset is not None)

    properties = tuple(found.values())
    logger.debug(f"Scanned {cls.__qualname__}: {[p.name for p in properties]}")
    return TypeMetadata(properties, build_index(properties))


def type_metadata(cls: type) -> TypeMetadata:
    """Cached scan_type."""
    return property_cache.get_or_add(cls, scan_type)


def scan_instance(obj: Any, metadata: TypeMetadata) -> Tuple[PropertyDescriptor, ...]:
    """
    Descriptors for public instance attributes the type itself does not declare.

    Such attributes have no declared type, so they are typed ``Any``.
    """
    try:
        members = vars(obj)
    except TypeError:
        return ()
    return tuple(
        PropertyDescriptor(name, Any, True)
        for name in members
        if not name.startswith("_") and name != ACCESSOR_NAME and canonical_key(name) not in metadata.index
    )


def _read_member(instance: Any, members: Mapping[str, PropertyDescriptor], name: str) -> Any:
    """Read the member matching ``name`` case-insensitively; None when there is none."""
    match = members.get(canonical_key(name))
    if match is None:
        return None
    return getattr(instance, match.name)


def _constructor_parameters(cls: type) -> List[Tuple[inspect.Parameter, Any]]:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return []
    try:
        hints = get_type_hints(cls.__init__)
    except (NameError, TypeError, AttributeError):
        hints = {}
    return [
        (param, hints.get(param.name, Any))
        for param in signature.parameters.values()
        if param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


def describe_annotation(annotation: Any) -> AttributeDescriptor:
    """
    Rebuild the arguments an annotation was created with.

    Constructor parameters become positional arguments, valued from the member
    of the same name. Remaining public writable members become named arguments.
    A member that cannot be read is recorded with a None value.
    """
    annotation_type = type(annotation)
    metadata = type_metadata(annotation_type)
    members = build_index(metadata.properties + scan_instance(annotation, metadata))
    arguments: List[AttributeArgumentDescriptor] = []

    for param, hint in _constructor_parameters(annotation_type):
        has_default = param.default is not inspect.Parameter.empty
        try:
            value = _read_member(annotation, members, param.name)
        except Exception as e:
            logger.debug(f"Could not read argument '{param.name}' of {annotation_type.__qualname__}: {e}")
            value = None
        arguments.append(
            AttributeArgumentDescriptor(
                type=hint,
                name=param.name,
                value=value,
                is_optional=has_default,
                default_value=param.default if has_default else None,
            )
        )

    taken = {canonical_key(argument.name) for argument in arguments}
    for descriptor in members.values():
        if not descriptor.has_setter or descriptor.key in taken:
            continue
        try:
            value = getattr(annotation, descriptor.name)
        except Exception as e:
            logger.debug(f"Could not read named argument '{descriptor.name}' of {annotation_type.__qualname__}: {e}")
            value = None
        arguments.append(AttributeArgumentDescriptor(descriptor.type, descriptor.name, value, True, None))

    return AttributeDescriptor(annotation_type, tuple(arguments))


def scan_attributes(cls: type) -> Tuple[AttributeDescriptor, ...]:
    return tuple(describe_annotation(annotation) for annotation in type_annotations(cls))


def type_attributes(cls: type) -> Tuple[AttributeDescriptor, ...]:
    """Cached scan_attributes."""
    return attribute_cache.get_or_add(cls, scan_attributes)
