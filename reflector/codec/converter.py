# reflector/codec/converter.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Reflector-driven object codec.

Objects are written as one token object per instance, one entry per property
descriptor, and read back into a fresh zero-argument instance through the same
reflector contract. Which reflector backs an object is decided per instance by
CodecOptions.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from reflector.codec.naming import NAMING_POLICIES
from reflector.codec.options import CodecOptions
from reflector.codec.tokens import JsonTokenReader, JsonTokenWriter
from reflector.codec.values import is_collection_type, is_simple_type, read_value, write_value
from reflector.core.access import get_reflector, try_get_property_info
from reflector.core.descriptors import PropertyDescriptor, canonical_key
from reflector.core.errors import FormatError, NoReflectorAvailableError
from reflector.interfaces.protocols import ReflectorClass, StructuredReader, StructuredWriter
from reflector.interfaces.types import NamingPolicy, TokenType
from reflector.runtime.dynamic import DynamicReflector

logger = logging.getLogger(__name__)

T = TypeVar("T")


def find_property(
    reflector: ReflectorClass, key: str, naming_policy: Optional[NamingPolicy] = None
) -> Optional[PropertyDescriptor]:
    """
    Case-insensitive descriptor lookup.

    A key with no direct match is compared, case-insensitively, with each
    property name as rendered by ``naming_policy`` and by every registered
    policy, so ``is_active`` finds ``IsActive`` while ``na-me`` finds nothing.
    When several properties render to the same key, the first in declaration
    order wins.
    """
    descriptor = try_get_property_info(reflector, key)
    if descriptor is not None or not isinstance(key, str):
        return descriptor
    wanted = canonical_key(key)
    policies = list(NAMING_POLICIES.values())
    if naming_policy is not None:
        policies.insert(0, naming_policy)
    for candidate in reflector.properties:
        if any(canonical_key(policy(candidate.name)) == wanted for policy in policies):
            return candidate
    return None


class ReflectorCodec(Generic[T]):
    """
    Codec for a single target type.

    Example:
        codec = ReflectorCodec(Person)
        text = codec.dumps(person)
        copy = codec.loads(text)
    """

    def __init__(self, target_type: Type[T], options: Optional[CodecOptions] = None) -> None:
        self.target_type = target_type
        self.options = options or CodecOptions()
        self._nested: Dict[type, ReflectorCodec[Any]] = {target_type: self}

    def _resolve_reflector(self, instance: Any) -> Optional[ReflectorClass]:
        if self.options.use_generated:
            return get_reflector(instance, fallback_to_dynamic=self.options.fallback_to_dynamic)
        if self.options.fallback_to_dynamic:
            return DynamicReflector(instance)
        return None

    def nested(self, type_: type) -> "ReflectorCodec[Any]":
        """Codec for a nested object type, created once per type and reused."""
        codec = self._nested.get(type_)
        if codec is None:
            codec = ReflectorCodec(type_, self.options)
            codec._nested = self._nested
            self._nested[type_] = codec
        return codec

    def write(self, writer: StructuredWriter, value: Optional[T]) -> None:
        """
        Write ``value`` as an object token sequence, or a null token for None.

        :raises NoReflectorAvailableError: If no reflector can be obtained.
        :raises FormatError: If a property value cannot be written; the
            property name is attached and the cause chained.
        """
        if value is None:
            writer.write_null()
            return
        reflector = self._resolve_reflector(value)
        if reflector is None:
            raise NoReflectorAvailableError(type(value))

        writer.write_start_object()
        for descriptor in reflector.properties:
            try:
                item = reflector.get_value(descriptor.name)
                writer.write_property_name(self.options.convert_name(descriptor.name))
                write_value(writer, item, descriptor.type, self.nested)
            except Exception as e:
                raise FormatError(
                    f"Failed to serialize property '{descriptor.name}': {e}",
                    property_name=descriptor.name,
                ) from e
        writer.write_end_object()

    def _new_instance(self) -> T:
        try:
            return self.target_type()
        except Exception as e:
            raise FormatError(f"Cannot create an instance of {self.target_type.__name__}: {e}") from e

    def read(self, reader: StructuredReader) -> T:
        """
        Read an object starting at the reader's current START_OBJECT token,
        leaving the reader on the matching END_OBJECT.

        Keys match properties case-insensitively. Unknown and read-only keys
        are skipped without decoding their values.

        :raises FormatError: On malformed structure, premature end of input or
            a property value that cannot be decoded.
        :raises NoReflectorAvailableError: If no reflector can be obtained.
        """
        if reader.token_type is not TokenType.START_OBJECT:
            raise FormatError(
                f"Expected START_OBJECT for {self.target_type.__name__}, got {reader.token_type.name}"
            )
        instance = self._new_instance()
        reflector = self._resolve_reflector(instance)
        if reflector is None:
            raise NoReflectorAvailableError(self.target_type)

        while reader.read():
            if reader.token_type is TokenType.END_OBJECT:
                return instance
            if reader.token_type is not TokenType.PROPERTY_NAME:
                raise FormatError(f"Expected a property name, got {reader.token_type.name}")
            key = reader.get_value()
            if not reader.read():
                break
            descriptor = find_property(reflector, key, self.options.naming_policy)
            if descriptor is None or not descriptor.has_setter:
                logger.debug(f"Skipping {'unknown' if descriptor is None else 'read-only'} key '{key}'")
                reader.skip()
                continue
            try:
                value = read_value(reader, descriptor.type, self.nested)
                reflector.set_value(descriptor.name, value)
            except Exception as e:
                raise FormatError(
                    f"Failed to deserialize property '{descriptor.name}': {e}",
                    property_name=descriptor.name,
                ) from e
        raise FormatError("Unexpected end of input")

    def dumps(self, value: Optional[T]) -> str:
        writer = JsonTokenWriter()
        self.write(writer, value)
        return writer.getvalue()

    def loads(self, text: str) -> Optional[T]:
        """Decode JSON text; a top-level ``null`` yields None."""
        reader = JsonTokenReader(text)
        if not reader.read():
            raise FormatError("Empty input")
        if reader.token_type is TokenType.NULL:
            return None
        return self.read(reader)


class ReflectorCodecFactory:
    """
    Decides which types the reflector codec applies to and creates codecs for
    them.
    """

    def __init__(self, options: Optional[CodecOptions] = None) -> None:
        self.options = options or CodecOptions()

    def can_convert(self, type_: Any) -> bool:
        """
        True for concrete classes with a zero-argument constructor that are not
        simple values or collections. With dynamic fallback disabled, a probe
        instance must also expose a generated reflector.
        """
        if not inspect.isclass(type_) or inspect.isabstract(type_):
            return False
        if is_simple_type(type_) or is_collection_type(type_) or type_ is object:
            return False
        try:
            signature = inspect.signature(type_)
        except (TypeError, ValueError):
            return False
        for param in signature.parameters.values():
            required = param.default is inspect.Parameter.empty
            if required and param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                return False
        if self.options.fallback_to_dynamic:
            return True
        try:
            probe = type_()
            return self.options.use_generated and get_reflector(probe) is not None
        except Exception as e:
            logger.debug(f"Probe instance of {type_.__qualname__} failed: {e}")
            return False

    def create_codec(self, type_: Type[T]) -> ReflectorCodec[T]:
        """:raises TypeError: If ``can_convert`` rejects the type."""
        if not self.can_convert(type_):
            raise TypeError(f"Type {getattr(type_, '__name__', type_)!r} is not supported by the reflector codec")
        return ReflectorCodec(type_, self.options)


def dumps(value: Any, options: Optional[CodecOptions] = None) -> str:
    """Encode an object (or None) as compact JSON."""
    if value is None:
        return "null"
    return ReflectorCodec(type(value), options).dumps(value)


def loads(text: str, target_type: Type[T], options: Optional[CodecOptions] = None) -> Optional[T]:
    """Decode JSON text into a new ``target_type`` instance."""
    return ReflectorCodec(target_type, options).loads(text)
