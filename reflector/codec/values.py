# reflector/codec/values.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Hint-driven encoding and decoding of property values.

Scalars map onto JSON scalars, a few common library types onto their usual
string or number forms, collections onto arrays and objects. Anything else is
treated as a nested object and handed to a codec obtained from ``nested``.
"""

from __future__ import annotations

import base64
import binascii
import collections.abc
import enum
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Literal, Protocol, Tuple, TypeVar, get_args, get_origin

from reflector.codec.tokens import TokenStreamReader, read_tree
from reflector.core.errors import ReflectorError
from reflector.core.validations import accepts_none, is_any, is_union, non_none_members, strip_qualifiers, type_name
from reflector.interfaces.protocols import StructuredReader, StructuredWriter
from reflector.interfaces.types import TokenType


class NestedCodec(Protocol):
    def write(self, writer: StructuredWriter, value: Any) -> None: ...

    def read(self, reader: StructuredReader) -> Any: ...


NestedFactory = Callable[[type], NestedCodec]

_SIMPLE_TYPES = (str, bool, int, float, complex, bytes, bytearray, Decimal, date, time, timedelta, uuid.UUID)

_SEQUENCE_TYPES = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}

_MAPPING_TYPES = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


def is_simple_type(type_: Any) -> bool:
    """True for primitives, strings, enums and the library scalar types above."""
    if not isinstance(type_, type):
        return False
    return issubclass(type_, _SIMPLE_TYPES) or issubclass(type_, enum.Enum)


def is_collection_type(type_: Any) -> bool:
    target = get_origin(type_) or type_
    if target in _SEQUENCE_TYPES or target in _MAPPING_TYPES:
        return True
    return isinstance(target, type) and issubclass(target, (list, tuple, set, frozenset, dict))


def _container_hint(hint: Any) -> Any:
    members = tuple(non_none_members(hint))
    return members[0] if len(members) == 1 else Any


def _item_hints(hint: Any) -> Tuple[Any, Any]:
    """Return (item hint, fixed tuple hints or None) for a collection hint."""
    hint = _container_hint(hint)
    args = get_args(hint)
    if get_origin(hint) is tuple and args:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0], None
        return Any, args
    return (args[0] if args else Any), None


def _mapping_hints(hint: Any) -> Tuple[Any, Any]:
    args = get_args(_container_hint(hint))
    if len(args) == 2:
        return args[0], args[1]
    return Any, Any


def _key_text(key: Any) -> str:
    if isinstance(key, enum.Enum):
        key = key.value
    return key if isinstance(key, str) else str(key)


def write_value(writer: StructuredWriter, value: Any, hint: Any, nested: NestedFactory) -> None:
    """
    Write ``value`` declared as ``hint``.

    :raises TypeError: If a value of this kind cannot be written.
    """
    if value is None:
        writer.write_null()
    elif isinstance(value, enum.Enum):
        write_value(writer, value.value, Any, nested)
    elif isinstance(value, (bool, str)):
        writer.write_value(value)
    elif isinstance(value, int):
        widen = _container_hint(strip_qualifiers(hint)) is float
        writer.write_value(float(value) if widen else value)
    elif isinstance(value, float):
        writer.write_value(value)
    elif isinstance(value, complex):
        writer.write_value(str(value))
    elif isinstance(value, Decimal):
        writer.write_value(str(value))
    elif isinstance(value, (datetime, date, time)):
        writer.write_value(value.isoformat())
    elif isinstance(value, timedelta):
        writer.write_value(value.total_seconds())
    elif isinstance(value, uuid.UUID):
        writer.write_value(str(value))
    elif isinstance(value, (bytes, bytearray)):
        writer.write_value(base64.b64encode(value).decode("ascii"))
    elif isinstance(value, collections.abc.Mapping):
        _, value_hint = _mapping_hints(strip_qualifiers(hint))
        writer.write_start_object()
        for key, item in value.items():
            writer.write_property_name(_key_text(key))
            write_value(writer, item, value_hint, nested)
        writer.write_end_object()
    elif isinstance(value, (list, tuple, set, frozenset)):
        item_hint, fixed = _item_hints(strip_qualifiers(hint))
        writer.write_start_array()
        for index, item in enumerate(value):
            element_hint = fixed[index] if fixed is not None and index < len(fixed) else item_hint
            write_value(writer, item, element_hint, nested)
        writer.write_end_array()
    else:
        nested(type(value)).write(writer, value)


def _expect(reader: StructuredReader, *tokens: TokenType) -> None:
    if reader.token_type not in tokens:
        expected = " or ".join(t.name for t in tokens)
        raise TypeError(f"Expected {expected}, got {reader.token_type.name}")


def _read_scalar(reader: StructuredReader, target: type) -> Any:
    if target is bool:
        _expect(reader, TokenType.TRUE, TokenType.FALSE)
        return reader.get_value()
    if target is str:
        _expect(reader, TokenType.STRING)
        return reader.get_value()
    if target is int:
        _expect(reader, TokenType.NUMBER)
        value = reader.get_value()
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"{value} is not an integer")
            return int(value)
        return value
    if target is float:
        _expect(reader, TokenType.NUMBER)
        return float(reader.get_value())
    if target is complex:
        _expect(reader, TokenType.NUMBER, TokenType.STRING)
        return complex(reader.get_value())
    if target is Decimal:
        _expect(reader, TokenType.STRING, TokenType.NUMBER)
        try:
            return Decimal(str(reader.get_value()))
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal {reader.get_value()!r}") from e
    if target is timedelta:
        _expect(reader, TokenType.NUMBER)
        return timedelta(seconds=reader.get_value())
    if target is uuid.UUID:
        _expect(reader, TokenType.STRING)
        return uuid.UUID(reader.get_value())
    if target in (bytes, bytearray):
        _expect(reader, TokenType.STRING)
        try:
            return target(base64.b64decode(reader.get_value(), validate=True))
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 data: {e}") from e
    if target in (datetime, date, time):
        _expect(reader, TokenType.STRING)
        text = reader.get_value()
        if text.endswith("Z") and target is not date:
            text = text[:-1] + "+00:00"
        return target.fromisoformat(text)
    raise TypeError(f"Unsupported scalar type {target.__name__}")


def _read_array(reader: StructuredReader, hint: Any, target: type, nested: NestedFactory) -> Any:
    _expect(reader, TokenType.START_ARRAY)
    item_hint, fixed = _item_hints(hint)
    items = []
    while reader.read():
        if reader.token_type is TokenType.END_ARRAY:
            if fixed is not None and len(items) != len(fixed):
                raise ValueError(f"Expected {len(fixed)} items, got {len(items)}")
            return _SEQUENCE_TYPES.get(target, target)(items)
        index = len(items)
        element_hint = fixed[index] if fixed is not None and index < len(fixed) else item_hint
        items.append(read_value(reader, element_hint, nested))
    raise ValueError("Unexpected end of input inside an array")


def _read_mapping(reader: StructuredReader, hint: Any, target: type, nested: NestedFactory) -> Any:
    _expect(reader, TokenType.START_OBJECT)
    key_hint, value_hint = _mapping_hints(hint)
    result = {}
    while reader.read():
        if reader.token_type is TokenType.END_OBJECT:
            return result if target in _MAPPING_TYPES else target(result)
        _expect(reader, TokenType.PROPERTY_NAME)
        key = _convert_key(reader.get_value(), key_hint)
        if not reader.read():
            break
        result[key] = read_value(reader, value_hint, nested)
    raise ValueError("Unexpected end of input inside an object")


def _convert_key(text: str, hint: Any) -> Any:
    target = strip_qualifiers(hint)
    if is_any(target) or target is str:
        return text
    if isinstance(target, type) and issubclass(target, enum.Enum):
        return _enum_member(target, text)
    if target in (int, float, Decimal, uuid.UUID):
        return target(text)
    return text


def _enum_member(enum_type: type, raw: Any) -> Any:
    try:
        return enum_type(raw)
    except ValueError:
        # keys arrive as text even when member values are numbers
        for member in enum_type:
            if str(member.value) == str(raw):
                return member
        raise


def _read_union(reader: StructuredReader, hint: Any, nested: NestedFactory) -> Any:
    members = tuple(non_none_members(hint))
    if len(members) == 1:
        return read_value(reader, members[0], nested)
    tree = read_tree(reader)
    for member in members:
        replay = TokenStreamReader.from_tree(tree)
        replay.read()
        try:
            return read_value(replay, member, nested)
        except (TypeError, ValueError, ReflectorError):
            continue
    raise TypeError(f"Value does not match any member of {type_name(hint)}")


def read_value(reader: StructuredReader, hint: Any, nested: NestedFactory) -> Any:
    """
    Decode the value at the reader's current token as ``hint``, leaving the
    reader on the value's last token.

    :raises TypeError: If the token kind does not fit the hint.
    :raises ValueError: If the token fits but its content does not parse.
    """
    hint = strip_qualifiers(hint)
    if is_any(hint):
        return read_tree(reader)
    if reader.token_type is TokenType.NULL:
        if accepts_none(hint):
            return None
        raise TypeError(f"null is not a valid {type_name(hint)} value")

    origin = get_origin(hint)
    if is_union(origin):
        return _read_union(reader, hint, nested)
    if origin is Literal:
        value = read_tree(reader)
        for choice in get_args(hint):
            if choice == value and type(choice) is type(value):
                return choice
        raise ValueError(f"{value!r} is not one of {get_args(hint)}")
    if isinstance(hint, TypeVar):
        return read_value(reader, hint.__bound__ or Any, nested)

    target = origin or hint
    if target in _SEQUENCE_TYPES or (isinstance(target, type) and issubclass(target, (list, tuple, set, frozenset))):
        return _read_array(reader, hint, target, nested)
    if target in _MAPPING_TYPES or (isinstance(target, type) and issubclass(target, dict)):
        return _read_mapping(reader, hint, target, nested)
    if not isinstance(target, type):
        return read_tree(reader)
    if issubclass(target, enum.Enum):
        _expect(reader, TokenType.STRING, TokenType.NUMBER, TokenType.TRUE, TokenType.FALSE)
        return _enum_member(target, reader.get_value())
    if is_simple_type(target):
        return _read_scalar(reader, target)
    return nested(target).read(reader)
