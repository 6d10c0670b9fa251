# tests/unit/test_values.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional, Set, Tuple, Union

import pytest

from reflector.codec.tokens import JsonTokenWriter, TokenStreamReader
from reflector.codec.values import is_collection_type, is_simple_type, read_value, write_value
from tests.models import Address, Color, Person


def _no_nested(type_):
    raise AssertionError(f"unexpected nested codec for {type_}")


def _encode(value, hint):
    writer = JsonTokenWriter()
    write_value(writer, value, hint, _no_nested)
    return writer.getvalue()


def _decode(tree, hint):
    reader = TokenStreamReader.from_tree(tree)
    reader.read()
    return read_value(reader, hint, _no_nested)


def test_simple_and_collection_types():
    for type_ in (str, int, bool, float, Decimal, datetime, uuid.UUID, bytes, Color):
        assert is_simple_type(type_)
    assert not is_simple_type(Person)
    assert not is_simple_type(List[int])
    assert is_collection_type(list)
    assert is_collection_type(Dict[str, int])
    assert not is_collection_type(Person)


@pytest.mark.parametrize(
    "value,hint,expected",
    [
        (5, int, "5"),
        (5, float, "5.0"),
        (5, Optional[float], "5.0"),
        (True, bool, "true"),
        (Decimal("1.10"), Decimal, '"1.10"'),
        (date(2024, 1, 2), date, '"2024-01-02"'),
        (timedelta(minutes=1), timedelta, "60.0"),
        (b"hi", bytes, '"aGk="'),
        (Color.GREEN, Color, '"green"'),
        ([1, 2], List[int], "[1,2]"),
        ((1, "a"), Tuple[int, str], '[1,"a"]'),
        ({"a": 1}, Dict[str, int], '{"a":1}'),
        ({Color.RED: 1}, Dict[Color, int], '{"red":1}'),
        (None, Optional[int], "null"),
    ],
)
def test_write_value(value, hint, expected):
    assert _encode(value, hint) == expected


def test_write_uuid_and_datetime():
    ident = uuid.UUID("12345678-1234-5678-1234-567812345678")
    assert _encode(ident, uuid.UUID) == '"12345678-1234-5678-1234-567812345678"'
    stamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    assert _encode(stamp, datetime) == '"2024-05-01T12:30:00+00:00"'


@pytest.mark.parametrize(
    "tree,hint,expected",
    [
        (5, int, 5),
        (5, float, 5.0),
        (5.0, int, 5),
        ("x", str, "x"),
        (True, bool, True),
        (None, Optional[str], None),
        ("1.10", Decimal, Decimal("1.10")),
        (60, timedelta, timedelta(minutes=1)),
        ("aGk=", bytes, b"hi"),
        ("green", Color, Color.GREEN),
        ([1, 2], List[int], [1, 2]),
        ([1, 2], Set[int], {1, 2}),
        ([1, "a"], Tuple[int, str], (1, "a")),
        ({"a": 1}, Dict[str, int], {"a": 1}),
        ({"1": "x"}, Dict[int, str], {1: "x"}),
        ({"red": 2}, Dict[Color, int], {Color.RED: 2}),
        ("b", Literal["a", "b"], "b"),
        ({"any": [1]}, Any, {"any": [1]}),
        ("x", Union[int, str], "x"),
        (3, Union[int, str], 3),
    ],
)
def test_read_value(tree, hint, expected):
    assert _decode(tree, hint) == expected


def test_read_datetime_with_z_suffix():
    value = _decode("2024-05-01T12:30:00Z", datetime)
    assert value == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "tree,hint,error",
    [
        ("5", int, TypeError),
        (True, int, TypeError),
        (5.5, int, ValueError),
        (None, int, TypeError),
        (1, str, TypeError),
        ("purple", Color, ValueError),
        ("c", Literal["a", "b"], ValueError),
        ([1, "a", 3], Tuple[int, str], ValueError),
        ("not-base64!", bytes, ValueError),
        ([1.5], Union[int, str], TypeError),
    ],
)
def test_read_value_rejects_mismatches(tree, hint, error):
    with pytest.raises(error):
        _decode(tree, hint)


def test_nested_objects_use_the_factory():
    calls = []

    class FakeCodec:
        def write(self, writer, value):
            calls.append(("write", value))
            writer.write_null()

        def read(self, reader):
            calls.append(("read", reader.token_type))
            reader.skip()
            return Address(street="read")

    writer = JsonTokenWriter()
    address = Address()
    write_value(writer, address, Address, lambda type_: FakeCodec())
    assert writer.getvalue() == "null"

    reader = TokenStreamReader.from_tree({"street": "x"})
    reader.read()
    assert read_value(reader, Optional[Address], lambda type_: FakeCodec()) == Address(street="read")
    assert calls[0] == ("write", address)
    assert calls[1][0] == "read"
