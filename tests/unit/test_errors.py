# tests/unit/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


def test_error_hierarchy(error_classes):
    (
        ReflectorError,
        PropertyError,
        UnknownPropertyError,
        ReadOnlyPropertyError,
        TypeMismatchError,
        NoReflectorAvailableError,
        FormatError,
    ) = error_classes
    assert issubclass(PropertyError, ReflectorError)
    assert issubclass(UnknownPropertyError, PropertyError)
    assert issubclass(ReadOnlyPropertyError, PropertyError)
    assert issubclass(TypeMismatchError, PropertyError)
    assert issubclass(NoReflectorAvailableError, ReflectorError)
    assert issubclass(FormatError, ReflectorError)
    assert not issubclass(FormatError, PropertyError)


def test_base_error_details():
    from reflector.core.errors import ReflectorError

    e = ReflectorError("Something failed")
    assert str(e) == "Something failed"
    assert e.message == "Something failed"
    assert e.details == {}

    e = ReflectorError("With context", {"key": "value"})
    assert e.details == {"key": "value"}


def test_property_errors_carry_key_and_owner():
    from reflector.core.errors import ReadOnlyPropertyError, UnknownPropertyError

    e = UnknownPropertyError("Missing", "Person")
    assert e.key == "Missing"
    assert e.owner == "Person"
    assert "Missing" in str(e)
    assert "Person" in str(e)

    e = ReadOnlyPropertyError("Id", "Record")
    assert e.key == "Id"
    assert "read-only" in str(e)


def test_type_mismatch_error():
    from reflector.core.errors import TypeMismatchError

    e = TypeMismatchError("age", "int", "str", "Person")
    assert e.expected == "int"
    assert e.actual == "str"
    assert e.key == "age"
    assert "expected a int value, got str" in str(e)


def test_no_reflector_available_error():
    from reflector.core.errors import NoReflectorAvailableError

    class Widget:
        pass

    e = NoReflectorAvailableError(Widget)
    assert e.target_type is Widget
    assert "Widget" in str(e)
    assert "fallback_to_dynamic" in str(e)


def test_format_error_property_name():
    from reflector.core.errors import FormatError

    assert FormatError("Bad input").property_name is None
    e = FormatError("Bad value", property_name="age")
    assert e.property_name == "age"
    assert e.message == "Bad value"
