# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from tests.models import Contact, GeneratedPerson, Person


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "stress: mark test as a stress test")


@pytest.fixture
def person():
    """A plain dataclass instance with no reflector of its own."""
    return Person(name="Alice", age=30, is_active=True)


@pytest.fixture
def generated_person():
    """The same data on a @reflectable class."""
    return GeneratedPerson(name="Alice", age=30, is_active=True)


@pytest.fixture(params=["dynamic", "generated"])
def any_person(request, person, generated_person):
    """A (reflector, object) pair for each reflector implementation."""
    from reflector.runtime.dynamic import DynamicReflector

    if request.param == "dynamic":
        return DynamicReflector(person), person
    return generated_person.reflector, generated_person


@pytest.fixture
def contact():
    from tests.models import Address

    return Contact(
        name="Bob",
        email=None,
        tags=["friend", "work"],
        address=Address(street="1 Main St", city="Springfield"),
        previous=[Address(street="2 Elm St", city="Shelbyville")],
    )


@pytest.fixture
def error_classes():
    """Provides the error classes for quick reference."""
    from reflector.core.errors import (
        FormatError,
        NoReflectorAvailableError,
        PropertyError,
        ReadOnlyPropertyError,
        ReflectorError,
        TypeMismatchError,
        UnknownPropertyError,
    )

    return (
        ReflectorError,
        PropertyError,
        UnknownPropertyError,
        ReadOnlyPropertyError,
        TypeMismatchError,
        NoReflectorAvailableError,
        FormatError,
    )
