# tests/unit/test_access.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import pytest

from reflector.core.access import (
    apply_dict,
    get_reflector,
    has_property,
    to_dict,
    try_get_property_info,
    try_get_value,
    try_get_value_as,
    try_set_value,
    try_set_value_as,
)
from reflector.runtime.dynamic import DynamicReflector
from reflector.runtime.generated import GeneratedReflector
from tests.models import Account, Animal, Dog, GeneratedPerson, Measurement, Owner, Person

# -----------------------------------------------------------------------------
# REFLECTOR RESOLUTION
# -----------------------------------------------------------------------------


def test_get_reflector_prefers_own_reflector(generated_person):
    reflector = get_reflector(generated_person, fallback_to_dynamic=True)
    assert isinstance(reflector, GeneratedReflector)
    assert reflector is generated_person.reflector


def test_get_reflector_fallback(person):
    assert get_reflector(person) is None
    reflector = get_reflector(person, fallback_to_dynamic=True)
    assert isinstance(reflector, DynamicReflector)
    assert reflector.reflected_object is person


def test_get_reflector_none():
    assert get_reflector(None, fallback_to_dynamic=True) is None


def test_get_reflector_ignores_non_reflector_accessor():
    class Impostor:
        reflector = "not a reflector"

    assert get_reflector(Impostor()) is None


# -----------------------------------------------------------------------------
# LOOKUP
# -----------------------------------------------------------------------------


def test_has_property(any_person):
    reflector, _ = any_person
    assert has_property(reflector, "name")
    assert has_property(reflector, "IS_ACTIVE")
    assert not has_property(reflector, "missing")
    assert not has_property(reflector, "")
    assert not has_property(reflector, "   ")
    assert not has_property(reflector, None)


def test_try_get_property_info(any_person):
    reflector, _ = any_person
    descriptor = try_get_property_info(reflector, "AGE")
    assert descriptor.name == "age"
    assert descriptor.type is int
    assert try_get_property_info(reflector, "missing") is None


def test_try_get_value(any_person):
    reflector, _ = any_person
    assert try_get_value(reflector, "Name") == ("Alice", True)
    assert try_get_value(reflector, "missing") == (None, False)


# -----------------------------------------------------------------------------
# TYPED READS: EXACT RUNTIME TYPE ONLY
# -----------------------------------------------------------------------------


def test_try_get_value_as_exact_type(any_person):
    reflector, _ = any_person
    assert try_get_value_as(reflector, "age", int) == (30, True)
    assert try_get_value_as(reflector, "is_active", bool) == (True, True)


def test_try_get_value_as_rejects_widening(any_person):
    reflector, _ = any_person
    value, found = try_get_value_as(reflector, "age", float)
    assert (value, found) == (0.0, False)
    assert type(value) is float


def test_try_get_value_as_rejects_base_type():
    owner = Owner(pet=Dog(name="Rex"))
    reflector = DynamicReflector(owner)
    assert try_get_value_as(reflector, "pet", Animal) == (None, False)
    value, found = try_get_value_as(reflector, "pet", Dog)
    assert found and value is owner.pet


def test_try_get_value_as_missing(any_person):
    reflector, _ = any_person
    assert try_get_value_as(reflector, "missing", int) == (0, False)
    assert try_get_value_as(reflector, "name", bool) == (False, False)


# -----------------------------------------------------------------------------
# WRITES
# -----------------------------------------------------------------------------


def test_try_set_value(any_person):
    reflector, obj = any_person
    assert try_set_value(reflector, "AGE", 31)
    assert obj.age == 31
    assert not try_set_value(reflector, "age", "old")
    assert obj.age == 31
    assert not try_set_value(reflector, "missing", 1)


def test_try_set_value_none_requires_nullable_type():
    person = Person(name="Alice")
    assert not try_set_value(DynamicReflector(person), "name", None)
    assert person.name == "Alice"

    measurement = Measurement(nickname="Tiny")
    assert try_set_value(DynamicReflector(measurement), "nickname", None)
    assert measurement.nickname is None


def test_try_set_value_rejects_flags_for_numbers(any_person):
    reflector, obj = any_person
    assert not try_set_value(reflector, "age", True)
    assert obj.age == 30
    assert not try_set_value_as(reflector, "age", False, bool)
    assert type(obj.age) is int

    measurement = Measurement()
    assert not try_set_value(DynamicReflector(measurement), "weight", True)
    assert measurement.weight == 0.0


def test_try_set_value_read_only():
    account = Account()
    assert not try_set_value(DynamicReflector(account), "account_id", 9)


def test_try_set_value_widens_and_accepts_subclasses():
    measurement = Measurement()
    assert try_set_value(DynamicReflector(measurement), "weight", 5)
    assert type(measurement.weight) is float

    owner = Owner()
    assert try_set_value(DynamicReflector(owner), "pet", Dog(name="Rex"))


def test_try_set_value_as():
    measurement = Measurement()
    reflector = DynamicReflector(measurement)
    assert try_set_value_as(reflector, "weight", 2, int)
    assert measurement.weight == 2.0
    assert not try_set_value_as(reflector, "weight", "2", str)
    assert not try_set_value_as(reflector, "missing", 2, int)
    assert not try_set_value_as(reflector, "weight", "2", int)


# -----------------------------------------------------------------------------
# MAPS
# -----------------------------------------------------------------------------


def test_to_dict_skips_none_values():
    measurement = Measurement(weight=1.5)
    assert to_dict(DynamicReflector(measurement)) == {"weight": 1.5}


def test_to_dict_keeps_declaration_order(any_person):
    reflector, _ = any_person
    assert list(to_dict(reflector)) == ["name", "age", "is_active"]


def test_apply_dict_skips_what_it_cannot_set():
    person = GeneratedPerson()
    apply_dict(person.reflector, {"NAME": "Cy", "age": "old", "unknown": 1, "is_active": True})
    assert person == GeneratedPerson(name="Cy", age=0, is_active=True)


@pytest.mark.parametrize("key", ["name", "Name", "NAME", "nAmE"])
def test_case_variants_resolve_to_same_property(any_person, key):
    reflector, _ = any_person
    assert try_get_value(reflector, key) == ("Alice", True)
