# tests/unit/test_naming.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import pytest

from reflector.codec.naming import (
    NAMING_POLICIES,
    camel_case,
    get_naming_policy,
    identity,
    kebab_case_lower,
    kebab_case_upper,
    pascal_case,
    snake_case_lower,
    snake_case_upper,
    split_words,
)
from reflector.codec.options import CodecOptions


@pytest.mark.parametrize(
    "name,words",
    [
        ("IsActive", ["Is", "Active"]),
        ("is_active", ["is", "active"]),
        ("HTTPServer", ["HTTP", "Server"]),
        ("userID", ["user", "ID"]),
        ("display-name", ["display", "name"]),
        ("Value2", ["Value2"]),
    ],
)
def test_split_words(name, words):
    assert split_words(name) == words


@pytest.mark.parametrize(
    "policy,expected",
    [
        (identity, "IsActive"),
        (snake_case_lower, "is_active"),
        (snake_case_upper, "IS_ACTIVE"),
        (kebab_case_lower, "is-active"),
        (kebab_case_upper, "IS-ACTIVE"),
        (camel_case, "isActive"),
        (pascal_case, "IsActive"),
    ],
)
def test_policies_on_pascal_case_name(policy, expected):
    assert policy("IsActive") == expected


def test_policies_on_snake_case_name():
    assert camel_case("is_active") == "isActive"
    assert pascal_case("is_active") == "IsActive"
    assert snake_case_lower("is_active") == "is_active"
    assert snake_case_lower("HTTPServer") == "http_server"


def test_get_naming_policy():
    assert get_naming_policy("snake_case_lower") is snake_case_lower
    assert set(NAMING_POLICIES) >= {"identity", "camel_case", "kebab_case_upper"}
    with pytest.raises(ValueError, match="Unknown naming policy"):
        get_naming_policy("shouting")


def test_options_accept_policy_names():
    options = CodecOptions().with_naming_policy("snake_case_lower")
    assert options.naming_policy is snake_case_lower
    assert options.convert_name("IsActive") == "is_active"
    assert CodecOptions().convert_name("IsActive") == "IsActive"
    assert options.with_naming_policy(None).naming_policy is None
