# reflector/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Dict, Optional


class ReflectorError(Exception):
    """
    Base exception class for errors raised by the reflector library.

    :param message: Human readable description.
    :param details: Optional mapping of extra context for diagnostics.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PropertyError(ReflectorError):
    """
    Base class for errors tied to a single named property of a reflected object.
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        owner: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.key = key
        self.owner = owner


class UnknownPropertyError(PropertyError):
    """
    Raised when a key does not match any property descriptor.
    """

    def __init__(self, key: str, owner: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(f"Property '{key}' not found on {owner}", key, owner, details)


class ReadOnlyPropertyError(PropertyError):
    """
    Raised when a value is assigned to a property whose descriptor has no setter.
    """

    def __init__(self, key: str, owner: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(f"Property '{key}' on {owner} is read-only", key, owner, details)


class TypeMismatchError(PropertyError):
    """
    Raised when a non-None value is not assignable to the declared property type.
    """

    def __init__(
        self,
        key: str,
        expected: str,
        actual: str,
        owner: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            f"Cannot set '{key}' on {owner}: expected a {expected} value, got {actual}",
            key,
            owner,
            details,
        )
        self.expected = expected
        self.actual = actual


class NoReflectorAvailableError(ReflectorError):
    """
    Raised when the codec cannot obtain any reflector for a type.
    """

    def __init__(self, target_type: Any, details: Optional[Dict[str, Any]] = None) -> None:
        name = getattr(target_type, "__name__", repr(target_type))
        super().__init__(
            f"No reflector available for type {name}. "
            "Enable fallback_to_dynamic or decorate the class with @reflectable.",
            details,
        )
        self.target_type = target_type


class FormatError(ReflectorError):
    """
    Raised when structured input does not have the expected token shape, or when
    encoding/decoding a single property fails (property_name is then set).
    """

    def __init__(
        self,
        message: str,
        property_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.property_name = property_name
