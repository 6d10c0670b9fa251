"""reflector: case-insensitive property reflection with a reflector-driven codec

This package exposes a single capability contract for reading and writing the
properties of arbitrary objects, with two interchangeable implementations.

Responsibilities:
    - Property and attribute metadata for any object
    - Case-insensitive get/set with type checking
    - Non-throwing access helpers
    - Token-based object encoding and decoding (JSON)

Interactions:
    - Client code through the public API below
    - Python type hints and the inspect module for metadata discovery
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - Descriptor caches are safe for concurrent reads and inserts
        - Reflectors themselves are not synchronized

    Error Handling:
        - Structured error hierarchy rooted at ReflectorError
        - Strict operations raise; try_* helpers report booleans

    Logging:
        - Module-level loggers, DEBUG only, no handlers configured
"""

from reflector.codec.converter import ReflectorCodec, ReflectorCodecFactory, dumps, loads
from reflector.codec.options import CodecOptions
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
from reflector.core.annotations import annotate
from reflector.core.descriptors import AttributeArgumentDescriptor, AttributeDescriptor, PropertyDescriptor
from reflector.core.errors import (
    FormatError,
    NoReflectorAvailableError,
    PropertyError,
    ReadOnlyPropertyError,
    ReflectorError,
    TypeMismatchError,
    UnknownPropertyError,
)
from reflector.interfaces.protocols import HasReflector, ReflectorClass
from reflector.runtime.dynamic import DynamicReflector
from reflector.runtime.generated import GeneratedReflector, reflectable

__version__ = "0.1.0"

__all__ = [
    "AttributeArgumentDescriptor",
    "AttributeDescriptor",
    "CodecOptions",
    "DynamicReflector",
    "FormatError",
    "GeneratedReflector",
    "HasReflector",
    "NoReflectorAvailableError",
    "PropertyDescriptor",
    "PropertyError",
    "ReadOnlyPropertyError",
    "ReflectorClass",
    "ReflectorCodec",
    "ReflectorCodecFactory",
    "ReflectorError",
    "TypeMismatchError",
    "UnknownPropertyError",
    "annotate",
    "apply_dict",
    "dumps",
    "get_reflector",
    "has_property",
    "loads",
    "reflectable",
    "to_dict",
    "try_get_property_info",
    "try_get_value",
    "try_get_value_as",
    "try_set_value",
    "try_set_value_as",
]
