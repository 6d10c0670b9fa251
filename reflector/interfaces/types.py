# reflector/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from enum import Enum, auto
from typing import Any, Callable, Tuple

PropertyName = str
TypeHint = Any

# Callback Types
NamingPolicy = Callable[[str], str]
Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]


class TokenType(Enum):
    """Structural tokens of a JSON-like tree format."""

    NONE = auto()  # before the first read / after the last one
    START_OBJECT = auto()
    END_OBJECT = auto()
    START_ARRAY = auto()
    END_ARRAY = auto()
    PROPERTY_NAME = auto()
    STRING = auto()
    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()


Token = Tuple[TokenType, Any]

SCALAR_TOKENS = frozenset({TokenType.STRING, TokenType.NUMBER, TokenType.TRUE, TokenType.FALSE, TokenType.NULL})
