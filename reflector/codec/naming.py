# reflector/codec/naming.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Property naming policies applied to names at write time.

Reading matches keys case-insensitively against the declared property names,
and failing that against each name as rendered by the policies registered
here, so a document written under any of them reads back into the same
properties.
"""

import re
from typing import Dict, List

from reflector.interfaces.types import NamingPolicy

# acronym followed by a word, capitalized word, lowercase run, or trailing acronym
_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")
_SEPARATORS = re.compile(r"[\s_\-]+")


def split_words(name: str) -> List[str]:
    words: List[str] = []
    for part in _SEPARATORS.split(name):
        words.extend(_WORD.findall(part))
    return words


def identity(name: str) -> str:
    return name


def snake_case_lower(name: str) -> str:
    """``IsActive`` -> ``is_active``, ``HTTPServer`` -> ``http_server``."""
    return "_".join(word.lower() for word in split_words(name))


def snake_case_upper(name: str) -> str:
    return "_".join(word.upper() for word in split_words(name))


def kebab_case_lower(name: str) -> str:
    return "-".join(word.lower() for word in split_words(name))


def kebab_case_upper(name: str) -> str:
    return "-".join(word.upper() for word in split_words(name))


def camel_case(name: str) -> str:
    """``is_active`` -> ``isActive``, ``URLValue`` -> ``urlValue``."""
    words = split_words(name)
    if not words:
        return name
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def pascal_case(name: str) -> str:
    """``is_active`` -> ``IsActive``."""
    return "".join(word.capitalize() for word in split_words(name)) or name


NAMING_POLICIES: Dict[str, NamingPolicy] = {
    "identity": identity,
    "snake_case_lower": snake_case_lower,
    "snake_case_upper": snake_case_upper,
    "kebab_case_lower": kebab_case_lower,
    "kebab_case_upper": kebab_case_upper,
    "camel_case": camel_case,
    "pascal_case": pascal_case,
}


def get_naming_policy(name: str) -> NamingPolicy:
    """
    Look up a policy by its registered name.

    :raises ValueError: If no policy has that name.
    """
    try:
        return NAMING_POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown naming policy '{name}'. Available: {sorted(NAMING_POLICIES)}") from None
