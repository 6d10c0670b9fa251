# reflector/codec/options.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from dataclasses import dataclass, replace
from typing import Optional, Union

from reflector.codec.naming import get_naming_policy
from reflector.interfaces.types import NamingPolicy


@dataclass(frozen=True)
class CodecOptions:
    """
    Codec configuration.

    Attributes:
        use_generated: Prefer an object's own (generated) reflector.
        fallback_to_dynamic: Wrap objects in a DynamicReflector when they have
            no reflector of their own.
        naming_policy: Applied to property names when writing; None keeps the
            declared names.
    """

    use_generated: bool = True
    fallback_to_dynamic: bool = True
    naming_policy: Optional[NamingPolicy] = None

    def with_naming_policy(self, policy: Union[str, NamingPolicy, None]) -> "CodecOptions":
        """Copy of these options with another policy, given as a callable or a registered name."""
        if isinstance(policy, str):
            policy = get_naming_policy(policy)
        return replace(self, naming_policy=policy)

    def convert_name(self, name: str) -> str:
        if self.naming_policy is None:
            return name
        return self.naming_policy(name)
