# reflector/runtime/cache.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class DescriptorCache(Generic[V]):
    """
    Process-wide, append-only map from a type to metadata computed for it.

    Entries are never evicted or replaced. Reads take no lock. The factory runs
    outside the lock, so two threads may compute the same entry; the first one
    inserted wins and later results are discarded.
    """

    def __init__(self, name: str = "descriptors") -> None:
        self._name = name
        self._entries: Dict[type, V] = {}
        self._insert_lock = threading.Lock()

    def get(self, key: type) -> Optional[V]:
        return self._entries.get(key)

    def get_or_add(self, key: type, factory: Callable[[type], V]) -> V:
        """
        Return the cached entry for ``key``, computing it with ``factory`` on a miss.
        """
        entry = self._entries.get(key)
        if entry is not None:
            return entry

        computed = factory(key)
        with self._insert_lock:
            winner = self._entries.setdefault(key, computed)
        if winner is not computed:
            logger.debug(f"Discarding redundant {self._name} scan of {key.__qualname__}")
        return winner

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
