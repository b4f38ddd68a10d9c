"""
Expiring in-memory cache with per-entry TTL.

Constructor-scoped: each owner creates (or is handed) its own instance, so
nothing is shared process-wide by accident. Backed by cachetools.TLRUCache,
which evicts entries once their time-to-use passes and caps memory at maxsize.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

from cachetools import TLRUCache

from cleo.config import CACHE_MAXSIZE


@dataclass
class _Entry:
    value: Any
    ttl: float


def _time_to_use(_key: Hashable, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class ExpiringCache:
    """
    get/set(key, ttl) cache.

    Args:
        maxsize: Maximum number of live entries (least recently used evicted first)
        clock: Monotonic time source in seconds, injectable for tests
    """

    def __init__(
        self,
        maxsize: int = CACHE_MAXSIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store: TLRUCache[Hashable, _Entry] = TLRUCache(
            maxsize=maxsize, ttu=_time_to_use, timer=clock
        )

    def get(self, key: Hashable, default: Any = None) -> Any:
        entry = self._store.get(key)
        if entry is None:
            return default
        return entry.value

    def set(self, key: Hashable, value: Any, ttl: float) -> None:
        """Store value for ttl seconds. A non-positive ttl removes the key."""
        if ttl <= 0:
            self.delete(key)
            return
        self._store[key] = _Entry(value=value, ttl=ttl)

    def delete(self, key: Hashable) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._store

    def __len__(self) -> int:
        self._store.expire()
        return len(self._store)
