"""
In-memory TTL cache store.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional

from shared.logging import get_logger


DEFAULT_TTL_SECONDS = 120.0


def key_family(key: str) -> str:
    """Collapse a cache key to its query name, e.g. "getComponents:Case A" -> "getComponents"."""
    return key.split(":", 1)[0]


@dataclass
class CacheEntry:
    """A cached value and the clock reading it was stored at."""
    value: Any
    stored_at: float


class CacheStore:
    """
    Process-lived key/value store with lazy TTL expiry.

    An entry is served while ``now - stored_at <= ttl_seconds`` and removed by
    the first lookup after that. There is no background eviction. With
    ``max_entries`` set, inserting a new key beyond the bound drops the least
    recently stored entry; the default is unbounded.

    All access goes through one lock so the lazy delete in ``get`` cannot
    interleave with ``set`` from another thread.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self.logger = get_logger("inventory.cache_store")

    def get(self, key: str, default: Any = None) -> Any:
        """Return the fresh value for ``key``, else ``default``."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if now - entry.stored_at <= self.ttl_seconds:
                return entry.value
            del self._entries[key]

        self.logger.debug("Cache entry expired", key=key)
        return default

    def set(self, key: str, value: Any) -> None:
        """Insert or replace ``key``, stamped with the current time."""
        entry = CacheEntry(value=value, stored_at=self._clock())
        evicted = None
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = entry
            if self.max_entries is not None and len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)

        if evicted is not None:
            self.logger.debug("Cache entry evicted", key=evicted, max_entries=self.max_entries)

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one entry, or every entry when ``key`` is None. Missing keys are ignored."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def peek(self, key: str) -> Optional[CacheEntry]:
        """Return the raw entry for ``key`` without expiry checks."""
        with self._lock:
            return self._entries.get(key)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
