"""
Cache-aware read path for backend queries.
"""

import asyncio
from typing import Any, Callable, Dict, Mapping, Optional, TYPE_CHECKING

from shared.logging import get_logger
from .store import CacheStore, key_family

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..adapters.backend_client import BackendClient
    from shared.metrics import MetricsCollector


_MISSING = object()


class CachedReader:
    """
    Serves backend GETs from a ``CacheStore`` while fresh.

    On a miss the query is fetched, optionally parsed, stored and returned.
    A failed fetch or parse propagates and leaves the store untouched.

    Concurrent misses for one key share a single in-flight request.
    ``invalidate`` detaches that request as well, so a read that started
    before a write can never repopulate the key after the write.
    """

    def __init__(
        self,
        store: CacheStore,
        backend: "BackendClient",
        *,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.store = store
        self.backend = backend
        self.metrics = metrics
        self.logger = get_logger("inventory.cached_reader")
        self._in_flight: Dict[str, "asyncio.Task[Any]"] = {}

    async def get(
        self,
        key: str,
        params: Mapping[str, str],
        parse: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """Return the cached value for ``key`` or fetch it with ``params``."""
        hit = self.store.get(key, _MISSING)
        if hit is not _MISSING:
            self.logger.debug("Cache hit", key=key)
            self._count("cache_hits_total", key)
            return hit

        self.logger.debug("Cache miss", key=key)
        self._count("cache_misses_total", key)

        task = self._in_flight.get(key)
        # A finished task is waiting for _forget; its outcome must not be replayed
        if task is None or task.done():
            task = asyncio.ensure_future(self._fetch_and_store(key, dict(params), parse))
            self._in_flight[key] = task
            task.add_done_callback(lambda done, k=key: self._forget(k, done))

        # Shielded so one caller giving up does not cancel the fetch for the others
        return await asyncio.shield(task)

    def invalidate(self, key: Optional[str] = None) -> None:
        """Evict ``key`` (or everything) and detach matching in-flight reads."""
        if key is None:
            self.store.invalidate()
            self._in_flight.clear()
            self.logger.info("Cache cleared")
            self._count("cache_invalidations_total", "*")
            return

        self.store.invalidate(key)
        self._in_flight.pop(key, None)
        self.logger.info("Cache key invalidated", key=key)
        self._count("cache_invalidations_total", key)

    async def _fetch_and_store(self, key: str, params: Dict[str, str], parse) -> Any:
        data = await self.backend.get(params)
        if parse is not None:
            data = parse(data)

        # Only the request still registered for the key may populate it
        if self._in_flight.get(key) is asyncio.current_task():
            self.store.set(key, data)
        else:
            self.logger.debug("Discarding read superseded by invalidation", key=key)
        return data

    def _forget(self, key: str, task: "asyncio.Task[Any]") -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Mark the outcome as retrieved when every caller has gone away
        if not task.cancelled():
            task.exception()

    def _count(self, metric: str, key: str) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric, key_family=key_family(key))
