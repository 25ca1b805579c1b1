"""Time-boxed read-through cache shared by the data providers.

Entries are keyed by ``(endpoint, symbol)``. Concurrent screening tasks on
one event loop may read and insert freely: a get never observes a partially
written entry and the last writer wins. Expired entries are dropped on read
of that key and swept on every write.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TTLCache(Generic[T]):
    def __init__(
        self,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], tuple[float, T]] = {}

    def get(self, endpoint: str, symbol: str) -> T | None:
        entry = self._entries.get((endpoint, symbol))
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self._ttl:
            self._entries.pop((endpoint, symbol), None)
            return None
        return value

    def set(self, endpoint: str, symbol: str, value: T) -> None:
        now = self._clock()
        self._prune(now)
        # Single tuple assignment so readers see the old or new entry, never a mix
        self._entries[(endpoint, symbol)] = (now, value)

    def _prune(self, now: float) -> None:
        expired = [key for key, (stored_at, _) in self._entries.items() if now - stored_at >= self._ttl]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Pruned %d expired cache entries", len(expired))

    async def get_or_fetch(
        self,
        endpoint: str,
        symbol: str,
        fetch: Callable[[], Awaitable[T]],
    ) -> T:
        """Return a fresh cached value or await ``fetch`` and store its result.

        Exceptions from ``fetch`` propagate and nothing is cached.
        """
        cached = self.get(endpoint, symbol)
        if cached is not None:
            logger.debug("Cache hit: %s/%s", endpoint, symbol)
            return cached
        value = await fetch()
        self.set(endpoint, symbol, value)
        return value

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        return self.get(*key) is not None
