# src/cache/query_cache.py
"""Bounded LRU cache of successful query results with a TTL.

Entries older than the TTL are treated as misses and evicted on access.
All operations hold a single lock; concurrent writers to the same key
resolve last-writer-wins.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable

from answerfinder.cache.models import CacheEntry, CacheStats
from answerfinder.core.models import FindAnswerResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 100
DEFAULT_TTL_SECONDS = 3600.0


class QueryCache:
    """In-process LRU cache keyed by raw-query hash."""

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._max_size = max_size
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> FindAnswerResult | None:
        """Cached value, or None on miss or expiry. Hits become most recent."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.inserted_at > self._ttl:
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key[:12])
                return None
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: FindAnswerResult) -> None:
        """Insert or refresh an entry, evicting the least recently used at capacity."""
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            while len(self._entries) >= self._max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache evicted LRU entry: %s", evicted[:12])
            self._entries[key] = CacheEntry(key=key, value=value, inserted_at=self._clock())

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> CacheStats:
        with self._lock:
            size = len(self._entries)
        return CacheStats(
            size=size,
            max_size=self._max_size,
            utilization_percent=round(size / self._max_size * 100, 2),
        )
