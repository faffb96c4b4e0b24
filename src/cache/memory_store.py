# src/cache/memory_store.py — v1
"""In-process cache store with a fixed time-to-live.

One instance lives for the whole process (or one test). Expiry is measured
from write time; reads never extend it. Stale entries are dropped lazily on
read, there is no background sweep and no size bound.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from filepreview.cache.base_cache_store import BaseCacheStore
from filepreview.cache.models import CacheEntry, CacheKey

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store keyed by (locator, display_name)."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def clock(self) -> Callable[[], float]:
        return self._clock

    async def get(self, locator: str, display_name: str) -> CacheEntry | None:
        """Return the entry if it is younger than the TTL."""
        key = (locator, display_name)
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss: %s (%s)", locator, display_name)
            return None
        if entry.age(self._clock()) >= self._ttl:
            logger.debug("Cache stale: %s (%s)", locator, display_name)
            del self._entries[key]
            return None
        logger.debug("Cache hit: %s (%s)", locator, display_name)
        return entry

    async def put(self, locator: str, display_name: str, entry: CacheEntry) -> None:
        """Store an entry (unconditional overwrite)."""
        self._entries[(locator, display_name)] = entry

    async def delete(self, locator: str, display_name: str) -> None:
        """Remove an entry."""
        self._entries.pop((locator, display_name), None)

    async def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
