# src/cache/base_cache_store.py — v2
"""Abstract cache store interface for classified preview content."""

from __future__ import annotations

from abc import ABC, abstractmethod

from filepreview.cache.models import CacheEntry


class BaseCacheStore(ABC):
    """Unified interface for preview cache backends.

    Keys are (locator, display_name) pairs. Implementations treat a stale
    entry exactly like a missing one.
    """

    @abstractmethod
    async def get(self, locator: str, display_name: str) -> CacheEntry | None:
        """Retrieve a fresh entry, or None on miss or staleness."""

    @abstractmethod
    async def put(self, locator: str, display_name: str, entry: CacheEntry) -> None:
        """Store an entry, replacing any previous one."""

    @abstractmethod
    async def delete(self, locator: str, display_name: str) -> None:
        """Remove an entry if present."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop every entry."""
