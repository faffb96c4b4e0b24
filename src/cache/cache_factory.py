# src/cache/cache_factory.py — v3
"""Factory for cache store instantiation."""

from __future__ import annotations

from typing import Callable

from filepreview.cache.base_cache_store import BaseCacheStore
from filepreview.config.settings import Settings


def create_cache_store(
    settings: Settings | None = None,
    clock: Callable[[], float] | None = None,
) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to a 5 minute memory store.
        clock: Optional time source (seconds), mainly for tests.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend
    ttl = 300.0 if settings is None else settings.cache_ttl_seconds

    if backend == "memory":
        from filepreview.cache.memory_store import MemoryCacheStore
        if clock is None:
            return MemoryCacheStore(ttl_seconds=ttl)
        return MemoryCacheStore(ttl_seconds=ttl, clock=clock)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
