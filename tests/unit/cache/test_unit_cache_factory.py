# tests/unit/cache/test_unit_cache_factory.py — v2
"""Tests for cache/cache_factory.py — backend selection."""

from __future__ import annotations

from filepreview.cache.cache_factory import create_cache_store
from filepreview.cache.memory_store import MemoryCacheStore
from filepreview.config.settings import Settings


class TestCreateCacheStore:
    def test_default_is_five_minute_memory_store(self):
        store = create_cache_store()
        assert isinstance(store, MemoryCacheStore)
        assert store.ttl_seconds == 300

    def test_uses_settings_ttl(self):
        store = create_cache_store(Settings(_env_file=None, cache_ttl_seconds=12))
        assert isinstance(store, MemoryCacheStore)
        assert store.ttl_seconds == 12

    def test_custom_clock(self, clock):
        store = create_cache_store(clock=clock)
        assert store.clock is clock
