# tests/unit/fetching/test_blob_registry.py — v1
"""Tests for fetching/blob_registry.py — ephemeral handle lifecycle."""

from __future__ import annotations

import pytest

from filepreview.core.errors import FetchError
from filepreview.fetching.blob_registry import BlobRegistry


class TestBlobRegistry:
    def test_create_returns_blob_locator(self, blobs):
        locator = blobs.create(b"data", "text/plain", name="a.txt")
        assert locator.startswith("blob:session/")
        assert blobs.is_live(locator)

    def test_locators_are_unique(self, blobs):
        assert blobs.create(b"x") != blobs.create(b"x")

    def test_read(self, blobs):
        locator = blobs.create(b"data", "text/plain", name="a.txt")
        handle = blobs.read(locator)
        assert handle.data == b"data"
        assert handle.content_type == "text/plain"
        assert handle.name == "a.txt"

    def test_read_revoked_fails(self, blobs):
        locator = blobs.create(b"data")
        blobs.revoke(locator)
        with pytest.raises(FetchError):
            blobs.read(locator)

    def test_revoke_twice_is_harmless(self, blobs):
        locator = blobs.create(b"data")
        blobs.revoke(locator)
        blobs.revoke(locator)
        assert not blobs.is_live(locator)

    def test_revoke_all(self):
        registry = BlobRegistry(origin="upload")
        registry.create(b"1")
        registry.create(b"2")
        assert len(registry) == 2
        registry.revoke_all()
        assert len(registry) == 0

    def test_origin_in_locator(self):
        assert BlobRegistry(origin="cli").create(b"").startswith("blob:cli/")
