# src/fetching/blob_registry.py — v1
"""Session-scoped registry of ephemeral ``blob:`` handles.

A handle points at bytes already held in memory (a file picked for upload
but not yet stored, or a temporary copy made by the image presenter). It is
valid until revoked; reading a revoked handle fails like a missing file.
"""

from __future__ import annotations

import logging
import uuid

from filepreview.core.errors import FetchError
from filepreview.core.models import EPHEMERAL_SCHEME, BlobHandle

logger = logging.getLogger(__name__)


class BlobRegistry:
    """Creates, reads and revokes ephemeral handles."""

    def __init__(self, origin: str = "session") -> None:
        self._origin = origin
        self._handles: dict[str, BlobHandle] = {}

    def create(self, data: bytes, content_type: str = "", name: str = "") -> str:
        """Materialize bytes and return a fresh ``blob:`` locator."""
        locator = f"{EPHEMERAL_SCHEME}{self._origin}/{uuid.uuid4()}"
        self._handles[locator] = BlobHandle(
            locator=locator, data=data, content_type=content_type, name=name,
        )
        logger.debug("Created %s (%d bytes, %s)", locator, len(data), content_type or "untyped")
        return locator

    def read(self, locator: str) -> BlobHandle:
        """Return the handle behind a locator.

        Raises:
            FetchError: If the handle was revoked or never existed.
        """
        handle = self._handles.get(locator)
        if handle is None:
            raise FetchError(locator, "blob handle is not available (revoked or unknown)")
        return handle

    def is_live(self, locator: str) -> bool:
        return locator in self._handles

    def revoke(self, locator: str) -> None:
        """Release a handle. Revoking twice is harmless."""
        if self._handles.pop(locator, None) is not None:
            logger.debug("Revoked %s", locator)

    def revoke_all(self) -> None:
        """Release every handle (end of session)."""
        self._handles.clear()

    def __len__(self) -> int:
        return len(self._handles)
