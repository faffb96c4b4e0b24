# src/presentation/image_presenter.py — v1
"""Image display with bounded automatic retry.

State machine: LOADING → DISPLAYED, or LOADING → RETRYING → DISPLAYED | FAILED.

When the direct locator fails to display, the presenter re-reads the bytes
through the fetcher and shows them from a temporary ``blob:`` handle it owns.
After ``max_retries`` such attempts the next failure is terminal. Temporary
handles are released on reset, on close, and when a newer one replaces them;
they are never put in the shared cache.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from filepreview.core.errors import FetchError, RetryExhausted
from filepreview.core.models import is_ephemeral
from filepreview.fetching.blob_registry import BlobRegistry

logger = logging.getLogger(__name__)

FetchBytes = Callable[[str], Awaitable[tuple[bytes, str]]]

DEFAULT_MAX_RETRIES = 2


class ImageState(str, Enum):
    LOADING = "loading"
    DISPLAYED = "displayed"
    RETRYING = "retrying"
    FAILED = "failed"


@dataclass
class RetryState:
    """Automatic retry budget. ``attempt_count`` never exceeds ``max_attempts``."""

    attempt_count: int = 0
    max_attempts: int = DEFAULT_MAX_RETRIES

    @property
    def exhausted(self) -> bool:
        return self.attempt_count >= self.max_attempts


class ImagePresenter:
    """Owns the display source of one image preview."""

    def __init__(
        self,
        locator: str,
        fetch_bytes: FetchBytes,
        blobs: BlobRegistry,
        max_retries: int = DEFAULT_MAX_RETRIES,
        display_name: str = "",
    ) -> None:
        self._fetch_bytes = fetch_bytes
        self._blobs = blobs
        self._max_retries = max_retries
        self._display_name = display_name
        self._temporary: str | None = None
        self._generation = 0
        self._closed = False
        self._start(locator)

    # --- State ---

    @property
    def locator(self) -> str:
        return self._locator

    @property
    def source(self) -> str:
        """Locator the view should load right now."""
        return self._source

    @property
    def state(self) -> ImageState:
        return self._state

    @property
    def retry(self) -> RetryState:
        return self._retry

    @property
    def error(self) -> RetryExhausted | None:
        return self._error

    @property
    def temporary_locator(self) -> str | None:
        return self._temporary

    # --- Events from the view ---

    def mark_loaded(self) -> ImageState:
        if self._state is not ImageState.FAILED:
            self._state = ImageState.DISPLAYED
        return self._state

    async def mark_failed(self) -> ImageState:
        """Handle a display failure of the current source.

        Retries while budget remains; a retry whose re-fetch fails counts as
        another failed load. Once exhausted the presenter is FAILED and
        ignores further failures.
        """
        generation = self._generation
        while self._state is not ImageState.FAILED:
            if self._retry.exhausted:
                self._fail()
                break

            self._retry.attempt_count += 1
            self._state = ImageState.RETRYING
            logger.warning(
                "Image failed to load (attempt %d/%d): %s",
                self._retry.attempt_count, self._retry.max_attempts, self._locator,
            )
            try:
                data, content_type = await self._refetch()
            except FetchError as exc:
                logger.warning("Error fetching image as blob: %s", exc)
                if generation != self._generation:
                    break
                continue

            if generation != self._generation:
                # Input changed or closed while fetching; nothing to apply.
                break
            self._replace_temporary(
                self._blobs.create(data, content_type, name=self._display_name)
            )
            break
        return self._state

    # --- Lifecycle ---

    def reset(self, locator: str) -> None:
        """Input locator changed: drop the temporary handle and start over."""
        self._release_temporary()
        self._generation += 1
        self._start(locator)

    def close(self) -> None:
        """Release owned resources. Safe to call more than once."""
        self._release_temporary()
        self._generation += 1
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> ImagePresenter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Internals ---

    def _start(self, locator: str) -> None:
        self._locator = locator
        self._source = locator
        self._state = ImageState.LOADING
        self._retry = RetryState(max_attempts=self._max_retries)
        self._error: RetryExhausted | None = None

    def _fail(self) -> None:
        self._state = ImageState.FAILED
        self._error = RetryExhausted(self._locator, self._retry.attempt_count)
        logger.error(
            "Image failed to load after %d attempts: %s",
            self._retry.attempt_count, self._locator,
        )

    async def _refetch(self) -> tuple[bytes, str]:
        if is_ephemeral(self._locator):
            raise FetchError(self._locator, "blob handle failed to load directly")
        return await self._fetch_bytes(self._locator)

    def _replace_temporary(self, locator: str) -> None:
        self._release_temporary()
        self._temporary = locator
        self._source = locator

    def _release_temporary(self) -> None:
        if self._temporary is not None:
            self._blobs.revoke(self._temporary)
            self._temporary = None
