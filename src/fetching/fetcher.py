# src/fetching/fetcher.py — v1
"""Content fetcher: resolve a preview request into classified content.

Resolution order:
  1. Fresh cache entry for (locator, display_name), unless bypassed.
  2. Extension-based classification, no I/O.
  3. Ephemeral handle read (display-name MIME is authoritative) or remote
     GET (declared Content-Type is authoritative).
  4. MIME-family branch; anything not binary is decoded as text.
  5. Cache write, unconditional overwrite.

There is no automatic retry here. A failed read surfaces once and the
caller decides whether to offer "try again".
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

import httpx

from filepreview.cache.base_cache_store import BaseCacheStore
from filepreview.cache.models import CacheEntry
from filepreview.classification.classifier import (
    OCTET_STREAM,
    classify,
    content_for_mime,
    extension_of,
    mime_for_decision,
    mime_for_extension,
    mime_for_name,
    normalize_mime,
)
from filepreview.config.settings import Settings
from filepreview.core.errors import DecodeError, FetchError
from filepreview.core.models import ClassifiedContent, PreviewRequest, TextContent, is_ephemeral
from filepreview.fetching.blob_registry import BlobRegistry

logger = logging.getLogger(__name__)


@dataclass
class RawContent:
    """Bytes read from a locator plus what the source said about them."""

    data: bytes
    content_type: str
    charset: str | None = None


class ContentFetcher:
    """Resolves locators through the cache, the classifier and actual reads."""

    def __init__(
        self,
        cache: BaseCacheStore,
        blobs: BlobRegistry | None = None,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._cache = cache
        self._blobs = blobs if blobs is not None else BlobRegistry()
        self._owns_client = client is None
        if client is None:
            settings = settings or Settings()
            client = httpx.AsyncClient(
                timeout=settings.http_timeout_seconds,
                follow_redirects=settings.http_follow_redirects,
            )
        self._client = client
        self._clock = clock or getattr(cache, "clock", time.monotonic)

    @property
    def cache(self) -> BaseCacheStore:
        return self._cache

    @property
    def blobs(self) -> BlobRegistry:
        return self._blobs

    async def resolve(
        self, request: PreviewRequest, *, bypass_cache: bool = False
    ) -> CacheEntry:
        """Classify (and if needed read) a file, caching the outcome.

        Args:
            request: Locator and display name.
            bypass_cache: Skip the cache lookup ("try again"). The result is
                still written back.

        Returns:
            The cache entry now stored for the request.

        Raises:
            FetchError: The read itself failed.
            DecodeError: Bytes could not be decoded as text.
        """
        locator, name = request.locator, request.display_name

        if not bypass_cache:
            cached = await self._cached_entry(request)
            if cached is not None:
                return cached

        content = classify(locator, name)
        if content is not None:
            mime = mime_for_decision(locator, name)
            logger.debug("Classified %s as %s without fetching", locator, content.kind)
            return await self._store(request, content, mime)

        raw = await self._read(locator, expected_mime=self._expected_mime(request))
        mime = raw.content_type
        content = content_for_mime(mime)
        if content is None:
            content = TextContent(payload=self._decode(locator, raw))
            mime = mime or "text/plain"

        logger.info("Resolved %s as %s (%s)", locator, content.kind, mime or "unknown")
        return await self._store(request, content, mime)

    async def fetch_bytes(self, locator: str) -> tuple[bytes, str]:
        """Read raw bytes for download or image re-display.

        Returns:
            (data, content_type) where content_type may be "".

        Raises:
            FetchError: The read failed.
        """
        raw = await self._read(locator, expected_mime="")
        return raw.data, raw.content_type

    async def invalidate(self, request: PreviewRequest) -> None:
        """Drop the cached entry for a request."""
        await self._cache.delete(request.locator, request.display_name)

    async def aclose(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> ContentFetcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # --- Internals ---

    async def _cached_entry(self, request: PreviewRequest) -> CacheEntry | None:
        cached = await self._cache.get(request.locator, request.display_name)
        if cached is None:
            return None
        # An ephemeral entry must not outlive its handle.
        if request.is_ephemeral and not self._blobs.is_live(request.locator):
            await self._cache.delete(request.locator, request.display_name)
            return None
        return cached

    async def _store(
        self, request: PreviewRequest, content: ClassifiedContent, mime: str
    ) -> CacheEntry:
        entry = CacheEntry(content=content, mime_type=mime, timestamp=self._clock())
        await self._cache.put(request.locator, request.display_name, entry)
        return entry

    @staticmethod
    def _expected_mime(request: PreviewRequest) -> str:
        """MIME implied by the name; "" when nothing usable."""
        if request.is_ephemeral:
            ext = extension_of(request.display_name)
            return mime_for_extension(ext) if ext else ""
        return mime_for_name(request.locator, request.display_name)

    async def _read(self, locator: str, expected_mime: str) -> RawContent:
        if is_ephemeral(locator):
            return self._read_blob(locator, expected_mime)
        return await self._read_remote(locator, expected_mime)

    def _read_blob(self, locator: str, expected_mime: str) -> RawContent:
        try:
            handle = self._blobs.read(locator)
        except FetchError:
            logger.warning("Ephemeral handle unavailable: %s", locator)
            raise
        # The display-name extension wins; the handle's own type is the fallback.
        mime = expected_mime or normalize_mime(handle.content_type)
        return RawContent(data=handle.data, content_type=mime)

    async def _read_remote(self, locator: str, expected_mime: str) -> RawContent:
        logger.info("Fetching %s", locator)
        try:
            response = await self._client.get(
                locator, headers={"Cache-Control": "no-cache"}
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Fetch failed for %s: %s", locator, exc)
            raise FetchError(locator, str(exc) or type(exc).__name__) from exc

        if response.status_code >= 400:
            reason = f"{response.status_code} {response.reason_phrase}".strip()
            logger.warning("Fetch failed for %s: %s", locator, reason)
            raise FetchError(locator, reason, status_code=response.status_code)

        declared = normalize_mime(response.headers.get("content-type"))
        # Declared type is authoritative unless it says nothing useful.
        if declared and declared != OCTET_STREAM:
            mime = declared
        else:
            mime = expected_mime or declared
        return RawContent(
            data=response.content,
            content_type=mime,
            charset=response.charset_encoding,
        )

    @staticmethod
    def _decode(locator: str, raw: RawContent) -> str:
        encoding = raw.charset or "utf-8"
        try:
            return raw.data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            logger.warning("Could not decode %s as %s text: %s", locator, encoding, exc)
            raise DecodeError(locator, f"not valid {encoding} text") from exc
