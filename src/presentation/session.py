# src/presentation/session.py — v1
"""One active preview: request switching, loading, views and actions.

A session shows one (locator, display_name) at a time. Loads are
single-flight per session: while the current request is being resolved,
further load calls are dropped. Switching requests mid-load makes the
latest request win; the older result still lands in the cache but is never
shown. Fetch and decode failures end here as an ErrorView.

Usage:
    session = PreviewSession(fetcher)
    unsubscribe = session.subscribe(render)
    await session.open(PreviewRequest(locator=url, display_name="data.csv"))
    session.show_more()
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable
from urllib.parse import unquote

from filepreview.cache.models import CacheEntry
from filepreview.classification.classifier import locator_path
from filepreview.config.settings import Settings
from filepreview.core.errors import FetchError, PreviewError
from filepreview.core.models import (
    DocumentContent,
    ImageContent,
    PdfContent,
    PreviewRequest,
    TextContent,
    VideoContent,
)
from filepreview.fetching.fetcher import ContentFetcher
from filepreview.logging.context import set_request_context, set_session_context
from filepreview.presentation.image_presenter import ImagePresenter, ImageState
from filepreview.presentation.views import (
    CodeView,
    DocumentView,
    ErrorView,
    Header,
    ImageView,
    LoadingView,
    PdfView,
    PreviewView,
    SaveTrigger,
    SpreadsheetView,
    VideoView,
    mime_badge,
    truncate_filename,
)
from filepreview.rendering.models import RenderWindow
from filepreview.rendering.table_renderer import is_tabular, render_table
from filepreview.rendering.text_renderer import render_text

logger = logging.getLogger(__name__)

Listener = Callable[[PreviewView], None]

NO_LOCATOR_MESSAGE = "No file URL provided"
MEDIA_FAILED_MESSAGE = (
    "Failed to load {kind} preview. This might be due to permission issues "
    "or the file may not exist."
)


class PreviewSession:
    """State holder for one preview widget."""

    def __init__(
        self,
        fetcher: ContentFetcher,
        settings: Settings | None = None,
        session_id: str | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings or Settings()
        self._session_id = session_id or uuid.uuid4().hex[:8]
        self._request: PreviewRequest | None = None
        self._generation = 0
        self._inflight: int | None = None
        self._entry: CacheEntry | None = None
        self._window = self._initial_window()
        self._presenter: ImagePresenter | None = None
        self._listeners: list[Listener] = []
        self._view: PreviewView = LoadingView()

    # --- Observation ---

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def request(self) -> PreviewRequest | None:
        return self._request

    @property
    def view(self) -> PreviewView:
        return self._view

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    @property
    def window(self) -> RenderWindow:
        return self._window

    @property
    def is_loading(self) -> bool:
        return self._inflight is not None and self._inflight == self._generation

    @property
    def image_presenter(self) -> ImagePresenter | None:
        return self._presenter

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a view listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Loading ---

    async def open(
        self, request: PreviewRequest | str, display_name: str = ""
    ) -> PreviewView | None:
        """Make ``request`` the active preview and load it."""
        self.select(request, display_name)
        return await self.load()

    def select(self, request: PreviewRequest | str, display_name: str = "") -> PreviewRequest:
        """Make ``request`` the active one without resolving it.

        Enough for ``download()``, which reads the file on its own.
        """
        if isinstance(request, str):
            request = PreviewRequest(locator=request, display_name=display_name)

        if request != self._request:
            self._generation += 1
            self._request = request
            self._entry = None
            self._window = self._initial_window()
            self._release_presenter()
        return request

    async def load(self, *, bypass_cache: bool = False) -> PreviewView | None:
        """Resolve the active request and publish its view.

        Returns:
            The published view, or None when the call was dropped (a load is
            already in flight) or its result went stale.
        """
        request = self._request
        if request is None or not request.locator:
            return self._publish(
                ErrorView(NO_LOCATOR_MESSAGE, can_retry=False, can_download=False)
            )
        if self.is_loading:
            logger.debug("Load already in flight for %s; dropped", request.locator)
            return None

        generation = self._generation
        self._inflight = generation
        set_session_context(self._session_id)
        set_request_context(request.locator, request.display_name)
        self._publish(LoadingView(header=self._header()))

        try:
            entry = await self._fetcher.resolve(request, bypass_cache=bypass_cache)
        except PreviewError as exc:
            if generation != self._generation:
                return None
            logger.warning("Preview unavailable for %s: %s", request.locator, exc)
            return self._publish(ErrorView(str(exc), header=self._header()))
        finally:
            if self._inflight == generation:
                self._inflight = None

        if generation != self._generation:
            logger.debug("Discarding stale result for %s", request.locator)
            return None

        self._entry = entry
        return self._publish(self._build_view())

    async def retry(self) -> PreviewView | None:
        """Manual "try again": restart resolution, skipping the cache."""
        self._release_presenter()
        self._entry = None
        return await self.load(bypass_cache=True)

    # --- Window ---

    def show_more(self) -> PreviewView:
        if self._is_text():
            self._window = self._window.show_more()
            return self._publish(self._build_view())
        return self._view

    def show_less(self) -> PreviewView:
        if self._is_text():
            self._window = self._window.show_less()
            return self._publish(self._build_view())
        return self._view

    # --- Media events ---

    def image_loaded(self) -> PreviewView:
        if self._presenter is not None:
            self._presenter.mark_loaded()
        return self._view

    async def image_failed(self) -> PreviewView:
        """The image view could not display its current source."""
        presenter = self._presenter
        if presenter is None:
            return self._view
        generation = self._generation
        await presenter.mark_failed()
        if generation != self._generation or presenter is not self._presenter:
            return self._view
        return self._publish(self._build_view())

    def media_failed(self) -> PreviewView:
        """Video or PDF failed to load: terminal fallback, no auto-retry."""
        entry = self._entry
        if entry is None or not isinstance(entry.content, (VideoContent, PdfContent)):
            return self._view
        kind = "video" if isinstance(entry.content, VideoContent) else "PDF"
        return self._publish(
            ErrorView(MEDIA_FAILED_MESSAGE.format(kind=kind), header=self._header())
        )

    # --- Download ---

    async def download(self) -> SaveTrigger:
        """Fetch the file for saving, whatever the preview state.

        Raises:
            FetchError: The locator cannot be read.
        """
        request = self._request
        if request is None or not request.locator:
            raise FetchError("", NO_LOCATOR_MESSAGE)
        data, content_type = await self._fetcher.fetch_bytes(request.locator)
        filename = request.display_name or _filename_from_locator(request.locator)
        logger.info("Prepared download of %s (%d bytes)", filename, len(data))
        return SaveTrigger(filename=filename, data=data, content_type=content_type)

    # --- Lifecycle ---

    def close(self) -> None:
        """Release owned resources and ignore any in-flight result."""
        self._generation += 1
        self._inflight = None
        self._release_presenter()
        self._listeners.clear()

    def __enter__(self) -> PreviewSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Internals ---

    def _initial_window(self) -> RenderWindow:
        return RenderWindow.initial(
            0,
            initial_size=self._settings.initial_visible_lines,
            chunk_size=self._settings.visible_lines_chunk,
        )

    def _is_text(self) -> bool:
        return self._entry is not None and isinstance(self._entry.content, TextContent)

    def _header(self) -> Header:
        request = self._request
        name = request.display_name if request else ""
        badge = mime_badge(self._entry.mime_type) if self._entry else ""
        return Header(
            title=name,
            label=truncate_filename(name, self._settings.filename_max_length),
            badge=badge,
        )

    def _build_view(self) -> PreviewView:
        entry = self._entry
        request = self._request
        if entry is None or request is None:
            return LoadingView(header=self._header())

        content = entry.content
        header = self._header()
        if isinstance(content, ImageContent):
            presenter = self._ensure_presenter(request)
            if presenter.state is ImageState.FAILED:
                return ErrorView(
                    str(presenter.error),
                    header=header,
                    retry_exhausted=True,
                )
            return ImageView(
                source=presenter.source,
                header=header,
                attempt=presenter.retry.attempt_count,
            )
        if isinstance(content, VideoContent):
            return VideoView(
                source=request.locator,
                mime_type=entry.mime_type or "video/mp4",
                header=header,
            )
        if isinstance(content, PdfContent):
            return PdfView(source=request.locator, header=header)
        if isinstance(content, DocumentContent):
            return DocumentView(subtype=content.subtype, header=header)
        if isinstance(content, TextContent):
            if is_tabular(request.display_name):
                table = render_table(
                    content.payload, self._window, self._settings.truncation_marker
                )
                self._window = table.window
                return SpreadsheetView(table=table, header=header)
            text = render_text(content.payload, self._window, request.display_name)
            self._window = text.window
            return CodeView(text=text, header=header)
        raise TypeError(f"Unhandled content kind: {type(content).__name__}")

    def _ensure_presenter(self, request: PreviewRequest) -> ImagePresenter:
        if self._presenter is None:
            self._presenter = ImagePresenter(
                request.locator,
                self._fetcher.fetch_bytes,
                self._fetcher.blobs,
                max_retries=self._settings.image_max_retries,
                display_name=request.display_name,
            )
        elif self._presenter.locator != request.locator:
            self._presenter.reset(request.locator)
        return self._presenter

    def _release_presenter(self) -> None:
        if self._presenter is not None:
            self._presenter.close()
            self._presenter = None

    def _publish(self, view: PreviewView) -> PreviewView:
        self._view = view
        for listener in list(self._listeners):
            listener(view)
        return view


def _filename_from_locator(locator: str) -> str:
    tail = unquote(locator_path(locator).rsplit("/", 1)[-1])
    return tail or "download"
