# src/presentation/views.py — v1
"""View models produced by a preview session.

Each view carries the header label and MIME badge so a front end can draw
the title bar and the always-present download button without consulting
anything else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from filepreview.core.models import DocumentSubtype
from filepreview.rendering.models import TableView, TextView

DEFAULT_FILENAME_MAX_LENGTH = 40


def truncate_filename(filename: str, max_length: int = DEFAULT_FILENAME_MAX_LENGTH) -> str:
    """Shorten a long file name for the header, keeping its extension.

    With a limit of 20,
    ``quarterly-budget-reimbursement-receipts-2026.pdf``
    becomes ``quarterly-bud....pdf``.
    """
    if not filename or len(filename) <= max_length:
        return filename
    if "." in filename:
        name, extension = filename.rsplit(".", 1)
    else:
        name, extension = filename, ""
    suffix = f".{extension}" if extension else ""
    keep = max(max_length - 3 - len(suffix), 1)
    return f"{name[:keep]}...{suffix}"


def mime_badge(mime_type: str) -> str:
    """Short badge text for a MIME type (``image/png`` → ``png``)."""
    if not mime_type:
        return ""
    return mime_type.split("/", 1)[-1]


@dataclass(frozen=True)
class Header:
    """Title bar content."""

    title: str = ""
    label: str = ""
    badge: str = ""


@dataclass(frozen=True)
class LoadingView:
    header: Header = field(default_factory=Header)


@dataclass(frozen=True)
class ErrorView:
    """Terminal panel: message, download link and optionally "try again"."""

    message: str
    header: Header = field(default_factory=Header)
    can_retry: bool = True
    can_download: bool = True
    retry_exhausted: bool = False


@dataclass(frozen=True)
class ImageView:
    source: str
    header: Header = field(default_factory=Header)
    attempt: int = 0


@dataclass(frozen=True)
class VideoView:
    source: str
    mime_type: str
    header: Header = field(default_factory=Header)


@dataclass(frozen=True)
class PdfView:
    source: str
    header: Header = field(default_factory=Header)


@dataclass(frozen=True)
class DocumentView:
    """Office file: icon plus download, no inline rendering."""

    subtype: DocumentSubtype
    header: Header = field(default_factory=Header)


@dataclass(frozen=True)
class CodeView:
    text: TextView
    header: Header = field(default_factory=Header)


@dataclass(frozen=True)
class SpreadsheetView:
    table: TableView
    header: Header = field(default_factory=Header)


PreviewView = Union[
    LoadingView, ErrorView, ImageView, VideoView, PdfView,
    DocumentView, CodeView, SpreadsheetView,
]


@dataclass(frozen=True)
class SaveTrigger:
    """What the front end needs to save a file locally."""

    filename: str
    data: bytes
    content_type: str = ""
