# src/classification/classifier.py — v1
"""Content-kind classification from names and MIME types.

Pure functions, no I/O. ``classify`` decides from the display name or the
locator path alone and returns None when the extension is not conclusive;
the fetcher then classifies from the actual content type via
``content_for_mime``.
"""

from __future__ import annotations

import mimetypes
from urllib.parse import urlsplit

from filepreview.core.models import (
    ClassifiedContent,
    DocumentContent,
    DocumentSubtype,
    ImageContent,
    PdfContent,
    VideoContent,
    is_ephemeral,
)

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp", "bmp", "svg"})
VIDEO_EXTENSIONS = frozenset({"mp4", "webm", "ogg", "mov", "avi"})
PDF_EXTENSIONS = frozenset({"pdf"})

# Extension → document subtype.
_DOCUMENT_EXTENSIONS: dict[str, DocumentSubtype] = {
    "doc": "document",
    "docx": "document",
    "xls": "spreadsheet",
    "xlsx": "spreadsheet",
    "ppt": "presentation",
    "pptx": "presentation",
}

# Office MIME string → document subtype.
OFFICE_MIME_TYPES: dict[str, DocumentSubtype] = {
    "application/msword": "document",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "document",
    "application/vnd.ms-excel": "spreadsheet",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "spreadsheet",
    "application/vnd.ms-powerpoint": "presentation",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "presentation",
}

_TEXT_EXTENSIONS = frozenset({
    "txt", "md", "js", "jsx", "ts", "tsx", "html", "css",
    "json", "yml", "yaml", "csv",
})

_MIME_MAP: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
    "svg": "image/svg+xml",
    "mp4": "video/mp4",
    "webm": "video/webm",
    "ogg": "video/ogg",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    **{ext: "text/plain" for ext in _TEXT_EXTENSIONS},
}

OCTET_STREAM = "application/octet-stream"


def extension_of(name: str) -> str:
    """Lower-cased extension without the dot, or "" when there is none."""
    if not name:
        return ""
    tail = name.rsplit("/", 1)[-1]
    if "." not in tail:
        return ""
    return tail.rsplit(".", 1)[-1].lower()


def locator_path(locator: str) -> str:
    """Path component of a locator, without query string or fragment."""
    if is_ephemeral(locator):
        return ""
    return urlsplit(locator).path


def classify(locator: str, display_name: str = "") -> ClassifiedContent | None:
    """Decide the content kind from extensions alone.

    Args:
        locator: Remote URL or ``blob:`` handle.
        display_name: Original filename, checked before the locator path.

    Returns:
        The classified content, or None when a fetch is needed to decide.
    """
    decided = _decide(locator, display_name)
    return decided[0] if decided else None


def _decide(locator: str, display_name: str) -> tuple[ClassifiedContent, str] | None:
    """First conclusive (content, extension) from the display name, then the locator."""
    for candidate in (display_name, locator_path(locator)):
        ext = extension_of(candidate)
        content = _classify_extension(ext)
        if content is not None:
            return content, ext
    return None


def _classify_extension(ext: str) -> ClassifiedContent | None:
    if not ext:
        return None
    if ext in IMAGE_EXTENSIONS:
        return ImageContent()
    if ext in VIDEO_EXTENSIONS:
        return VideoContent()
    if ext in PDF_EXTENSIONS:
        return PdfContent()
    subtype = _DOCUMENT_EXTENSIONS.get(ext)
    if subtype is not None:
        return DocumentContent(subtype=subtype)
    return None


def mime_for_extension(ext: str) -> str:
    """Expected MIME type for an extension (without dot)."""
    ext = ext.lower().lstrip(".")
    if not ext:
        return ""
    mime = _MIME_MAP.get(ext)
    if mime:
        return mime
    guessed, _ = mimetypes.guess_type(f"file.{ext}")
    return guessed or OCTET_STREAM


def mime_for_name(locator: str, display_name: str = "") -> str:
    """Expected MIME from the display name, falling back to the locator path."""
    ext = extension_of(display_name) or extension_of(locator_path(locator))
    return mime_for_extension(ext)


def content_for_mime(mime: str) -> ClassifiedContent | None:
    """Map a MIME type onto a binary content kind.

    Returns None for everything that should be decoded as text.
    """
    mime = normalize_mime(mime)
    if mime.startswith("image/"):
        return ImageContent()
    if mime.startswith("video/"):
        return VideoContent()
    if mime == "application/pdf":
        return PdfContent()
    subtype = OFFICE_MIME_TYPES.get(mime)
    if subtype is not None:
        return DocumentContent(subtype=subtype)
    return None


def mime_for_decision(locator: str, display_name: str = "") -> str:
    """MIME recorded alongside a classification decided without I/O.

    Uses the same extension that decided the kind, so a conclusive locator
    suffix wins over an inconclusive display name.
    """
    decided = _decide(locator, display_name)
    if decided is None:
        return mime_for_name(locator, display_name)
    return mime_for_extension(decided[1])


def normalize_mime(mime: str | None) -> str:
    """Strip parameters (``; charset=...``) and lower-case."""
    if not mime:
        return ""
    return mime.split(";", 1)[0].strip().lower()
