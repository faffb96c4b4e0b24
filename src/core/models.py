# src/core/models.py — v2
"""Domain models shared by every layer: requests, classified content, handles."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

EPHEMERAL_SCHEME = "blob:"


def is_ephemeral(locator: str) -> bool:
    """Whether a locator is a session-local handle rather than a remote address."""
    return locator.startswith(EPHEMERAL_SCHEME)


# === REQUESTS ===


class PreviewRequest(BaseModel):
    """What the caller wants previewed. Cache identity is (locator, display_name)."""

    model_config = ConfigDict(frozen=True)

    locator: str
    display_name: str = ""

    @property
    def cache_key(self) -> tuple[str, str]:
        return (self.locator, self.display_name)

    @property
    def is_ephemeral(self) -> bool:
        return is_ephemeral(self.locator)


# === CLASSIFIED CONTENT ===


class ImageContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"


class VideoContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["video"] = "video"


class PdfContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["pdf"] = "pdf"


DocumentSubtype = Literal["document", "spreadsheet", "presentation"]


class DocumentContent(BaseModel):
    """Office file with no inline renderer; previewed as an icon plus download."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["document"] = "document"
    subtype: DocumentSubtype = "document"


class TextContent(BaseModel):
    """Decoded textual payload (plain text, code, CSV)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    payload: str


ClassifiedContent = Union[
    ImageContent, VideoContent, PdfContent, DocumentContent, TextContent
]


# === EPHEMERAL HANDLES ===


class BlobHandle(BaseModel):
    """Bytes materialized in the current session behind a ``blob:`` locator."""

    model_config = ConfigDict(frozen=True)

    locator: str
    data: bytes
    content_type: str = ""
    name: str = ""

    @property
    def size(self) -> int:
        return len(self.data)
