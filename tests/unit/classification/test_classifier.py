# tests/unit/classification/test_classifier.py — v1
"""Tests for classification/classifier.py — extension and MIME classification."""

from __future__ import annotations

import pytest

from filepreview.classification.classifier import (
    OCTET_STREAM,
    classify,
    content_for_mime,
    extension_of,
    locator_path,
    mime_for_decision,
    mime_for_extension,
    mime_for_name,
    normalize_mime,
)
from filepreview.core.models import (
    DocumentContent,
    ImageContent,
    PdfContent,
    VideoContent,
)


class TestExtensionOf:
    @pytest.mark.parametrize("name,expected", [
        ("photo.PNG", "png"),
        ("archive.tar.gz", "gz"),
        ("README", ""),
        ("", ""),
        ("dir.v2/notes", ""),
        ("https://example.com/a/b/report.pdf", "pdf"),
    ])
    def test_extension(self, name, expected):
        assert extension_of(name) == expected


class TestLocatorPath:
    def test_strips_query_and_fragment(self):
        assert locator_path("https://cdn.example.com/x/photo.png?sig=abc#top") == "/x/photo.png"

    def test_blob_has_no_path(self):
        assert locator_path("blob:session/1234") == ""


class TestClassify:
    @pytest.mark.parametrize("name,kind", [
        ("a.jpg", "image"),
        ("a.jpeg", "image"),
        ("a.svg", "image"),
        ("clip.mp4", "video"),
        ("clip.mov", "video"),
        ("clip.ogg", "video"),
        ("report.pdf", "pdf"),
        ("letter.docx", "document"),
    ])
    def test_conclusive_extensions(self, name, kind):
        content = classify("https://files.example.com/opaque-id", name)
        assert content is not None
        assert content.kind == kind

    @pytest.mark.parametrize("name,subtype", [
        ("a.doc", "document"),
        ("a.docx", "document"),
        ("a.xls", "spreadsheet"),
        ("a.xlsx", "spreadsheet"),
        ("a.ppt", "presentation"),
        ("a.pptx", "presentation"),
    ])
    def test_document_subtypes(self, name, subtype):
        assert classify("https://files.example.com/x", name) == DocumentContent(subtype=subtype)

    @pytest.mark.parametrize("name", ["notes.txt", "data.csv", "app.tsx", "README", ""])
    def test_inconclusive_returns_none(self, name):
        assert classify("https://files.example.com/opaque-id", name) is None

    def test_display_name_wins_over_locator(self):
        content = classify("https://files.example.com/preview.pdf", "holiday.png")
        assert isinstance(content, ImageContent)

    def test_locator_path_used_when_display_name_inconclusive(self):
        content = classify("https://files.example.com/v/clip.webm?token=1", "notes")
        assert isinstance(content, VideoContent)

    def test_case_insensitive(self):
        assert isinstance(classify("https://x.example.com/f", "SCAN.PDF"), PdfContent)

    def test_blob_uses_display_name_only(self):
        assert classify("blob:session/abc", "") is None
        assert isinstance(classify("blob:session/abc", "photo.webp"), ImageContent)


class TestMime:
    def test_known_extension(self):
        assert mime_for_extension("png") == "image/png"
        assert mime_for_extension(".MOV") == "video/quicktime"

    def test_text_extensions_map_to_plain(self):
        assert mime_for_extension("csv") == "text/plain"

    def test_unknown_extension_is_octet_stream(self):
        assert mime_for_extension("zzqx") == OCTET_STREAM

    def test_no_extension(self):
        assert mime_for_extension("") == ""

    def test_mime_for_name_prefers_display_name(self):
        assert mime_for_name("https://x.example.com/a.pdf", "b.png") == "image/png"
        assert mime_for_name("https://x.example.com/a.pdf", "") == "application/pdf"

    def test_mime_for_decision_follows_deciding_extension(self):
        # "notes.txt" is not conclusive, so the .pdf path decided the kind.
        assert mime_for_decision("https://x.example.com/a.pdf", "notes.txt") == "application/pdf"

    def test_normalize(self):
        assert normalize_mime("Text/Plain; charset=UTF-8") == "text/plain"
        assert normalize_mime(None) == ""


class TestContentForMime:
    @pytest.mark.parametrize("mime,kind", [
        ("image/png", "image"),
        ("video/mp4; codecs=avc1", "video"),
        ("application/pdf", "pdf"),
        ("application/vnd.ms-excel", "document"),
    ])
    def test_binary_kinds(self, mime, kind):
        content = content_for_mime(mime)
        assert content is not None
        assert content.kind == kind

    def test_office_subtype(self):
        content = content_for_mime(
            "application/vnd.openxmlformats-officedocument.presentationml.presentation"
        )
        assert content == DocumentContent(subtype="presentation")

    @pytest.mark.parametrize("mime", ["text/csv", "application/json", "", OCTET_STREAM])
    def test_everything_else_is_text(self, mime):
        assert content_for_mime(mime) is None
