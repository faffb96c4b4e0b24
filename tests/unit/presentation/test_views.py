# tests/unit/presentation/test_views.py — v1
"""Tests for presentation/views.py — header helpers."""

from __future__ import annotations

import pytest

from filepreview.presentation.views import ErrorView, mime_badge, truncate_filename


class TestTruncateFilename:
    def test_short_name_unchanged(self):
        assert truncate_filename("report.pdf") == "report.pdf"

    def test_exact_limit_unchanged(self):
        name = "a" * 36 + ".pdf"
        assert truncate_filename(name) == name

    def test_keeps_extension(self):
        result = truncate_filename("quarterly-budget-reimbursement-receipts-2026.pdf", 20)
        assert result == "quarterly-bud....pdf"
        assert len(result) == 20

    def test_no_extension(self):
        result = truncate_filename("x" * 50, 40)
        assert result == "x" * 37 + "..."

    @pytest.mark.parametrize("name", ["b" * 100 + ".xlsx", "c" * 41, "d" * 60 + ".tar.gz"])
    def test_never_exceeds_limit(self, name):
        assert len(truncate_filename(name, 40)) <= 40

    def test_empty(self):
        assert truncate_filename("") == ""


class TestMimeBadge:
    def test_subtype(self):
        assert mime_badge("image/png") == "png"

    def test_empty(self):
        assert mime_badge("") == ""


class TestErrorView:
    def test_defaults_offer_retry_and_download(self):
        view = ErrorView("boom")
        assert view.can_retry
        assert view.can_download
        assert not view.retry_exhausted
