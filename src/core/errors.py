# src/core/errors.py — v1
"""Error taxonomy for preview resolution.

An undecided classification is not an error: ``classify()`` returns None and
the fetcher takes over. Everything below stops at the preview session, which
renders it as an error panel with a download link.
"""

from __future__ import annotations


class PreviewError(Exception):
    """Base class for preview failures."""


class FetchError(PreviewError):
    """Network or blob read failed (not found, forbidden, connection error, revoked handle)."""

    def __init__(self, locator: str, reason: str, status_code: int | None = None):
        self.locator = locator
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to fetch file: {reason}")


class DecodeError(PreviewError):
    """Content was read but could not be decoded as the expected kind."""

    def __init__(self, locator: str, reason: str):
        self.locator = locator
        self.reason = reason
        super().__init__(f"Failed to read file content: {reason}")


class HighlightError(PreviewError):
    """Syntax highlighting failed for the guessed language. Recovered locally."""

    def __init__(self, language: str):
        self.language = language
        super().__init__(f"No highlighter for language {language!r}")


class RetryExhausted(PreviewError):
    """Image failed to display after every automatic retry."""

    def __init__(self, locator: str, attempts: int):
        self.locator = locator
        self.attempts = attempts
        super().__init__(
            "Failed to load image after multiple attempts. "
            "The file may be corrupted or unsupported."
        )
