# src/logging/context.py — v2
"""Contextual logging support — attach session, locator and file name to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per preview load.
_session_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "session_id", default=None
)
_locator: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "locator", default=None
)
_display_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "display_name", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    session_id: str | None = None
    locator: str | None = None
    display_name: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        session_id=_session_id.get(),
        locator=_locator.get(),
        display_name=_display_name.get(),
    )


def set_session_context(session_id: str) -> None:
    """Set the preview session id (once per session)."""
    _session_id.set(session_id)


def set_request_context(locator: str, display_name: str | None = None) -> None:
    """Set the file being resolved (per load)."""
    _locator.set(locator)
    _display_name.set(display_name or None)


def clear_context() -> None:
    """Reset all context variables."""
    _session_id.set(None)
    _locator.set(None)
    _display_name.set(None)
