# src/logging/logger.py — v2
"""Log formatting and setup for the ``filepreview`` logger tree.

Modules log through ``logging.getLogger(__name__)``; everything under
``filepreview.`` inherits the handler installed by ``setup_logging``. Both
formatters add the preview context (session, locator, display name) that
the session sets before each load.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

from filepreview.logging.context import get_context

ROOT_LOGGER = "filepreview"

# Third-party loggers that are chatty at INFO.
NOISY_LOGGERS = ("httpx", "httpcore")


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, preview context nested under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            payload["context"] = context

        data = getattr(record, "data", None)
        if data:
            payload["data"] = data

        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Single-line format for terminals: ``time [LEVEL] logger [session] (file) message``."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = (
            f"{_timestamp(record):%H:%M:%S} [{record.levelname:<7}] {record.name}"
        )
        if ctx.session_id:
            line += f" [{ctx.session_id}]"
        if ctx.display_name:
            line += f" ({ctx.display_name})"
        line += f": {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JsonFormatter,
    "text": TextFormatter,
}


def get_logger(name: str) -> logging.Logger:
    """Logger below the package root, e.g. ``get_logger("cache")``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Install a single stream handler on the package root logger.

    Calling it again replaces the previous handler. Noisy HTTP client
    loggers are held at WARNING.

    Args:
        level: DEBUG, INFO, WARNING or ERROR.
        log_format: "json" or "text"; anything else falls back to text.
        stream: Target stream, stderr by default.

    Returns:
        The installed handler.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(_FORMATTERS.get(log_format, TextFormatter)())
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
