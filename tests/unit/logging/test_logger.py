# tests/unit/logging/test_logger.py — v2
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import io
import json
import logging
import sys

from filepreview.logging.context import clear_context, set_request_context, set_session_context
from filepreview.logging.logger import (
    ROOT_LOGGER,
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
)


def _record(msg: str = "Hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_session_context("s42")
        set_request_context("https://x.example.com/a", "a.png")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["context"] == {
            "session_id": "s42",
            "locator": "https://x.example.com/a",
            "display_name": "a.png",
        }

    def test_format_with_exception(self):
        try:
            raise ValueError("broken")
        except ValueError:
            record = logging.LogRecord(
                name="test", level=logging.ERROR, pathname="", lineno=0,
                msg="failed", args=(), exc_info=sys.exc_info(),
            )
        parsed = json.loads(JsonFormatter().format(record))
        assert "ValueError: broken" in parsed["exception"]


class TestTextFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "[INFO" in output

    def test_includes_session_and_name(self):
        set_session_context("s42")
        set_request_context("u", "report.pdf")
        output = TextFormatter().format(_record())
        assert "[s42]" in output
        assert "(report.pdf)" in output


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger(ROOT_LOGGER).handlers.clear()

    def test_get_logger_namespaced(self):
        assert get_logger("cache").name == "filepreview.cache"

    def test_writes_json_to_stream(self):
        stream = io.StringIO()
        setup_logging(level="DEBUG", log_format="json", stream=stream)
        get_logger("test").debug("cache hit")
        line = stream.getvalue().strip()
        assert json.loads(line)["message"] == "cache hit"

    def test_reinit_does_not_duplicate_handlers(self):
        setup_logging(level="INFO")
        setup_logging(level="INFO")
        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1

    def test_level_applied(self):
        setup_logging(level="WARNING")
        assert logging.getLogger(ROOT_LOGGER).level == logging.WARNING

    def test_http_client_loggers_quieted(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_unknown_format_falls_back_to_text(self):
        handler = setup_logging(log_format="xml")
        assert isinstance(handler.formatter, TextFormatter)
