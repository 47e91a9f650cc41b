"""Tests for logging configuration."""

from __future__ import annotations

import logging
import sys

from guesswho.config.logging import ColoredConsoleFormatter, get_logger


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("game", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestColoredConsoleFormatter:
    def test_plain_format(self):
        out = ColoredConsoleFormatter(use_color=False).format(_record("Guess received"))
        assert "INFO" in out
        assert "[game]" in out
        assert out.endswith("Guess received")
        assert "\033[" not in out

    def test_extras_appended(self):
        out = ColoredConsoleFormatter(use_color=False).format(
            _record("Rejected request", subject="user_123", path="/api/game/guess")
        )
        assert out.endswith("Rejected request (subject=user_123, path=/api/game/guess)")

    def test_empty_extras_skipped(self):
        out = ColoredConsoleFormatter(use_color=False).format(_record("Game started", subject=None))
        assert "subject=" not in out

    def test_colored_format(self):
        out = ColoredConsoleFormatter(use_color=True).format(_record("hello"))
        assert "\033[" in out

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record("failed")
            record.exc_info = sys.exc_info()
        out = ColoredConsoleFormatter(use_color=False).format(record)
        assert "RuntimeError: boom" in out


class TestGetLogger:
    def test_returns_named_logger(self):
        logger = get_logger("api")
        assert logger.name == "api"
        assert logging.getLogger().handlers
