"""
Logging configuration with a tagged, colored console handler.

Usage:
    from guesswho.config.logging import get_logger
    logger = get_logger("api")
    logger.info("Guess received", extra={"subject": "user_123"})
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

# ANSI color codes for console output
COLORS = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# Tag colors
TAG_COLORS = {
    "api": "\033[94m",  # Blue
    "auth": "\033[95m",  # Magenta
    "game": "\033[93m",  # Yellow
    "llm": "\033[91m",  # Red
    "config": "\033[92m",  # Green
}

# Record attributes appended to the message when present
EXTRA_FIELDS = ("subject", "path", "status_code", "duration_ms")

NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "uvicorn.access",
    "watchfiles",
    "google_genai",
    "google.auth",
    "urllib3",
)


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that renders `HH:MM:SS LEVEL [tag] message (extras)`."""

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def _paint(self, color: str, text: str) -> str:
        if not self.use_color:
            return text
        return f"{color}{text}{COLORS['RESET']}"

    def format(self, record: logging.LogRecord) -> str:
        tag = record.name
        timestamp = datetime.now().strftime("%H:%M:%S")
        level_str = self._paint(COLORS.get(record.levelname, ""), f"{record.levelname:8}")
        tag_str = self._paint(TAG_COLORS.get(tag, "\033[37m"), f"[{tag}]")

        extra_parts = []
        for key in EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None and value != "":
                extra_parts.append(f"{key}={value}")

        extra_str = f" ({', '.join(extra_parts)})" if extra_parts else ""
        msg = f"{timestamp} {level_str} {tag_str} {record.getMessage()}{extra_str}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


_initialized = False


def _get_console_level() -> int:
    """Get console log level from environment variable."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def init_logging(console_level: int | None = None, use_color: bool | None = None):
    """Initialize the logging system with a console handler."""
    global _initialized

    if _initialized:
        return

    if console_level is None:
        console_level = _get_console_level()
    if use_color is None:
        use_color = sys.stdout.isatty()

    # Clear any existing handlers on root logger (from basicConfig or other sources)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ColoredConsoleFormatter(use_color=use_color))

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    if not _initialized:
        init_logging()
    return logging.getLogger(name)


def shutdown_logging():
    """Flush and close all logging handlers."""
    global _initialized
    logging.shutdown()
    _initialized = False
