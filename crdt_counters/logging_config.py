"""Opt-in logging for crdt_counters.

The package logger carries only a NullHandler, so counters are silent
until an application attaches output here. What gets logged: merges
that raised entries (DEBUG) and saturated counts (WARNING).

Example usage:
    import crdt_counters

    crdt_counters.enable_console_logging(level="DEBUG")
    crdt_counters.enable_file_logging("counters.log", json_lines=True)

    # or, driven by CRDT_LOGGING / CRDT_LOG_FILE / CRDT_LOG_JSON
    crdt_counters.configure_from_env()
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "set_level",
]

LOGGER_NAME = "crdt_counters"

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 3

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _get_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _attach(handler: logging.Handler, level: LogLevel | int, json_lines: bool) -> None:
    handler.setFormatter(JsonFormatter() if json_lines else logging.Formatter(TEXT_FORMAT))
    handler.setLevel(_get_level(level))
    logger = _get_logger()
    logger.setLevel(_get_level(level))
    logger.addHandler(handler)


def enable_console_logging(
    level: LogLevel | int = "INFO",
    json_lines: bool = False,
) -> logging.StreamHandler:
    """Send package logs to stderr, as text or JSON lines.

    Returns:
        The attached StreamHandler.
    """
    handler = logging.StreamHandler()
    _attach(handler, level, json_lines)
    return handler


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    json_lines: bool = False,
    max_bytes: int = MAX_BYTES,
    backup_count: int = BACKUP_COUNT,
) -> RotatingFileHandler:
    """Send package logs to a size-rotated file. Parent directories are created.

    Returns:
        The attached RotatingFileHandler.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    _attach(handler, level, json_lines)
    return handler


def configure_from_env() -> None:
    """Attach a handler described by the environment.

    ``CRDT_LOGGING`` sets the level, ``CRDT_LOG_FILE`` selects a file
    instead of stderr, ``CRDT_LOG_JSON=1`` switches to JSON lines. Nothing
    happens when neither a level nor a file is given.
    """
    level = os.environ.get("CRDT_LOGGING", "").upper()
    log_file = os.environ.get("CRDT_LOG_FILE", "")
    json_lines = os.environ.get("CRDT_LOG_JSON", "") == "1"

    if not level and not log_file:
        return

    level = level or "INFO"
    if log_file:
        enable_file_logging(log_file, level=level, json_lines=json_lines)
    else:
        enable_console_logging(level=level, json_lines=json_lines)


def set_level(level: LogLevel | int) -> None:
    """Change the package logger's level without touching its handlers."""
    _get_logger().setLevel(_get_level(level))


def disable_logging() -> None:
    """Close every attached handler and silence the package logger."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
