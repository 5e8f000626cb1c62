# src/logging/logger.py - v1
"""Logger setup with JSON and text formatters.

Logs go to stderr so that ``annosync export`` can write JSON to stdout.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from annosync.logging.context import get_context

if TYPE_CHECKING:
    from annosync.config.settings import Settings

# Third-party loggers that are too chatty at INFO.
_NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with request/document context attached."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            entry["context"] = context

        # Structured payload passed as extra={"data": {...}}
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line human-readable format for terminals."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = (
            f"{datetime.now(timezone.utc):%Y-%m-%d %H:%M:%S} "
            f"[{record.levelname:8s}] {record.name}"
        )
        if ctx.request_id:
            line += f" [{ctx.operation or '-'}:{ctx.request_id}]"
        if ctx.document:
            line += f" ({ctx.document})"
        line += f": {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> logging.Logger:
    """Configure the ``annosync`` logger tree and return its root.

    Calling it again replaces the handlers installed by a previous call.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        log_format: "json" or "text".
        log_file: Optional file that receives the same records.
        rotation: Max log file size before rollover (e.g. "10MB").
        retention: Number of rotated files to keep.
    """
    root = logging.getLogger("annosync")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.propagate = False
    root.handlers.clear()

    formatter: logging.Formatter = (
        JsonFormatter() if log_format == "json" else TextFormatter()
    )

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        from annosync.logging.handlers import create_rotating_handler

        file_handler = create_rotating_handler(
            log_file, rotation=rotation, retention=retention,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def setup_logging_from_settings(
    settings: Settings, level: str | None = None,
) -> logging.Logger:
    """Apply the logging section of Settings, optionally forcing a level."""
    return setup_logging(
        level=level or settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
