"""Logging helpers for the cueline CLI and scripts.

Library code only calls ``logging.getLogger(__name__)``; hosts embedding the
engine keep their own handlers.
"""

from __future__ import annotations

from datetime import UTC, datetime
import json
import logging
import sys
from typing import Any

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes of a bare LogRecord; anything else on a record came from ``extra=``
# or a LoggerAdapter (e.g. command="move", item_ids=[...]).
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def _record_context(record: logging.LogRecord, formatter: logging.Formatter) -> dict[str, Any]:
    context: dict[str, Any] = {
        "logger_name": record.name,
        "module": record.module,
        "function": record.funcName,
        "line": record.lineno,
    }
    if record.exc_info:
        exc_type, exc_value, _ = record.exc_info
        context["error_type"] = exc_type.__name__ if exc_type else None
        context["error_message"] = str(exc_value) if exc_value else None
        context["stack_trace"] = record.exc_text or formatter.formatException(record.exc_info)

    context.update(
        (key, value)
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    )
    return context


class StructuredJSONFormatter(logging.Formatter):
    """One JSON object per record: level, message, UTC timestamp, context.

    ``context`` carries the source location, exception details and every
    extra field, so a failed move logs e.g. ``{"command": "move", ...}``.
    """

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "level": record.levelname,
                "message": record.getMessage(),
                "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "context": _record_context(record, self),
            },
            default=str,
        )


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Configure the root logger; safe to call repeatedly.

    Args:
        level: Level name, case-insensitive.
        format_string: Text record format. Ignored if structured=True.
        filename: Log file path. If None, logs to stdout.
        structured: Emit JSON records instead of text.

    Raises:
        ValueError: If ``level`` is not a logging level name.
    """
    levelno = logging.getLevelNamesMapping().get(level.upper())
    if levelno is None:
        raise ValueError(f"Unknown log level: {level}")

    handler: logging.Handler = (
        logging.FileHandler(filename) if filename else logging.StreamHandler(sys.stdout)
    )
    handler.setFormatter(
        StructuredJSONFormatter()
        if structured
        else logging.Formatter(format_string or DEFAULT_LOG_FORMAT)
    )
    logging.basicConfig(level=levelno, handlers=[handler], force=True)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Return a logger, wrapped in a LoggerAdapter when context is given."""
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, context) if context else logger


__all__ = [
    "DEFAULT_LOG_FORMAT",
    "StructuredJSONFormatter",
    "configure_logging",
    "get_logger",
]
