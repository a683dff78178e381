"""
Structured logging configuration for form replicators.

Supports both human-readable (development) and JSON (production) formats.
Nothing is configured on import; applications call configure_logging().
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from replicator.core.config import get_settings


_RESERVED_ATTRS = (
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName",
)


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Fields pushed through LogContext or ``extra=`` end up as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


class ContextFilter(logging.Filter):
    """Copies the active LogContext fields onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in LogContext._context.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def configure_logging(
    level: Optional[str] = None,
    format_type: Optional[str] = None,
    logger_name: str = "replicator",
) -> logging.Logger:
    """
    Configure logging for the replicator package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to REPLICATOR_LOG_LEVEL
        format_type: "json" for structured, "text" for human-readable;
            defaults to REPLICATOR_LOG_FORMAT
        logger_name: Logger to configure ("" for the root logger)

    Returns:
        The configured logger
    """
    settings = get_settings()
    level = level or settings.log_level
    format_type = format_type or settings.log_format

    logger = logging.getLogger(logger_name or None)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if format_type.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    handler.addFilter(ContextFilter())

    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name, typically __name__

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class LogContext:
    """
    Context manager for adding fields to log records.

    Usage:
        with LogContext(form="profile", replicator="phones"):
            logger.info("Reconciling rows")  # Will include form and replicator
    """

    _context: Dict[str, Any] = {}

    def __init__(self, **kwargs):
        self._fields = kwargs
        self._old_values = {}

    def __enter__(self):
        for key, value in self._fields.items():
            self._old_values[key] = LogContext._context.get(key)
            LogContext._context[key] = value
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for key, old_value in self._old_values.items():
            if old_value is None:
                LogContext._context.pop(key, None)
            else:
                LogContext._context[key] = old_value
