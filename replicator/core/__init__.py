"""Core configuration and logging for form replicators."""

from replicator.core.config import (
    Settings,
    ReplicatorOptions,
    get_settings,
    reset_settings,
)
from replicator.core.logging import (
    JSONFormatter,
    TextFormatter,
    LogContext,
    configure_logging,
    get_logger,
)

__all__ = [
    # Config
    "Settings",
    "ReplicatorOptions",
    "get_settings",
    "reset_settings",
    # Logging
    "JSONFormatter",
    "TextFormatter",
    "LogContext",
    "configure_logging",
    "get_logger",
]
