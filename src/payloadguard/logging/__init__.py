"""
payloadguard structured logging.

JSON or text output with per-request context injection.
"""

from payloadguard.logging.config import (
    GuardLogger,
    LogFormat,
    LogLevel,
    configure_logging,
    get_logger,
)
from payloadguard.logging.context import (
    ContextFilter,
    RequestLogContext,
    get_log_context,
    with_log_context,
)
from payloadguard.logging.formatters import JSONFormatter, TextFormatter

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    "GuardLogger",
    "LogLevel",
    "LogFormat",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    # Context
    "RequestLogContext",
    "ContextFilter",
    "get_log_context",
    "with_log_context",
]
