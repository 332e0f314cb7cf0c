"""
Log formatters for payloadguard.

JSON output for log aggregation in production, colorized text for local
development.
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any

# Request fields promoted to the top level of a JSON line
REQUEST_FIELDS = ("request_id", "method", "path", "status", "latency_ms")


class JSONFormatter(logging.Formatter):
    """
    Single-line JSON formatter.

    Fields included:
    - timestamp: ISO 8601 UTC timestamp
    - level, logger, message
    - request_id, method, path, status, latency_ms (when bound)
    - exception: type, message and traceback (when present)
    - extra: any other fields passed to the logger
    """

    # LogRecord attributes that never go into ``extra``
    EXCLUDE_FIELDS = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "message",
        "taskName",
    }

    def __init__(self, include_extra: bool = True) -> None:
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        log_dict: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in REQUEST_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_dict[field] = value

        if record.exc_info:
            log_dict["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        if self.include_extra:
            extra = {}
            for key, value in record.__dict__.items():
                if (
                    key in self.EXCLUDE_FIELDS
                    or key in REQUEST_FIELDS
                    or key.startswith("_")
                ):
                    continue
                try:
                    json.dumps(value)
                    extra[key] = value
                except (TypeError, ValueError):
                    extra[key] = str(value)
            if extra:
                log_dict["extra"] = extra

        return json.dumps(log_dict, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level = f"{self.COLORS[level]}{level:8}{self.RESET}"
        else:
            level = f"{level:8}"

        # "GET /api/employees -> 200"
        request = ""
        method = getattr(record, "method", None)
        path = getattr(record, "path", None)
        if method and path:
            request = f" {method} {path}"
            status = getattr(record, "status", None)
            if status is not None:
                request += f" -> {status}"

        request_id = getattr(record, "request_id", None)
        context = f" [request_id={request_id}]" if request_id else ""

        latency = getattr(record, "latency_ms", None)
        latency_str = f" ({latency:.1f}ms)" if latency is not None else ""

        log_line = (
            f"{timestamp} {level} {record.name}{context}:{request} "
            f"{record.getMessage()}{latency_str}"
        )

        if record.exc_info:
            log_line += "\n" + self.formatException(record.exc_info)

        return log_line
