"""
Structured logging configuration for podsecurity.

Provides consistent, structured logging across all modules
with support for different output formats and log levels.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# LogRecord attributes that are not extra fields
_RESERVED_ATTRS = frozenset({
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
    "exc_info",
    "exc_text",
    "thread",
    "threadName",
    "taskName",
    "message",
})


def _event_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed through ``extra`` (check ids, verdicts, counts)."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per record.

    Event fields such as ``check_id`` or ``allowed`` become top-level keys,
    so admission decisions can be filtered by a log aggregator.
    """

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {}

        if self.include_timestamp:
            log_data["timestamp"] = datetime.now(timezone.utc).isoformat()

        log_data["level"] = record.levelname.lower()
        log_data["logger"] = record.name
        log_data["message"] = record.getMessage()
        log_data.update(_event_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Formatter for CLI usage.

    Renders ``[time] LEVEL logger: message key=value ...`` with event
    fields sorted by name.
    """

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as human-readable text."""
        parts = []

        if self.include_timestamp:
            timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
            parts.append(f"[{timestamp}]")

        parts.append(f"{record.levelname:>8}")
        parts.append(f"{record.name}:")
        parts.append(record.getMessage())

        fields = _event_fields(record)
        parts.extend(f"{key}={fields[key]}" for key in sorted(fields))

        output = " ".join(parts)

        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)

        return output


class PodSecurityLogger:
    """
    Wrapper around Python logging with persistent context fields.

    Provides event helpers for evaluations and fixture verification.
    """

    def __init__(self, name: str):
        """
        Initialize logger.

        Args:
            name: Logger name
        """
        self.logger = logging.getLogger(name)
        self._context: dict[str, Any] = {}

    def set_context(self, **kwargs: Any) -> None:
        """Set persistent context fields for all logs."""
        self._context.update(kwargs)

    def clear_context(self) -> None:
        """Clear context fields."""
        self._context.clear()

    def _log(
        self,
        level: int,
        message: str,
        exc_info: bool = False,
        **kwargs: Any,
    ) -> None:
        extra = {**self._context, **kwargs}
        self.logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def check_evaluated(
        self,
        check_id: str,
        level: str,
        version: str,
        pod_name: str,
        allowed: bool,
        detail: str = "",
    ) -> None:
        """Log a check evaluation event."""
        self._log(
            logging.INFO if allowed else logging.WARNING,
            "Check evaluated",
            event_type="check.evaluated",
            check_id=check_id,
            check_level=level,
            check_version=version,
            pod_name=pod_name,
            allowed=allowed,
            detail=detail,
        )

    def verification_completed(
        self,
        keys_checked: int,
        pods_checked: int,
        failure_count: int,
        duration_seconds: float,
    ) -> None:
        """Log fixture verification completion event."""
        self._log(
            logging.INFO if failure_count == 0 else logging.ERROR,
            "Fixture verification completed",
            event_type="fixtures.verified",
            keys_checked=keys_checked,
            pods_checked=pods_checked,
            failure_count=failure_count,
            duration_seconds=duration_seconds,
        )


def configure_logging(
    level: str = "INFO",
    format: str = "human",
    output: str = "stderr",
) -> None:
    """
    Configure the ``podsecurity`` logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to INFO
        format: Output format (human, json)
        output: Output destination (stderr, stdout)
    """
    root_logger = logging.getLogger("podsecurity")
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout if output == "stdout" else sys.stderr)

    if format == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanReadableFormatter()

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> PodSecurityLogger:
    """
    Get a podsecurity logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        PodSecurityLogger instance
    """
    return PodSecurityLogger(f"podsecurity.{name}")
