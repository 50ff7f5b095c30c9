"""Logging configuration for the ulidkit command line.

Two output formats are supported:

* human-readable console lines, and
* one JSON object per line for log collectors.

The library modules only create module loggers; nothing is configured until
:func:`setup_logging` runs (the CLI calls it once per invocation).
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from .settings import Settings

# Attributes already rendered by the base format or not useful as extras.
_STANDARD_ATTRS: set[str] = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
    "taskName",
}

_CONFIGURED_FLAG = "_ulidkit_configured"


class ConsoleLogFormatter(logging.Formatter):
    """Render log records as single-line console output.

    Example line:

        2025-11-27T02:57:00.302Z DEBUG ulidkit.cli.new ulidkit.new.generated count=3 policy=fast
    """

    _time_format = "%Y-%m-%dT%H:%M:%S"

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)-5s %(name)s %(message)s", datefmt=self._time_format)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return _utc_timestamp(record, datefmt or self._time_format)

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - std signature
        base = super().format(record)
        extras = [
            f"{key}={_format_extra_value(value)}"
            for key, value in sorted(_record_extras(record).items())
        ]
        if extras:
            return f"{base} " + " ".join(extras)
        return base


class JsonLogFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    _time_format = "%Y-%m-%dT%H:%M:%S"

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return _utc_timestamp(record, datefmt or self._time_format)

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - std signature
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self._time_format),
            "level": record.levelname,
            "service": "ulidkit",
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_record_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default, separators=(",", ":"))


def setup_logging(settings: Settings) -> None:
    """Install a single stderr handler on the root logger using ``settings``.

    Safe to call repeatedly; later calls swap the formatter and level in place
    instead of stacking handlers.
    """

    root_logger = logging.getLogger()
    configured = getattr(root_logger, _CONFIGURED_FLAG, False)
    if not configured or not root_logger.handlers:
        root_logger.handlers = [logging.StreamHandler(sys.stderr)]
        setattr(root_logger, _CONFIGURED_FLAG, True)
    else:
        root_logger.handlers = [root_logger.handlers[0]]

    handler = root_logger.handlers[0]
    handler.setFormatter(_build_formatter(settings.log_format))
    root_logger.setLevel(getattr(logging, settings.log_level))


def log_context(*, ulid: object | None = None, **extra: Any) -> dict[str, Any]:
    """Build a consistent ``extra`` payload for structured logs."""

    ctx: dict[str, Any] = {}
    if ulid is not None:
        ctx["ulid"] = str(ulid)
    for key, value in extra.items():
        ctx[key] = value
    return ctx


def _utc_timestamp(record: logging.LogRecord, pattern: str) -> str:
    base = datetime.fromtimestamp(record.created, tz=UTC).strftime(pattern)
    return f"{base}.{int(record.msecs):03d}Z"


def _format_extra_value(value: Any) -> str:
    if value is None:
        return "null"
    return str(value)


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    extras: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_ATTRS or key.startswith("_"):
            continue
        extras[key] = value
    return extras


def _json_default(value: Any) -> str:
    return str(value)


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonLogFormatter()
    return ConsoleLogFormatter()


__all__ = [
    "ConsoleLogFormatter",
    "JsonLogFormatter",
    "log_context",
    "setup_logging",
]
