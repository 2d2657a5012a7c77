"""Stdout logging setup for services built on jsendkit."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from jsendkit.config import LoggingSettings

from . import fields
from .context import bind_context, get_context


class ContextFilter(logging.Filter):
    """Attach the bound request context to each record as ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = get_context()
        return True


def _core_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        fields.TIMESTAMP: datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
        fields.LEVEL: record.levelname,
        fields.LOGGER: record.name,
        fields.MESSAGE: record.getMessage(),
    }


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    context = getattr(record, "context", None)
    return dict(context) if isinstance(context, dict) else {}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: core fields, then envelope/request context."""

    def format(self, record: logging.LogRecord) -> str:
        payload = _core_fields(record)
        for key, value in _record_context(record).items():
            payload.setdefault(key, value)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Readable line with the event name up front and remaining fields after.

    ``2026-01-01T00:00:00+0000 INFO jsendkit.http [request_rejected] msg status=400``
    """

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(event_tag)s%(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        context = _record_context(record)
        event = context.pop(fields.EVENT, None)
        record.event_tag = f"[{event}] " if event is not None else ""
        line = super().format(record)
        if not context:
            return line
        suffix = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{line} {suffix}"


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Route root logging to one stdout handler configured from ``settings``.

    Existing root handlers are replaced, so repeated calls do not duplicate
    output. ``service`` and ``environment`` are bound into the context.
    """
    settings = settings or LoggingSettings()

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if settings.json_output else PlainFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(settings.level)

    bind_context(**{fields.SERVICE: settings.service, fields.ENVIRONMENT: settings.environment})


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger using Python's standard logging hierarchy."""
    return logging.getLogger(name)
