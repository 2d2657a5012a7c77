"""Public logging API for jsendkit.

Wraps Python's ``logging`` module with stdout defaults and request-scoped
structured context for envelope and rejection events.
"""

from .config import ContextFilter, JsonFormatter, PlainFormatter, configure_logging, get_logger
from .context import bind_context, clear_context, get_context, log_context, request_context
from .events import (
    ENVELOPE_LEVELS,
    envelope_fields,
    log_envelope_event,
    log_rejection_event,
    rejection_fields,
)

__all__ = [
    "ENVELOPE_LEVELS",
    "ContextFilter",
    "JsonFormatter",
    "PlainFormatter",
    "bind_context",
    "clear_context",
    "configure_logging",
    "envelope_fields",
    "get_context",
    "get_logger",
    "log_context",
    "log_envelope_event",
    "log_rejection_event",
    "rejection_fields",
    "request_context",
]
