"""Canonical logging field names for jsendkit log records."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Envelope fields.
ENVELOPE_TYPE = "envelope_type"
STATUS = "status"
CODE = "code"

# Request fields.
METHOD = "method"
PATH = "path"
CHANNEL = "channel"

ENVELOPE_RENDERED_EVENT = "envelope_rendered"
REQUEST_REJECTED_EVENT = "request_rejected"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
