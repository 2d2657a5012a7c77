"""Log events emitted when envelopes are rendered or requests are rejected."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Protocol

from jsendkit.envelope import Envelope, EnvelopeKind

from . import fields
from .context import request_context

ENVELOPE_LEVELS: Mapping[EnvelopeKind, int] = MappingProxyType(
    {
        EnvelopeKind.SUCCESS: logging.DEBUG,
        EnvelopeKind.FAIL: logging.INFO,
        EnvelopeKind.ERROR: logging.WARNING,
    }
)


class RejectionLike(Protocol):
    message: str
    status: int
    channel: str


def envelope_fields(envelope: Envelope) -> dict[str, object]:
    """Return the log fields describing one envelope."""
    values: dict[str, object] = {
        fields.EVENT: fields.ENVELOPE_RENDERED_EVENT,
        fields.ENVELOPE_TYPE: envelope.kind.value,
        fields.STATUS: envelope.status,
    }
    failure = envelope.error_fields()
    if failure is not None and failure.code is not None:
        values[fields.CODE] = failure.code
    return values


def rejection_fields(rejection: RejectionLike) -> dict[str, object]:
    """Return the log fields describing one extraction rejection."""
    return {
        fields.EVENT: fields.REQUEST_REJECTED_EVENT,
        fields.CHANNEL: rejection.channel,
        fields.STATUS: rejection.status,
    }


def log_envelope_event(
    logger: logging.Logger, envelope: Envelope, *, method: str, path: str
) -> None:
    """Log a rendered envelope at the level its variant calls for.

    Error logs at WARNING, Fail at INFO and Success at DEBUG.
    """
    failure = envelope.error_fields()
    message = f"{envelope.kind.value} envelope"
    if failure is not None:
        message = f"{message}: {failure.message}"
    with request_context(method, path, **envelope_fields(envelope)):
        logger.log(ENVELOPE_LEVELS[envelope.kind], message)


def log_rejection_event(
    logger: logging.Logger, rejection: RejectionLike, *, method: str, path: str
) -> None:
    """Log one rejected extraction at INFO."""
    with request_context(method, path, **rejection_fields(rejection)):
        logger.info("request rejected: %s", rejection.message)
