"""Starlette response type for envelopes."""

from __future__ import annotations

from typing import Any, Mapping

from starlette.background import BackgroundTask
from starlette.requests import Request
from starlette.responses import JSONResponse

from jsendkit.config import get_settings
from jsendkit.envelope import Envelope, WireStyle, promote, render
from jsendkit.logging import get_logger, log_envelope_event

_LOGGER = get_logger(__name__)


class EnvelopeResponse(JSONResponse):
    """JSON response whose status and body come from one envelope."""

    def __init__(
        self,
        envelope: Envelope,
        *,
        style: WireStyle | None = None,
        headers: Mapping[str, str] | None = None,
        background: BackgroundTask | None = None,
    ) -> None:
        resolved = style if style is not None else get_settings().wire.style
        status_code, body = render(envelope, style=resolved)
        self.envelope = envelope
        super().__init__(
            content=body,
            status_code=status_code,
            headers=headers,
            background=background,
        )


def to_response(value: Any, *, style: WireStyle | None = None) -> EnvelopeResponse:
    """Promote any handler result to an envelope and wrap it in a response."""
    return EnvelopeResponse(promote(value), style=style)


def log_envelope(request: Request, envelope: Envelope) -> None:
    """Log a rendered envelope with the request line bound into context."""
    log_envelope_event(_LOGGER, envelope, method=request.method, path=request.url.path)
