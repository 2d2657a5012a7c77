"""Parse envelope responses received through httpx."""

from __future__ import annotations

from typing import Any

import httpx

from jsendkit.config import get_settings
from jsendkit.envelope import Envelope, WireStyle, from_wire
from jsendkit.errors import WireFormatError


def envelope_from_response(
    response: httpx.Response,
    *,
    data_type: Any = Any,
    code_type: Any = int,
    style: WireStyle | None = None,
) -> Envelope:
    """Rebuild the envelope in ``response``, carrying the response status."""
    try:
        payload = response.json()
    except ValueError as exc:
        raise WireFormatError(
            message=f"HTTP {response.status_code} response body is not valid JSON"
        ) from exc

    resolved = style if style is not None else get_settings().wire.style
    envelope = from_wire(payload, data_type=data_type, code_type=code_type, style=resolved)
    return envelope.with_status(response.status_code)
