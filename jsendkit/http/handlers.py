"""FastAPI exception handlers rendering failures as envelopes.

Register them all at once with ``install_exception_handlers(app)`` so that
extractor rejections, FastAPI's own validation errors and ``HTTPException``
responses share the envelope wire shape.
"""

from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import Response

from jsendkit.envelope import error_status, fail_status
from jsendkit.errors import EnvelopeException

from .rejections import summarize_validation_errors
from .responses import EnvelopeResponse, log_envelope


async def envelope_exception_handler(request: Request, exc: EnvelopeException) -> Response:
    """Render the envelope carried by an ``EnvelopeException``."""
    log_envelope(request, exc.envelope)
    return EnvelopeResponse(exc.envelope)


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """Map FastAPI parameter validation failures to a 422 Fail."""
    envelope = fail_status(
        summarize_validation_errors(exc.errors()),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )
    log_envelope(request, envelope)
    return EnvelopeResponse(envelope)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Map ``HTTPException`` to Fail below 500 and to Error otherwise."""
    if exc.status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
        envelope = fail_status(exc.detail, exc.status_code)
    else:
        envelope = error_status(exc.detail, exc.status_code)
    log_envelope(request, envelope)
    return EnvelopeResponse(envelope, headers=getattr(exc, "headers", None))


EXCEPTION_HANDLERS = {
    EnvelopeException: envelope_exception_handler,
    RequestValidationError: request_validation_exception_handler,
    StarletteHTTPException: http_exception_handler,
}


def install_exception_handlers(app: FastAPI) -> None:
    """Register every envelope exception handler on ``app``."""
    for exc_type, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_type, handler)
