"""FastAPI helpers for envelope-returning endpoints."""

from __future__ import annotations

import inspect
from functools import wraps
from typing import Any, Callable

from fastapi import FastAPI
from starlette.responses import Response

from jsendkit.config import LoggingSettings
from jsendkit.envelope import promote
from jsendkit.errors import EnvelopeException
from jsendkit.logging import configure_logging

from .handlers import install_exception_handlers
from .responses import EnvelopeResponse


def create_app(
    *,
    title: str = "jsendkit",
    version: str = "0.0.0",
    logging_settings: LoggingSettings | None = None,
) -> FastAPI:
    """Create a FastAPI app with envelope exception handlers installed.

    When ``logging_settings`` is given, root logging is configured from it.
    """
    if logging_settings is not None:
        configure_logging(logging_settings)
    app = FastAPI(title=title, version=version)
    install_exception_handlers(app)
    return app


def enveloped(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorate an endpoint so its result is sent as an ``EnvelopeResponse``.

    The return value is promoted to an envelope; an ``EnvelopeException``
    raised in the body becomes its carried envelope. Responses returned
    directly pass through untouched.
    """
    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_endpoint(*args: Any, **kwargs: Any) -> Response:
            try:
                result = await func(*args, **kwargs)
            except EnvelopeException as exc:
                return EnvelopeResponse(exc.envelope)
            return _settle(result)

        endpoint: Callable[..., Any] = async_endpoint
    else:

        @wraps(func)
        def sync_endpoint(*args: Any, **kwargs: Any) -> Response:
            try:
                result = func(*args, **kwargs)
            except EnvelopeException as exc:
                return EnvelopeResponse(exc.envelope)
            return _settle(result)

        endpoint = sync_endpoint

    # FastAPI reads parameters from the signature; resolve postponed
    # annotations against the endpoint's own module. The declared return type
    # must not become a response model.
    signature = inspect.signature(func, eval_str=True)
    endpoint.__signature__ = signature.replace(  # type: ignore[attr-defined]
        return_annotation=EnvelopeResponse
    )
    return endpoint


def _settle(result: Any) -> Response:
    """Pass responses through and wrap everything else in an envelope."""
    if isinstance(result, Response):
        return result
    return EnvelopeResponse(promote(result))
