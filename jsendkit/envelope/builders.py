"""Convenience constructors for envelope variants.

Each family has a default-status form and an explicit-status form; defaults
come from ``DEFAULT_STATUS``.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, TypeVar

from .envelope import Error, Fail, Success
from .kinds import EnvelopeKind, default_status

D = TypeVar("D")
C = TypeVar("C")

StatusLike = int | HTTPStatus


def success(data: D = None) -> Success[D]:
    """Build a Success with status 200; omitting ``data`` yields the unit payload."""
    return success_status(data, default_status(EnvelopeKind.SUCCESS))


def success_status(data: D, status: StatusLike) -> Success[D]:
    """Build a Success with an explicit status."""
    return Success(data=data, status=int(status))


def error(message: Any) -> Error[Any]:
    """Build an Error without a code and with status 500."""
    return error_status(message, default_status(EnvelopeKind.ERROR))


def error_code(message: Any, code: C) -> Error[C]:
    """Build an Error carrying ``code`` with status 500."""
    return error_code_status(message, code, default_status(EnvelopeKind.ERROR))


def error_status(message: Any, status: StatusLike) -> Error[Any]:
    """Build an Error without a code and with an explicit status."""
    return Error(message=str(message), code=None, status=int(status))


def error_code_status(message: Any, code: C, status: StatusLike) -> Error[C]:
    """Build an Error carrying ``code`` with an explicit status."""
    return Error(message=str(message), code=code, status=int(status))


def fail(message: Any) -> Fail[Any]:
    """Build a Fail without a code and with status 400."""
    return fail_status(message, default_status(EnvelopeKind.FAIL))


def fail_code(message: Any, code: C) -> Fail[C]:
    """Build a Fail carrying ``code`` with status 400."""
    return fail_code_status(message, code, default_status(EnvelopeKind.FAIL))


def fail_status(message: Any, status: StatusLike) -> Fail[Any]:
    """Build a Fail without a code and with an explicit status."""
    return Fail(message=str(message), code=None, status=int(status))


def fail_code_status(message: Any, code: C, status: StatusLike) -> Fail[C]:
    """Build a Fail carrying ``code`` with an explicit status."""
    return Fail(message=str(message), code=code, status=int(status))
