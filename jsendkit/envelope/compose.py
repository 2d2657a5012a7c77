"""Short-circuit composition over envelope-producing steps.

``bind`` runs the next step only when the current envelope is a Success; the
first Error or Fail ends the chain unchanged. Steps may return an envelope,
an ``Ok``/``Err`` outcome (optionally paired with a code and status), or a bare
value; ``promote`` maps each of those onto an envelope.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from functools import wraps
from http import HTTPStatus
from typing import Any, Callable, Generic, TypeVar

from jsendkit.errors import EnvelopeException

from .builders import error, error_code, error_code_status, error_status, success
from .envelope import Envelope, EnvelopeModel

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome of a two-outcome computation."""

    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome of a two-outcome computation; ``error`` must be displayable."""

    error: E


Outcome = Ok[Any] | Err[Any]


def from_result(
    outcome: Outcome,
    *,
    code: Any = None,
    status: int | HTTPStatus | None = None,
) -> Envelope:
    """Promote an outcome; ``Err`` always becomes an Error, never a Fail."""
    if isinstance(outcome, Ok):
        return success(outcome.value)
    if not isinstance(outcome, Err):
        raise TypeError(f"expected Ok or Err, got {type(outcome).__name__}")

    message = str(outcome.error)
    if code is None and status is None:
        return error(message)
    if status is None:
        return error_code(message, code)
    if code is None:
        return error_status(message, status)
    return error_code_status(message, code, status)


def from_value(value: Any) -> Envelope:
    """A value with no failure channel is always a Success."""
    return success(value)


def from_call(
    func: Callable[..., Any],
    *args: Any,
    code: Any = None,
    status: int | HTTPStatus | None = None,
    **kwargs: Any,
) -> Envelope:
    """Run ``func``; a return value is ``Ok`` and a raised exception is ``Err``."""
    try:
        outcome: Outcome = Ok(func(*args, **kwargs))
    except Exception as exc:  # noqa: BLE001
        outcome = Err(exc)
    return from_result(outcome, code=code, status=status)


def promote(value: Any) -> Envelope:
    """Map any step result onto an envelope."""
    if isinstance(value, EnvelopeModel):
        return value
    if isinstance(value, (Ok, Err)):
        return from_result(value)
    if (
        isinstance(value, tuple)
        and len(value) in (2, 3)
        and isinstance(value[0], (Ok, Err))
    ):
        return from_result(value[0], code=value[1], status=value[2] if len(value) == 3 else None)
    return from_value(value)


def bind(envelope: Envelope, step: Callable[[Any], Any]) -> Envelope:
    """Feed a Success payload to ``step``; return failures untouched."""
    if not envelope.is_success():
        return envelope
    return promote(step(envelope.data))


def chain(first: Any, *steps: Callable[[Any], Any]) -> Envelope:
    """Bind ``steps`` left-to-right starting from ``promote(first)``."""
    current = promote(first)
    for step in steps:
        if not current.is_success():
            break
        current = bind(current, step)
    return current


def short_circuit(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn ``EnvelopeException`` raised inside ``func`` into its envelope.

    Normal return values are promoted. Works for plain and ``async`` functions.
    """
    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Envelope:
            try:
                return promote(await func(*args, **kwargs))
            except EnvelopeException as exc:
                return exc.envelope

        return async_wrapper

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Envelope:
        try:
            return promote(func(*args, **kwargs))
        except EnvelopeException as exc:
            return exc.envelope

    return wrapper
