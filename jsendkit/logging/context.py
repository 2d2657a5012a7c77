"""Request-scoped structured logging context.

Fields bound while a request is handled ride along on every log record
emitted in the same task. Values keep their type (a status stays an ``int``)
so the JSON formatter can emit them unchanged.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Iterator, Mapping

from . import fields

_EMPTY: Mapping[str, object] = MappingProxyType({})
_LOG_CONTEXT: ContextVar[Mapping[str, object]] = ContextVar("jsendkit_log_context", default=_EMPTY)


def get_context() -> dict[str, object]:
    """Return a copy of the fields bound in the current context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind fields into the current context; ``None`` values are skipped."""
    present = {key: value for key, value in values.items() if value is not None}
    if present:
        _LOG_CONTEXT.set(MappingProxyType({**_LOG_CONTEXT.get(), **present}))


def clear_context(*keys: str) -> None:
    """Drop ``keys`` from the context, or every field when none are given."""
    if not keys:
        _LOG_CONTEXT.set(_EMPTY)
        return
    remaining = {key: value for key, value in _LOG_CONTEXT.get().items() if key not in keys}
    _LOG_CONTEXT.set(MappingProxyType(remaining))


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` for the duration of a block."""
    token = _LOG_CONTEXT.set(_LOG_CONTEXT.get())
    try:
        bind_context(**dict(values))
        yield
    finally:
        _LOG_CONTEXT.reset(token)


@contextmanager
def request_context(method: str, path: str, **values: object) -> Iterator[None]:
    """Bind the request line plus any extra fields for the duration of a block."""
    with log_context({fields.METHOD: method, fields.PATH: path, **values}):
        yield
