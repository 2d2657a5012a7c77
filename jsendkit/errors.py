"""Typed errors raised by jsendkit envelope helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsendkit.envelope.envelope import Envelope


@dataclass(eq=False)
class JsendError(Exception):
    """Base error type for jsendkit failures.

    Instances stay mutable: ``contextlib`` and ``AsyncExitStack`` assign
    ``__traceback__`` on exceptions leaving a managed block.
    """

    message: str

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(eq=False)
class EnvelopeUnwrapError(JsendError):
    """An unwrap operation was invoked on the wrong envelope variant."""

    expected: str
    actual: str


@dataclass(eq=False)
class WireFormatError(JsendError):
    """Wire payload does not describe a valid envelope, or cannot be emitted."""


@dataclass(eq=False)
class EnvelopeException(JsendError):
    """Carry a failure envelope out of a handler as an early return.

    Raised by ``Envelope.or_raise`` and by request extractors; converted back
    into the carried envelope by ``short_circuit`` and the FastAPI handlers.
    """

    envelope: Envelope

    @classmethod
    def of(cls, envelope: Envelope) -> EnvelopeException:
        """Wrap one failure envelope, deriving the message from it."""
        fields = envelope.unwrap_failure()
        return cls(message=f"{envelope.kind.value}: {fields.message}", envelope=envelope)
