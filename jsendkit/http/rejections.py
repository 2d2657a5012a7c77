"""Typed request-extraction rejections, one per input channel.

A rejection carries the human-readable text and the HTTP status suggested for
one failed extraction. ``into_envelope`` turns it into a Fail envelope; a
rejection never becomes an Error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Sequence

from jsendkit.envelope import Fail, fail_status
from jsendkit.errors import JsendError


@dataclass(eq=False)
class Rejection(JsendError):
    """Base rejection for inbound request extraction failures."""

    status: int
    channel: ClassVar[str] = "request"

    def body_text(self) -> str:
        """Return the text a client should see for this rejection."""
        return self.message

    def into_envelope(self) -> Fail:
        """Return the Fail envelope describing this rejection."""
        return fail_status(self.body_text(), self.status)


@dataclass(eq=False)
class JsonRejection(Rejection):
    """JSON body was missing, malformed or of the wrong shape."""

    channel: ClassVar[str] = "json"


@dataclass(eq=False)
class QueryRejection(Rejection):
    """Query string did not match the target type."""

    channel: ClassVar[str] = "query"


@dataclass(eq=False)
class PathRejection(Rejection):
    """Path parameters were absent or did not match the target type."""

    channel: ClassVar[str] = "path"


@dataclass(eq=False)
class FormRejection(Rejection):
    """Form body or query did not match the target type."""

    channel: ClassVar[str] = "form"


@dataclass(eq=False)
class BytesRejection(Rejection):
    """Raw body could not be buffered."""

    channel: ClassVar[str] = "bytes"


@dataclass(eq=False)
class RawFormRejection(Rejection):
    """Raw form payload could not be read."""

    channel: ClassVar[str] = "raw_form"


@dataclass(eq=False)
class RawPathParamsRejection(Rejection):
    """No path parameters were captured for the request."""

    channel: ClassVar[str] = "raw_path_params"


@dataclass(eq=False)
class ExtensionRejection(Rejection):
    """A request-scoped extension value was missing or mistyped."""

    channel: ClassVar[str] = "extension"


@dataclass(eq=False)
class MatchedPathRejection(Rejection):
    """The request was not matched to a route."""

    channel: ClassVar[str] = "matched_path"


def summarize_validation_errors(errors: Sequence[Mapping[str, Any]]) -> str:
    """Join pydantic-style error entries into one line of ``loc: msg`` parts."""
    parts: list[str] = []
    for item in errors:
        message = str(item.get("msg", "invalid value"))
        location = ".".join(str(part) for part in item.get("loc", ()))
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "invalid request"
