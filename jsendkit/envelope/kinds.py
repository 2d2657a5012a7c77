"""Envelope variant tags and their default HTTP statuses."""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from types import MappingProxyType
from typing import Mapping


class EnvelopeKind(str, Enum):
    """Discriminator values written to the ``type`` field on the wire."""

    SUCCESS = "success"
    ERROR = "error"
    FAIL = "fail"


DEFAULT_STATUS: Mapping[EnvelopeKind, int] = MappingProxyType(
    {
        EnvelopeKind.SUCCESS: HTTPStatus.OK.value,
        EnvelopeKind.ERROR: HTTPStatus.INTERNAL_SERVER_ERROR.value,
        EnvelopeKind.FAIL: HTTPStatus.BAD_REQUEST.value,
    }
)


def default_status(kind: EnvelopeKind) -> int:
    """Return the HTTP status a variant carries when none is given."""
    return DEFAULT_STATUS[kind]
