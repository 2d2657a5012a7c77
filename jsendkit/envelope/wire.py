"""JSON wire mapping for envelopes.

Nested form (canonical)::

    {"type": "success", "data": ...}
    {"type": "error" | "fail", "message": "...", "code": ...}

``code`` is present only when set. The flattened form merges a mapping payload
onto the top-level object next to ``type``. Status never travels on the wire.
"""

from __future__ import annotations

import json
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Mapping, Union, get_origin

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from jsendkit.errors import WireFormatError

from .envelope import Envelope, EnvelopeModel, Error, Fail, Success
from .kinds import EnvelopeKind


class WireStyle(str, Enum):
    """Placement of the Success payload on the wire."""

    NESTED = "nested"
    FLATTENED = "flattened"


def to_wire(envelope: Envelope, *, style: WireStyle = WireStyle.NESTED) -> dict[str, Any]:
    """Return a JSON-compatible mapping for one envelope."""
    try:
        body = envelope.model_dump(mode="json")
    except PydanticSerializationError as exc:
        raise WireFormatError(message=f"envelope payload is not serializable: {exc}") from exc

    if WireStyle(style) is WireStyle.NESTED or not envelope.is_success():
        return body

    data = body.pop("data")
    if data is None:
        return body
    if not isinstance(data, dict):
        raise WireFormatError(
            message=f"flattened success payload must be an object, got {type(data).__name__}"
        )
    if "type" in data:
        raise WireFormatError(message="flattened success payload must not define 'type'")
    return {**body, **data}


def to_json(envelope: Envelope, *, style: WireStyle = WireStyle.NESTED) -> str:
    """Return compact JSON text for one envelope."""
    return json.dumps(to_wire(envelope, style=style), separators=(",", ":"))


def render(envelope: Envelope, *, style: WireStyle = WireStyle.NESTED) -> tuple[int, dict[str, Any]]:
    """Return the HTTP status carried by the envelope and its wire body."""
    return envelope.status, to_wire(envelope, style=style)


@lru_cache(maxsize=128)
def envelope_adapter(data_type: Any = Any, code_type: Any = int) -> TypeAdapter[Any]:
    """Return a cached adapter over the discriminated envelope union."""
    return TypeAdapter(
        Annotated[
            Union[Success[data_type], Error[code_type], Fail[code_type]],
            Field(discriminator="type"),
        ]
    )


def envelope_json_schema(data_type: Any = Any, code_type: Any = int) -> dict[str, Any]:
    """Return the JSON schema describing envelopes of the given types."""
    return envelope_adapter(data_type, code_type).json_schema()


def from_wire(
    payload: Any,
    *,
    data_type: Any = Any,
    code_type: Any = int,
    style: WireStyle = WireStyle.NESTED,
) -> Envelope:
    """Rebuild an envelope from its wire mapping; status takes the variant default.

    A flattened success with no payload keys decodes to the unit payload
    (``None``) unless ``data_type`` is a mapping or model, which gets ``{}``.
    """
    if not isinstance(payload, Mapping):
        raise WireFormatError(message="envelope must be a JSON object")

    body = dict(payload)
    body.pop("status", None)
    if WireStyle(style) is WireStyle.FLATTENED and body.get("type") == EnvelopeKind.SUCCESS.value:
        fields = {key: value for key, value in body.items() if key != "type"}
        data = fields if fields or _expects_mapping(data_type) else None
        body = {"type": EnvelopeKind.SUCCESS.value, "data": data}

    try:
        envelope = envelope_adapter(data_type, code_type).validate_python(body)
    except ValidationError as exc:
        raise WireFormatError(message=_describe_validation_error(exc)) from exc
    if not isinstance(envelope, EnvelopeModel):
        raise WireFormatError(message="envelope payload did not resolve to a variant")
    return envelope


def from_json(
    raw: str | bytes,
    *,
    data_type: Any = Any,
    code_type: Any = int,
    style: WireStyle = WireStyle.NESTED,
) -> Envelope:
    """Parse JSON text into an envelope."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise WireFormatError(message=f"envelope is not valid JSON: {exc.msg}") from exc
    return from_wire(payload, data_type=data_type, code_type=code_type, style=style)


def _describe_validation_error(error: ValidationError) -> str:
    """Map one pydantic validation failure to a stable short message."""
    first = error.errors()[0]
    kind = first.get("type")
    if kind == "union_tag_not_found":
        return "envelope is missing the 'type' field"
    if kind == "union_tag_invalid":
        return "envelope 'type' must be one of: success, error, fail"

    location = [str(part) for part in first.get("loc", ())]
    if kind == "missing" and location:
        return f"envelope is missing the '{location[-1]}' field"
    path = ".".join(location[1:]) or "envelope"
    return f"{path}: {first.get('msg', 'invalid value')}"


def _expects_mapping(data_type: Any) -> bool:
    origin = get_origin(data_type) or data_type
    if origin in (dict, Mapping):
        return True
    return isinstance(origin, type) and issubclass(origin, (BaseModel, Mapping))
