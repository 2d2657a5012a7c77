"""Public envelope API: variants, constructors, composition and wire mapping."""

from .builders import (
    error,
    error_code,
    error_code_status,
    error_status,
    fail,
    fail_code,
    fail_code_status,
    fail_status,
    success,
    success_status,
)
from .compose import (
    Err,
    Ok,
    Outcome,
    bind,
    chain,
    from_call,
    from_result,
    from_value,
    promote,
    short_circuit,
)
from .envelope import Envelope, EnvelopeModel, Error, Fail, FailureModel, Success
from .fields import ErrorFields
from .kinds import DEFAULT_STATUS, EnvelopeKind, default_status
from .wire import (
    WireStyle,
    envelope_adapter,
    envelope_json_schema,
    from_json,
    from_wire,
    render,
    to_json,
    to_wire,
)

__all__ = [
    "DEFAULT_STATUS",
    "Envelope",
    "EnvelopeKind",
    "EnvelopeModel",
    "Err",
    "Error",
    "ErrorFields",
    "Fail",
    "FailureModel",
    "Ok",
    "Outcome",
    "Success",
    "WireStyle",
    "bind",
    "chain",
    "default_status",
    "envelope_adapter",
    "envelope_json_schema",
    "error",
    "error_code",
    "error_code_status",
    "error_status",
    "fail",
    "fail_code",
    "fail_code_status",
    "fail_status",
    "from_call",
    "from_json",
    "from_result",
    "from_value",
    "from_wire",
    "promote",
    "render",
    "short_circuit",
    "success",
    "success_status",
    "to_json",
    "to_wire",
]
