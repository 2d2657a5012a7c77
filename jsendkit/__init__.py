"""Three-state response envelopes for FastAPI services."""

from .envelope import (
    DEFAULT_STATUS,
    Envelope,
    EnvelopeKind,
    Err,
    Error,
    ErrorFields,
    Fail,
    Ok,
    Success,
    WireStyle,
    bind,
    chain,
    error,
    error_code,
    error_code_status,
    error_status,
    fail,
    fail_code,
    fail_code_status,
    fail_status,
    from_call,
    from_json,
    from_result,
    from_value,
    from_wire,
    promote,
    render,
    short_circuit,
    success,
    success_status,
    to_json,
    to_wire,
)
from .errors import EnvelopeException, EnvelopeUnwrapError, JsendError, WireFormatError

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_STATUS",
    "Envelope",
    "EnvelopeException",
    "EnvelopeKind",
    "EnvelopeUnwrapError",
    "Err",
    "Error",
    "ErrorFields",
    "Fail",
    "JsendError",
    "Ok",
    "Success",
    "WireFormatError",
    "WireStyle",
    "bind",
    "chain",
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
