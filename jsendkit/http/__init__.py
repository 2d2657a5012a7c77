"""FastAPI/Starlette integration for envelopes."""

from .client import envelope_from_response
from .extractors import (
    Bytes,
    Extension,
    Extractor,
    Form,
    JsonBody,
    MatchedPath,
    Path,
    Query,
    RawForm,
    RawPathParams,
)
from .handlers import (
    EXCEPTION_HANDLERS,
    envelope_exception_handler,
    http_exception_handler,
    install_exception_handlers,
    request_validation_exception_handler,
)
from .rejections import (
    BytesRejection,
    ExtensionRejection,
    FormRejection,
    JsonRejection,
    MatchedPathRejection,
    PathRejection,
    QueryRejection,
    RawFormRejection,
    RawPathParamsRejection,
    Rejection,
    summarize_validation_errors,
)
from .responses import EnvelopeResponse, log_envelope, to_response
from .server import create_app, enveloped

__all__ = [
    "Bytes",
    "BytesRejection",
    "EXCEPTION_HANDLERS",
    "EnvelopeResponse",
    "Extension",
    "ExtensionRejection",
    "Extractor",
    "Form",
    "FormRejection",
    "JsonBody",
    "JsonRejection",
    "MatchedPath",
    "MatchedPathRejection",
    "Path",
    "PathRejection",
    "Query",
    "QueryRejection",
    "RawForm",
    "RawFormRejection",
    "RawPathParams",
    "RawPathParamsRejection",
    "Rejection",
    "create_app",
    "envelope_exception_handler",
    "envelope_from_response",
    "enveloped",
    "http_exception_handler",
    "install_exception_handlers",
    "log_envelope",
    "request_validation_exception_handler",
    "summarize_validation_errors",
    "to_response",
]
