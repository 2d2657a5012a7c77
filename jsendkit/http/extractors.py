"""Request extractors that surface extraction failures as Fail envelopes.

Each extractor is a FastAPI dependency wrapping Starlette's native access to
one input channel::

    @app.post("/items")
    async def create(item: Item = Depends(JsonBody(Item))) -> Envelope: ...

On success the extracted value is handed to the endpoint unchanged. On
failure the channel's ``Rejection`` is converted into a Fail envelope and
raised as ``EnvelopeException``; ``install_exception_handlers`` renders it.
"""

# FastAPI resolves dependency annotations at runtime, so this module keeps
# real (non-postponed) annotations on ``__call__``.

import dataclasses
from typing import Any, Generic, Mapping, Optional, TypeVar, get_origin, is_typeddict

from pydantic import BaseModel, TypeAdapter, ValidationError
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect, Request

from jsendkit.config import get_settings
from jsendkit.envelope import Envelope, success
from jsendkit.errors import EnvelopeException
from jsendkit.logging import get_logger, log_rejection_event

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

_LOGGER = get_logger(__name__)

T = TypeVar("T")

FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"
MULTIPART_MEDIA_TYPE = "multipart/form-data"
JSON_MEDIA_TYPE = "application/json"

_BODYLESS_METHODS = frozenset({"GET", "HEAD"})
_MISSING = object()


class Extractor(Generic[T]):
    """Base class for channel extractors usable with ``fastapi.Depends``."""

    async def __call__(self, request: Request) -> T:
        try:
            return await self.extract(request)
        except Rejection as rejection:
            _log_rejection(request, rejection)
            raise EnvelopeException.of(rejection.into_envelope()) from rejection

    async def extract(self, request: Request) -> T:
        """Read this extractor's channel, raising a ``Rejection`` on failure."""
        raise NotImplementedError

    async def extract_envelope(self, request: Request) -> Envelope:
        """Return ``success(value)`` or the Fail envelope for the rejection."""
        try:
            value = await self.extract(request)
        except Rejection as rejection:
            _log_rejection(request, rejection)
            return rejection.into_envelope()
        return success(value)


class JsonBody(Extractor[T]):
    """Deserialize a JSON request body into ``model``."""

    def __init__(self, model: Any, *, max_body_bytes: Optional[int] = None) -> None:
        self.model = model
        self._adapter: TypeAdapter[Any] = TypeAdapter(model)
        self._max_body_bytes = max_body_bytes

    async def extract(self, request: Request) -> T:
        if not _is_json_media_type(_media_type(request)):
            raise JsonRejection(
                message="Expected request with `Content-Type: application/json`",
                status=415,
            )
        body = await _read_body(request, _limit(self._max_body_bytes), JsonRejection)
        try:
            return self._adapter.validate_json(body)
        except ValidationError as exc:
            errors = exc.errors()
            if any(item.get("type") == "json_invalid" for item in errors):
                raise JsonRejection(
                    message="Failed to parse the request body as JSON: "
                    f"{summarize_validation_errors(errors)}",
                    status=400,
                ) from exc
            raise JsonRejection(
                message="Failed to deserialize the JSON body into the target type: "
                f"{summarize_validation_errors(errors)}",
                status=422,
            ) from exc


class Query(Extractor[T]):
    """Deserialize the query string into ``model``."""

    def __init__(self, model: Any) -> None:
        self.model = model
        self._adapter: TypeAdapter[Any] = TypeAdapter(model)

    async def extract(self, request: Request) -> T:
        try:
            return self._adapter.validate_python(_collect(request.query_params.multi_items()))
        except ValidationError as exc:
            raise QueryRejection(
                message="Failed to deserialize query string: "
                f"{summarize_validation_errors(exc.errors())}",
                status=400,
            ) from exc


class Path(Extractor[T]):
    """Deserialize matched path parameters into ``model``.

    Mapping-like targets (models, dataclasses, TypedDicts, dicts) receive the
    parameters by name. Any other target receives the single parameter value,
    or a tuple of values in route order when there are several.
    """

    def __init__(self, model: Any) -> None:
        self.model = model
        self._adapter: TypeAdapter[Any] = TypeAdapter(model)
        self._by_name = _accepts_mapping(model)

    async def extract(self, request: Request) -> T:
        params = _captured_path_params(request, PathRejection)
        if self._by_name:
            value: Any = params
        elif len(params) == 1:
            value = next(iter(params.values()))
        else:
            value = tuple(params.values())
        try:
            return self._adapter.validate_python(value)
        except ValidationError as exc:
            raise PathRejection(
                message=f"Invalid URL: {summarize_validation_errors(exc.errors())}",
                status=400,
            ) from exc


class Form(Extractor[T]):
    """Deserialize a form into ``model``.

    ``GET``/``HEAD`` requests read the query string; other methods read an
    urlencoded or multipart body through ``Request.form``.
    """

    def __init__(self, model: Any) -> None:
        self.model = model
        self._adapter: TypeAdapter[Any] = TypeAdapter(model)

    async def extract(self, request: Request) -> T:
        if request.method in _BODYLESS_METHODS:
            data = _collect(request.query_params.multi_items())
            prefix, status = "Failed to deserialize form", 400
        else:
            if _media_type(request) not in (FORM_MEDIA_TYPE, MULTIPART_MEDIA_TYPE):
                raise FormRejection(
                    message=f"Form requests must have `Content-Type: {FORM_MEDIA_TYPE}`",
                    status=415,
                )
            try:
                form = await request.form()
            except ClientDisconnect as exc:
                raise FormRejection(
                    message="Failed to buffer the request body: client disconnected",
                    status=400,
                ) from exc
            except MultiPartException as exc:
                raise FormRejection(
                    message=f"Failed to parse the form body: {exc.message}",
                    status=400,
                ) from exc
            data = _collect(form.multi_items())
            prefix, status = "Failed to deserialize form body", 422

        try:
            return self._adapter.validate_python(data)
        except ValidationError as exc:
            raise FormRejection(
                message=f"{prefix}: {summarize_validation_errors(exc.errors())}",
                status=status,
            ) from exc


class Bytes(Extractor[bytes]):
    """Buffer the raw request body."""

    def __init__(self, *, max_body_bytes: Optional[int] = None) -> None:
        self._max_body_bytes = max_body_bytes

    async def extract(self, request: Request) -> bytes:
        return await _read_body(request, _limit(self._max_body_bytes), BytesRejection)


class RawForm(Extractor[bytes]):
    """Return the undecoded urlencoded form: query string or body bytes."""

    def __init__(self, *, max_body_bytes: Optional[int] = None) -> None:
        self._max_body_bytes = max_body_bytes

    async def extract(self, request: Request) -> bytes:
        if request.method in _BODYLESS_METHODS:
            return bytes(request.scope.get("query_string", b""))
        if _media_type(request) != FORM_MEDIA_TYPE:
            raise RawFormRejection(
                message=f"Form requests must have `Content-Type: {FORM_MEDIA_TYPE}`",
                status=415,
            )
        return await _read_body(request, _limit(self._max_body_bytes), RawFormRejection)


class RawPathParams(Extractor[list[tuple[str, str]]]):
    """Return matched path parameters as ``(name, value)`` string pairs."""

    async def extract(self, request: Request) -> list[tuple[str, str]]:
        params = _captured_path_params(request, RawPathParamsRejection)
        return [(str(name), str(value)) for name, value in params.items()]


class Extension(Extractor[T]):
    """Return a request-scoped value stored on ``request.state``."""

    def __init__(self, name: str, expected_type: Optional[type] = None) -> None:
        self.name = name
        self.expected_type = expected_type

    async def extract(self, request: Request) -> T:
        value = getattr(request.state, self.name, _MISSING)
        if value is _MISSING:
            raise ExtensionRejection(
                message=f"Missing request extension: Extension `{self.name}` was not "
                f"found. Perhaps you forgot to set `request.state.{self.name}`?",
                status=500,
            )
        if self.expected_type is not None and not isinstance(value, self.expected_type):
            raise ExtensionRejection(
                message=f"Request extension `{self.name}` is not of type "
                f"`{self.expected_type.__name__}`",
                status=500,
            )
        return value


class MatchedPath(Extractor[str]):
    """Return the path template of the route that matched the request."""

    async def extract(self, request: Request) -> str:
        route = request.scope.get("route")
        path = getattr(route, "path", None)
        if not isinstance(path, str):
            raise MatchedPathRejection(message="No matched path found", status=500)
        return path


def _media_type(request: Request) -> str:
    """Return the lower-cased media type without parameters."""
    raw = request.headers.get("content-type", "")
    return raw.split(";", 1)[0].strip().lower()


def _is_json_media_type(media_type: str) -> bool:
    """Accept ``application/json`` and structured ``+json`` suffixes."""
    return media_type == JSON_MEDIA_TYPE or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


def _limit(override: Optional[int]) -> int:
    """Resolve the body size limit from the override or settings."""
    if override is not None:
        return override
    return get_settings().extractors.max_body_bytes


async def _read_body(request: Request, limit: int, rejection: type[Rejection]) -> bytes:
    """Buffer the body, rejecting oversized or interrupted uploads.

    Chunks are counted as they arrive, so an upload without a usable
    ``Content-Length`` stops being read at the first chunk past ``limit``.
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise _too_large(rejection)

    chunks: list[bytes] = []
    received = 0
    try:
        async for chunk in request.stream():
            received += len(chunk)
            if received > limit:
                raise _too_large(rejection)
            chunks.append(chunk)
    except ClientDisconnect as exc:
        raise rejection(
            message="Failed to buffer the request body: client disconnected",
            status=400,
        ) from exc

    body = b"".join(chunks)
    # Later readers (request.body(), request.json()) reuse the buffered body.
    request._body = body
    return body


def _too_large(rejection: type[Rejection]) -> Rejection:
    return rejection(
        message="Failed to buffer the request body: length limit exceeded",
        status=413,
    )


def _captured_path_params(request: Request, rejection: type[Rejection]) -> dict[str, Any]:
    """Return path params captured by routing, or reject when routing never ran."""
    if "path_params" not in request.scope:
        raise rejection(
            message="No paths parameters found for matched route",
            status=500,
        )
    return dict(request.path_params)


def _collect(items: list[tuple[str, Any]]) -> dict[str, Any]:
    """Group repeated keys into lists, keeping single keys scalar."""
    output: dict[str, Any] = {}
    for key, value in items:
        if key not in output:
            output[key] = value
        elif isinstance(output[key], list):
            output[key].append(value)
        else:
            output[key] = [output[key], value]
    return output


def _accepts_mapping(model: Any) -> bool:
    """Return ``True`` when ``model`` validates from a name-keyed mapping."""
    origin = get_origin(model) or model
    if origin in (dict, Mapping):
        return True
    if not isinstance(origin, type):
        return False
    return (
        issubclass(origin, (BaseModel, Mapping))
        or dataclasses.is_dataclass(origin)
        or is_typeddict(origin)
    )


def _log_rejection(request: Request, rejection: Rejection) -> None:
    log_rejection_event(_LOGGER, rejection, method=request.method, path=request.url.path)
