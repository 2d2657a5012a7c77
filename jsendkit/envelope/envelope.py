"""Three-state response envelope models.

Exactly one of ``Success``, ``Error`` or ``Fail`` describes a handler outcome.
Every instance carries an HTTP ``status`` used only at the response boundary:
it is excluded from serialization, equality and hashing.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Callable, ClassVar, Generic, Literal, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)

from jsendkit.errors import EnvelopeException, EnvelopeUnwrapError

from .fields import ErrorFields
from .kinds import EnvelopeKind, default_status

D = TypeVar("D")
C = TypeVar("C")

MIN_STATUS = 100
MAX_STATUS = 599


class EnvelopeModel(BaseModel):
    """Behavior shared by all envelope variants."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[EnvelopeKind]

    def is_success(self) -> bool:
        return self.kind is EnvelopeKind.SUCCESS

    def is_error(self) -> bool:
        return self.kind is EnvelopeKind.ERROR

    def is_fail(self) -> bool:
        return self.kind is EnvelopeKind.FAIL

    def is_success_and(self, predicate: Callable[[Any], bool]) -> bool:
        """Apply ``predicate`` to the payload; non-success variants yield ``False``."""
        if isinstance(self, Success):
            return bool(predicate(self.data))
        return False

    def is_error_and(self, predicate: Callable[[ErrorFields[Any]], bool]) -> bool:
        """Apply ``predicate`` to the failure fields of an Error only."""
        if isinstance(self, Error):
            return bool(predicate(self.error_fields()))
        return False

    def is_fail_and(self, predicate: Callable[[ErrorFields[Any]], bool]) -> bool:
        """Apply ``predicate`` to the failure fields of a Fail only."""
        if isinstance(self, Fail):
            return bool(predicate(self.error_fields()))
        return False

    def error_fields(self) -> ErrorFields[Any] | None:
        """Return the failure projection, or ``None`` for Success."""
        if isinstance(self, FailureModel):
            return ErrorFields(message=self.message, code=self.code, status=self.status)
        return None

    def unwrap(self) -> Any:
        """Return the Success payload or raise ``EnvelopeUnwrapError``."""
        if isinstance(self, Success):
            return self.data
        raise EnvelopeUnwrapError(
            message=f"called unwrap on {self.kind.value} envelope: {self.message}",
            expected=EnvelopeKind.SUCCESS.value,
            actual=self.kind.value,
        )

    def unwrap_failure(self) -> ErrorFields[Any]:
        """Return the failure projection or raise ``EnvelopeUnwrapError``."""
        fields = self.error_fields()
        if fields is None:
            raise EnvelopeUnwrapError(
                message="called unwrap_failure on success envelope",
                expected="error|fail",
                actual=self.kind.value,
            )
        return fields

    def or_raise(self) -> Any:
        """Return the Success payload or raise this envelope as an early return."""
        if isinstance(self, Success):
            return self.data
        raise EnvelopeException.of(self)

    def and_then(self, step: Callable[[Any], Any]) -> Envelope:
        """Method form of ``jsendkit.envelope.compose.bind``."""
        from .compose import bind

        return bind(self, step)

    def with_status(self, status: int | HTTPStatus) -> Envelope:
        """Return a copy of this envelope with a different HTTP status."""
        return type(self).model_validate({**self.__dict__, "status": int(status)})

    def _identity(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnvelopeModel):
            return NotImplemented
        return self.kind is other.kind and self._identity() == other._identity()

    def __hash__(self) -> int:
        """Hash variant and payload (or message and code); both must be hashable."""
        return hash((self.kind, self._identity()))


class Success(EnvelopeModel, Generic[D]):
    """Operation completed; ``data`` is the result."""

    kind: ClassVar[EnvelopeKind] = EnvelopeKind.SUCCESS

    type: Literal["success"] = "success"
    data: D
    status: int = Field(
        default=default_status(EnvelopeKind.SUCCESS),
        ge=MIN_STATUS,
        le=MAX_STATUS,
        exclude=True,
    )

    def _identity(self) -> tuple[Any, ...]:
        return (self.data,)


class FailureModel(EnvelopeModel):
    """Wire behavior shared by Error and Fail."""

    @model_serializer(mode="wrap")
    def _omit_absent_code(self, handler: SerializerFunctionWrapHandler) -> Any:
        serialized = handler(self)
        if isinstance(serialized, dict) and getattr(self, "code", None) is None:
            serialized.pop("code", None)
        return serialized

    def _identity(self) -> tuple[Any, ...]:
        return (self.message, self.code)


class Error(FailureModel, Generic[C]):
    """Unexpected or server-side failure."""

    kind: ClassVar[EnvelopeKind] = EnvelopeKind.ERROR

    type: Literal["error"] = "error"
    message: str
    code: C | None = None
    status: int = Field(
        default=default_status(EnvelopeKind.ERROR),
        ge=MIN_STATUS,
        le=MAX_STATUS,
        exclude=True,
    )


class Fail(FailureModel, Generic[C]):
    """Client-caused failure, including malformed input."""

    kind: ClassVar[EnvelopeKind] = EnvelopeKind.FAIL

    type: Literal["fail"] = "fail"
    message: str
    code: C | None = None
    status: int = Field(
        default=default_status(EnvelopeKind.FAIL),
        ge=MIN_STATUS,
        le=MAX_STATUS,
        exclude=True,
    )


Envelope = Union[Success, Error, Fail]
