"""Read-only projection shared by the Error and Fail variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

C = TypeVar("C")


@dataclass(frozen=True)
class ErrorFields(Generic[C]):
    """Failure details without regard to which failure variant produced them."""

    message: str
    code: C | None
    status: int
