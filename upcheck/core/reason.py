"""Outcome of validating a single probe response."""

from dataclasses import dataclass
from typing import Any, Dict

from upcheck.config.common import FailureKind, ReasonType
from upcheck.errors import ValidationFailure


@dataclass(frozen=True)
class Reason:
    """Why a probe was judged down. A passing probe has no Reason at all."""

    kind: FailureKind
    message: str

    @property
    def type(self) -> ReasonType:
        return self.kind.reason_type

    def __str__(self) -> str:
        return self.message

    def fields(self) -> Dict[str, Any]:
        """Event fields describing this failure."""
        return {"error": {"type": self.type.value, "message": self.message}}

    @classmethod
    def validate_failed(cls, failure: ValidationFailure) -> "Reason":
        return cls(kind=failure.kind, message=failure.message)

    @classmethod
    def io_failed(cls, error: Exception) -> "Reason":
        return cls(kind=FailureKind.IO, message=str(error) or type(error).__name__)
