"""Common enumerations used across upcheck configuration and results."""

from enum import Enum


class ReasonType(str, Enum):
    """Top-level classification of a down observation."""

    VALIDATE = "validate"
    IO = "io"


class FailureKind(str, Enum):
    """Why a probe response was judged down."""

    STATUS = "status"
    HEADER = "header"
    BODY = "body"
    JSON_DECODE = "json_decode"
    JSON_CONDITION = "json_condition"
    IO = "io"

    @property
    def reason_type(self) -> ReasonType:
        if self is FailureKind.IO:
            return ReasonType.IO
        return ReasonType.VALIDATE
