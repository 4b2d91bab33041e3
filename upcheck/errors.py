"""Exception types raised by upcheck."""

from upcheck.config.common import FailureKind


class UpcheckError(Exception):
    """Base class for upcheck errors."""


class ConfigurationError(UpcheckError):
    """A pattern or condition could not be compiled."""


class ValidationFailure(UpcheckError):
    """A probe response did not satisfy a check.

    Raised by individual checks and converted to a Reason by the Validator,
    never propagated to callers of ``Validator.validate``.
    """

    def __init__(self, kind: FailureKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message
