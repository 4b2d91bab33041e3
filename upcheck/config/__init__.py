"""Configuration models for response validation.

This package re-exports all commonly used classes for convenient importing.
"""

from upcheck.config.common import FailureKind, ReasonType

from upcheck.config.response import (
    BodyPatterns,
    JSONCheckConfig,
    PlainPatterns,
    PositiveNegativePatterns,
    ResponseConfig,
)

__all__ = [
    # Enums
    "FailureKind",
    "ReasonType",
    # Response
    "BodyPatterns",
    "JSONCheckConfig",
    "PlainPatterns",
    "PositiveNegativePatterns",
    "ResponseConfig",
]
