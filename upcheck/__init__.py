"""upcheck - HTTP probe response validation for uptime monitoring.

Decides whether a probe response is up or down from:
- Accepted status codes (or the default "below 400" policy)
- Required response headers
- Positive/negative body patterns
- Conditions over JSON response bodies
"""

__version__ = "0.1.0"

from upcheck.config import (
    FailureKind,
    JSONCheckConfig,
    PlainPatterns,
    PositiveNegativePatterns,
    ReasonType,
    ResponseConfig,
)

from upcheck.core import (
    Reason,
    Validator,
    make_validator,
)

from upcheck.errors import ConfigurationError, UpcheckError, ValidationFailure

from upcheck.probe import ProbeResult, run_probe

__all__ = [
    # Version
    "__version__",
    # Config
    "FailureKind",
    "JSONCheckConfig",
    "PlainPatterns",
    "PositiveNegativePatterns",
    "ReasonType",
    "ResponseConfig",
    # Core
    "Reason",
    "Validator",
    "make_validator",
    # Errors
    "ConfigurationError",
    "UpcheckError",
    "ValidationFailure",
    # Probe
    "ProbeResult",
    "run_probe",
]
