"""Core components for response validation.

This module contains the building blocks the Validator is composed of:
- Matchers: positive/negative body patterns
- Conditions: structural predicates over decoded JSON bodies
- Validators: status, header, body and JSON checks plus the Validator itself
"""

from upcheck.core.conditions import Condition, new_condition
from upcheck.core.matchers import (
    Matcher,
    PatternSet,
    check_body_patterns,
    compile_pattern,
    parse_body,
)
from upcheck.core.reason import Reason
from upcheck.core.validators import (
    BodyCheck,
    BodyPatternCheck,
    HeaderCheck,
    JSONConditionCheck,
    ResponseCheck,
    StatusCheck,
    StatusOKCheck,
    Validator,
    make_validator,
)

__all__ = [
    "Condition",
    "new_condition",
    "Matcher",
    "PatternSet",
    "check_body_patterns",
    "compile_pattern",
    "parse_body",
    "Reason",
    "BodyCheck",
    "BodyPatternCheck",
    "HeaderCheck",
    "JSONConditionCheck",
    "ResponseCheck",
    "StatusCheck",
    "StatusOKCheck",
    "Validator",
    "make_validator",
]
