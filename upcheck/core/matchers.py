"""Body pattern matchers for probe responses."""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from upcheck.config.response import BodyPatterns, PlainPatterns, PositiveNegativePatterns
from upcheck.errors import ConfigurationError

POSITIVE_MISMATCH = "negative pattern match, but positive pattern mismatch"
NEGATIVE_MISMATCH = "positive pattern match, but negative pattern mismatch"


class Matcher:
    """A compiled body pattern."""

    __slots__ = ("pattern", "_regex")

    def __init__(self, pattern: str):
        self.pattern = pattern
        try:
            self._regex = re.compile(pattern)
        except re.error as e:
            raise ConfigurationError(f"invalid body pattern '{pattern}': {e}") from e

    def match_string(self, text: str) -> bool:
        return self._regex.search(text) is not None

    def __repr__(self) -> str:
        return f"Matcher({self.pattern!r})"


def compile_pattern(pattern: str) -> Matcher:
    return Matcher(pattern)


@dataclass(frozen=True)
class PatternSet:
    """Positive and negative matchers built from a body configuration."""

    positive: Tuple[Matcher, ...] = ()
    negative: Tuple[Matcher, ...] = ()


def parse_body(body: BodyPatterns) -> PatternSet:
    """Compile the body configuration into a PatternSet.

    A plain list contributes only its first string, as a positive pattern.
    For a positive/negative mapping, keys are visited in order and the first
    unrecognized key holding a string pattern ends the scan, returning what
    has been collected so far.
    """
    if isinstance(body, PlainPatterns):
        for candidate in body.patterns:
            if isinstance(candidate, str):
                return PatternSet(positive=(compile_pattern(candidate),))
        return PatternSet()

    positive: List[Matcher] = []
    negative: List[Matcher] = []

    if isinstance(body, PositiveNegativePatterns):
        for check_type, params in body.sections.items():
            if not isinstance(params, list):
                continue
            for param in params:
                if not isinstance(param, str):
                    continue
                if check_type == "positive":
                    positive.append(compile_pattern(param))
                elif check_type == "negative":
                    negative.append(compile_pattern(param))
                else:
                    return PatternSet(tuple(positive), tuple(negative))

    return PatternSet(tuple(positive), tuple(negative))


def check_body_patterns(body: str, patterns: PatternSet) -> Optional[str]:
    """Evaluate a body against positive and negative patterns.

    Returns None when the body passes, otherwise the mismatch message.

    With no negative patterns the body must match a positive one. With
    negative patterns, an empty positive list counts as matched, and the
    body passes only if it matches positively and hits no negative pattern.
    """
    positive_hit = any(m.match_string(body) for m in patterns.positive)

    if not patterns.negative:
        return None if positive_hit else POSITIVE_MISMATCH

    # negative-only configurations
    if not patterns.positive:
        positive_hit = True

    negative_hit = any(m.match_string(body) for m in patterns.negative)

    if positive_hit and not negative_hit:
        return None
    if positive_hit:
        return NEGATIVE_MISMATCH
    return POSITIVE_MISMATCH
