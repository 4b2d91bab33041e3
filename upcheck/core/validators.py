"""Response validation: decides whether a probe response counts as up.

Checks come in two flavours. Response checks only look at the status line
and headers. Body checks also receive the decoded body, so the caller only
needs to read the body when at least one body check is registered.
"""

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from httpx import Response

from upcheck.config.common import FailureKind
from upcheck.config.response import ResponseConfig
from upcheck.core.conditions import Condition, new_condition
from upcheck.core.matchers import PatternSet, check_body_patterns, parse_body
from upcheck.core.reason import Reason
from upcheck.errors import ValidationFailure
from upcheck.utils import logger, transform_numbers


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid number literal {name}")


_json_decoder = json.JSONDecoder(parse_float=Decimal, parse_constant=_reject_constant)


class ResponseCheck:
    """Check using only the status line and headers of a response."""

    def check(self, response: Response) -> None:
        """Raise ValidationFailure on mismatch. Override in subclass."""
        raise NotImplementedError


class BodyCheck:
    """Check using the response together with its decoded body."""

    def check(self, response: Response, body: str) -> None:
        """Raise ValidationFailure on mismatch. Override in subclass."""
        raise NotImplementedError


class StatusCheck(ResponseCheck):
    """Status code must be one of the configured values."""

    def __init__(self, statuses: Sequence[int]):
        self.statuses: Tuple[int, ...] = tuple(statuses)

    def check(self, response: Response) -> None:
        if response.status_code in self.statuses:
            return
        raise ValidationFailure(
            FailureKind.STATUS,
            f"received status code {response.status_code} expecting {list(self.statuses)}",
        )


class StatusOKCheck(ResponseCheck):
    """Default status policy: anything below 400 is fine."""

    def check(self, response: Response) -> None:
        if response.status_code >= 400:
            raise ValidationFailure(
                FailureKind.STATUS,
                f"{response.status_code} {response.reason_phrase}".strip(),
            )


class HeaderCheck(ResponseCheck):
    def __init__(self, headers: Dict[str, str]):
        self.headers: Tuple[Tuple[str, str], ...] = tuple(headers.items())

    def check(self, response: Response) -> None:
        for name, expected in self.headers:
            values = response.headers.get_list(name)
            value = values[0] if values else ""
            if value != expected:
                raise ValidationFailure(
                    FailureKind.HEADER,
                    f"header {name} is '{value}' expecting '{expected}'",
                )


class BodyPatternCheck(BodyCheck):
    def __init__(self, patterns: PatternSet):
        self.patterns = patterns

    def check(self, response: Response, body: str) -> None:
        message = check_body_patterns(body, self.patterns)
        if message is not None:
            raise ValidationFailure(FailureKind.BODY, message)


class JSONConditionCheck(BodyCheck):
    """Decode the body as a JSON object and evaluate every condition.

    All conditions are evaluated so the failure message lists each one that
    did not hold, not just the first.
    """

    def __init__(self, conditions: Sequence[Tuple[str, Condition]]):
        self.conditions: Tuple[Tuple[str, Condition], ...] = tuple(conditions)

    @staticmethod
    def decode(body: str) -> Dict[str, Any]:
        """Decode the first JSON value in body; trailing data is ignored."""
        document, _ = _json_decoder.raw_decode(body.lstrip(" \t\r\n"))
        if document is None:
            document = {}
        if not isinstance(document, dict):
            raise ValueError(f"expected a JSON object, got {type(document).__name__}")
        transform_numbers(document)
        return document

    def check(self, response: Response, body: str) -> None:
        try:
            document = self.decode(body)
        except (ValueError, RecursionError) as e:
            raise ValidationFailure(
                FailureKind.JSON_DECODE,
                f"could not parse JSON for body check with condition. Source: {body}: {e}",
            ) from e

        failed = [desc for desc, condition in self.conditions if not condition.check(document)]
        if failed:
            raise ValidationFailure(
                FailureKind.JSON_CONDITION,
                f"JSON body did not match {len(failed)} conditions '{','.join(failed)}' "
                f"for monitor. Received JSON {document}",
            )


@dataclass(frozen=True)
class Validator:
    """Ordered response checks followed by ordered body checks.

    Immutable once built, so a single instance can be shared by concurrent
    probes of the same monitor.
    """

    response_checks: Tuple[ResponseCheck, ...] = ()
    body_checks: Tuple[BodyCheck, ...] = ()

    def wants_body(self) -> bool:
        """Whether the caller has to read the response body at all."""
        return len(self.body_checks) > 0

    def validate(self, response: Response, body: str = "") -> Optional[Reason]:
        """Return None if the response passes, otherwise the first failure."""
        try:
            for response_check in self.response_checks:
                response_check.check(response)
            for body_check in self.body_checks:
                body_check.check(response, body)
        except ValidationFailure as failure:
            logger.debug(f"Validation failed ({failure.kind.value}): {failure.message}")
            return Reason.validate_failed(failure)
        return None

    @classmethod
    def from_config(cls, config: ResponseConfig) -> "Validator":
        return make_validator(config)


def make_validator(config: ResponseConfig) -> Validator:
    """Build a Validator from configuration.

    Every pattern and condition is compiled here; a malformed one raises
    ConfigurationError and no Validator is returned.
    """
    response_checks: List[ResponseCheck] = []
    body_checks: List[BodyCheck] = []

    if config.status:
        response_checks.append(StatusCheck(config.status))
    else:
        response_checks.append(StatusOKCheck())

    if config.headers:
        response_checks.append(HeaderCheck(config.headers))

    if config.body is not None:
        body_checks.append(BodyPatternCheck(parse_body(config.body)))

    if config.json_checks:
        compiled = [(check.description, new_condition(check.condition)) for check in config.json_checks]
        body_checks.append(JSONConditionCheck(compiled))

    logger.debug(
        f"Built validator with {len(response_checks)} response checks "
        f"and {len(body_checks)} body checks"
    )
    return Validator(tuple(response_checks), tuple(body_checks))
