"""Structural conditions evaluated against decoded JSON documents.

A condition is configured as a mapping holding exactly one operator:

    equals:     {field: value}            exact str/int/bool equality
    contains:   {field: substring}        substring of a string (or any list item)
    regexp:     {field: pattern}          re.search on a string (or any list item)
    range:      {field.gte: number, ...}  numeric bounds (gt, gte, lt, lte)
    has_fields: [field, ...]              every field present
    and:        [condition, ...]
    or:         [condition, ...]
    not:        condition

Fields are dotted paths into nested mappings.
"""

import re
from typing import Any, Callable, Dict, List, Tuple

from upcheck.errors import ConfigurationError

_MISSING = object()


def get_value(document: Dict[str, Any], field: str) -> Any:
    """Look up a dotted field path, returning _MISSING when absent."""
    current: Any = document
    for part in field.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _string_values(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [v for v in value if isinstance(v, str)]
    return []


class Condition:
    """Base condition class."""

    def check(self, document: Dict[str, Any]) -> bool:
        """Check if document satisfies the condition. Override in subclass."""
        raise NotImplementedError


class Equals(Condition):
    def __init__(self, fields: Any):
        if not isinstance(fields, dict):
            raise ConfigurationError("equals condition requires a mapping of fields")
        for field, value in fields.items():
            if not isinstance(value, (str, int, bool)):
                raise ConfigurationError(
                    f"equals condition on '{field}' has unexpected type "
                    f"'{type(value).__name__}', only strings, ints and bools are allowed"
                )
        self.fields: Dict[str, Any] = dict(fields)

    @staticmethod
    def _equal(actual: Any, expected: Any) -> bool:
        if isinstance(expected, bool):
            return isinstance(actual, bool) and actual is expected
        if isinstance(expected, int):
            return isinstance(actual, int) and not isinstance(actual, bool) and actual == expected
        return isinstance(actual, str) and actual == expected

    def check(self, document: Dict[str, Any]) -> bool:
        for field, expected in self.fields.items():
            actual = get_value(document, field)
            if actual is _MISSING or not self._equal(actual, expected):
                return False
        return True

    def __repr__(self) -> str:
        return f"equals: {self.fields}"


class Contains(Condition):
    def __init__(self, fields: Any):
        if not isinstance(fields, dict):
            raise ConfigurationError("contains condition requires a mapping of fields")
        for field, value in fields.items():
            if not isinstance(value, str):
                raise ConfigurationError(
                    f"contains condition on '{field}' requires a string, got '{type(value).__name__}'"
                )
        self.fields: Dict[str, str] = dict(fields)

    def check(self, document: Dict[str, Any]) -> bool:
        for field, substring in self.fields.items():
            actual = get_value(document, field)
            if actual is _MISSING:
                return False
            if not any(substring in s for s in _string_values(actual)):
                return False
        return True

    def __repr__(self) -> str:
        return f"contains: {self.fields}"


class Regexp(Condition):
    def __init__(self, fields: Any):
        if not isinstance(fields, dict):
            raise ConfigurationError("regexp condition requires a mapping of fields")
        self.fields: Dict[str, "re.Pattern[str]"] = {}
        for field, pattern in fields.items():
            if not isinstance(pattern, str):
                raise ConfigurationError(
                    f"regexp condition on '{field}' requires a string pattern, got '{type(pattern).__name__}'"
                )
            try:
                self.fields[field] = re.compile(pattern)
            except re.error as e:
                raise ConfigurationError(f"invalid regexp '{pattern}' for '{field}': {e}") from e

    def check(self, document: Dict[str, Any]) -> bool:
        for field, regex in self.fields.items():
            actual = get_value(document, field)
            if actual is _MISSING:
                return False
            if not any(regex.search(s) for s in _string_values(actual)):
                return False
        return True

    def __repr__(self) -> str:
        return "regexp: {" + ", ".join(f"{f}: {r.pattern}" for f, r in self.fields.items()) + "}"


_RANGE_OPS: Dict[str, Callable[[Any, Any], bool]] = {
    "gt": lambda a, b: a > b,
    "gte": lambda a, b: a >= b,
    "lt": lambda a, b: a < b,
    "lte": lambda a, b: a <= b,
}


class Range(Condition):
    def __init__(self, bounds: Any):
        if not isinstance(bounds, dict):
            raise ConfigurationError("range condition requires a mapping of bounds")
        self.bounds: List[Tuple[str, str, Any]] = []
        for key, bound in bounds.items():
            field, _, op = str(key).rpartition(".")
            if not field or op not in _RANGE_OPS:
                raise ConfigurationError(
                    f"range condition key '{key}' must be <field>.gt|gte|lt|lte"
                )
            if not _is_number(bound):
                raise ConfigurationError(
                    f"range condition '{key}' requires a number, got '{type(bound).__name__}'"
                )
            self.bounds.append((field, op, bound))

    def check(self, document: Dict[str, Any]) -> bool:
        for field, op, bound in self.bounds:
            actual = get_value(document, field)
            if not _is_number(actual) or not _RANGE_OPS[op](actual, bound):
                return False
        return True

    def __repr__(self) -> str:
        return "range: {" + ", ".join(f"{f}.{op}: {b}" for f, op, b in self.bounds) + "}"


class HasFields(Condition):
    def __init__(self, fields: Any):
        if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
            raise ConfigurationError("has_fields condition requires a list of field names")
        self.fields: List[str] = list(fields)

    def check(self, document: Dict[str, Any]) -> bool:
        return all(get_value(document, f) is not _MISSING for f in self.fields)

    def __repr__(self) -> str:
        return f"has_fields: {self.fields}"


class And(Condition):
    def __init__(self, configs: Any):
        if not isinstance(configs, list) or not configs:
            raise ConfigurationError("and condition requires a non-empty list of conditions")
        self.conditions = [new_condition(c) for c in configs]

    def check(self, document: Dict[str, Any]) -> bool:
        return all(c.check(document) for c in self.conditions)

    def __repr__(self) -> str:
        return "and: [" + ", ".join(repr(c) for c in self.conditions) + "]"


class Or(Condition):
    def __init__(self, configs: Any):
        if not isinstance(configs, list) or not configs:
            raise ConfigurationError("or condition requires a non-empty list of conditions")
        self.conditions = [new_condition(c) for c in configs]

    def check(self, document: Dict[str, Any]) -> bool:
        return any(c.check(document) for c in self.conditions)

    def __repr__(self) -> str:
        return "or: [" + ", ".join(repr(c) for c in self.conditions) + "]"


class Not(Condition):
    def __init__(self, config: Any):
        self.inner = new_condition(config)

    def check(self, document: Dict[str, Any]) -> bool:
        return not self.inner.check(document)

    def __repr__(self) -> str:
        return f"not: {self.inner!r}"


_OPERATORS: Dict[str, Callable[[Any], Condition]] = {
    "equals": Equals,
    "contains": Contains,
    "regexp": Regexp,
    "range": Range,
    "has_fields": HasFields,
    "and": And,
    "or": Or,
    "not": Not,
}


def new_condition(config: Any) -> Condition:
    """Create a condition from configuration."""
    if not isinstance(config, dict) or not config:
        raise ConfigurationError("missing or invalid condition")
    if len(config) > 1:
        raise ConfigurationError(
            f"condition must have exactly one operator, got {sorted(config)}"
        )

    operator, operand = next(iter(config.items()))
    factory = _OPERATORS.get(str(operator).lower())
    if factory is None:
        raise ConfigurationError(f"unknown condition operator: {operator}")
    return factory(operand)
