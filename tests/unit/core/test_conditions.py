"""Condition compilation and evaluation tests."""

import pytest

from upcheck.core.conditions import (
    _MISSING,
    And,
    Contains,
    Equals,
    HasFields,
    Not,
    Or,
    Range,
    Regexp,
    get_value,
    new_condition,
)
from upcheck.errors import ConfigurationError

DOC = {
    "status": "ok",
    "code": 200,
    "ratio": 0.75,
    "healthy": True,
    "tags": ["prod", "eu-west"],
    "db": {"latency_ms": 12, "state": "connected"},
}


class TestGetValue:
    def test_nested_path(self) -> None:
        assert get_value(DOC, "db.state") == "connected"

    def test_missing_path(self) -> None:
        assert get_value(DOC, "db.missing") is _MISSING
        assert not Equals({"db.missing": "x"}).check(DOC)

    def test_path_through_scalar(self) -> None:
        assert not HasFields(["status.inner"]).check(DOC)


class TestEquals:
    def test_string(self) -> None:
        assert new_condition({"equals": {"status": "ok"}}).check(DOC)
        assert not new_condition({"equals": {"status": "bad"}}).check(DOC)

    def test_int(self) -> None:
        assert new_condition({"equals": {"code": 200}}).check(DOC)
        assert not new_condition({"equals": {"code": 500}}).check(DOC)

    def test_int_does_not_equal_string(self) -> None:
        assert not new_condition({"equals": {"code": "200"}}).check(DOC)

    def test_bool(self) -> None:
        assert new_condition({"equals": {"healthy": True}}).check(DOC)
        assert not new_condition({"equals": {"code": True}}).check(DOC)

    def test_all_fields_must_match(self) -> None:
        assert not new_condition({"equals": {"status": "ok", "code": 500}}).check(DOC)

    def test_float_value_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="unexpected type"):
            new_condition({"equals": {"ratio": 0.75}})


class TestContains:
    def test_substring(self) -> None:
        assert Contains({"db.state": "connect"}).check(DOC)
        assert not Contains({"db.state": "down"}).check(DOC)

    def test_list_of_strings(self) -> None:
        assert Contains({"tags": "west"}).check(DOC)

    def test_non_string_field(self) -> None:
        assert not Contains({"code": "20"}).check(DOC)

    def test_non_string_value_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Contains({"code": 200})


class TestRegexp:
    def test_match(self) -> None:
        assert Regexp({"status": "^o"}).check(DOC)
        assert not Regexp({"status": "^x"}).check(DOC)

    def test_list(self) -> None:
        assert Regexp({"tags": r"^eu-"}).check(DOC)

    def test_invalid_pattern_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="invalid regexp"):
            new_condition({"regexp": {"status": "(ok"}})


class TestRange:
    def test_bounds(self) -> None:
        assert Range({"code.gte": 200, "code.lt": 300}).check(DOC)
        assert not Range({"code.gt": 200}).check(DOC)

    def test_float_field(self) -> None:
        assert Range({"ratio.lte": 1}).check(DOC)

    def test_nested_field(self) -> None:
        assert Range({"db.latency_ms.lt": 100}).check(DOC)

    def test_non_numeric_field(self) -> None:
        assert not Range({"status.gt": 0}).check(DOC)
        assert not Range({"healthy.gte": 0}).check(DOC)

    def test_bad_operator_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Range({"code.between": 1})

    def test_non_numeric_bound_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Range({"code.gt": "100"})


class TestHasFields:
    def test_present(self) -> None:
        assert HasFields(["status", "db.latency_ms"]).check(DOC)

    def test_absent(self) -> None:
        assert not HasFields(["status", "uptime"]).check(DOC)


class TestLogical:
    def test_and(self) -> None:
        cond = new_condition({"and": [
            {"equals": {"status": "ok"}},
            {"range": {"code.lt": 400}},
        ]})
        assert isinstance(cond, And)
        assert cond.check(DOC)

    def test_or(self) -> None:
        cond = new_condition({"or": [
            {"equals": {"status": "bad"}},
            {"equals": {"code": 200}},
        ]})
        assert isinstance(cond, Or)
        assert cond.check(DOC)

    def test_not(self) -> None:
        cond = new_condition({"not": {"equals": {"status": "bad"}}})
        assert isinstance(cond, Not)
        assert cond.check(DOC)

    def test_nested_error_propagates(self) -> None:
        with pytest.raises(ConfigurationError):
            new_condition({"and": [{"equals": {"status": "ok"}}, {"bogus": {}}]})

    def test_empty_list_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            new_condition({"or": []})


class TestNewCondition:
    @pytest.mark.parametrize("config", [None, {}, "status == 'ok'", ["equals"]])
    def test_invalid_shapes(self, config) -> None:
        with pytest.raises(ConfigurationError):
            new_condition(config)

    def test_unknown_operator(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown condition operator"):
            new_condition({"matches": {"status": "ok"}})

    def test_multiple_operators(self) -> None:
        with pytest.raises(ConfigurationError, match="exactly one operator"):
            new_condition({"equals": {"status": "ok"}, "contains": {"status": "o"}})
