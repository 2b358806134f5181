"""Tests for comparison operators."""

from __future__ import annotations

from datetime import date

import pytest

from shapecheck.assertions import CheckFailure, ConfigurationError, Operator, evaluate
from shapecheck.assertions.operators import is_primitive, parse_operator, strict_equal


class TestEvaluate:
    @pytest.mark.parametrize(
        "operator, actual, expected",
        [
            ("==", 1, 1.0),
            ("===", "a", "a"),
            ("!=", 1, 2),
            ("!==", 1, 1.0),
            (">=", 5, 0),
            ("<=", 0, 0),
            ("<", -1, 0),
            (">", date(2024, 2, 1), date(2024, 1, 1)),
            ("equal", {"a": [1, 2]}, {"a": [1, 2]}),
            ("notEqual", "x", "y"),
            ("strictEqual", 3, 3),
        ],
    )
    def test_passing_comparisons(self, operator, actual, expected) -> None:
        evaluate(operator, actual, expected, "unused")

    @pytest.mark.parametrize(
        "operator, actual, expected",
        [
            ("==", 1, 2),
            ("===", 1, True),
            ("===", 1, 1.0),
            ("!=", "a", "a"),
            (">=", -1, 0),
            ("<", 0, 0),
            ("equal", [1, 2], [2, 1]),
            ("notEqual", 1, 1),
            ("strictEqual", [1], [1]),
        ],
    )
    def test_failing_comparisons(self, operator, actual, expected) -> None:
        with pytest.raises(CheckFailure) as excinfo:
            evaluate(operator, actual, expected, "boom", path="x.y")
        assert excinfo.value.message == "boom"
        assert excinfo.value.path == "x.y"
        assert excinfo.value.actual == actual

    def test_failure_is_an_assertion_error(self) -> None:
        with pytest.raises(AssertionError, match="nope"):
            evaluate("==", 1, 2, "nope")

    def test_incomparable_operands_fail_instead_of_crashing(self) -> None:
        with pytest.raises(CheckFailure):
            evaluate(">=", None, 0, "Incorrect")

    def test_some_and_every(self) -> None:
        evaluate("some", [1, 2, 3], lambda v: v == 2, "")
        evaluate("every", [1, 2, 3], lambda v: v > 0, "")
        with pytest.raises(CheckFailure):
            evaluate("every", [1, -2, 3], lambda v: v > 0, "")
        with pytest.raises(CheckFailure):
            evaluate("some", [], lambda v: True, "")

    def test_unknown_operator(self) -> None:
        with pytest.raises(ConfigurationError, match='Undefined operator: "~=".'):
            evaluate("~=", 1, 1, "")


class TestHelpers:
    def test_parse_operator_accepts_enum_and_name(self) -> None:
        assert parse_operator(">=") is Operator.GTE
        assert parse_operator(Operator.EQUAL) is Operator.EQUAL

    def test_strict_equal_uses_identity_for_containers(self) -> None:
        items = [1, 2]
        assert strict_equal(items, items)
        assert not strict_equal(items, [1, 2])

    def test_is_primitive(self) -> None:
        assert is_primitive(None)
        assert is_primitive(date(2024, 1, 1))
        assert not is_primitive({"a": 1})
        assert not is_primitive([1])
