"""Tests for expectation node classification."""

from __future__ import annotations

import pytest

from shapecheck.assertions import ConfigurationError, classify
from shapecheck.assertions.directives import (
    Directive,
    ForEach,
    IndexedArray,
    Literal,
    NestedRecord,
    Predicate,
)


class TestClassifyRecordActual:
    def test_mapping_is_nested_record(self) -> None:
        node = classify({"a": 1}, {"a": 1}, ["root"])
        assert node == NestedRecord({"a": 1})

    def test_reserved_key_requires_nesting(self) -> None:
        with pytest.raises(ConfigurationError, match="You must use nesting"):
            classify({"a": 1}, {"$check": "equal", "$value": {"a": 1}}, ["user"])

    def test_literal_against_record(self) -> None:
        with pytest.raises(ConfigurationError, match='"user" is object'):
            classify({"a": 1}, 5, ["user"])


class TestClassifySequenceActual:
    def test_index_keys(self) -> None:
        node = classify(["a", "b"], {0: "a", "-1": "b"}, ["tags"])
        assert node == IndexedArray([(0, 0, "a"), ("-1", -1, "b")])

    def test_non_index_key(self) -> None:
        with pytest.raises(ConfigurationError, match="You must use numbers"):
            classify(["a"], {"first": "a"}, ["tags"])

    def test_for_each_strips_directive_keys(self) -> None:
        node = classify([{"ok": True}], {"$check": "forEach", "ok": True}, ["items"])
        assert node == ForEach({"ok": True})

    def test_for_each_with_value(self) -> None:
        element = {"$check": ">", "$value": 0}
        node = classify([1, 2], {"$check": "forEach", "$value": element}, ["counts"])
        assert node == ForEach(element)

    def test_for_each_with_value_and_fields(self) -> None:
        with pytest.raises(ConfigurationError, match="not both"):
            classify([1], {"$check": "forEach", "$value": 1, "ok": True}, ["items"])

    def test_for_each_without_element_expectation(self) -> None:
        with pytest.raises(ConfigurationError, match="requires an element expectation"):
            classify([1], {"$check": "forEach"}, ["items"])

    def test_predicate(self) -> None:
        node = classify([1], {"$check": "some", "$value": bool}, ["items"])
        assert isinstance(node, Predicate)
        assert node.check == "some"

    def test_predicate_requires_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a function"):
            classify([1], {"$check": "every", "$value": 1}, ["items"])

    def test_list_literal_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="is array"):
            classify(["a"], ["a"], ["tags"])

    def test_directive_with_func_on_sequence(self) -> None:
        node = classify(["a", "b"], {"$check": "==", "$value": ["x", "y"], "$func": len}, ["tags"])
        assert isinstance(node, Directive)

    def test_directive_without_func_on_sequence(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a primitive"):
            classify(["a"], {"$check": "equal", "$value": ["a"]}, ["tags"])


class TestClassifyPrimitiveActual:
    def test_literal(self) -> None:
        assert classify(5, 5, ["count"]) == Literal(5)

    def test_directive(self) -> None:
        node = classify(5, {"$check": ">=", "$value": 0, "$eMessage": "bad"}, ["count"])
        assert isinstance(node, Directive)
        assert node.check == ">="
        assert node.value == 0
        assert node.raw["$eMessage"] == "bad"

    def test_missing_check(self) -> None:
        with pytest.raises(ConfigurationError, match='"\\$check" required'):
            classify(5, {"$value": 0}, ["count"])

    def test_missing_value(self) -> None:
        with pytest.raises(ConfigurationError, match='"\\$value" required'):
            classify(5, {"$check": ">="}, ["count"])

    def test_none_is_a_valid_value(self) -> None:
        node = classify(None, {"$check": "===", "$value": None}, ["chargeRequestedAt"])
        assert isinstance(node, Directive)
        assert node.value is None

    def test_func_must_be_callable(self) -> None:
        with pytest.raises(ConfigurationError, match='"\\$func" must be a function'):
            classify(5, {"$check": "==", "$value": 5, "$func": "len"}, ["count"])

    def test_unexpected_directive_key(self) -> None:
        with pytest.raises(ConfigurationError, match='unexpected key "foo"'):
            classify(5, {"$check": "==", "$value": 5, "foo": 1}, ["count"])

    def test_array_directive_on_scalar(self) -> None:
        with pytest.raises(ConfigurationError, match="is not array"):
            classify(5, {"$check": "some", "$value": bool}, ["count"])

    def test_list_expectation_on_scalar(self) -> None:
        with pytest.raises(ConfigurationError, match="is not array"):
            classify("a", ["a"], ["tag"])
