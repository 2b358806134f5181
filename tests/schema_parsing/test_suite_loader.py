"""Tests for loading, validating and parsing check suites."""

from __future__ import annotations

from pathlib import Path

import pytest

from shapecheck.assertions import MISSING, Check, CheckFailure, FieldSet
from shapecheck.schema_parsing import (
    load_case_data,
    load_suite,
    resolve_transform,
    validate_suite_yaml,
)

MINIMAL = """
version: 1
name: Chat
cases:
  - id: unread
    data: chat.json
    expect:
      unreadMessagesCount: {$check: ">=", $value: 0}
"""


class TestLoadSuite:
    def test_minimal(self, tmp_path: Path) -> None:
        suite, result = validate_suite_yaml(MINIMAL, base_dir=tmp_path)
        assert result.is_valid
        assert suite.name == "Chat"
        assert suite.defaults.fail_fast is False
        assert suite.cases[0].id == "unread"
        assert suite.data_path(suite.cases[0]) == tmp_path / "chat.json"

    def test_file_not_found(self, tmp_path: Path) -> None:
        suite, result = load_suite(tmp_path / "nope.yaml")
        assert suite is None
        assert result.errors[0].message == "File not found"

    def test_invalid_yaml(self) -> None:
        suite, result = validate_suite_yaml("name: [unclosed")
        assert suite is None
        assert "Invalid YAML syntax" in result.errors[0].message

    def test_not_a_mapping(self) -> None:
        suite, result = validate_suite_yaml("- a\n- b\n")
        assert suite is None
        assert result.errors[0].value == "list"

    def test_load_from_file(self, write_suite) -> None:
        path = write_suite({
            "version": 1,
            "name": "From file",
            "cases": [{"id": "a", "data": "a.json", "expect": {"x": 1}}],
        })
        suite, result = load_suite(path)
        assert result.is_valid
        assert suite.base_dir == path.parent


class TestValidation:
    def _errors(self, yaml_text: str) -> dict[str, str]:
        suite, result = validate_suite_yaml(yaml_text)
        assert suite is None
        return {error.path: error.message for error in result.errors}

    def test_missing_top_level(self) -> None:
        errors = self._errors("version: 1\n")
        assert "name" in errors
        assert "cases" in errors

    def test_unknown_top_level(self) -> None:
        errors = self._errors(MINIMAL + "server: {}\n")
        assert errors["server"] == "Unknown top-level field 'server'"

    def test_bad_version(self) -> None:
        errors = self._errors(MINIMAL.replace("version: 1", "version: 0"))
        assert errors["version"] == "Must be >= 1"

    def test_duplicate_case_ids(self) -> None:
        errors = self._errors("""
version: 1
name: Dupes
cases:
  - {id: a, data: a.json, expect: {x: 1}}
  - {id: a, data: b.json, expect: {x: 1}}
""")
        assert errors["cases[1].id"] == "Duplicate case id"

    def test_case_fields(self) -> None:
        errors = self._errors("""
version: 1
name: Bad case
cases:
  - id: a
    expect: [1]
    select: "$.[["
    required: {strings: [x]}
    unknown: 1
""")
        assert errors["cases[0].data"] == "Case requires a 'data' field"
        assert errors["cases[0].expect"] == "Expect must be an object"
        assert "cases[0].select" in errors
        assert errors["cases[0].required.strings"] == "Unknown required-field bucket"
        assert errors["cases[0].unknown"] == "Unknown case field"

    def test_expectation_directives(self) -> None:
        errors = self._errors("""
version: 1
name: Bad directives
cases:
  - id: a
    data: a.json
    expect:
      count: {$check: "=~", $value: 1}
      name: {$check: equal, $value: x, $func: shout}
      members: {$check: some, $value: 7}
""")
        assert errors["cases[0].expect.count.$check"] == "Invalid check operator"
        assert errors["cases[0].expect.name.$func"] == "Unknown transform"
        assert "cases[0].expect.members.$value" in errors

    def test_non_string_check_is_reported(self) -> None:
        errors = self._errors("""
version: 1
name: Bad checks
cases:
  - id: a
    data: a.json
    expect:
      count: {$check: [">="], $value: 0}
      tags: {$check: {op: some}, $value: {id: 1}}
""")
        assert errors["cases[0].expect.count.$check"] == "Invalid check operator"
        assert errors["cases[0].expect.tags.$check"] == "Invalid check operator"

    def test_defaults(self) -> None:
        errors = self._errors(MINIMAL + "defaults: {fail_fast: 'yes', retries: 2}\n")
        assert errors["defaults.fail_fast"] == "Must be a boolean"
        assert errors["defaults.retries"] == "Unknown defaults field"


class TestParsing:
    def test_env_interpolation_keeps_type(self) -> None:
        suite, result = validate_suite_yaml("""
version: 1
name: Env
env: {ROLE_ID: 7, NAME: Ann}
cases:
  - id: a
    data: "{{env.NAME}}.json"
    expect:
      id: "{{env.ROLE_ID}}"
      label: "role-{{env.ROLE_ID}}"
      other: "{{env.UNKNOWN}}"
""")
        assert result.is_valid
        case = suite.cases[0]
        assert case.data == "Ann.json"
        assert case.expect == {"id": 7, "label": "role-7", "other": "{{env.UNKNOWN}}"}

    def test_transforms_and_matchers(self) -> None:
        suite, result = validate_suite_yaml("""
version: 1
name: Directives
cases:
  - id: a
    data: a.json
    required: {scalar: [id]}
    expect:
      name: {$check: equal, $value: ann, $func: lower}
      createdAt: {$check: equal, $value: "2024-01-02T23:00:00", $func: "date:%Y.%m.%d"}
      members: {$check: some, $value: {id: 7}}
      counts: {$check: forEach, $value: {$check: ">", $value: 0, $func: int}}
""")
        assert result.is_valid
        case = suite.cases[0]
        assert case.required == FieldSet(scalar=["id"])

        data = {
            "id": 1,
            "name": "ANN",
            "createdAt": "2024-01-02T10:20:00",
            "members": [{"id": 8}, {"id": 7}],
            "counts": ["1", "2"],
        }
        Check.data(data, case.expect, case.required)

        data["members"] = [{"id": 8}]
        with pytest.raises(CheckFailure) as excinfo:
            Check.data(data, case.expect)
        assert excinfo.value.path == "members"


class TestTransforms:
    def test_named(self) -> None:
        assert resolve_transform("len")([1, 2]) == 2
        assert resolve_transform("upper")("a") == "A"

    def test_date(self) -> None:
        assert resolve_transform("date:%Y.%m.%d")("2024-01-02T10:20:00Z") == "2024.01.02"

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown transform"):
            resolve_transform("shout")


class TestLoadCaseData:
    def test_json_with_select(self, write_suite, chat) -> None:
        path = write_suite(
            {"version": 1, "name": "S", "cases": [
                {"id": "a", "data": "resp.json", "select": "$.data.chat", "expect": {"id": 10}},
                {"id": "b", "data": "resp.json", "select": "$.data.chat.members[*].id", "expect": {}},
                {"id": "c", "data": "resp.json", "select": "$.data.none", "expect": {}},
            ]},
            {"resp.json": {"data": {"chat": chat}}},
        )
        suite, _ = load_suite(path)
        assert load_case_data(suite, suite.cases[0])["id"] == 10
        assert load_case_data(suite, suite.cases[1]) == [7, 8]
        assert load_case_data(suite, suite.cases[2]) is MISSING

    def test_yaml_data(self, write_suite) -> None:
        path = write_suite(
            {"version": 1, "name": "S", "cases": [{"id": "a", "data": "resp.yaml", "expect": {}}]},
            {"resp.yaml": {"x": 1}},
        )
        suite, _ = load_suite(path)
        assert load_case_data(suite, suite.cases[0]) == {"x": 1}

    def test_unparseable(self, write_suite, tmp_path: Path) -> None:
        path = write_suite({"version": 1, "name": "S", "cases": [{"id": "a", "data": "bad.json", "expect": {}}]})
        (tmp_path / "bad.json").write_text("{not json")
        suite, _ = load_suite(path)
        with pytest.raises(ValueError, match="Cannot parse"):
            load_case_data(suite, suite.cases[0])
