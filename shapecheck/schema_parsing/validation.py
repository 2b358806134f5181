"""
Schema validation for check suites.

This module contains the validation logic that checks raw parsed YAML
against the suite schema and reports errors with helpful messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JsonPathParserError

from ..assertions import FieldBucket, Operator
from ..assertions.directives import CHECK_KEY, FOR_EACH, FUNC_KEY
from ..assertions.messages import MESSAGE_KEY, VALUE_KEY
from .functions import is_known_transform


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "cases[0].expect.count.$check"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of schema validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Schema validation passed"
        lines = [f"Schema validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Schema Validator
# ─────────────────────────────────────────────────────────────────────────────

class SchemaValidator:
    """Validates raw parsed YAML against the suite schema."""

    REQUIRED_TOP_LEVEL = {"version", "name", "cases"}
    OPTIONAL_TOP_LEVEL = {"env", "defaults"}
    CASE_FIELDS = {"id", "data", "expect", "select", "required", "description"}
    VALID_CHECKS = {op.value for op in Operator} | {FOR_EACH}
    ARRAY_CHECKS = {Operator.SOME.value, Operator.EVERY.value}
    VALID_BUCKETS = {bucket.value for bucket in FieldBucket}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()
        self.case_ids: set[str] = set()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_version()
        self._validate_name()
        self._validate_env()
        self._validate_defaults()
        self._validate_cases()

        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your suite file"
            )

        for key in sorted(unknown, key=str):
            self.result.add_error(
                str(key),
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_version(self) -> None:
        version = self.data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            self.result.add_error(
                "version",
                "Must be an integer",
                value=version,
                suggestion="Use 'version: 1'"
            )
        elif version < 1:
            self.result.add_error(
                "version",
                "Must be >= 1",
                value=version
            )

    def _validate_name(self) -> None:
        name = self.data.get("name")
        if not isinstance(name, str):
            self.result.add_error(
                "name",
                "Must be a string",
                value=name
            )
        elif not name.strip():
            self.result.add_error(
                "name",
                "Cannot be empty",
                suggestion="Provide a descriptive name for your suite"
            )

    def _validate_env(self) -> None:
        env = self.data.get("env")
        if env is not None and not isinstance(env, dict):
            self.result.add_error(
                "env",
                "Must be an object",
                value=env
            )

    def _validate_defaults(self) -> None:
        defaults = self.data.get("defaults")
        if defaults is None:
            return
        if not isinstance(defaults, dict):
            self.result.add_error(
                "defaults",
                "Must be an object",
                value=defaults
            )
            return

        fail_fast = defaults.get("fail_fast")
        if fail_fast is not None and not isinstance(fail_fast, bool):
            self.result.add_error(
                "defaults.fail_fast",
                "Must be a boolean",
                value=fail_fast
            )

        for key in defaults:
            if key != "fail_fast":
                self.result.add_error(
                    f"defaults.{key}",
                    "Unknown defaults field",
                    suggestion="Valid fields are: fail_fast"
                )

    def _validate_cases(self) -> None:
        cases = self.data.get("cases")
        if not isinstance(cases, list):
            self.result.add_error(
                "cases",
                "Must be a list",
                value=cases
            )
            return

        if not cases:
            self.result.add_error(
                "cases",
                "Must contain at least one case",
                suggestion="Add a case with 'id', 'data' and 'expect'"
            )
            return

        for i, case in enumerate(cases):
            self._validate_case(i, case)

    def _validate_case(self, index: int, case: Any) -> None:
        path = f"cases[{index}]"

        if not isinstance(case, dict):
            self.result.add_error(
                path,
                "Case must be an object",
                value=case
            )
            return

        case_id = case.get("id")
        if not case_id:
            self.result.add_error(
                f"{path}.id",
                "Case must have an 'id' field",
                suggestion="Add a unique identifier like 'id: my_case'"
            )
        elif not isinstance(case_id, str):
            self.result.add_error(
                f"{path}.id",
                "Case id must be a string",
                value=case_id
            )
        elif case_id in self.case_ids:
            self.result.add_error(
                f"{path}.id",
                "Duplicate case id",
                value=case_id,
                suggestion="Each case must have a unique id"
            )
        else:
            self.case_ids.add(case_id)

        for key in case:
            if key not in self.CASE_FIELDS:
                self.result.add_error(
                    f"{path}.{key}",
                    "Unknown case field",
                    suggestion=f"Valid fields are: {', '.join(sorted(self.CASE_FIELDS))}"
                )

        data_file = case.get("data")
        if not data_file:
            self.result.add_error(
                f"{path}.data",
                "Case requires a 'data' field",
                suggestion="Point 'data' at a JSON or YAML file with the captured response"
            )
        elif not isinstance(data_file, str):
            self.result.add_error(
                f"{path}.data",
                "Data must be a string (file path)",
                value=data_file
            )

        select = case.get("select")
        if select is not None:
            self._validate_select(f"{path}.select", select)

        required = case.get("required")
        if required is not None:
            self._validate_required(f"{path}.required", required)

        if "expect" not in case:
            self.result.add_error(
                f"{path}.expect",
                "Case requires an 'expect' field"
            )
        elif not isinstance(case["expect"], dict):
            self.result.add_error(
                f"{path}.expect",
                "Expect must be an object",
                value=case["expect"]
            )
        else:
            self._validate_expectation(f"{path}.expect", case["expect"])

    def _validate_select(self, path: str, select: Any) -> None:
        if not isinstance(select, str):
            self.result.add_error(
                path,
                "Select must be a string (JSONPath expression)",
                value=select
            )
            return
        try:
            parse_jsonpath(select)
        except JsonPathParserError as e:
            self.result.add_error(
                path,
                f"Invalid JSONPath expression: {e}",
                value=select,
                suggestion="Use an expression like '$.data.items'"
            )
        except Exception as e:
            self.result.add_error(
                path,
                f"Failed to parse JSONPath: {type(e).__name__}: {e}",
                value=select
            )

    def _validate_required(self, path: str, required: Any) -> None:
        if not isinstance(required, dict):
            self.result.add_error(
                path,
                "Required must be an object of buckets",
                value=required,
                suggestion=f"Valid buckets: {', '.join(sorted(self.VALID_BUCKETS))}"
            )
            return

        for bucket, fields in required.items():
            if bucket not in self.VALID_BUCKETS:
                self.result.add_error(
                    f"{path}.{bucket}",
                    "Unknown required-field bucket",
                    suggestion=f"Valid buckets: {', '.join(sorted(self.VALID_BUCKETS))}"
                )
            elif not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
                self.result.add_error(
                    f"{path}.{bucket}",
                    "Must be a list of field names",
                    value=fields
                )

    def _validate_expectation(self, path: str, node: Any) -> None:
        """Walk an expectation tree and check the directives it uses."""
        if isinstance(node, list):
            for i, item in enumerate(node):
                self._validate_expectation(f"{path}[{i}]", item)
            return
        if not isinstance(node, dict):
            return

        check = node.get(CHECK_KEY)
        if not isinstance(check, str):
            # Lists and mappings are unhashable, so test the type first
            check = None
        if CHECK_KEY in node and check not in self.VALID_CHECKS:
            self.result.add_error(
                f"{path}.{CHECK_KEY}",
                "Invalid check operator",
                value=node[CHECK_KEY],
                suggestion=f"Valid operators: {', '.join(sorted(self.VALID_CHECKS))}"
            )

        if FUNC_KEY in node and not is_known_transform(node[FUNC_KEY]):
            self.result.add_error(
                f"{path}.{FUNC_KEY}",
                "Unknown transform",
                value=node[FUNC_KEY],
                suggestion="Use one of: str, int, float, bool, len, lower, upper, strip, sorted, date:<format>"
            )

        if MESSAGE_KEY in node and not isinstance(node[MESSAGE_KEY], str):
            self.result.add_error(
                f"{path}.{MESSAGE_KEY}",
                "Custom message must be a string",
                value=node[MESSAGE_KEY]
            )

        if check in self.ARRAY_CHECKS and not isinstance(node.get(VALUE_KEY), dict):
            self.result.add_error(
                f"{path}.{VALUE_KEY}",
                f"'{check}' requires an expectation object every element is matched against",
                value=node.get(VALUE_KEY),
                suggestion=f"Use '{VALUE_KEY}: {{id: 7}}'"
            )

        for key, child in node.items():
            if key in (CHECK_KEY, FUNC_KEY, MESSAGE_KEY):
                continue
            self._validate_expectation(f"{path}.{key}", child)
