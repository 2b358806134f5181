"""
Check result models.

This module defines the data structures describing presence constraints
and the outcome of a non-raising check.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ConfigurationError


class AssertionStatus(str, Enum):
    """Status of a check."""
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"  # malformed expectation


class FieldBucket(str, Enum):
    """Presence constraints of a required-field set."""
    SCALAR = "scalar"
    OBJECT = "object"
    ARRAY = "array"


@dataclass
class FieldSet:
    """
    Required fields checked before any value comparison.

    Attributes:
        scalar: fields that must not be None or missing
        object: fields that must be non-empty records
        array: fields that must be lists (empty allowed)
    """
    scalar: list[str] = field(default_factory=list)
    object: list[str] = field(default_factory=list)
    array: list[str] = field(default_factory=list)

    @classmethod
    def coerce(cls, value: FieldSet | Mapping[str, Any]) -> FieldSet:
        """Accept a FieldSet or a plain mapping with bucket keys."""
        if isinstance(value, FieldSet):
            return value
        if not isinstance(value, Mapping):
            raise ConfigurationError(
                f"Required fields must be a mapping of buckets, got {type(value).__name__}."
            )

        valid = {bucket.value for bucket in FieldBucket}
        for key in value:
            if key not in valid:
                raise ConfigurationError(
                    f'Unknown required-field bucket "{key}". Valid buckets: {", ".join(sorted(valid))}.'
                )
            if value[key] is not None and not isinstance(value[key], (list, tuple)):
                raise ConfigurationError(f'Required-field bucket "{key}" must be a list of field names.')
        return cls(**{key: list(fields or []) for key, fields in value.items()})

    def buckets(self) -> list[tuple[FieldBucket, list[str]]]:
        return [
            (FieldBucket.SCALAR, self.scalar),
            (FieldBucket.OBJECT, self.object),
            (FieldBucket.ARRAY, self.array),
        ]


@dataclass
class AssertionResult:
    """
    Outcome of Check.evaluate().

    Attributes:
        status: Whether the check passed, failed, or errored
        message: Human-readable description of the result
        path: Dotted path of the failing field, if any
        expected: What was expected at the failing field
        actual: What was actually found there
        details: Additional context for debugging
    """
    status: AssertionStatus
    message: str
    path: str | None = None
    expected: Any = None
    actual: Any = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.status == AssertionStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status == AssertionStatus.FAILED

    def __str__(self) -> str:
        """Format as a human-readable string."""
        if self.status == AssertionStatus.PASSED:
            return f"✅ PASS: {self.message}"

        icon = "❌" if self.status == AssertionStatus.FAILED else "⚠️"
        lines = [f"{icon} {self.status.value.upper()}: {self.message}"]

        if self.path:
            lines.append(f"   Path: {self.path}")

        if self.expected is not None:
            lines.append(f"   Expected: {_format_value(self.expected)}")

        if self.actual is not None:
            lines.append(f"   Actual:   {_format_value(self.actual)}")

        for key, value in self.details.items():
            lines.append(f"   {key}: {_format_value(value)}")

        return "\n".join(lines)

    @classmethod
    def passed_result(cls, message: str = "All checks passed") -> AssertionResult:
        """Create a passing result."""
        return cls(status=AssertionStatus.PASSED, message=message)

    @classmethod
    def failed_result(
        cls,
        message: str,
        path: str | None = None,
        expected: Any = None,
        actual: Any = None,
        details: dict[str, Any] | None = None,
    ) -> AssertionResult:
        """Create a failing result."""
        return cls(
            status=AssertionStatus.FAILED,
            message=message,
            path=path,
            expected=expected,
            actual=actual,
            details=details or {},
        )

    @classmethod
    def error_result(
        cls,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> AssertionResult:
        """Create an error result (the expectation couldn't be evaluated)."""
        return cls(
            status=AssertionStatus.ERROR,
            message=message,
            path=path,
            details=details or {},
        )


def _format_value(value: Any, max_length: int = 100) -> str:
    """Format a value for display, truncating if too long."""
    if value is None:
        return "null"

    if isinstance(value, (list, dict)):
        try:
            formatted = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            formatted = repr(value)
    else:
        formatted = repr(value)

    if len(formatted) > max_length:
        return formatted[: max_length - 3] + "..."

    return formatted
