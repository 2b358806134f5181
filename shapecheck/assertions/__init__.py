"""
Check Engine for Nested Response Validation

This package validates deeply nested response data against expectation
templates. Templates mix literal values, comparison directives and array
directives; the engine walks the data and fails fast at the first
mismatch with a dotted path naming the field.

Directives:
    - {"$check": op, "$value": expected}: compare with an operator
      (==, ===, !=, !==, >=, <=, <, >, equal, notEqual, strictEqual)
    - "$func": transform applied to both sides before comparing
    - "$eMessage": custom failure message (string or callable)
    - {0: ..., -1: ...}: check array elements by index
    - {"$check": "forEach", ...}: check every array element
    - {"$check": "some" | "every", "$value": predicate}: array predicates

Usage:
    from shapecheck.assertions import Check

    Check.data(result, {
        "count": {"$check": ">=", "$value": 0},
        "owner.id": 7,
        "tags": {0: "a", "-1": "c"},
    })

    # Non-raising form
    result = Check.evaluate(data, expectation)
    if not result.passed:
        print(result)
"""

# Errors
from .errors import CheckError, CheckFailure, ConfigurationError, NotFoundError

# Models
from .models import AssertionResult, AssertionStatus, FieldBucket, FieldSet

# Engine
from .engine import Check
from .directives import RESERVED_KEYS, classify
from .messages import build_message, format_path
from .operators import Operator, evaluate
from .paths import MISSING
from .required import verify_required_fields

__all__ = [
    # Errors
    "CheckError",
    "CheckFailure",
    "ConfigurationError",
    "NotFoundError",
    # Models
    "AssertionResult",
    "AssertionStatus",
    "FieldBucket",
    "FieldSet",
    # Engine
    "Check",
    "MISSING",
    "Operator",
    "RESERVED_KEYS",
    "build_message",
    "classify",
    "evaluate",
    "format_path",
    "verify_required_fields",
]
