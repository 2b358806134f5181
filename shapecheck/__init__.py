"""
shapecheck - Declarative Checks for Nested Response Data

This package validates deeply nested response objects (API or query
results) against expectation templates instead of field-by-field
assertions.

Subpackages:
    - assertions: the check engine (Check.data and friends)
    - schema_parsing: parse and validate YAML check suites
    - reporting: run reports and result tracking

Usage:
    from shapecheck import Check

    Check.data(result, {
        "unreadMessagesCount": {"$check": ">=", "$value": 0},
        "members": {"$check": "some", "$value": lambda m: m["id"] == 7},
        "messages": {"$check": "forEach", "chatId": 42},
    })

    # Or from a YAML suite
    from shapecheck import load_suite, run_suite

    suite, result = load_suite("checks/chat.yaml")
    reporter = run_suite(suite)
    print(reporter.report.summary())
"""

__version__ = "0.1.0"

# Re-export assertions for convenience
from .assertions import (
    # Engine
    Check,
    MISSING,
    Operator,
    # Errors
    CheckError,
    CheckFailure,
    ConfigurationError,
    NotFoundError,
    # Models
    AssertionResult,
    AssertionStatus,
    FieldSet,
)

# Re-export schema_parsing for convenience
from .schema_parsing import (
    load_suite,
    load_case_data,
    validate_suite_yaml,
    Suite,
    CaseConfig,
    Defaults,
    ValidationResult,
    ValidationError,
    SchemaValidator,
)

# Re-export reporting for convenience
from .reporting import (
    RunReport,
    RunStatus,
    CaseRecord,
    CaseStatus,
    Reporter,
)

from .runner import run_suite

__all__ = [
    # Package info
    "__version__",
    # Engine
    "Check",
    "MISSING",
    "Operator",
    # Errors
    "CheckError",
    "CheckFailure",
    "ConfigurationError",
    "NotFoundError",
    # Models
    "AssertionResult",
    "AssertionStatus",
    "FieldSet",
    # Schema parsing
    "load_suite",
    "load_case_data",
    "validate_suite_yaml",
    "Suite",
    "CaseConfig",
    "Defaults",
    "ValidationResult",
    "ValidationError",
    "SchemaValidator",
    # Reporting
    "RunReport",
    "RunStatus",
    "CaseRecord",
    "CaseStatus",
    "Reporter",
    # Runner
    "run_suite",
]
