"""
Schema Parsing for Check Suites

This package provides tools for parsing, validating, and working with
YAML check suites.

Usage:
    from shapecheck.schema_parsing import load_suite, validate_suite_yaml

    # Load from file
    suite, result = load_suite("checks/chat.yaml")
    if not result.is_valid:
        print(result)

    # Or validate from string
    suite, result = validate_suite_yaml(yaml_string)
"""

# Public API
from .loader import load_case_data, load_suite, validate_suite_yaml

# Models (for type hints and isinstance checks)
from .models import CaseConfig, Defaults, Suite

# Transforms available as $func
from .functions import TRANSFORMS, resolve_transform

# Validation (for custom validation if needed)
from .validation import SchemaValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_suite",
    "load_case_data",
    "validate_suite_yaml",
    # Models
    "Suite",
    "CaseConfig",
    "Defaults",
    # Transforms
    "TRANSFORMS",
    "resolve_transform",
    # Validation
    "ValidationResult",
    "ValidationError",
    "SchemaValidator",
]
