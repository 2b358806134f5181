"""
Suite loader for check suites.

This module provides the public API for loading and validating suite
files from disk or YAML strings, and for loading the data a case checks.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from jsonpath_ng import parse as parse_jsonpath

from ..assertions import MISSING
from .models import CaseConfig, Suite
from .parser import SchemaParser
from .validation import SchemaValidator, ValidationResult


def load_suite(path: str | Path) -> tuple[Suite | None, ValidationResult]:
    """
    Load and validate a suite from a YAML file.

    Args:
        path: Path to the YAML suite file

    Returns:
        Tuple of (Suite or None, ValidationResult)
        If validation fails, Suite will be None.

    Example:
        suite, result = load_suite("checks/chat.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
        # Use suite...
    """
    path = Path(path)

    # Check file exists
    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    # Parse YAML
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    return _validate_and_parse(data, str(path), path.parent)


def validate_suite_yaml(
    yaml_string: str,
    base_dir: str | Path = ".",
) -> tuple[Suite | None, ValidationResult]:
    """
    Validate a suite from a YAML string (useful for testing).

    Args:
        yaml_string: YAML content as a string
        base_dir: Directory case data paths are relative to

    Returns:
        Tuple of (Suite or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    return _validate_and_parse(data, "yaml", Path(base_dir))


def _validate_and_parse(
    data: Any,
    source: str,
    base_dir: Path,
) -> tuple[Suite | None, ValidationResult]:
    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Content must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    validator = SchemaValidator(data)
    result = validator.validate()

    if not result.is_valid:
        return None, result

    parser = SchemaParser(data, base_dir)
    return parser.parse(), result


def load_case_data(suite: Suite, case: CaseConfig) -> Any:
    """
    Load the data a case checks.

    JSON files are parsed as JSON, anything else as YAML. When the case
    has a `select` JSONPath, a single match yields its value, several
    matches yield the list of values and no match yields MISSING.

    Raises:
        FileNotFoundError: the data file does not exist
        ValueError: the data file cannot be parsed
    """
    path = suite.data_path(case)
    text = path.read_text()

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Cannot parse {path}: {e}") from e

    if not case.select:
        return data

    matches = parse_jsonpath(case.select).find(data)
    if not matches:
        return MISSING
    if len(matches) == 1:
        return matches[0].value
    return [match.value for match in matches]
