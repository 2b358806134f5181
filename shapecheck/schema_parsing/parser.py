"""
Schema parser for check suites.

This module converts validated YAML data into a typed Suite, turning the
YAML form of directives into the callables the check engine expects.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from ..assertions import Check, FieldSet
from ..assertions.directives import ARRAY_CHECKS, CHECK_KEY, FOR_EACH, FUNC_KEY
from ..assertions.messages import VALUE_KEY
from .functions import resolve_transform
from .models import CaseConfig, Defaults, Suite


class SchemaParser:
    """Parses and converts validated YAML to a typed Suite structure."""

    # Regex for template interpolation: {{env.KEY}}
    TEMPLATE_PATTERN = re.compile(r"\{\{\s*env\.(\w+)\s*\}\}")

    def __init__(self, data: dict[str, Any], base_dir: str | Path = "."):
        self.data = data
        self.base_dir = Path(base_dir)
        self.env: dict[str, Any] = data.get("env") or {}

    def parse(self) -> Suite:
        """Convert validated data to typed Suite."""
        return Suite(
            version=self.data["version"],
            name=self.data["name"],
            base_dir=self.base_dir,
            env=self.env,
            defaults=self._parse_defaults(),
            cases=[self._parse_case(case) for case in self.data["cases"]],
            source=self.data,
        )

    def _parse_defaults(self) -> Defaults:
        defaults = self.data.get("defaults") or {}
        return Defaults(fail_fast=defaults.get("fail_fast", False))

    def _parse_case(self, case: dict) -> CaseConfig:
        required = case.get("required")
        return CaseConfig(
            id=case["id"],
            data=self.interpolate(case["data"]),
            expect=self.build_expectation(self.interpolate(case["expect"])),
            select=case.get("select"),
            required=FieldSet.coerce(required) if required else None,
            description=case.get("description"),
        )

    def interpolate(self, value: Any) -> Any:
        """Replace {{env.KEY}} placeholders with values from the suite env."""
        if isinstance(value, str):
            match = self.TEMPLATE_PATTERN.fullmatch(value.strip())
            if match and match.group(1) in self.env:
                # A lone placeholder keeps the env value's type
                return self.env[match.group(1)]

            def replace_env(match: re.Match) -> str:
                var_name = match.group(1)
                return str(self.env.get(var_name, match.group(0)))

            return self.TEMPLATE_PATTERN.sub(replace_env, value)
        elif isinstance(value, dict):
            return {k: self.interpolate(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [self.interpolate(v) for v in value]
        return value

    def build_expectation(self, node: Any) -> Any:
        """Turn named transforms and some/every objects into callables."""
        if isinstance(node, list):
            return [self.build_expectation(item) for item in node]
        if not isinstance(node, dict):
            return node

        built = {}
        for key, child in node.items():
            if key == FUNC_KEY:
                built[key] = resolve_transform(child)
            elif key == VALUE_KEY and node.get(CHECK_KEY) in ARRAY_CHECKS:
                built[key] = Check.matcher(self.build_expectation(child))
            elif key == VALUE_KEY and node.get(CHECK_KEY) == FOR_EACH:
                built[key] = self.build_expectation(child)
            elif key in (CHECK_KEY, VALUE_KEY):
                built[key] = child
            else:
                built[key] = self.build_expectation(child)
        return built
