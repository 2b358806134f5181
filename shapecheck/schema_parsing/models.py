"""
Typed data structures for check suites.

This module contains the dataclasses that represent the internal typed
structure of a parsed suite file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..assertions import FieldSet


@dataclass
class Defaults:
    """Default settings for running cases."""
    fail_fast: bool = False


@dataclass
class CaseConfig:
    """A single check: which data to load and what it should look like."""
    id: str
    data: str  # file path, relative to the suite file
    expect: Any = None
    select: str | None = None  # JSONPath into the loaded data
    required: FieldSet | None = None
    description: str | None = None


@dataclass
class Suite:
    """Fully parsed and validated suite."""
    version: int
    name: str
    base_dir: Path = field(default_factory=Path)
    env: dict[str, Any] = field(default_factory=dict)
    defaults: Defaults = field(default_factory=Defaults)
    cases: list[CaseConfig] = field(default_factory=list)
    source: dict[str, Any] = field(default_factory=dict)  # raw YAML, for hashing

    def data_path(self, case: CaseConfig) -> Path:
        """Resolve a case's data file against the suite directory."""
        path = Path(case.data)
        return path if path.is_absolute() else self.base_dir / path
