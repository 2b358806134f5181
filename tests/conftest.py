"""Shared pytest fixtures for shapecheck tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml


@pytest.fixture
def chat() -> dict[str, Any]:
    """A nested response resembling a chat query result."""
    return {
        "id": 10,
        "unreadMessagesCount": 3,
        "archived": False,
        "chargeRequestedAt": None,
        "owner": {"id": 7, "lastRole": {"name": "pro"}},
        "tags": ["a", "b", "c"],
        "members": [{"id": 7, "name": "Ann"}, {"id": 8, "name": "Bob"}],
        "messages": [
            {"text": "#hash one", "chatId": 10},
            {"text": "#hash two", "chatId": 10},
        ],
        "pageInfo": {"hasMore": False},
        "createdAt": "2024-01-02T10:20:00",
    }


@pytest.fixture
def write_suite(tmp_path: Path):
    """Write a suite YAML file (plus data files) and return its path."""

    def _write(suite: dict[str, Any], data_files: dict[str, Any] | None = None) -> Path:
        for name, content in (data_files or {}).items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            if name.endswith(".json"):
                path.write_text(json.dumps(content))
            else:
                path.write_text(yaml.safe_dump(content))
        suite_path = tmp_path / "suite.yaml"
        suite_path.write_text(yaml.safe_dump(suite, sort_keys=False))
        return suite_path

    return _write
