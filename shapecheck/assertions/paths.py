"""
Lookup helpers for walking actual data.

Records are any Mapping, sequences are lists and tuples. A value that is
not present at all is reported as MISSING, which is distinct from None.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

INDEX_PATTERN = re.compile(r"^-?\d+$")


class _Missing:
    """Sentinel for a field that is absent from the actual data."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def is_record(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def as_index(key: Any) -> int | None:
    """Return the integer index a key stands for, or None if it is not one."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and INDEX_PATTERN.match(key):
        return int(key)
    return None


def get_item(sequence: Any, index: int) -> Any:
    """Get an element by index; negative indexes count from the end."""
    if -len(sequence) <= index < len(sequence):
        return sequence[index]
    return MISSING


def get_field(record: Any, key: Any) -> Any:
    """
    Get a field from a record.

    A key present literally wins. Otherwise a dotted string key is
    resolved segment by segment, with integer segments indexing into
    sequences ("tags.0", "lastRole.name").
    """
    if key in record:
        return record[key]
    if not isinstance(key, str) or "." not in key:
        return MISSING

    current = record
    for segment in key.split("."):
        current = _step(current, segment)
        if current is MISSING:
            break
    return current


def _step(value: Any, segment: str) -> Any:
    if is_record(value):
        return value.get(segment, MISSING)
    if is_sequence(value):
        index = as_index(segment)
        if index is not None:
            return get_item(value, index)
    return MISSING
