"""
Named transforms usable as $func in suite files.

YAML cannot carry functions, so suites refer to transforms by name:
"lower", "len", "date:%Y.%m.%d", ...
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from typing import Any

DATE_PREFIX = "date:"

TRANSFORMS: dict[str, Callable[[Any], Any]] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "len": len,
    "lower": lambda value: value.lower(),
    "upper": lambda value: value.upper(),
    "strip": lambda value: value.strip(),
    "sorted": sorted,
}


def date_formatter(fmt: str) -> Callable[[Any], str]:
    """Format dates (or ISO-8601 strings) with strftime."""
    def format_date(value: Any) -> str:
        if isinstance(value, str):
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if not isinstance(value, date):
            raise TypeError(f"Cannot format {type(value).__name__} as a date")
        return value.strftime(fmt)

    return format_date


def is_known_transform(name: Any) -> bool:
    if not isinstance(name, str):
        return False
    if name.startswith(DATE_PREFIX):
        return len(name) > len(DATE_PREFIX)
    return name in TRANSFORMS


def resolve_transform(name: str) -> Callable[[Any], Any]:
    """Look up a transform by name."""
    if name.startswith(DATE_PREFIX):
        return date_formatter(name[len(DATE_PREFIX):])
    try:
        return TRANSFORMS[name]
    except KeyError:
        raise ValueError(f"Unknown transform: {name!r}") from None
