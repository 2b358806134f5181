"""Failure message construction."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .paths import is_record

MESSAGE_KEY = "$eMessage"
VALUE_KEY = "$value"


def format_path(stack: Sequence[Any]) -> str:
    """Join a path stack into a dotted path ("items.1.ok")."""
    return ".".join(str(part) for part in stack)


def build_message(actual: Any, node: Any, stack: Sequence[Any]) -> str:
    """
    Build the failure message for an expectation node.

    A custom $eMessage wins: a callable is invoked with
    (actual, expected $value), a string is used verbatim. Otherwise the
    message names the dotted path.
    """
    if is_record(node) and MESSAGE_KEY in node:
        custom = node[MESSAGE_KEY]
        if callable(custom):
            return str(custom(actual, node.get(VALUE_KEY)))
        return str(custom)
    return f'Incorrect "{format_path(stack)}".'
