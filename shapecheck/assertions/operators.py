"""
Comparison operators used by directive leaves.

evaluate() runs a single comparison and raises CheckFailure when it
does not hold. Unknown operator names raise ConfigurationError.
"""

from __future__ import annotations

import operator as op
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from .errors import CheckFailure, ConfigurationError

PRIMITIVE_TYPES = (type(None), bool, int, float, Decimal, str, bytes, date, datetime, time, Enum)


class Operator(str, Enum):
    """Supported values of $check for leaf comparisons."""
    LOOSE_EQ = "=="
    STRICT_EQ = "==="
    LOOSE_NE = "!="
    STRICT_NE = "!=="
    GTE = ">="
    LTE = "<="
    LT = "<"
    GT = ">"
    EQUAL = "equal"
    NOT_EQUAL = "notEqual"
    STRICT_EQUAL = "strictEqual"
    SOME = "some"
    EVERY = "every"


def is_primitive(value: Any) -> bool:
    return isinstance(value, PRIMITIVE_TYPES)


def same_value(actual: Any, expected: Any) -> bool:
    """Equal and of the same concrete type (1 and 1.0 or True differ)."""
    return type(actual) is type(expected) and actual == expected


def strict_equal(actual: Any, expected: Any) -> bool:
    """Primitives compare by type and value, everything else by identity."""
    if is_primitive(actual) and is_primitive(expected):
        return same_value(actual, expected)
    return actual is expected


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        try:
            return bool(compare(actual, expected))
        except TypeError:
            # Operands that cannot be ordered never satisfy the comparison.
            return False
    return check


_COMPARATORS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.LOOSE_EQ: op.eq,
    Operator.STRICT_EQ: same_value,
    Operator.LOOSE_NE: op.ne,
    Operator.STRICT_NE: lambda actual, expected: not same_value(actual, expected),
    Operator.GTE: _ordered(op.ge),
    Operator.LTE: _ordered(op.le),
    Operator.LT: _ordered(op.lt),
    Operator.GT: _ordered(op.gt),
    Operator.EQUAL: op.eq,
    Operator.NOT_EQUAL: op.ne,
    Operator.STRICT_EQUAL: strict_equal,
    Operator.SOME: lambda actual, predicate: any(predicate(item) for item in actual),
    Operator.EVERY: lambda actual, predicate: all(predicate(item) for item in actual),
}


def parse_operator(name: Any) -> Operator:
    """Look up an operator by its $check name."""
    try:
        return Operator(name)
    except ValueError:
        raise ConfigurationError(f'Undefined operator: "{name}".') from None


def evaluate(
    operator: Operator | str,
    actual: Any,
    expected: Any,
    message: str,
    path: str | None = None,
) -> None:
    """
    Assert that `actual <operator> expected` holds.

    For some/every `expected` is a predicate applied to each element of
    `actual`.

    Raises:
        ConfigurationError: unknown operator
        CheckFailure: the comparison does not hold
    """
    operator = parse_operator(operator)
    if not bool(_COMPARATORS[operator](actual, expected)):
        raise CheckFailure(message, path=path, actual=actual, expected=expected)
