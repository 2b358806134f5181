"""
Classification of expectation nodes.

Each node of an expectation tree is classified once, against the actual
value found at the same path, into one of:

    Literal       - plain value compared for equality
    Directive     - {$check, $value, $func?, $eMessage?} leaf comparison
    NestedRecord  - mapping of field names recursed into
    IndexedArray  - mapping of element indexes recursed into
    ForEach       - {$check: forEach, ...} applied to every element
    Predicate     - {$check: some|every, $value: callable}

Malformed nodes raise ConfigurationError.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from .errors import ConfigurationError
from .messages import MESSAGE_KEY, VALUE_KEY, format_path
from .operators import Operator, is_primitive
from .paths import as_index, is_record, is_sequence

CHECK_KEY = "$check"
FUNC_KEY = "$func"
RESERVED_KEYS = frozenset({VALUE_KEY, CHECK_KEY, FUNC_KEY, MESSAGE_KEY})

FOR_EACH = "forEach"
ARRAY_CHECKS = (Operator.SOME.value, Operator.EVERY.value)


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Directive:
    check: Any
    value: Any
    func: Callable[[Any], Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NestedRecord:
    fields: dict[Any, Any]


@dataclass(frozen=True)
class IndexedArray:
    # (key as written, resolved index, element expectation)
    items: list[tuple[Any, int, Any]]


@dataclass(frozen=True)
class ForEach:
    element: Any


@dataclass(frozen=True)
class Predicate:
    check: str
    predicate: Callable[[Any], bool]
    raw: dict[str, Any] = field(default_factory=dict)


ExpectationNode = Union[Literal, Directive, NestedRecord, IndexedArray, ForEach, Predicate]


def reserved_keys_in(node: Any) -> set[Any]:
    return {key for key in node if key in RESERVED_KEYS}


def classify(actual: Any, node: Any, stack: Sequence[Any]) -> ExpectationNode:
    """
    Classify an expectation node against the actual value at its path.

    `actual` must already be known to exist (not MISSING).
    """
    where = format_path(stack)
    name = stack[-1] if stack else "data"

    if is_record(actual):
        if not is_record(node):
            raise ConfigurationError(
                f'in "{where}": "{name}" is object. Cannot use default \'equal\' for object.',
                path=where,
            )
        if reserved_keys_in(node):
            raise ConfigurationError(
                f'in "{where}": "{name}" is object. You must use nesting for the object.',
                path=where,
            )
        return NestedRecord(dict(node))

    if is_sequence(actual):
        if not is_record(node):
            raise ConfigurationError(
                f'"{where}" is array. Please use object for iteration or object to get element of array.',
                path=where,
            )
        if CHECK_KEY in node:
            check = node[CHECK_KEY]
            if check == FOR_EACH:
                return _for_each(node, where)
            if check in ARRAY_CHECKS:
                return _predicate(actual, node, where, name)
            return _directive(actual, node, where, name)
        if reserved_keys_in(node):
            raise ConfigurationError(f'in "{where}": "$check" required.', path=where)
        return _indexed(node, where)

    if is_sequence(node):
        raise ConfigurationError(
            f'in "{where}": "{name}" is not array. Use a "$check" directive instead of a list.',
            path=where,
        )
    if not is_record(node):
        return Literal(node)
    if node.get(CHECK_KEY) in ARRAY_CHECKS or node.get(CHECK_KEY) == FOR_EACH:
        raise ConfigurationError(f'in "{where}": {name} is not array.', path=where)
    return _directive(actual, node, where, name)


def _directive(actual: Any, node: Any, where: str, name: Any) -> Directive:
    check = node.get(CHECK_KEY)
    if not check:
        raise ConfigurationError(f'in "{where}": "$check" required.', path=where)
    if VALUE_KEY not in node:
        raise ConfigurationError(f'in "{where}": "$value" required.', path=where)

    unknown = [key for key in node if key not in RESERVED_KEYS]
    if unknown:
        raise ConfigurationError(
            f'in "{where}": unexpected key "{unknown[0]}" in directive.',
            path=where,
        )

    value = node[VALUE_KEY]
    func = node.get(FUNC_KEY)
    if func is not None:
        if not callable(func):
            raise ConfigurationError(f'in "{where}": "$func" must be a function.', path=where)
    elif not is_primitive(value) or not is_primitive(actual):
        raise ConfigurationError(
            f'in "{where}": "{name}" and "$value" must be a primitive. '
            f'"{name}" is {type(actual).__name__}; "$value" is {type(value).__name__}. '
            f'Possibly incorrect value in "$check".',
            path=where,
        )

    return Directive(check=check, value=value, func=func, raw=dict(node))


def _predicate(actual: Any, node: Any, where: str, name: Any) -> Predicate:
    if not is_sequence(actual):
        raise ConfigurationError(f'in "{where}": {name} is not array.', path=where)
    if VALUE_KEY not in node:
        raise ConfigurationError(f'in "{where}": "$value" required.', path=where)
    predicate = node[VALUE_KEY]
    if not callable(predicate):
        raise ConfigurationError(f'in "{where}": "$value" must be a function.', path=where)
    return Predicate(check=node[CHECK_KEY], predicate=predicate, raw=dict(node))


def _for_each(node: Any, where: str) -> ForEach:
    fields = {key: value for key, value in node.items() if key not in RESERVED_KEYS}
    if VALUE_KEY in node:
        if fields:
            raise ConfigurationError(
                f'in "{where}": "forEach" takes either "$value" or element fields, not both.',
                path=where,
            )
        return ForEach(node[VALUE_KEY])
    if not fields:
        raise ConfigurationError(
            f'in "{where}": "forEach" requires an element expectation.',
            path=where,
        )
    return ForEach(fields)


def _indexed(node: Any, where: str) -> IndexedArray:
    items = []
    for key, expectation in node.items():
        index = as_index(key)
        if index is None:
            raise ConfigurationError(
                f'"{where}" is array. You must use numbers to get item in arrays.',
                path=where,
            )
        items.append((key, index, expectation))
    return IndexedArray(items)
