"""
Check engine for declarative validation of nested data.

The engine walks the actual data and an expectation tree in lockstep and
raises at the first mismatch. Expectations mix literal values, directives
({$check, $value, $func, $eMessage}) and array directives (indexes,
forEach, some, every).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .directives import (
    Directive,
    ForEach,
    IndexedArray,
    Literal,
    NestedRecord,
    Predicate,
    classify,
)
from .errors import CheckFailure, ConfigurationError, NotFoundError
from .messages import build_message, format_path
from .models import AssertionResult, FieldSet
from .operators import Operator, evaluate
from .paths import MISSING, get_field, get_item, is_record, is_sequence
from .required import verify_required_fields

logger = logging.getLogger(__name__)

# log_level name -> logger method ("warn" as in console.warn)
LOG_LEVELS = {
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "warning": "warning",
    "error": "error",
}

Expectation = Any
ExpectationFactory = Callable[[Any], Expectation]
RequiredFields = FieldSet | Mapping[str, Any]


class Check:
    """
    Declarative assertions over nested response data.

    Example:
        Check.data(result, {
            "unreadMessagesCount": {"$check": ">=", "$value": 0},
            "user": {"email": "a@b.c", "lastRole.name": "pro"},
            "tags": {0: "first", -1: "last"},
            "messages": {"$check": "forEach", "chatId": 42},
            "members": {"$check": "some", "$value": lambda m: m["id"] == 7},
        })
    """

    @staticmethod
    def data(
        data: Any,
        expectation: Expectation | ExpectationFactory,
        required_fields: RequiredFields | None = None,
    ) -> None:
        """
        Check a record, or every record of a list, against an expectation.

        For a list, `expectation` may be a factory called with each element
        to build that element's expectation.

        Raises:
            NotFoundError: data is None, an empty list, or a field is missing
            ConfigurationError: the expectation is malformed
            CheckFailure: a value does not match
        """
        if data is None or data is MISSING:
            raise NotFoundError("Not found data")

        if is_sequence(data):
            if not data:
                raise NotFoundError("data is empty Array.")
            logger.debug(f"Checking {len(data)} element(s)")
            for position, element in enumerate(data):
                element_expectation = expectation(element) if callable(expectation) else expectation
                Check._check(element, element_expectation, required_fields, [str(position)])
            return

        if callable(expectation):
            raise ConfigurationError('"data" is not array. The second parameter should be an object.')

        Check._check(data, expectation, required_fields, [])

    @staticmethod
    def required_fields(
        field_set: RequiredFields,
        data: Any,
        path: str = "",
    ) -> None:
        """Verify presence and shape of required fields (see verify_required_fields)."""
        verify_required_fields(field_set, data, path)

    @staticmethod
    def compare(actual: Any, expectation: Expectation, stack: Sequence[Any] = ()) -> None:
        """Recursively compare actual data against an expectation node."""
        stack = list(stack)
        if actual is MISSING:
            raise NotFoundError(
                f'"{format_path(stack)}" Not Found. See the query schema.',
                path=format_path(stack),
            )

        node = classify(actual, expectation, stack)

        if isinstance(node, NestedRecord):
            for key, child in node.fields.items():
                Check.compare(get_field(actual, key), child, stack + [key])

        elif isinstance(node, IndexedArray):
            for key, index, child in node.items:
                Check.compare(get_item(actual, index), child, stack + [key])

        elif isinstance(node, ForEach):
            for position, element in enumerate(actual):
                Check.compare(element, node.element, stack + [position])

        elif isinstance(node, Predicate):
            evaluate(
                node.check,
                actual,
                node.predicate,
                build_message(actual, node.raw, stack),
                path=format_path(stack),
            )

        elif isinstance(node, Directive):
            message = build_message(actual, node.raw, stack)
            if node.func is not None:
                evaluate(node.check, node.func(actual), node.func(node.value), message, format_path(stack))
            else:
                evaluate(node.check, actual, node.value, message, format_path(stack))

        elif isinstance(node, Literal):
            evaluate(
                Operator.EQUAL,
                actual,
                node.value,
                build_message(actual, node.value, stack),
                path=format_path(stack),
            )

    @staticmethod
    def evaluate(
        data: Any,
        expectation: Expectation | ExpectationFactory,
        required_fields: RequiredFields | None = None,
    ) -> AssertionResult:
        """Run Check.data() and report the outcome instead of raising."""
        try:
            Check.data(data, expectation, required_fields)
        except ConfigurationError as e:
            return AssertionResult.error_result(message=e.message, path=e.path)
        except NotFoundError as e:
            return AssertionResult.failed_result(
                message=e.message,
                path=e.path,
                details={"reason": "not found"},
            )
        except CheckFailure as e:
            return AssertionResult.failed_result(
                message=e.message,
                path=e.path,
                expected=e.expected,
                actual=e.actual,
            )
        return AssertionResult.passed_result()

    @staticmethod
    def matcher(expectation: Expectation) -> Callable[[Any], bool]:
        """
        Build a predicate telling whether a value satisfies an expectation.

        Useful as the $value of some/every. ConfigurationError propagates.
        """
        def matches(value: Any) -> bool:
            try:
                Check.compare(value, expectation)
            except (CheckFailure, NotFoundError):
                return False
            return True

        return matches

    @staticmethod
    def no_errors(errors: Sequence[Any] | None, log_level: str | None = None) -> None:
        """
        Assert that a response carries no errors.

        With `log_level`, every error is also logged at that level first.
        An unknown level is a ConfigurationError.
        """
        if log_level is not None and log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f'Unknown log level "{log_level}". Valid levels: {", ".join(LOG_LEVELS)}.'
            )

        if errors and log_level:
            log = getattr(logger, LOG_LEVELS[log_level])
            for error in errors:
                log(f'there should be no error: "{error}"')

        if errors:
            raise CheckFailure(
                "there should be no errors: " + json.dumps(errors, default=str),
                actual=errors,
            )

    @staticmethod
    def error(errors: Any, desired_error: Any) -> None:
        """Assert that the (first) error carries the desired message."""
        if not errors:
            raise NotFoundError("Not found errors")

        first = errors[0] if is_sequence(errors) else errors
        actual = _message_of(first)
        expected = _message_of(desired_error)
        evaluate(
            Operator.EQUAL,
            actual,
            expected,
            f'there should be error: "{expected}"',
        )

    @staticmethod
    def _check(
        data: Any,
        expectation: Expectation,
        required_fields: RequiredFields | None,
        stack: list[str],
    ) -> None:
        if required_fields:
            verify_required_fields(required_fields, data)
        Check.compare(data, expectation, stack)


def _message_of(error: Any) -> Any:
    if is_record(error):
        return error.get("message")
    if isinstance(error, str):
        return error
    return getattr(error, "message", None) or str(error)
