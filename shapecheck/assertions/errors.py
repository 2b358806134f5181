"""
Exception types raised by the check engine.

Every error aborts the current check. CheckFailure subclasses the builtin
AssertionError so test runners report it as a regular test failure.
"""

from __future__ import annotations

from typing import Any


class CheckError(Exception):
    """Base class for all check engine errors."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class NotFoundError(CheckError):
    """The actual data (or a field inside it) is missing."""


class ConfigurationError(CheckError):
    """The expectation tree is malformed."""


class CheckFailure(CheckError, AssertionError):
    """A value in the actual data does not match its expectation."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        actual: Any = None,
        expected: Any = None,
    ):
        super().__init__(message, path)
        self.actual = actual
        self.expected = expected
