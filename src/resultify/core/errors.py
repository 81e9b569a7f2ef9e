"""Error hierarchy for resultify.

This module defines the exceptions raised by resultify. ``ResultError`` is the
failure record owned by a ``Failure`` outcome; it is only raised when calling
code explicitly asks for it (``expect``, ``unwrap`` without a fallback).
The other exceptions signal misuse of the library itself.

Exception Hierarchy:
    ResultifyError (base)
    ├── ResultError   - Domain failure carried by a Failure outcome
    ├── UsageError    - Programmer misuse (also a TypeError)
    └── ConfigError   - Configuration loading and validation issues
"""

from typing import Any, TypeGuard

type Code = str | int | float | None
"""Stable discriminant of a failure. ``None`` means "no code"."""


def is_valid_code(value: object) -> bool:
    """Return True if value can be used as a failure code.

    ``bool`` is rejected even though it subclasses ``int``.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int, float))


def default_message(code: Code) -> str:
    """Return the generated message for a failure without an explicit one."""
    return f"error occurred with code '{code}'"


class ResultifyError(Exception):
    """Base exception for all resultify errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dict with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error description.
            details: Optional dict with additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class UsageError(ResultifyError, TypeError):
    """Misuse of resultify itself.

    Raised immediately for bad argument shapes: a non-callable passed to an
    adapter, an invalid code type, or a combinator invoked on an object that
    is not a Success or a Failure. Never wrapped into a Failure.
    """


class ConfigError(ResultifyError):
    """Error from configuration operations.

    Attributes:
        config_file: Path to the config file if applicable.
    """

    def __init__(
        self,
        message: str,
        *,
        config_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize config error.

        Args:
            message: Human-readable error description.
            config_file: Path to the config file if applicable.
            details: Optional dict with additional context.
        """
        super().__init__(message, details)
        self.config_file = config_file


class ResultError(ResultifyError):
    """Failure record carried by a Failure outcome.

    The code is fixed at construction. The message can be rewritten by
    ``Failure.expect``; that rewrite happens in place and is not
    synchronized, so a record must not be read and rewritten from several
    threads at once.

    Attributes:
        code: Stable discriminant used for programmatic branching.
        message: Human-readable description.
        cause: The lower-level error or value that triggered the failure.
    """

    def __init__(
        self,
        code: Code,
        message: str,
        cause: object = None,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the failure record.

        Args:
            code: Failure code (str, int, float or None).
            message: Human-readable error description.
            cause: Optional triggering error or value.
            details: Optional dict with additional context.

        Raises:
            UsageError: If code is not a valid failure code.
        """
        if not is_valid_code(code):
            raise UsageError(
                f"invalid code: {code!r}",
                details={"code_type": type(code).__name__},
            )
        super().__init__(message, details)
        self._code = code
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    @property
    def code(self) -> Code:
        """Return the failure code."""
        return self._code

    @staticmethod
    def is_instance(value: object) -> TypeGuard["ResultError"]:
        """Return True if value is a ResultError.

        Lets error-handling code tell failures raised from outcomes apart
        from unrelated exceptions.
        """
        return isinstance(value, ResultError)

    def __str__(self) -> str:
        """Return the current message."""
        return self.message

    def __repr__(self) -> str:
        return f"ResultError({self._code!r}, {self.message!r})"
