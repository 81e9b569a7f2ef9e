"""Outcome type - a value that is either a Success or a Failure.

This module provides:
- Outcome: the base class carrying all combinators
- Success[T]: the variant holding a payload
- Failure[C]: the variant holding a code and an owned ResultError

Failures are data until calling code decides otherwise. ``expect`` and
``unwrap`` without a fallback raise the failure record; ``unwrap`` with a
fallback and ``fix`` recover from it.

Usage:
    # Construction
    ok = Success(42)
    err = Failure("not_found", "user {code} missing")

    # Inspection
    if result.is_success():
        process(result.value)

    # Repair and conversion
    value = result.unwrap(0)
    repaired = result.fix(lambda failure: Success(None), code="not_found")
    chained = result.err_to("lookup_failed")  # cause is the original record
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final

from resultify.core.errors import Code, ResultError, UsageError, default_message
from resultify.core.variants import Handler, Lazy, as_fallback, resolve_fallback


class _Unset:
    """Marker for an omitted argument, distinct from None."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<unset>"


UNSET: Final[Any] = _Unset()


def _invalid_instance() -> UsageError:
    return UsageError("'self' is not a valid result instance")


def _same_code(expected: object, actual: Code) -> bool:
    """Strict code equality: same type and equal value."""
    return type(expected) is type(actual) and expected == actual


class Outcome:
    """Base class of Success and Failure.

    Every combinator dispatches on the concrete variant. Invoking one on an
    object that is neither variant raises UsageError.
    """

    __slots__ = ()

    def is_success(self) -> bool:
        """Return True if this outcome is a Success."""
        match self:
            case Success():
                return True
            case Failure():
                return False
            case _:
                raise _invalid_instance()

    def is_failure(self) -> bool:
        """Return True if this outcome is a Failure."""
        match self:
            case Success():
                return False
            case Failure():
                return True
            case _:
                raise _invalid_instance()

    def expect(self, message: str | None = None) -> Any:
        """Return the payload or raise the failure record.

        Args:
            message: Replacement message for the failure record. Every
                ``{code}`` token is replaced by the failure code. The record
                is rewritten in place.

        Raises:
            ResultError: If this outcome is a Failure.

        Returns:
            The success payload.
        """
        match self:
            case Success(value):
                return value
            case Failure(code, error):
                if message is not None:
                    error.message = message.replace("{code}", str(code))
                raise error
            case _:
                raise _invalid_instance()

    def unwrap(self, fallback: Any = UNSET) -> Any:
        """Return the payload, or recover with a fallback.

        On Failure without a fallback the record is raised. Otherwise the
        fallback is evaluated once: ``Const`` and bare values are returned,
        ``Lazy`` and bare callables are called with no arguments, ``Handler``
        is called with this Failure. An awaitable result is returned as is.

        Args:
            fallback: Optional fallback for the Failure case.

        Raises:
            ResultError: If this outcome is a Failure and no fallback is given.

        Returns:
            The success payload or the fallback result.
        """
        match self:
            case Success(value):
                return value
            case Failure(_, error):
                if fallback is UNSET:
                    raise error
                return resolve_fallback(as_fallback(fallback, callable_as=Lazy), self)
            case _:
                raise _invalid_instance()

    def fix(self, handler: Any = UNSET, *, code: Any = UNSET) -> Any:
        """Repair a Failure.

        - ``fix()`` returns this outcome unchanged.
        - ``fix(handler)`` replaces any Failure with the handler's result.
        - ``fix(handler, code=c)`` only replaces a Failure whose code is
          strictly equal to ``c`` (same type, equal value).

        ``Handler`` and bare callables receive this Failure, ``Lazy`` is
        called with no arguments, ``Const`` and bare values are returned
        literally. An asynchronous handler yields an awaitable.

        Args:
            handler: Replacement outcome or a way to produce one.
            code: Only repair failures carrying this code.

        Returns:
            This outcome, or the repaired one.
        """
        match self:
            case Success():
                return self
            case Failure(failure_code, _):
                if handler is UNSET:
                    return self
                if code is not UNSET and not _same_code(code, failure_code):
                    return self
                return resolve_fallback(as_fallback(handler, callable_as=Handler), self)
            case _:
                raise _invalid_instance()

    def ok_to(self, value: Any = UNSET) -> Outcome:
        """Replace the payload of a Success.

        Args:
            value: New payload. Omitted means None.

        Returns:
            A new Success, or this Failure unchanged.
        """
        match self:
            case Success():
                return Success() if value is UNSET else Success(value)
            case Failure():
                return self
            case _:
                raise _invalid_instance()

    def err_to(self, code: Code = None, message: str | BaseException | None = None) -> Outcome:
        """Convert a Failure into a new one, chaining the original as cause.

        Args:
            code: Code of the new failure.
            message: Message of the new failure, generated when omitted.

        Returns:
            This Success unchanged, or a new Failure whose record's cause is
            the original record.
        """
        match self:
            case Success():
                return self
            case Failure(_, error):
                return Failure(code, message, error)
            case _:
                raise _invalid_instance()

    def map(self, fn: Callable[[Any], Any]) -> Outcome:
        """Transform the Success payload with fn; pass a Failure through."""
        match self:
            case Success(value):
                return Success(fn(value))
            case Failure():
                return self
            case _:
                raise _invalid_instance()

    def and_then(self, fn: Callable[[Any], Outcome]) -> Outcome:
        """Chain an Outcome-producing operation (flatMap/bind).

        Example:
            def parse(text: str) -> Outcome:
                return resultify(int, text)

            Success("10").and_then(parse)  # Success(10)
        """
        match self:
            case Success(value):
                return fn(value)
            case Failure():
                return self
            case _:
                raise _invalid_instance()


@dataclass(frozen=True, slots=True, repr=False)
class Success[T](Outcome):
    """Successful outcome holding a payload (None when omitted)."""

    value: T = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"Result Ok({self.value})"

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True, slots=True, init=False, repr=False)
class Failure[C](Outcome):
    """Failed outcome holding a code and its failure record.

    Construction:
        Failure()                       # code None, generated message
        Failure("code")                 # generated message
        Failure("code", "message")      # explicit message
        Failure("code", exc)            # message from exc, exc as cause
        Failure("code", "message", obj) # explicit message and cause

    The no-code value is None and it is written out as ``None``, for
    example in generated messages and in ``{code}`` substitution.
    """

    code: C
    error: ResultError

    def __init__(
        self,
        code: C = None,  # type: ignore[assignment]
        message: str | BaseException | None = None,
        cause: object = UNSET,
    ) -> None:
        if isinstance(message, BaseException):
            text = str(message) or default_message(code)
            if cause is UNSET:
                cause = message
        elif isinstance(message, str):
            text = message
        else:
            text = default_message(code)

        error = ResultError(code, text, None if cause is UNSET else cause)
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "error", error)

    def __str__(self) -> str:
        return f"Result Err({self.code} {self.error.message})"

    def __repr__(self) -> str:
        return f"Failure({self.code!r}, {self.error.message!r})"
