"""Fallback variants for recovering from a Failure.

``unwrap`` and ``fix`` accept a fallback that is one of three explicit shapes:

- ``Const(value)``: use the value as is.
- ``Lazy(fn)``: call ``fn()`` and use its result.
- ``Handler(fn)``: call ``fn(failure)`` and use its result.

Bare arguments are coerced once at the boundary: a callable becomes ``Lazy``
for ``unwrap`` and ``Handler`` for ``fix``, anything else becomes ``Const``.
Wrap a callable in ``Const`` to use the callable itself as the value.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from resultify.core.errors import UsageError


@dataclass(frozen=True, slots=True)
class Const[T]:
    """A literal fallback value."""

    value: T


@dataclass(frozen=True, slots=True)
class Lazy[T]:
    """A zero-argument producer of the fallback value."""

    fn: Callable[[], T]


@dataclass(frozen=True, slots=True)
class Handler[T]:
    """A one-argument handler receiving the Failure being recovered."""

    fn: Callable[[Any], T]


type Fallback[T] = Const[T] | Lazy[T] | Handler[T]


def as_fallback(
    value: Any,
    *,
    callable_as: type[Lazy[Any]] | type[Handler[Any]],
) -> Fallback[Any]:
    """Coerce a bare argument into a Fallback.

    Args:
        value: Either an explicit variant or a bare value/callable.
        callable_as: Variant used for bare callables.

    Returns:
        The explicit variant.
    """
    if isinstance(value, (Const, Lazy, Handler)):
        return value
    if callable(value):
        return callable_as(value)
    return Const(value)


def resolve_fallback(fallback: Fallback[Any], failure: Any) -> Any:
    """Evaluate a fallback against a failure, exactly once."""
    match fallback:
        case Const(value):
            return value
        case Lazy(fn):
            return fn()
        case Handler(fn):
            return fn(failure)
        case _:
            raise UsageError(f"invalid fallback: {fallback!r}")
