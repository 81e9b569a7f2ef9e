"""Adapters turning ordinary callables into outcomes.

This module provides:
- Resultify / resultify: run a callable and capture its return value or
  raised exception. Awaitable return values are awaited by a coroutine.
- CallbackResultify / callback_resultify: run a callable that reports
  completion through a CallbackHandle and await the single resolution.

Adapters are frozen pydantic models holding the failure code and message
used for captured exceptions. The module-level ``resultify`` and
``callback_resultify`` instances use code None and generated messages.

Usage:
    outcome = resultify(int, "42")             # Success(42)
    outcome = Resultify(code="parse")(int, "x") # Failure("parse", ...)
    outcome = await resultify(fetch_user, 7)   # awaitable callables

    def legacy(handle, a, b):
        handle.success(a + b)

    outcome = await callback_resultify(legacy, 1, 1)  # Success([2])

Usage violations (a non-callable, an invalid code) raise UsageError
immediately instead of producing a Failure.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Coroutine
import functools
import inspect
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from resultify.core.errors import Code, UsageError, is_valid_code
from resultify.core.outcome import Failure, Outcome, Success
from resultify.observability.logging import get_logger

if TYPE_CHECKING:
    from resultify.config.models import AdapterConfig

log = get_logger(__name__)

# Attribute names a CallbackHandle already defines for itself.
_RESERVED_HANDLE_NAMES = frozenset({"resolve", "reject", "done", "settle"})


def function_name(fn: Callable[..., Any]) -> str:
    """Return the name used in generated failure messages."""
    while isinstance(fn, functools.partial):
        fn = fn.func
    return getattr(fn, "__name__", None) or "anonymous"


def failure_message(name: str, error: object) -> str:
    """Build the default message for a failure captured while calling name.

    The captured exception's own message is appended when it has one.
    """
    message = f"error occurred while calling '{name}' function"
    if isinstance(error, BaseException) and str(error):
        return f"{message}: {error}"
    return message


def handle_name_problem(resolve_name: str, reject_name: str) -> str | None:
    """Describe what is wrong with a pair of completion names, or return None."""
    for role, name in (("resolve", resolve_name), ("reject", reject_name)):
        if not name.isidentifier() or name.startswith("_"):
            return f"invalid {role} name: {name!r}"
        if name in _RESERVED_HANDLE_NAMES and name != role:
            return f"{role} name {name!r} clashes with a handle attribute"
    if resolve_name == reject_name:
        return f"resolve and reject names must differ, got {resolve_name!r}"
    return None


def _check_callable(fn: object) -> None:
    if not callable(fn):
        raise UsageError(
            f"expected a callable, got {type(fn).__name__}",
            details={"argument": repr(fn)},
        )


class _AdapterOptions(BaseModel):
    """Code and message shared by both adapters."""

    model_config = ConfigDict(frozen=True)

    code: str | int | float | None = None
    message: str | None = None

    @field_validator("code", mode="before")
    @classmethod
    def _validate_code(cls, value: Any) -> Any:
        if not is_valid_code(value):
            raise UsageError(f"invalid code: {value!r}")
        return value

    @field_validator("message", mode="before")
    @classmethod
    def _validate_message(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, str):
            raise UsageError(f"invalid message: {value!r}")
        return value

    @classmethod
    def from_config(cls, config: AdapterConfig) -> Any:
        """Build an adapter from the adapter section of a ResultifyConfig."""
        return cls(**config.model_dump(include=set(cls.model_fields)))

    def _failure(self, fn: Callable[..., Any], error: object) -> Failure[Code]:
        name = function_name(fn)
        log.debug(
            "resultify.call.failed",
            function=name,
            code=self.code,
            error_type=type(error).__name__,
        )
        return Failure(self.code, self.message or failure_message(name, error), error)


class Resultify(_AdapterOptions):
    """Run a callable and capture the outcome.

    A plain return value becomes a Success synchronously. A raised Exception
    becomes a Failure carrying it as cause. When the callable returns an
    awaitable, a coroutine is returned instead; awaiting it yields the
    Success or Failure of the awaited value.

    Attributes:
        code: Code of captured failures.
        message: Message of captured failures, generated when None.
    """

    def __call__(
        self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any
    ) -> Outcome | Coroutine[Any, Any, Outcome]:
        """Invoke fn(*args, **kwargs) and wrap what happens.

        Raises:
            UsageError: If fn is not callable.
        """
        _check_callable(fn)

        try:
            value = fn(*args, **kwargs)
        except Exception as exc:
            return self._failure(fn, exc)

        if inspect.isawaitable(value):
            return self._settle(fn, value)
        return Success(value)

    async def _settle(self, fn: Callable[..., Any], awaitable: Awaitable[Any]) -> Outcome:
        try:
            value = await awaitable
        except Exception as exc:
            return self._failure(fn, exc)
        return Success(value)


class CallbackHandle:
    """Single-use completion handle passed to callback-style callables.

    The two completion functions are reachable under the names configured on
    the adapter (``success`` and ``fail`` by default) as well as ``resolve``
    and ``reject``. The first completion wins; later ones are ignored and
    logged. Completion functions may be called from other threads.
    """

    def __init__(
        self,
        future: asyncio.Future[Outcome],
        on_reject: Callable[[object], Outcome],
        *,
        resolve_name: str = "success",
        reject_name: str = "fail",
    ) -> None:
        self._future = future
        self._loop = future.get_loop()
        self._on_reject = on_reject
        self._aliases: dict[str, Callable[..., None]] = {
            resolve_name: self.resolve,
            reject_name: self.reject,
        }
        self._task: asyncio.Future[Any] | None = None

    def __getattr__(self, name: str) -> Callable[..., None]:
        aliases = self.__dict__.get("_aliases", {})
        if name in aliases:
            return aliases[name]  # type: ignore[no-any-return]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    @property
    def done(self) -> bool:
        """Return True once the outcome has resolved."""
        return self._future.done()

    def resolve(self, *values: Any) -> None:
        """Resolve as Success holding the list of values."""
        self.settle(Success(list(values)))

    def reject(self, error: object = None) -> None:
        """Resolve as Failure caused by error."""
        self.settle(self._on_reject(error))

    def settle(self, outcome: Outcome) -> None:
        """Resolve with an already built outcome."""
        if self._in_loop_thread():
            self._set(outcome)
        else:
            self._loop.call_soon_threadsafe(self._set, outcome)

    def _in_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def _set(self, outcome: Outcome) -> None:
        if self._future.done():
            log.warning("resultify.callback.duplicate_resolution", outcome=str(outcome))
            return
        self._future.set_result(outcome)

    def _abort(self, error: BaseException) -> None:
        if self._future.done():
            return
        if isinstance(error, asyncio.CancelledError):
            self._future.cancel()
        else:
            self._future.set_exception(error)


class CallbackResultify(_AdapterOptions):
    """Run a callback-style callable and await its single completion.

    The callable is invoked as ``fn(handle, *args, **kwargs)``. Calling
    ``handle.<resolve_name>(*values)`` resolves to ``Success(list(values))``;
    calling ``handle.<reject_name>(error)`` resolves to a Failure caused by
    error. An Exception raised by the callable before either is called also
    resolves to a Failure. If the callable returns an awaitable it runs as a
    task and an Exception raised inside it is treated the same way.

    The returned coroutine waits until one completion happens; there is no
    timeout. Wrap it in ``asyncio.timeout`` when one is needed: cancelling
    the coroutine also cancels the task running an awaitable callable.
    Completions and raises after the outcome has resolved are logged as
    ``resultify.callback.duplicate_resolution`` and otherwise ignored.

    Attributes:
        code: Code of captured failures.
        message: Message of captured failures, generated when None.
        resolve_name: Handle attribute resolving the outcome as Success.
        reject_name: Handle attribute resolving the outcome as Failure.
    """

    resolve_name: str = "success"
    reject_name: str = "fail"

    @model_validator(mode="after")
    def _validate_names(self) -> CallbackResultify:
        problem = handle_name_problem(self.resolve_name, self.reject_name)
        if problem is not None:
            raise UsageError(problem)
        return self

    def __call__(
        self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any
    ) -> Coroutine[Any, Any, Outcome]:
        """Return a coroutine running fn with a fresh CallbackHandle.

        Raises:
            UsageError: If fn is not callable.
        """
        _check_callable(fn)
        return self._run(fn, args, kwargs)

    async def _run(
        self, fn: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> Outcome:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Outcome] = loop.create_future()
        handle = CallbackHandle(
            future,
            functools.partial(self._failure, fn),
            resolve_name=self.resolve_name,
            reject_name=self.reject_name,
        )

        try:
            returned = fn(handle, *args, **kwargs)
        except Exception as exc:
            handle.settle(self._failure(fn, exc))
        else:
            if inspect.isawaitable(returned):
                handle._task = asyncio.ensure_future(returned)
                handle._task.add_done_callback(functools.partial(self._on_task_done, fn, handle))

        try:
            return await future
        except asyncio.CancelledError:
            if handle._task is not None:
                handle._task.cancel()
            raise

    def _on_task_done(
        self, fn: Callable[..., Any], handle: CallbackHandle, task: asyncio.Future[Any]
    ) -> None:
        if task.cancelled():
            handle._abort(asyncio.CancelledError())
            return
        error = task.exception()
        if error is None:
            return
        if isinstance(error, Exception):
            handle.settle(self._failure(fn, error))
        else:
            handle._abort(error)


resultify = Resultify()
"""Default adapter: code None, generated messages."""

callback_resultify = CallbackResultify()
"""Default callback adapter: ``success``/``fail`` handle names."""
