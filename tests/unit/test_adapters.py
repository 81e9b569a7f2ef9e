"""Unit tests for the Resultify adapter in resultify.adapters."""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any

import pytest

from resultify.adapters import Resultify, failure_message, function_name, resultify
from resultify.config.models import AdapterConfig
from resultify.core.errors import ResultError, UsageError
from resultify.core.outcome import Failure, Success
from resultify.observability.logging import (
    LoggingConfig,
    configure_logging,
    reset_logging,
)


def add(a: object, b: object) -> int:
    if not isinstance(a, int) or not isinstance(b, int):
        raise TypeError("invalid arguments")
    return a + b


async def add_later(a: object, b: object) -> int:
    await asyncio.sleep(0)
    return add(a, b)


@pytest.fixture(autouse=True)
def reset_logging_state() -> Any:
    """Reset logging state before and after each test."""
    reset_logging()
    yield
    reset_logging()


class TestFunctionName:
    """Test the name used in generated messages."""

    def test_plain_function(self) -> None:
        assert function_name(add) == "add"

    def test_partial_unwraps_to_function(self) -> None:
        assert function_name(functools.partial(add, 1)) == "add"

    def test_nameless_callable_is_anonymous(self) -> None:
        class Adder:
            def __call__(self) -> int:
                return 1

        assert function_name(Adder()) == "anonymous"

    def test_failure_message_appends_error(self) -> None:
        assert failure_message("f", ValueError("bad")) == (
            "error occurred while calling 'f' function: bad"
        )
        assert failure_message("f", ValueError()) == "error occurred while calling 'f' function"
        assert failure_message("f", "reason") == "error occurred while calling 'f' function"


class TestResultifySync:
    """Test resultify with synchronous callables."""

    def test_return_value_becomes_success(self) -> None:
        """resultify(add, 1, 2).unwrap() == 3, synchronously."""
        outcome = resultify(add, 1, 2)
        assert outcome == Success(3)
        assert outcome.unwrap() == 3

    def test_keyword_arguments_are_forwarded(self) -> None:
        assert resultify(add, a=1, b=2).unwrap() == 3

    def test_raise_becomes_failure(self) -> None:
        """A raised exception becomes the cause of a Failure."""
        outcome = resultify(add, 1, "2")
        assert isinstance(outcome, Failure)
        assert outcome.code is None
        assert isinstance(outcome.error.cause, TypeError)

    def test_unwrap_mentions_function_name(self) -> None:
        """unwrap() raises with a message naming the callable."""
        with pytest.raises(ResultError, match="error occurred while calling 'add' function"):
            resultify(add, 1, "2").unwrap()

    def test_message_includes_error_message(self) -> None:
        outcome = resultify(add, 1, "2")
        assert outcome.error.message.endswith("invalid arguments")

    def test_code_is_used(self) -> None:
        """Resultify(code=...) sets the failure code."""
        outcome = Resultify(code="code")(add, 1, "2")
        assert outcome.code == "code"
        with pytest.raises(ResultError, match="'add'"):
            outcome.unwrap()

    def test_explicit_message_is_used(self) -> None:
        outcome = Resultify(code=400, message="bad input")(add, 1, "2")
        assert outcome.code == 400
        assert outcome.error.message == "bad input"

    def test_success_ignores_code(self) -> None:
        assert Resultify(code="x")(add, 1, 2) == Success(3)

    def test_callable_runs_once(self) -> None:
        calls: list[int] = []
        resultify(calls.append, 1)
        assert calls == [1]

    def test_base_exceptions_propagate(self) -> None:
        """Only Exception subclasses are captured."""

        def interrupt() -> None:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            resultify(interrupt)

    def test_lambda_name(self) -> None:
        outcome = resultify(lambda: 1 / 0)
        assert "'<lambda>'" in outcome.error.message


class TestResultifyAsync:
    """Test resultify with callables returning awaitables."""

    async def test_awaitable_returns_coroutine(self) -> None:
        """No outcome is produced until the coroutine is awaited."""
        pending = resultify(add_later, 1, 2)
        assert inspect.iscoroutine(pending)
        assert await pending == Success(3)

    async def test_resolved_value_becomes_success(self) -> None:
        assert await resultify(add_later, 1, 2) == Success(3)

    async def test_rejection_becomes_failure(self) -> None:
        outcome = await Resultify(code="async")(add_later, 1, "2")
        assert outcome.code == "async"
        assert isinstance(outcome.error.cause, TypeError)
        with pytest.raises(ResultError, match="'add_later'"):
            outcome.unwrap()

    async def test_future_return_value(self) -> None:
        """Any awaitable is awaited, not only coroutines."""
        future: asyncio.Future[int] = asyncio.get_running_loop().create_future()
        future.set_result(9)
        assert await resultify(lambda: future) == Success(9)

    async def test_cancellation_propagates(self) -> None:
        async def cancelled() -> None:
            raise asyncio.CancelledError

        with pytest.raises(asyncio.CancelledError):
            await resultify(cancelled)


class TestResultifyUsage:
    """Test usage violations."""

    def test_non_callable_raises(self) -> None:
        with pytest.raises(UsageError, match="expected a callable"):
            resultify(3)  # type: ignore[arg-type]

    def test_non_callable_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            resultify("add", 1, 2)  # type: ignore[arg-type]

    @pytest.mark.parametrize("code", [True, [], {"a": 1}, object()])
    def test_invalid_code_raises(self, code: object) -> None:
        with pytest.raises(UsageError, match="invalid code"):
            Resultify(code=code)

    def test_invalid_message_raises(self) -> None:
        with pytest.raises(UsageError, match="invalid message"):
            Resultify(code="a", message=3)  # type: ignore[arg-type]

    def test_adapter_is_frozen(self) -> None:
        from pydantic import ValidationError as PydanticValidationError

        adapter = Resultify(code="a")
        with pytest.raises(PydanticValidationError):
            adapter.code = "b"  # type: ignore[misc]


class TestResultifyConfig:
    """Test building adapters from configuration."""

    def test_from_config(self) -> None:
        adapter = Resultify.from_config(AdapterConfig(code="cfg", message="configured"))
        outcome = adapter(add, 1, "2")
        assert outcome.code == "cfg"
        assert outcome.error.message == "configured"


class TestResultifyLogging:
    """Test the debug event emitted for captured failures."""

    def test_failure_is_logged_at_debug(self, capsys: Any) -> None:
        configure_logging(LoggingConfig(log_level="DEBUG"))
        Resultify(code="logged")(add, 1, "2")

        captured = capsys.readouterr()
        assert "resultify.call.failed" in captured.err
        assert "logged" in captured.err
        assert "TypeError" in captured.err

    def test_failure_not_logged_at_info(self, capsys: Any) -> None:
        configure_logging(LoggingConfig(log_level="INFO"))
        resultify(add, 1, "2")

        captured = capsys.readouterr()
        assert "resultify.call.failed" not in captured.err
