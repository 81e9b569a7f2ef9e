"""resultify - failures as data.

An outcome is either a Success carrying a payload or a Failure carrying a
stable code, a message and an optional cause. Adapters run ordinary or
callback-style callables and hand back outcomes instead of raising.

Example:
    from resultify import Failure, Success, resultify

    def add(a: int, b: int) -> int:
        return a + b

    resultify(add, 1, 2).unwrap()          # 3
    resultify(add, 1, "2").unwrap(0)       # 0
    Failure("missing").fix(lambda f: Success("default"), code="missing")
"""

from resultify.adapters import (
    CallbackHandle,
    CallbackResultify,
    Resultify,
    callback_resultify,
    resultify,
)
from resultify.core import (
    UNSET,
    Code,
    ConfigError,
    Const,
    Failure,
    Fallback,
    Handler,
    Lazy,
    Outcome,
    ResultError,
    ResultifyError,
    Success,
    UsageError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Outcome
    "Outcome",
    "Success",
    "Failure",
    "UNSET",
    "Const",
    "Lazy",
    "Handler",
    "Fallback",
    # Adapters
    "Resultify",
    "CallbackResultify",
    "CallbackHandle",
    "resultify",
    "callback_resultify",
    # Errors
    "Code",
    "ResultifyError",
    "ResultError",
    "UsageError",
    "ConfigError",
]
