"""resultify core module - outcome type, fallback variants and errors."""

from resultify.core.errors import (
    Code,
    ConfigError,
    ResultError,
    ResultifyError,
    UsageError,
)
from resultify.core.outcome import UNSET, Failure, Outcome, Success
from resultify.core.variants import Const, Fallback, Handler, Lazy

__all__ = [
    # Outcome
    "Outcome",
    "Success",
    "Failure",
    "UNSET",
    # Fallback variants
    "Const",
    "Lazy",
    "Handler",
    "Fallback",
    # Errors
    "Code",
    "ResultifyError",
    "ResultError",
    "UsageError",
    "ConfigError",
]
