"""Structured logging configuration for resultify.

resultify never configures structlog on its own: its module-level loggers
are lazy structlog proxies, so events follow whatever configuration the
host application installs. ``configure_logging`` is an opt-in helper for
applications that want resultify's processor chain, with development mode
(human-readable console output) or production mode (JSON output) on stderr.

Features:
- ISO 8601 timestamps
- Log level in all entries
- contextvars integration for cross-async context propagation
- Mode selection via environment variable or config

Events emitted by resultify:
- resultify.call.failed (debug): an adapter captured an exception
- resultify.callback.duplicate_resolution (warning): a completion function
  was called, or the callable raised, after the outcome had already resolved

Event naming convention:
- Use dot.notation, format: domain.entity.verb_past_tense

Usage:
    from resultify.observability import configure_logging, get_logger

    configure_logging(LoggingConfig(mode=LogMode.PROD, log_level="DEBUG"))

    log = get_logger()
    log.debug("resultify.call.failed", function="load_user", code="db")
"""

from __future__ import annotations

from enum import Enum
import logging
import os
import sys
from typing import Any

from pydantic import BaseModel, Field
import structlog

LOG_MODE_ENV = "RESULTIFY_LOG_MODE"


class LogMode(str, Enum):
    """Logging output mode."""

    DEV = "dev"
    PROD = "prod"


class LoggingConfig(BaseModel):
    """Configuration for structured logging.

    Attributes:
        mode: Output mode (dev for human-readable, prod for JSON).
        log_level: Minimum log level to output.
    """

    mode: LogMode = Field(default=LogMode.DEV)
    log_level: str = Field(default="INFO")

    model_config = {"frozen": True}


# Module-level state for tracking configuration
_configured: bool = False


def _get_mode_from_env() -> LogMode:
    """Get logging mode from the RESULTIFY_LOG_MODE environment variable.

    Defaults to DEV if not set or invalid.
    """
    env_mode = os.environ.get(LOG_MODE_ENV, "dev").lower()
    if env_mode == "prod":
        return LogMode.PROD
    return LogMode.DEV


def _get_log_level(level_str: str) -> int:
    """Convert log level string to logging constant.

    Args:
        level_str: Log level as string (e.g., "INFO", "DEBUG").

    Returns:
        Logging constant (e.g., logging.INFO).
    """
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(level_str.upper(), logging.INFO)


def _get_processors(mode: LogMode) -> list[Any]:
    """Get the processor chain, ending with the renderer for the mode."""
    processors: list[Any] = [
        # Merge contextvars into event dict (for cross-async context)
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if mode == LogMode.DEV:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.JSONRenderer())

    return processors


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog process-wide with resultify's processor chain.

    Only call this from an application entry point; importing or using
    resultify never does.

    Args:
        config: Logging configuration. If None, uses defaults with
               mode from the RESULTIFY_LOG_MODE environment variable.

    Example:
        configure_logging(LoggingConfig(mode=LogMode.PROD, log_level="DEBUG"))
    """
    global _configured

    if config is None:
        config = LoggingConfig(mode=_get_mode_from_env())

    structlog.configure(
        processors=_get_processors(config.mode),
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(config.log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    _configured = True


def get_logger(name: str | None = None) -> Any:
    """Get a lazy structlog logger.

    The logger binds to the structlog configuration in effect when it is
    first used, so it is safe to create at import time.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables for cross-async propagation.

    Context bound here is included in all subsequent log entries within the
    same async context.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove context variables from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


def is_configured() -> bool:
    """Check if configure_logging has been called."""
    return _configured


def reset_logging() -> None:
    """Reset logging configuration state.

    This is primarily for testing purposes.
    """
    global _configured
    _configured = False
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
