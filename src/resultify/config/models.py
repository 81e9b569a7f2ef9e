"""Pydantic models for resultify configuration.

This module defines the configuration schema using Pydantic v2.
All configuration validation happens through these models.

Classes:
    AdapterConfig: Defaults used to build Resultify and CallbackResultify
    ResultifyConfig: Top-level configuration combining all sections
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from resultify.adapters import handle_name_problem
from resultify.core.errors import is_valid_code
from resultify.observability.logging import LoggingConfig


class AdapterConfig(BaseModel, frozen=True):
    """Adapter configuration.

    Attributes:
        code: Failure code for captured exceptions (str, number or null).
        message: Failure message for captured exceptions, generated if null.
        resolve_name: Callback handle attribute resolving as Success.
        reject_name: Callback handle attribute resolving as Failure.
    """

    code: str | int | float | None = None
    message: str | None = None
    resolve_name: str = Field(default="success", min_length=1)
    reject_name: str = Field(default="fail", min_length=1)

    @field_validator("code", mode="before")
    @classmethod
    def validate_code(cls, v: Any) -> Any:
        """Reject booleans and other non-code values before coercion."""
        if not is_valid_code(v):
            msg = f"code must be a string, a number or null, got {type(v).__name__}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_names(self) -> "AdapterConfig":
        """Apply the same completion name rules as CallbackResultify."""
        problem = handle_name_problem(self.resolve_name, self.reject_name)
        if problem is not None:
            raise ValueError(problem)
        return self


class ResultifyConfig(BaseModel, frozen=True):
    """Top-level resultify configuration.

    Attributes:
        adapter: Adapter defaults
        logging: Logging configuration
    """

    adapter: AdapterConfig = Field(default_factory=AdapterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_config() -> ResultifyConfig:
    """Get the default resultify configuration."""
    return ResultifyConfig()
