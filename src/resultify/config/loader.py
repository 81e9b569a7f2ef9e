"""Configuration loading for resultify.

Functions:
    load_config: Load configuration from a YAML file
    write_default_config: Write the default configuration to a YAML file
    get_config_path: Resolve the config path from the RESULTIFY_CONFIG env var
"""

import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError
import yaml

from resultify.config.models import ResultifyConfig, get_default_config
from resultify.core.errors import ConfigError

CONFIG_PATH_ENV = "RESULTIFY_CONFIG"


def get_config_path() -> Path | None:
    """Return the path named by RESULTIFY_CONFIG, or None if unset."""
    env_path = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if env_path:
        return Path(env_path).expanduser()
    return None


def _model_to_yaml_dict(model: ResultifyConfig) -> dict[str, Any]:
    """Convert a Pydantic model to a YAML-serializable dict."""
    return model.model_dump(mode="json")


def write_default_config(config_path: Path, *, overwrite: bool = False) -> Path:
    """Write the default configuration to config_path.

    Args:
        config_path: Destination file.
        overwrite: If True, overwrite an existing file. Defaults to False.

    Returns:
        The path written.

    Raises:
        ConfigError: If the file exists and overwrite=False.
    """
    if config_path.exists() and not overwrite:
        raise ConfigError(
            f"Configuration file already exists: {config_path}",
            config_file=str(config_path),
        )

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w") as f:
        yaml.dump(
            _model_to_yaml_dict(get_default_config()),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    return config_path


def load_config(config_path: Path | None = None) -> ResultifyConfig:
    """Load configuration from a YAML file.

    The path is taken from the argument, then from RESULTIFY_CONFIG. With
    neither set the defaults are returned.

    Args:
        config_path: Path to config file.

    Returns:
        Validated ResultifyConfig instance.

    Raises:
        ConfigError: If file doesn't exist, is malformed, or fails validation.
    """
    if config_path is None:
        config_path = get_config_path()
        if config_path is None:
            return get_default_config()

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            config_file=str(config_path),
        )

    try:
        with config_path.open() as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse configuration file: {e}",
            config_file=str(config_path),
            details={"yaml_error": str(e)},
        ) from e

    if config_dict is None:
        config_dict = {}

    try:
        return ResultifyConfig.model_validate(config_dict)
    except PydanticValidationError as e:
        error_messages = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            msg = error["msg"]
            error_messages.append(f"  - {loc}: {msg}")

        raise ConfigError(
            "Configuration validation failed:\n" + "\n".join(error_messages),
            config_file=str(config_path),
            details={"validation_errors": e.errors()},
        ) from e
