"""Configuration module for resultify.

Main exports:
    ResultifyConfig: Main configuration model
    AdapterConfig: Adapter defaults
    load_config: Load config from YAML file
    write_default_config: Write default config file

Usage:
    from resultify import Resultify
    from resultify.config import load_config

    config = load_config()
    adapter = Resultify.from_config(config.adapter)
"""

from resultify.config.loader import (
    get_config_path,
    load_config,
    write_default_config,
)
from resultify.config.models import (
    AdapterConfig,
    ResultifyConfig,
    get_default_config,
)

__all__ = [
    # Models
    "AdapterConfig",
    "ResultifyConfig",
    "get_default_config",
    # Loader
    "get_config_path",
    "load_config",
    "write_default_config",
]
