# Doot Configuration Loader
# Load and validate doot.yaml

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from doot.config.schema import SUPPORTED_VERSION, DootConfig
from doot.errors import ConfigurationError

DEFAULT_CONFIG_NAME = "doot.yaml"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get("DOOT_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_CONFIG_NAME)


def parse_config(content: str) -> DootConfig:
    """
    Parse and validate configuration text.

    Args:
        content: YAML document.

    Returns:
        DootConfig: Validated configuration object.

    Raises:
        ConfigurationError: If the YAML is malformed, invalid, or has an unsupported version.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise ConfigurationError("Configuration file is empty")

    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a mapping")

    try:
        config = DootConfig.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {details}") from e

    if config.version != SUPPORTED_VERSION:
        raise ConfigurationError(f"Unsupported config version: {config.version}")

    return config


def load_config(config_path: Optional[Path] = None) -> DootConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        DootConfig: Validated configuration object.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid.
    """
    if config_path is None:
        config_path = get_config_path()

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(str(getattr(e, "strerror", None) or e)).with_context(
            f"Failed to read config file: {config_path}"
        ) from e

    try:
        return parse_config(content)
    except ConfigurationError as e:
        raise e.with_context(f"Failed to parse {config_path}") from e
