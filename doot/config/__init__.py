# Doot Configuration Module
# Handles YAML-based configuration loading and validation

from doot.config.loader import DEFAULT_CONFIG_NAME, get_config_path, load_config, parse_config
from doot.config.schema import SUPPORTED_VERSION, DootConfig, Mode

__all__ = [
    # Schema
    "DootConfig",
    "Mode",
    "SUPPORTED_VERSION",
    # Loader
    "load_config",
    "parse_config",
    "get_config_path",
    "DEFAULT_CONFIG_NAME",
]
