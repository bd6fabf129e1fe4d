"""Configuration loading utilities."""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from fedimigrate.config.models import Config
from fedimigrate.errors import ConfigurationError

CONFIG_ENV_VAR = "FEDIMIGRATE_CONFIG"


def resolve_config_path(config_path: Path | None) -> Path | None:
    """Return the explicit path, else the one named by FEDIMIGRATE_CONFIG."""
    if config_path is not None:
        return config_path
    from_env = os.environ.get(CONFIG_ENV_VAR)
    return Path(from_env) if from_env else None


def load_config(config_path: Path | None) -> Config:
    """
    Load configuration from a YAML file, or defaults plus environment.

    Args:
        config_path: Path to YAML config file. When None, the
            FEDIMIGRATE_CONFIG environment variable is consulted.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the resolved path doesn't exist.
        ConfigurationError: If the YAML is invalid or fails validation.
    """
    path = resolve_config_path(config_path)
    if path is None:
        return Config()

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    data = data or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"YAML root must be a mapping, not {type(data).__name__}")

    try:
        return Config(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e
