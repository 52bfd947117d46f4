"""YAML configuration loading functions."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError
from .paths import CONFIG_ROOT

logger = logging.getLogger(__name__)


def load_yaml_config(
    path: str | Path,
    explicit: bool = False,
) -> dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to YAML configuration file
        explicit: If True, raise ConfigError on any failure (user-requested config).
                 If False, allow FileNotFoundError to propagate (auto-discovery).

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If file doesn't exist and explicit=False
        ConfigError: If explicit=True and loading/parsing fails, or the file
            does not contain a mapping
        yaml.YAMLError: If file is not valid YAML and explicit=False
    """
    path = Path(path)

    if not path.exists():
        if explicit:
            raise ConfigError(
                f"Configuration file not found: {path.absolute()}\n"
                f"Suggestion: Check that the file exists and the path is correct."
            )
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = (
            f"Failed to parse YAML configuration from {path.absolute()}\n"
            f"Error: {e}\n"
            f"Suggestion: Check that the file contains valid YAML syntax."
        )
        if explicit:
            raise ConfigError(error_msg) from e
        raise

    if config is None:
        logger.warning(f"Empty config file: {path}")
        return {}

    if not isinstance(config, dict):
        raise ConfigError(
            f"Configuration in {path.absolute()} must be a mapping, "
            f"got {type(config).__name__}"
        )

    logger.debug(f"Loaded config from {path}: {len(config)} keys")
    return config


def find_config(name: str, config_dir: Path | None = None) -> Path | None:
    """
    Find the default config file for a component.

    Looks for config file at: {config_dir}/{name}.yaml

    Returns:
        Path to the file, or None if it does not exist
    """
    config_dir = Path(config_dir) if config_dir else CONFIG_ROOT
    path = config_dir / f"{name}.yaml"
    return path if path.exists() else None
