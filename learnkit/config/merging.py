"""Configuration merging and building functions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError
from .loaders import find_config, load_yaml_config

logger = logging.getLogger(__name__)


def merge_configs(
    base: dict[str, Any],
    override: dict[str, Any],
    deep: bool = True,
) -> dict[str, Any]:
    """Merge configs (override takes precedence, supports deep merge)."""
    result = base.copy()

    for key, value in override.items():
        if deep and key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value, deep=True)
        else:
            result[key] = value

    return result


def build_config(
    name: str,
    overrides: dict[str, Any] | None = None,
    config_file: str | Path | None = None,
    defaults: dict[str, Any] | None = None,
    config_dir: Path | None = None,
) -> dict[str, Any]:
    """
    Build a component configuration from multiple sources.

    Configuration precedence (highest to lowest):
    1. Overrides
    2. Config file (if explicitly provided, FAIL HARD on errors)
    3. Default YAML (config/{name}.yaml - warn on errors)
    4. Provided defaults

    Args:
        name: Component name ("mean_model" or "error_function")
        overrides: Explicit values (highest priority, None values ignored)
        config_file: Path to override config file
        defaults: Default configuration (lowest priority)
        config_dir: Directory searched for the default YAML

    Returns:
        Complete merged configuration

    Raises:
        ConfigError: If config_file is explicitly provided and loading fails
    """
    config = defaults.copy() if defaults else {}

    default_path = find_config(name, config_dir)
    if default_path:
        try:
            config = merge_configs(config, load_yaml_config(default_path))
            logger.debug(f"Merged config from {default_path}")
        except (OSError, yaml.YAMLError, ConfigError) as e:
            # Auto-discovery: warn and continue
            logger.warning(
                f"Failed to load default config from {default_path}: {e}. "
                f"Using built-in defaults."
            )

    if config_file:
        try:
            config = merge_configs(config, load_yaml_config(config_file, explicit=True))
            logger.debug(f"Merged config from {config_file}")
        except ConfigError:
            raise
        except Exception as e:
            raise ConfigError(
                f"Failed to load configuration from {Path(config_file).absolute()}\n"
                f"Error: {e}\n"
                f"Suggestion: Check that the file exists and has valid YAML syntax."
            ) from e

    if overrides:
        explicit = {k: v for k, v in overrides.items() if v is not None}
        config = merge_configs(config, explicit)
        logger.debug(f"Applied {len(explicit)} overrides")

    return config
