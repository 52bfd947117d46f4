"""
Configuration - YAML config loading, merging and validation.

Precedence: overrides > explicit YAML file > default YAML (config/) > dataclass defaults
"""
from .paths import CONFIG_ROOT, ERROR_FUNCTION_CONFIG_PATH, MEAN_MODEL_CONFIG_PATH
from .exceptions import ConfigError, ConfigValidationError
from .ensemble_config import EnsembleConfig, MemberConfig
from .error_function_config import ErrorFunctionConfig
from .loaders import find_config, load_yaml_config
from .merging import build_config, merge_configs
from .validation import validate_config, validate_config_strict
from .serialization import save_config, save_config_json

__all__ = [
    # Paths
    "CONFIG_ROOT", "MEAN_MODEL_CONFIG_PATH", "ERROR_FUNCTION_CONFIG_PATH",
    # Exceptions
    "ConfigError", "ConfigValidationError",
    # Dataclasses
    "EnsembleConfig", "MemberConfig", "ErrorFunctionConfig",
    # Loaders
    "load_yaml_config", "find_config",
    # Merging
    "merge_configs", "build_config",
    # Validation
    "validate_config", "validate_config_strict",
    # Serialization
    "save_config", "save_config_json",
]
