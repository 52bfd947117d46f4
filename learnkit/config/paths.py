"""Configuration path constants."""

from pathlib import Path

# 2 levels up from learnkit/config/paths.py -> project root
CONFIG_ROOT = Path(__file__).resolve().parents[2] / "config"
MEAN_MODEL_CONFIG_PATH = CONFIG_ROOT / "mean_model.yaml"
ERROR_FUNCTION_CONFIG_PATH = CONFIG_ROOT / "error_function.yaml"
