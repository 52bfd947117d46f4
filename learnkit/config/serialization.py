"""Writing configurations to YAML or JSON."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml

logger = logging.getLogger(__name__)

ConfigLike = Union[dict[str, Any], Any]


def _as_dict(config: ConfigLike) -> dict[str, Any]:
    # Config dataclasses serialize through to_dict()
    if hasattr(config, "to_dict"):
        return config.to_dict()
    return dict(config)


def _prepare_path(path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def save_config(config: ConfigLike, path: str | Path) -> Path:
    """Write a config dict or dataclass to a YAML file."""
    path = _prepare_path(path)
    with open(path, "w") as f:
        yaml.safe_dump(_as_dict(config), f, default_flow_style=False, sort_keys=False)
    logger.info(f"Saved config to {path}")
    return path


def save_config_json(config: ConfigLike, path: str | Path) -> Path:
    """Write a config dict or dataclass to a JSON file."""
    path = _prepare_path(path)
    with open(path, "w") as f:
        json.dump(_as_dict(config), f, indent=2, default=str)
    logger.info(f"Saved config to {path}")
    return path
