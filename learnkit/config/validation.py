"""Configuration validation functions."""

from typing import Any

from ..losses import LOSSES
from ..models import ModelRegistry
from ..objectives.regularizers import REGULARIZERS
from .ensemble_config import VALID_OUTPUT_KINDS
from .exceptions import ConfigValidationError

VALID_KINDS = {"mean_model", "error_function"}

MEAN_MODEL_KEYS = {"output_kind", "output_size", "members", "parallel", "n_workers"}
ERROR_FUNCTION_KEYS = {
    "loss", "loss_config", "use_mini_batches", "regularizer",
    "regularizer_config", "regularization_strength", "random_seed",
}

# Allowed numeric ranges (inclusive)
NUMERIC_RANGES = {
    "n_workers": (1, 64),
    "output_size": (0, 100000),
    "regularization_strength": (0.0, 1e6),
}


def _check_numeric(config: dict[str, Any], errors: list[str]) -> None:
    for field_name, (min_val, max_val) in NUMERIC_RANGES.items():
        if field_name not in config:
            continue
        value = config[field_name]
        if value is None:
            continue  # Allow None values
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            errors.append(f"{field_name} must be numeric, got {type(value).__name__}")
        elif value < min_val or value > max_val:
            errors.append(f"{field_name}={value} out of range [{min_val}, {max_val}]")


def _validate_members(members: Any, errors: list[str]) -> None:
    if not isinstance(members, list):
        errors.append(f"members must be a list, got {type(members).__name__}")
        return

    for i, member in enumerate(members):
        if not isinstance(member, dict):
            errors.append(f"members[{i}] must be a mapping")
            continue
        name = member.get("name")
        if not name:
            errors.append(f"Missing required field: members[{i}].name")
        elif not ModelRegistry.is_registered(name):
            errors.append(f"members[{i}].name: unknown model '{name}'")
        weight = member.get("weight", 1.0)
        if isinstance(weight, bool) or not isinstance(weight, (int, float)) or not weight > 0:
            errors.append(f"members[{i}].weight must be a positive number, got {weight!r}")
        if not isinstance(member.get("config", {}), dict):
            errors.append(f"members[{i}].config must be a mapping")


def _validate_mean_model(config: dict[str, Any], errors: list[str]) -> None:
    output_kind = config.get("output_kind", "continuous")
    if output_kind not in VALID_OUTPUT_KINDS:
        errors.append(
            f"Invalid output_kind: {output_kind}. Must be one of: {VALID_OUTPUT_KINDS}"
        )
    elif output_kind == "class_index" and not config.get("output_size"):
        errors.append("output_size is required for class_index ensembles")

    if "members" in config:
        _validate_members(config["members"], errors)


def _validate_error_function(config: dict[str, Any], errors: list[str]) -> None:
    loss = config.get("loss", "squared")
    if loss not in LOSSES:
        errors.append(f"Invalid loss: {loss}. Must be one of: {sorted(LOSSES)}")

    regularizer = config.get("regularizer")
    if regularizer is not None and regularizer not in REGULARIZERS:
        errors.append(
            f"Invalid regularizer: {regularizer}. Must be one of: {sorted(REGULARIZERS)}"
        )

    if not isinstance(config.get("use_mini_batches", False), bool):
        errors.append("use_mini_batches must be a boolean")

    seed = config.get("random_seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        errors.append(f"random_seed must be an integer, got {type(seed).__name__}")


def validate_config(config: dict[str, Any], kind: str) -> list[str]:
    """Validate a mean_model or error_function config (keys, ranges and names)."""
    if kind not in VALID_KINDS:
        return [f"Unknown config kind: {kind}. Must be one of: {sorted(VALID_KINDS)}"]

    errors: list[str] = []
    allowed = MEAN_MODEL_KEYS if kind == "mean_model" else ERROR_FUNCTION_KEYS
    unknown = sorted(set(config) - allowed)
    if unknown:
        errors.append(f"Unknown {kind} keys: {unknown}")

    _check_numeric(config, errors)
    if kind == "mean_model":
        _validate_mean_model(config, errors)
    else:
        _validate_error_function(config, errors)
    return errors


def validate_config_strict(
    config: dict[str, Any],
    kind: str,
    raise_on_error: bool = True,
) -> list[str]:
    """Validate config and optionally raise ConfigValidationError."""
    errors = validate_config(config, kind)
    if errors and raise_on_error:
        raise ConfigValidationError(errors, kind=kind)
    return errors
