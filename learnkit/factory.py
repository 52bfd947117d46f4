"""
Factory functions building MeanModel and ErrorFunction from configuration.

Example:
    from learnkit.factory import create_error_function, create_mean_model

    ensemble = create_mean_model({
        "members": [
            {"name": "constant", "weight": 1.0, "config": {"value": 2.0}},
            {"name": "constant", "weight": 3.0, "config": {"value": 4.0}},
        ],
    })

    error = create_error_function(
        data, model, config_file="experiments/ridge.yaml",
        config={"regularization_strength": 0.1},
    )
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config import (
    EnsembleConfig,
    ErrorFunctionConfig,
    build_config,
    validate_config_strict,
)
from .data import LabeledData
from .losses import LOSSES
from .models import AbstractModel, MeanModel, ModelRegistry
from .objectives import REGULARIZERS, ErrorFunction

logger = logging.getLogger(__name__)


def load_mean_model_config(
    overrides: dict[str, Any] | None = None,
    config_file: str | Path | None = None,
) -> EnsembleConfig:
    """Build and validate an EnsembleConfig from defaults, YAML files and overrides."""
    config = build_config(
        "mean_model",
        overrides=overrides,
        config_file=config_file,
        defaults=EnsembleConfig().to_dict(),
    )
    validate_config_strict(config, "mean_model")
    return EnsembleConfig.from_dict(config)


def load_error_function_config(
    overrides: dict[str, Any] | None = None,
    config_file: str | Path | None = None,
) -> ErrorFunctionConfig:
    """Build and validate an ErrorFunctionConfig from defaults, YAML files and overrides."""
    config = build_config(
        "error_function",
        overrides=overrides,
        config_file=config_file,
        defaults=ErrorFunctionConfig().to_dict(),
    )
    validate_config_strict(config, "error_function")
    return ErrorFunctionConfig.from_dict(config)


def create_mean_model(
    config: EnsembleConfig | dict[str, Any] | None = None,
    config_file: str | Path | None = None,
) -> MeanModel:
    """
    Create a MeanModel and its members.

    Args:
        config: EnsembleConfig, or a dict of overrides applied on top of the
            default and explicit YAML files
        config_file: Optional YAML file (ignored when config is an EnsembleConfig)

    Returns:
        MeanModel holding one registry-created model per member

    Raises:
        ConfigValidationError: If the merged config is invalid
        InvalidArgumentError: If a member config does not match its model
    """
    if not isinstance(config, EnsembleConfig):
        config = load_mean_model_config(overrides=config, config_file=config_file)

    ensemble = ModelRegistry.create(
        "mean",
        config={
            "output_kind": config.output_kind,
            "output_size": config.output_size,
            "parallel": config.parallel,
            "n_workers": config.n_workers,
        },
    )
    for member in config.members:
        ensemble.add_model(ModelRegistry.create(member.name, config=member.config), member.weight)

    logger.info(
        f"Created MeanModel with {ensemble.number_of_models} members "
        f"(output_kind={config.output_kind}, weight_sum={ensemble.weight_sum})"
    )
    return ensemble


def create_error_function(
    dataset: LabeledData,
    model: AbstractModel,
    config: ErrorFunctionConfig | dict[str, Any] | None = None,
    config_file: str | Path | None = None,
    initialize: bool = True,
) -> ErrorFunction:
    """
    Create an ErrorFunction with the configured loss and regularizer.

    Args:
        dataset: Labeled (optionally weighted) data
        model: Model to optimize
        config: ErrorFunctionConfig, or a dict of overrides
        config_file: Optional YAML file (ignored when config is an ErrorFunctionConfig)
        initialize: If True, call init() with the configured random_seed

    Returns:
        ErrorFunction, initialized unless initialize=False
    """
    if not isinstance(config, ErrorFunctionConfig):
        config = load_error_function_config(overrides=config, config_file=config_file)

    loss = LOSSES[config.loss](**config.loss_config)
    error_function = ErrorFunction(
        dataset, model, loss, use_mini_batches=config.use_mini_batches
    )
    if config.regularizer is not None:
        regularizer = REGULARIZERS[config.regularizer](**config.regularizer_config)
        error_function.set_regularizer(config.regularization_strength, regularizer)

    if initialize:
        error_function.init(seed=config.random_seed)
    return error_function


__all__ = [
    "load_mean_model_config",
    "load_error_function_config",
    "create_mean_model",
    "create_error_function",
]
