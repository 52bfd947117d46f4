"""
ErrorFunction - Supervised training error of a model on labeled data.

    E(w) = (1 / n) * sum_i weight_i * loss(y_i, f_w(x_i)) + strength * R(w)

The sum runs over the whole dataset or over one randomly drawn batch when
mini-batches are enabled; n is the number of samples in the sum. Per-sample
weights apply when the dataset is a WeightedLabeledData.

Lifecycle:
    error = ErrorFunction(data, model, loss, use_mini_batches=True)
    error.set_regularizer(0.01, TwoNormRegularizer())
    error.init(seed=42)                  # required before eval
    value = error(error.propose_starting_point())
    value, gradient = error.eval_derivative(point)
"""
from __future__ import annotations

import copy
import logging
from typing import Optional, Tuple

import numpy as np

from ..data import LabeledData
from ..exceptions import InvalidArgumentError, ModelTypeError, PreconditionError
from ..losses import AbstractLoss
from ..models import AbstractModel
from .base import ObjectiveFunction
from .strategies import (
    EvaluationStrategy,
    FullDatasetStrategy,
    MiniBatchStrategy,
    WeightedDatasetStrategy,
)

logger = logging.getLogger(__name__)


class ErrorFunction(ObjectiveFunction):
    """
    Objective measuring the mean loss of a model on a labeled dataset.

    The model is optimized in place: every evaluation writes the point into
    the model's parameter vector. The dataset, model, loss and regularizer are
    referenced, not copied.

    Args:
        dataset: LabeledData or WeightedLabeledData
        model: Model whose parameters are the optimization variables
        loss: Loss comparing labels with model outputs
        use_mini_batches: If True, each evaluation uses one random batch

    Raises:
        ModelTypeError: If the model output kind does not match the loss, or
            the model input shape does not match the dataset
    """

    def __init__(
        self,
        dataset: LabeledData,
        model: AbstractModel,
        loss: AbstractLoss,
        use_mini_batches: bool = False,
    ) -> None:
        super().__init__()
        if model.output_kind is not loss.prediction_kind:
            raise ModelTypeError(
                f"{model.name} produces {model.output_kind.value} outputs but "
                f"{loss.name} expects {loss.prediction_kind.value} predictions"
            )
        if model.input_shape and model.input_shape != dataset.input_shape:
            raise ModelTypeError(
                f"{model.name} expects inputs of shape {model.input_shape}, "
                f"dataset provides {dataset.input_shape}"
            )

        self._dataset = dataset
        self._model = model
        self._loss = loss
        self._use_mini_batches = bool(use_mini_batches)
        self._regularizer: Optional[ObjectiveFunction] = None
        self._regularization_strength = 0.0
        self._initialized = False

        if self._use_mini_batches:
            strategy_class = MiniBatchStrategy
        elif dataset.is_weighted:
            strategy_class = WeightedDatasetStrategy
        else:
            strategy_class = FullDatasetStrategy
        self._strategy: EvaluationStrategy = strategy_class(dataset, model, loss)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def name(self) -> str:
        return "ErrorFunction"

    @property
    def dataset(self) -> LabeledData:
        return self._dataset

    @property
    def model(self) -> AbstractModel:
        return self._model

    @property
    def loss(self) -> AbstractLoss:
        return self._loss

    @property
    def strategy(self) -> EvaluationStrategy:
        return self._strategy

    @property
    def use_mini_batches(self) -> bool:
        return self._use_mini_batches

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def number_of_variables(self) -> int:
        return self._model.number_of_parameters

    @property
    def has_first_derivative(self) -> bool:
        if not (self._model.has_first_parameter_derivative and self._loss.has_derivative):
            return False
        return self._regularizer is None or self._regularizer.has_first_derivative

    @property
    def regularizer(self) -> Optional[ObjectiveFunction]:
        return self._regularizer

    @property
    def regularization_strength(self) -> float:
        return self._regularization_strength

    def set_regularizer(self, strength: float, regularizer: ObjectiveFunction) -> None:
        """
        Add strength * regularizer to every evaluation.

        Raises:
            InvalidArgumentError: If strength is negative
        """
        if strength < 0:
            raise InvalidArgumentError(
                f"Regularization strength must be non-negative, got {strength}"
            )
        self._regularizer = regularizer
        self._regularization_strength = float(strength)

    # =========================================================================
    # EVALUATION
    # =========================================================================

    def init(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Prepare for evaluation.

        Args:
            seed: Seed for a new generator used by mini-batch sampling
            rng: Generator to use instead; takes precedence over seed
        """
        if rng is None:
            rng = np.random.default_rng(seed)
        self._strategy.init(rng)
        self._initialized = True
        logger.info(
            f"Initialized ErrorFunction: strategy={self._strategy.name}, "
            f"n_elements={self._dataset.number_of_elements}, "
            f"n_batches={self._dataset.number_of_batches}, "
            f"n_variables={self.number_of_variables}"
        )

    def propose_starting_point(self) -> np.ndarray:
        """The model's current parameter vector."""
        return self._model.parameter_vector()

    def eval(self, point: np.ndarray) -> float:
        """
        Mean loss at point, plus the weighted regularizer if set.

        Raises:
            PreconditionError: If init() has not been called
            InvalidArgumentError: If point has the wrong size
        """
        self._check_initialized()
        self._evaluation_counter += 1
        point = np.asarray(point, dtype=np.float64)
        self._model.set_parameter_vector(point)

        value = self._strategy.eval()
        if self._regularizer is not None:
            value += self._regularization_strength * self._regularizer.eval(point)
        return float(value)

    def eval_derivative(self, point: np.ndarray) -> Tuple[float, np.ndarray]:
        """
        Mean loss at point and its gradient, regularizer included.

        Returns:
            Tuple of (value, gradient of size number_of_variables)

        Raises:
            PreconditionError: If init() has not been called or the model,
                loss or regularizer is not differentiable
        """
        self._check_initialized()
        if not self.has_first_derivative:
            raise PreconditionError(
                f"ErrorFunction is not differentiable with model={self._model.name}, "
                f"loss={self._loss.name}"
            )
        self._evaluation_counter += 1
        point = np.asarray(point, dtype=np.float64)
        self._model.set_parameter_vector(point)

        value, gradient = self._strategy.eval_derivative()
        if self._regularizer is not None:
            reg_value, reg_gradient = self._regularizer.eval_derivative(point)
            value += self._regularization_strength * reg_value
            gradient = gradient + self._regularization_strength * np.asarray(reg_gradient)
        return float(value), gradient

    def _check_initialized(self) -> None:
        if not self._initialized:
            raise PreconditionError("ErrorFunction.init() must be called before evaluation")

    # =========================================================================
    # COPYING
    # =========================================================================

    def __copy__(self) -> "ErrorFunction":
        """Copy with an independent strategy; collaborators are shared."""
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._strategy = copy.deepcopy(self._strategy)
        return clone

    def __repr__(self) -> str:
        return (
            f"ErrorFunction(model={self._model.name}, loss={self._loss.name}, "
            f"strategy={self._strategy.name}, "
            f"regularization_strength={self._regularization_strength})"
        )


__all__ = ["ErrorFunction"]
