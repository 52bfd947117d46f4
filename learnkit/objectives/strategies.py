"""
Evaluation strategies for ErrorFunction.

A strategy decides which samples an evaluation looks at and how they are
aggregated. All strategies return the mean per-sample loss, i.e. the summed
(weighted) loss divided by the number of samples considered.

Strategies:
- FullDatasetStrategy: Every batch, samples unweighted
- WeightedDatasetStrategy: Every batch, per-sample weights applied
- MiniBatchStrategy: One batch drawn uniformly at random per evaluation

The model parameters are set by the caller before eval() / eval_derivative().
"""
from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..data import LabeledBatch, LabeledData
from ..exceptions import PreconditionError
from ..losses import AbstractLoss
from ..models import AbstractModel

logger = logging.getLogger(__name__)


# =============================================================================
# BASE STRATEGY
# =============================================================================

class EvaluationStrategy(ABC):
    """
    Abstract base class for error evaluation strategies.

    A strategy references the dataset, model and loss of its ErrorFunction
    and owns its random generator. Deep copies share the collaborators and
    duplicate the owned state.
    """

    def __init__(
        self,
        dataset: LabeledData,
        model: AbstractModel,
        loss: AbstractLoss,
    ) -> None:
        self._dataset = dataset
        self._model = model
        self._loss = loss
        self._rng: Optional[np.random.Generator] = None

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def init(self, rng: np.random.Generator) -> None:
        """Take ownership of the random generator used for sampling."""
        self._rng = rng

    @abstractmethod
    def eval(self) -> float:
        """Mean (weighted) loss at the model's current parameters."""
        pass

    @abstractmethod
    def eval_derivative(self) -> Tuple[float, np.ndarray]:
        """Mean (weighted) loss and its gradient w.r.t. the model parameters."""
        pass

    # =========================================================================
    # BATCH HELPERS
    # =========================================================================

    def _batch_value(self, batch: LabeledBatch, weighted: bool) -> float:
        outputs = self._model.eval(batch.inputs)
        return self._loss.eval(batch.labels, outputs, batch.weights if weighted else None)

    def _batch_derivative(self, batch: LabeledBatch, weighted: bool) -> Tuple[float, np.ndarray]:
        outputs, state = self._model.eval_with_state(batch.inputs)
        value, coefficients = self._loss.eval_derivative(
            batch.labels, outputs, batch.weights if weighted else None
        )
        gradient = self._model.weighted_parameter_derivative(
            batch.inputs, outputs, coefficients, state
        )
        return value, np.asarray(gradient, dtype=np.float64)

    def _dataset_value(self, weighted: bool) -> float:
        total = 0.0
        for batch in self._dataset:
            total += self._batch_value(batch, weighted)
        return total / self._dataset.number_of_elements

    def _dataset_derivative(self, weighted: bool) -> Tuple[float, np.ndarray]:
        total = 0.0
        gradient = np.zeros(self._model.number_of_parameters)
        for batch in self._dataset:
            value, batch_gradient = self._batch_derivative(batch, weighted)
            total += value
            gradient += batch_gradient
        n_elements = self._dataset.number_of_elements
        return total / n_elements, gradient / n_elements

    def __deepcopy__(self, memo: Dict[int, Any]) -> "EvaluationStrategy":
        clone = copy.copy(self)
        clone._rng = copy.deepcopy(self._rng, memo)
        return clone

    def __repr__(self) -> str:
        return f"{self.name}(dataset={self._dataset!r}, model={self._model.name})"


# =============================================================================
# FULL DATASET STRATEGIES
# =============================================================================

class FullDatasetStrategy(EvaluationStrategy):
    """Mean loss over the whole dataset, ignoring sample weights."""

    def eval(self) -> float:
        return self._dataset_value(weighted=False)

    def eval_derivative(self) -> Tuple[float, np.ndarray]:
        return self._dataset_derivative(weighted=False)


class WeightedDatasetStrategy(EvaluationStrategy):
    """
    Weighted loss over the whole dataset.

    The weighted sum is divided by the number of samples, not by the sum of
    weights.
    """

    def eval(self) -> float:
        return self._dataset_value(weighted=True)

    def eval_derivative(self) -> Tuple[float, np.ndarray]:
        return self._dataset_derivative(weighted=True)


# =============================================================================
# MINI-BATCH STRATEGY
# =============================================================================

class MiniBatchStrategy(EvaluationStrategy):
    """
    Mean loss over a single batch drawn uniformly from the batch partition.

    Sample weights are applied when the dataset carries them. Every eval()
    and eval_derivative() call draws a new batch.
    """

    def __init__(
        self,
        dataset: LabeledData,
        model: AbstractModel,
        loss: AbstractLoss,
    ) -> None:
        super().__init__(dataset, model, loss)
        self._last_batch_index: Optional[int] = None

    @property
    def last_batch_index(self) -> Optional[int]:
        """Index of the batch used by the most recent evaluation."""
        return self._last_batch_index

    def _draw_batch(self) -> LabeledBatch:
        if self._rng is None:
            raise PreconditionError("MiniBatchStrategy used before init()")
        index = int(self._rng.integers(self._dataset.number_of_batches))
        self._last_batch_index = index
        logger.debug(f"Drew batch {index} of {self._dataset.number_of_batches}")
        return self._dataset.batch(index)

    def eval(self) -> float:
        batch = self._draw_batch()
        return self._batch_value(batch, weighted=batch.is_weighted) / len(batch)

    def eval_derivative(self) -> Tuple[float, np.ndarray]:
        batch = self._draw_batch()
        value, gradient = self._batch_derivative(batch, weighted=batch.is_weighted)
        return value / len(batch), gradient / len(batch)


__all__ = [
    "EvaluationStrategy",
    "FullDatasetStrategy",
    "WeightedDatasetStrategy",
    "MiniBatchStrategy",
]
