"""
AbstractLoss interface.

A loss compares a batch of labels with a batch of model predictions and
returns the SUM of the per-sample losses. Normalization by the number of
samples is left to the objective function, which sees the whole dataset.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from ..exceptions import InvalidArgumentError, PreconditionError
from ..models.base import OutputKind


class AbstractLoss(ABC):
    """
    Abstract base class for losses.

    Subclasses must implement:
        - prediction_kind (property): Output kind of the predictions it accepts
        - sample_losses(): Per-sample losses for a batch

    Differentiable losses also override has_derivative and
    sample_losses_derivative().
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    @abstractmethod
    def prediction_kind(self) -> OutputKind:
        """Output kind of the model predictions this loss expects."""
        pass

    @property
    def has_derivative(self) -> bool:
        """Whether eval_derivative() is available."""
        return False

    @abstractmethod
    def sample_losses(self, labels: np.ndarray, predictions: np.ndarray) -> np.ndarray:
        """
        Compute the loss of every sample.

        Returns:
            Array of shape (n_samples,)
        """
        pass

    def sample_losses_derivative(
        self, labels: np.ndarray, predictions: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Compute per-sample losses and their gradient w.r.t. the predictions.

        Returns:
            Tuple of (losses of shape (n_samples,), gradient shaped like predictions)
        """
        raise PreconditionError(f"{self.name} is not differentiable")

    def eval(
        self,
        labels: np.ndarray,
        predictions: np.ndarray,
        weights: Optional[np.ndarray] = None,
    ) -> float:
        """
        Sum of (weighted) per-sample losses over the batch.

        Args:
            labels: Batch of labels
            predictions: Batch of model outputs
            weights: Optional per-sample weights, shape (n_samples,)
        """
        losses = self.sample_losses(labels, predictions)
        weights = check_weights(weights, len(losses))
        if weights is None:
            return float(np.sum(losses))
        return float(np.dot(weights, losses))

    def eval_derivative(
        self,
        labels: np.ndarray,
        predictions: np.ndarray,
        weights: Optional[np.ndarray] = None,
    ) -> Tuple[float, np.ndarray]:
        """
        Sum of (weighted) per-sample losses and the gradient w.r.t. the predictions.

        Returns:
            Tuple of (loss sum, gradient with one row per sample)

        Raises:
            PreconditionError: If the loss is not differentiable
        """
        if not self.has_derivative:
            raise PreconditionError(f"{self.name} is not differentiable")

        losses, gradient = self.sample_losses_derivative(labels, predictions)
        weights = check_weights(weights, len(losses))
        if weights is None:
            return float(np.sum(losses)), gradient
        gradient = gradient * weights.reshape((-1,) + (1,) * (gradient.ndim - 1))
        return float(np.dot(weights, losses)), gradient

    def __call__(
        self,
        labels: np.ndarray,
        predictions: np.ndarray,
        weights: Optional[np.ndarray] = None,
    ) -> float:
        return self.eval(labels, predictions, weights)

    def __repr__(self) -> str:
        return f"{self.name}(prediction_kind={self.prediction_kind.value})"


def check_weights(weights: Optional[np.ndarray], n_samples: int) -> Optional[np.ndarray]:
    if weights is None:
        return None
    weights = np.asarray(weights, dtype=np.float64).ravel()
    if len(weights) != n_samples:
        raise InvalidArgumentError(
            f"Got {len(weights)} weights for {n_samples} samples"
        )
    return weights


def check_batch_sizes(labels: np.ndarray, predictions: np.ndarray) -> None:
    """
    Raises:
        InvalidArgumentError: If labels and predictions differ in length
    """
    if len(labels) != len(predictions):
        raise InvalidArgumentError(
            f"Got {len(labels)} labels for {len(predictions)} predictions"
        )


__all__ = ["AbstractLoss", "check_batch_sizes", "check_weights"]
