"""Distance losses for real-valued predictions."""
from __future__ import annotations

from typing import Tuple

import numpy as np

from ..exceptions import InvalidArgumentError
from ..models.base import OutputKind, as_batch
from .base import AbstractLoss, check_batch_sizes


def _residuals(labels: np.ndarray, predictions: np.ndarray) -> np.ndarray:
    labels = as_batch(labels)
    predictions = as_batch(predictions)
    check_batch_sizes(labels, predictions)
    if labels.shape != predictions.shape:
        raise InvalidArgumentError(
            f"Label shape {labels.shape} does not match prediction shape {predictions.shape}"
        )
    return predictions - labels


class SquaredLoss(AbstractLoss):
    """
    Squared loss 0.5 * ||f(x) - y||^2.

    Example:
        >>> SquaredLoss().eval(np.array([[1.0], [2.0]]), np.array([[2.0], [2.0]]))
        0.5
    """

    @property
    def prediction_kind(self) -> OutputKind:
        return OutputKind.CONTINUOUS

    @property
    def has_derivative(self) -> bool:
        return True

    def sample_losses(self, labels: np.ndarray, predictions: np.ndarray) -> np.ndarray:
        residuals = _residuals(labels, predictions)
        return 0.5 * np.sum(residuals ** 2, axis=1)

    def sample_losses_derivative(
        self, labels: np.ndarray, predictions: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        residuals = _residuals(labels, predictions)
        return 0.5 * np.sum(residuals ** 2, axis=1), residuals


class AbsoluteLoss(AbstractLoss):
    """
    Euclidean distance ||f(x) - y||_2.

    At zero residual the subgradient 0 is used.
    """

    @property
    def prediction_kind(self) -> OutputKind:
        return OutputKind.CONTINUOUS

    @property
    def has_derivative(self) -> bool:
        return True

    def sample_losses(self, labels: np.ndarray, predictions: np.ndarray) -> np.ndarray:
        return np.linalg.norm(_residuals(labels, predictions), axis=1)

    def sample_losses_derivative(
        self, labels: np.ndarray, predictions: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        residuals = _residuals(labels, predictions)
        norms = np.linalg.norm(residuals, axis=1)
        safe_norms = np.where(norms > 0, norms, 1.0)
        gradient = residuals / safe_norms[:, None]
        gradient[norms == 0] = 0.0
        return norms, gradient


__all__ = ["SquaredLoss", "AbsoluteLoss"]
