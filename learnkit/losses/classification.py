"""
Classification losses.

CrossEntropy scores real-valued class scores against integer labels.
ZeroOneLoss counts misclassifications and accepts either class-index
predictions or class scores.
"""
from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np
from scipy.special import expit, logsumexp
from sklearn.metrics import zero_one_loss

from ..exceptions import InvalidArgumentError, OutOfRangeError
from ..models.base import OutputKind, as_batch
from .base import AbstractLoss, check_weights, check_batch_sizes


def softmax(x: np.ndarray) -> np.ndarray:
    """
    Compute softmax probabilities.

    Args:
        x: Decision values of shape (n_samples, n_classes)

    Returns:
        Probability distribution over classes
    """
    exp_x = np.exp(x - np.max(x, axis=1, keepdims=True))
    return exp_x / np.sum(exp_x, axis=1, keepdims=True)


def _class_labels(labels: np.ndarray, n_classes: int) -> np.ndarray:
    labels = np.asarray(labels).ravel()
    if not np.issubdtype(labels.dtype, np.integer):
        if not np.all(np.equal(np.mod(labels, 1), 0)):
            raise InvalidArgumentError("Class labels must be integers")
        labels = labels.astype(np.int64)
    invalid = (labels < 0) | (labels >= n_classes)
    if np.any(invalid):
        raise OutOfRangeError(
            f"Class label {int(labels[invalid][0])} is out of range for {n_classes} classes"
        )
    return labels


class CrossEntropy(AbstractLoss):
    """
    Softmax log-loss on class scores.

    For k >= 2 scores the loss is logsumexp(f) - f[y]. A single score column is
    treated as a binary problem with labels {0, 1}: log(1 + exp(-s * f)) with
    s = 2y - 1.
    """

    @property
    def prediction_kind(self) -> OutputKind:
        return OutputKind.CONTINUOUS

    @property
    def has_derivative(self) -> bool:
        return True

    def sample_losses(self, labels: np.ndarray, predictions: np.ndarray) -> np.ndarray:
        return self.sample_losses_derivative(labels, predictions)[0]

    def sample_losses_derivative(
        self, labels: np.ndarray, predictions: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        scores = as_batch(predictions)
        check_batch_sizes(labels, scores)
        n_samples, n_scores = scores.shape

        if n_scores == 1:
            labels = _class_labels(labels, 2)
            signs = (2 * labels - 1).astype(np.float64)
            margins = signs * scores[:, 0]
            losses = np.logaddexp(0.0, -margins)
            gradient = (-signs * expit(-margins)).reshape(-1, 1)
            return losses, gradient

        labels = _class_labels(labels, n_scores)
        rows = np.arange(n_samples)
        losses = logsumexp(scores, axis=1) - scores[rows, labels]
        gradient = softmax(scores)
        gradient[rows, labels] -= 1.0
        return losses, gradient


class ZeroOneLoss(AbstractLoss):
    """
    Number of misclassified samples.

    Args:
        prediction_kind: CLASS_INDEX to compare predicted labels directly,
            CONTINUOUS to compare argmax of class scores (a single score column
            predicts class 1 when positive)
    """

    def __init__(self, prediction_kind: Union[OutputKind, str] = OutputKind.CLASS_INDEX) -> None:
        self._prediction_kind = OutputKind(prediction_kind)

    @property
    def prediction_kind(self) -> OutputKind:
        return self._prediction_kind

    def predicted_classes(self, predictions: np.ndarray) -> np.ndarray:
        """Convert predictions to class indices."""
        if self._prediction_kind is OutputKind.CLASS_INDEX:
            return np.asarray(predictions).ravel().astype(np.int64)
        scores = as_batch(predictions)
        if scores.shape[1] == 1:
            return (scores[:, 0] > 0).astype(np.int64)
        return np.argmax(scores, axis=1).astype(np.int64)

    def sample_losses(self, labels: np.ndarray, predictions: np.ndarray) -> np.ndarray:
        labels = np.asarray(labels).ravel()
        predicted = self.predicted_classes(predictions)
        check_batch_sizes(labels, predicted)
        return (predicted != labels).astype(np.float64)

    def eval(
        self,
        labels: np.ndarray,
        predictions: np.ndarray,
        weights: Optional[np.ndarray] = None,
    ) -> float:
        labels = np.asarray(labels).ravel()
        predicted = self.predicted_classes(predictions)
        check_batch_sizes(labels, predicted)
        weights = check_weights(weights, len(labels))
        if len(labels) == 0:
            return 0.0
        return float(zero_one_loss(labels, predicted, normalize=False, sample_weight=weights))

    def __repr__(self) -> str:
        return f"ZeroOneLoss(prediction_kind={self._prediction_kind.value})"


__all__ = ["CrossEntropy", "ZeroOneLoss", "softmax"]
