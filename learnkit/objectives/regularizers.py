"""
Parameter-norm regularizers.

Both regularizers accept a point of any dimension. An optional mask scales
each coordinate's contribution; a zero entry excludes that parameter (for
example a bias term) from the penalty.
"""
from __future__ import annotations

from typing import Any, Optional, Tuple

import numpy as np

from ..exceptions import InvalidArgumentError
from .base import ObjectiveFunction


class _NormRegularizer(ObjectiveFunction):
    def __init__(self, mask: Optional[Any] = None) -> None:
        super().__init__()
        self._mask = None if mask is None else np.asarray(mask, dtype=np.float64).ravel()

    @property
    def mask(self) -> Optional[np.ndarray]:
        return None if self._mask is None else self._mask.copy()

    @property
    def has_first_derivative(self) -> bool:
        return True

    def _coerce(self, point: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        point = np.asarray(point, dtype=np.float64).ravel()
        if self._mask is None:
            return point, np.ones_like(point)
        if self._mask.size != point.size:
            raise InvalidArgumentError(
                f"Regularizer mask has {self._mask.size} entries, point has {point.size}"
            )
        return point, self._mask


class TwoNormRegularizer(_NormRegularizer):
    """
    Squared two-norm penalty 0.5 * sum(mask * w^2), gradient mask * w.

    Example:
        >>> TwoNormRegularizer().eval(np.array([3.0, 4.0]))
        12.5
    """

    def eval(self, point: np.ndarray) -> float:
        self._evaluation_counter += 1
        point, mask = self._coerce(point)
        return float(0.5 * np.sum(mask * point ** 2))

    def eval_derivative(self, point: np.ndarray) -> Tuple[float, np.ndarray]:
        self._evaluation_counter += 1
        point, mask = self._coerce(point)
        return float(0.5 * np.sum(mask * point ** 2)), mask * point


class OneNormRegularizer(_NormRegularizer):
    """One-norm penalty sum(mask * |w|), subgradient mask * sign(w)."""

    def eval(self, point: np.ndarray) -> float:
        self._evaluation_counter += 1
        point, mask = self._coerce(point)
        return float(np.sum(mask * np.abs(point)))

    def eval_derivative(self, point: np.ndarray) -> Tuple[float, np.ndarray]:
        self._evaluation_counter += 1
        point, mask = self._coerce(point)
        return float(np.sum(mask * np.abs(point))), mask * np.sign(point)


REGULARIZERS = {
    "two_norm": TwoNormRegularizer,
    "one_norm": OneNormRegularizer,
}

__all__ = ["TwoNormRegularizer", "OneNormRegularizer", "REGULARIZERS"]
