"""Finite-difference gradient estimation for checking analytic derivatives."""
from __future__ import annotations

from typing import Callable, Union

import numpy as np

from ..exceptions import InvalidArgumentError
from .base import ObjectiveFunction


def estimate_derivative(
    objective: Union[ObjectiveFunction, Callable[[np.ndarray], float]],
    point: np.ndarray,
    epsilon: float = 1e-5,
) -> np.ndarray:
    """
    Estimate the gradient of an objective with central differences.

    Args:
        objective: Objective function or any callable point -> float
        point: Point at which to estimate the gradient
        epsilon: Step size

    Returns:
        Gradient estimate with the same size as point

    Example:
        >>> estimate_derivative(lambda w: float(w @ w), np.array([1.0, 2.0]))
        array([2., 4.])
    """
    if epsilon <= 0:
        raise InvalidArgumentError(f"epsilon must be positive, got {epsilon}")

    point = np.asarray(point, dtype=np.float64).ravel()
    gradient = np.zeros_like(point)
    probe = point.copy()
    for i in range(point.size):
        probe[i] = point[i] + epsilon
        upper = objective(probe.copy())
        probe[i] = point[i] - epsilon
        lower = objective(probe.copy())
        probe[i] = point[i]
        gradient[i] = (upper - lower) / (2.0 * epsilon)
    return gradient


__all__ = ["estimate_derivative"]
