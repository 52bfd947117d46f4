"""
ObjectiveFunction interface.

An objective maps a flat parameter vector to a scalar value and, when
differentiable, to the gradient at that point.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from ..exceptions import PreconditionError


class ObjectiveFunction(ABC):
    """
    Abstract base class for objective functions.

    Subclasses must implement:
        - eval(): Value at a point

    Differentiable objectives also override has_first_derivative and
    eval_derivative(). Implementations increment _evaluation_counter once per
    eval() / eval_derivative() call.
    """

    def __init__(self) -> None:
        self._evaluation_counter = 0

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    def evaluation_counter(self) -> int:
        """Number of eval() and eval_derivative() calls so far."""
        return self._evaluation_counter

    @property
    def number_of_variables(self) -> Optional[int]:
        """Dimension of the search space, or None if any dimension is accepted."""
        return None

    @property
    def has_first_derivative(self) -> bool:
        return False

    def init(self) -> None:
        """One-time setup before the first evaluation."""
        pass

    @abstractmethod
    def eval(self, point: np.ndarray) -> float:
        pass

    def eval_derivative(self, point: np.ndarray) -> Tuple[float, np.ndarray]:
        """
        Value and gradient at a point.

        Raises:
            PreconditionError: If the objective is not differentiable
        """
        raise PreconditionError(f"{self.name} does not provide a first derivative")

    def __call__(self, point: np.ndarray) -> float:
        return self.eval(point)


__all__ = ["ObjectiveFunction"]
