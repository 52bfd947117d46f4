"""Constant model: returns the same output vector for every input."""
from __future__ import annotations

from typing import Any, Optional, Tuple

import numpy as np

from ..exceptions import InvalidArgumentError
from .base import AbstractModel, OutputKind
from .registry import register


@register(
    name="constant",
    family="constant",
    description="Outputs a fixed vector regardless of the input",
)
class ConstantModel(AbstractModel):
    """
    Model whose output is its parameter vector.

    Args:
        value: Output vector (a scalar is treated as a 1D output)
        input_size: Optional declared input dimension; () if omitted
    """

    def __init__(self, value: Any = 0.0, input_size: Optional[int] = None) -> None:
        value = np.atleast_1d(np.asarray(value, dtype=np.float64)).ravel()
        if value.size == 0:
            raise InvalidArgumentError("value must contain at least one element")
        self._value = value.copy()
        self._input_size = input_size

    @property
    def output_kind(self) -> OutputKind:
        return OutputKind.CONTINUOUS

    @property
    def input_shape(self) -> Tuple[int, ...]:
        return (self._input_size,) if self._input_size else ()

    @property
    def output_shape(self) -> Tuple[int, ...]:
        return (self._value.size,)

    @property
    def has_first_parameter_derivative(self) -> bool:
        return True

    def parameter_vector(self) -> np.ndarray:
        return self._value.copy()

    def set_parameter_vector(self, parameters: np.ndarray) -> None:
        self._value = self._check_parameter_size(parameters, self._value.size).copy()

    def eval(self, inputs: np.ndarray) -> np.ndarray:
        inputs = self._validate_input_shape(inputs)
        return np.tile(self._value, (len(inputs), 1))

    def weighted_parameter_derivative(
        self,
        inputs: np.ndarray,
        outputs: np.ndarray,
        coefficients: np.ndarray,
        state: Any = None,
    ) -> np.ndarray:
        coefficients = np.asarray(coefficients, dtype=np.float64).reshape(len(inputs), -1)
        return coefficients.sum(axis=0)


__all__ = ["ConstantModel"]
