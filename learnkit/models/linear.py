"""
Linear models: affine regression and argmax classification.

LinearModel computes f(x) = W x + b for a batch of row vectors and provides
the parameter derivative used by gradient-based objective functions.
LinearClassifier wraps a LinearModel and returns the index of the largest
decision value.
"""
from __future__ import annotations

from typing import Any, Optional, Tuple

import numpy as np

from ..exceptions import InvalidArgumentError
from .base import AbstractModel, OutputKind
from .registry import register


@register(
    name="linear",
    family="linear",
    description="Affine model f(x) = W x + b",
    aliases=["linear_model"],
)
class LinearModel(AbstractModel):
    """
    Affine model with weight matrix W (output_size x input_size) and optional offset b.

    The parameter vector is W in row-major order followed by b.

    Example:
        >>> model = LinearModel(input_size=2, output_size=1)
        >>> model.set_parameter_vector(np.array([1.0, 2.0, 0.5]))
        >>> model(np.array([[1.0, 1.0]]))
        array([[3.5]])
    """

    def __init__(
        self,
        input_size: int,
        output_size: int = 1,
        offset: bool = True,
        weights: Optional[Any] = None,
        bias: Optional[Any] = None,
    ) -> None:
        if input_size <= 0:
            raise InvalidArgumentError(f"input_size must be positive, got {input_size}")
        if output_size <= 0:
            raise InvalidArgumentError(f"output_size must be positive, got {output_size}")

        self._input_size = int(input_size)
        self._output_size = int(output_size)
        self._offset = bool(offset)
        self._weights = np.zeros((self._output_size, self._input_size))
        self._bias = np.zeros(self._output_size)

        if weights is not None:
            weights = np.asarray(weights, dtype=np.float64)
            if weights.shape != self._weights.shape:
                raise InvalidArgumentError(
                    f"weights must have shape {self._weights.shape}, got {weights.shape}"
                )
            self._weights = weights.copy()
        if bias is not None:
            if not self._offset:
                raise InvalidArgumentError("bias given for a model without offset")
            bias = np.asarray(bias, dtype=np.float64).ravel()
            if bias.shape != self._bias.shape:
                raise InvalidArgumentError(
                    f"bias must have shape {self._bias.shape}, got {bias.shape}"
                )
            self._bias = bias.copy()

    @property
    def output_kind(self) -> OutputKind:
        return OutputKind.CONTINUOUS

    @property
    def input_shape(self) -> Tuple[int, ...]:
        return (self._input_size,)

    @property
    def output_shape(self) -> Tuple[int, ...]:
        return (self._output_size,)

    @property
    def has_offset(self) -> bool:
        return self._offset

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    @property
    def bias(self) -> np.ndarray:
        return self._bias.copy()

    @property
    def has_first_parameter_derivative(self) -> bool:
        return True

    @property
    def number_of_parameters(self) -> int:
        return self._weights.size + (self._output_size if self._offset else 0)

    def parameter_vector(self) -> np.ndarray:
        if self._offset:
            return np.concatenate([self._weights.ravel(), self._bias])
        return self._weights.ravel().copy()

    def set_parameter_vector(self, parameters: np.ndarray) -> None:
        parameters = self._check_parameter_size(parameters, self.number_of_parameters)
        n_weights = self._weights.size
        self._weights = parameters[:n_weights].reshape(self._output_size, self._input_size).copy()
        if self._offset:
            self._bias = parameters[n_weights:].copy()

    def eval(self, inputs: np.ndarray) -> np.ndarray:
        inputs = self._validate_input_shape(inputs)
        outputs = np.asarray(inputs, dtype=np.float64) @ self._weights.T
        if self._offset:
            outputs += self._bias
        return outputs

    def weighted_parameter_derivative(
        self,
        inputs: np.ndarray,
        outputs: np.ndarray,
        coefficients: np.ndarray,
        state: Any = None,
    ) -> np.ndarray:
        inputs = np.asarray(inputs, dtype=np.float64)
        coefficients = np.asarray(coefficients, dtype=np.float64).reshape(len(inputs), -1)
        weight_gradient = coefficients.T @ inputs
        if self._offset:
            return np.concatenate([weight_gradient.ravel(), coefficients.sum(axis=0)])
        return weight_gradient.ravel()


@register(
    name="linear_classifier",
    family="linear",
    description="Argmax over the outputs of a linear model",
)
class LinearClassifier(AbstractModel):
    """
    Classifier returning argmax_c (W x + b)_c.

    Outputs are class indices in [0, n_classes). The parameters are those of
    the underlying LinearModel. Class outputs are not differentiable.
    """

    def __init__(
        self,
        input_size: int,
        n_classes: int = 2,
        offset: bool = True,
        weights: Optional[Any] = None,
        bias: Optional[Any] = None,
    ) -> None:
        if n_classes < 2:
            raise InvalidArgumentError(f"n_classes must be >= 2, got {n_classes}")
        self._decision = LinearModel(
            input_size=input_size,
            output_size=n_classes,
            offset=offset,
            weights=weights,
            bias=bias,
        )

    @property
    def output_kind(self) -> OutputKind:
        return OutputKind.CLASS_INDEX

    @property
    def input_shape(self) -> Tuple[int, ...]:
        return self._decision.input_shape

    @property
    def output_shape(self) -> Tuple[int, ...]:
        return self._decision.output_shape

    @property
    def decision_function(self) -> LinearModel:
        """The underlying linear model producing per-class scores."""
        return self._decision

    def parameter_vector(self) -> np.ndarray:
        return self._decision.parameter_vector()

    def set_parameter_vector(self, parameters: np.ndarray) -> None:
        self._decision.set_parameter_vector(parameters)

    def eval(self, inputs: np.ndarray) -> np.ndarray:
        return np.argmax(self._decision.eval(inputs), axis=1).astype(np.int64)


__all__ = ["LinearModel", "LinearClassifier"]
