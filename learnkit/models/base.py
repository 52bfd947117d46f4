"""
AbstractModel interface for learnkit models.

Every model maps a batch of inputs to a batch of outputs and exposes a
flat parameter vector that objective functions can optimize.

This module provides:
- OutputKind: Declared output type of a model (real vectors or class indices)
- AbstractModel: Abstract base class for all models
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Tuple

import numpy as np

from ..exceptions import InvalidArgumentError


# =============================================================================
# OUTPUT KIND
# =============================================================================

class OutputKind(Enum):
    """Declared output type of a model."""

    CONTINUOUS = "continuous"
    CLASS_INDEX = "class_index"


# =============================================================================
# BASE MODEL INTERFACE
# =============================================================================

class AbstractModel(ABC):
    """
    Abstract base class for all models.

    Batches are numpy arrays whose first axis indexes samples. Models with
    CONTINUOUS output return arrays of shape (n_samples, output_size);
    models with CLASS_INDEX output return integer arrays of shape (n_samples,).

    Subclasses must implement:
        - output_kind (property): Declared output type
        - input_shape / output_shape (properties): Per-sample shapes
        - eval(): Batch evaluation
        - parameter_vector() / set_parameter_vector(): Parameter access

    Optional overrides:
        - eval_with_state(): Return intermediate state for derivatives
        - weighted_parameter_derivative(): Backward pass w.r.t. parameters

    Example:
        >>> model = LinearModel(input_size=3, output_size=2)
        >>> outputs = model(np.ones((5, 3)))
        >>> outputs.shape
        (5, 2)
    """

    @property
    def name(self) -> str:
        """Human-readable model name."""
        return self.__class__.__name__

    # =========================================================================
    # ABSTRACT PROPERTIES (must override)
    # =========================================================================

    @property
    @abstractmethod
    def output_kind(self) -> OutputKind:
        """Declared output type of this model."""
        pass

    @property
    @abstractmethod
    def input_shape(self) -> Tuple[int, ...]:
        """Shape of a single input sample. Empty tuple if undefined."""
        pass

    @property
    @abstractmethod
    def output_shape(self) -> Tuple[int, ...]:
        """Shape of a single output sample. Empty tuple if undefined."""
        pass

    # =========================================================================
    # ABSTRACT METHODS (must implement)
    # =========================================================================

    @abstractmethod
    def eval(self, inputs: np.ndarray) -> np.ndarray:
        """
        Evaluate the model on a batch of inputs.

        Args:
            inputs: Input batch, shape (n_samples, *input_shape)

        Returns:
            Output batch, shape (n_samples, output_size) for CONTINUOUS
            models or (n_samples,) for CLASS_INDEX models
        """
        pass

    @abstractmethod
    def parameter_vector(self) -> np.ndarray:
        """Return a copy of the flat parameter vector."""
        pass

    @abstractmethod
    def set_parameter_vector(self, parameters: np.ndarray) -> None:
        """
        Replace the parameter vector.

        Raises:
            InvalidArgumentError: If the vector has the wrong size
        """
        pass

    # =========================================================================
    # OPTIONAL METHODS (can override)
    # =========================================================================

    @property
    def output_size(self) -> int:
        """Number of output dimensions (number of classes for classifiers)."""
        return int(np.prod(self.output_shape)) if self.output_shape else 0

    @property
    def number_of_parameters(self) -> int:
        """Size of the parameter vector."""
        return len(self.parameter_vector())

    @property
    def has_first_parameter_derivative(self) -> bool:
        """Whether weighted_parameter_derivative() is implemented."""
        return False

    def eval_with_state(self, inputs: np.ndarray) -> Tuple[np.ndarray, Any]:
        """
        Evaluate and return the state needed by weighted_parameter_derivative().

        The default state is None.
        """
        return self.eval(inputs), None

    def weighted_parameter_derivative(
        self,
        inputs: np.ndarray,
        outputs: np.ndarray,
        coefficients: np.ndarray,
        state: Any = None,
    ) -> np.ndarray:
        """
        Compute sum_i coefficients[i] . d outputs[i] / d parameters.

        Args:
            inputs: Input batch that produced outputs
            outputs: Output batch from eval_with_state()
            coefficients: Per-sample output weights, same shape as outputs
            state: State returned by eval_with_state()

        Returns:
            Gradient of shape (number_of_parameters,)
        """
        raise NotImplementedError(
            f"{self.name} does not provide a parameter derivative"
        )

    def __call__(self, inputs: np.ndarray) -> np.ndarray:
        return self.eval(inputs)

    # =========================================================================
    # VALIDATION HELPERS
    # =========================================================================

    def _check_parameter_size(self, parameters: np.ndarray, expected: int) -> np.ndarray:
        """Coerce parameters to a 1D float array of the expected size."""
        parameters = np.asarray(parameters, dtype=np.float64).ravel()
        if parameters.size != expected:
            raise InvalidArgumentError(
                f"{self.name} expects {expected} parameters, got {parameters.size}"
            )
        return parameters

    def _validate_input_shape(self, inputs: np.ndarray, context: str = "inputs") -> np.ndarray:
        """
        Validate that a batch matches input_shape.

        Raises:
            InvalidArgumentError: If the per-sample shape differs
        """
        inputs = np.asarray(inputs)
        expected = self.input_shape
        if expected and inputs.shape[1:] != expected:
            raise InvalidArgumentError(
                f"{context} must have per-sample shape {expected}, "
                f"got batch shape {inputs.shape}"
            )
        return inputs

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"{self.__class__.__name__}("
            f"output_kind={self.output_kind.value}, "
            f"input_shape={self.input_shape}, "
            f"output_shape={self.output_shape})"
        )


def as_batch(outputs: np.ndarray) -> np.ndarray:
    """Reshape a 1D continuous batch to (n_samples, 1)."""
    outputs = np.asarray(outputs, dtype=np.float64)
    if outputs.ndim == 1:
        return outputs.reshape(-1, 1)
    return outputs


__all__ = [
    "OutputKind",
    "AbstractModel",
    "as_batch",
]
