"""
learnkit - Ensemble models and supervised objective functions.

Quick Start:
-----------
    from learnkit.data import LabeledData
    from learnkit.losses import SquaredLoss
    from learnkit.models import LinearModel
    from learnkit.objectives import ErrorFunction, TwoNormRegularizer

    data = LabeledData(inputs, labels, batch_size=32)
    error = ErrorFunction(data, LinearModel(input_size=4), SquaredLoss())
    error.set_regularizer(0.01, TwoNormRegularizer())
    error.init(seed=42)
    value, gradient = error.eval_derivative(error.propose_starting_point())
"""
from __future__ import annotations

__version__ = "0.1.0"

from .exceptions import (
    InvalidArgumentError,
    LearnKitError,
    ModelTypeError,
    OutOfRangeError,
    PreconditionError,
)

__all__ = [
    "__version__",
    "LearnKitError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "PreconditionError",
    "ModelTypeError",
]
