"""
Objectives - Scalar functions of a parameter vector.

Components:
- ObjectiveFunction: Abstract interface
- ErrorFunction: Mean supervised loss of a model on labeled data
- FullDatasetStrategy / WeightedDatasetStrategy / MiniBatchStrategy:
  How ErrorFunction selects and aggregates samples
- TwoNormRegularizer / OneNormRegularizer: Parameter penalties
- estimate_derivative: Central finite differences
"""
from .base import ObjectiveFunction
from .strategies import (
    EvaluationStrategy,
    FullDatasetStrategy,
    MiniBatchStrategy,
    WeightedDatasetStrategy,
)
from .error_function import ErrorFunction
from .regularizers import REGULARIZERS, OneNormRegularizer, TwoNormRegularizer
from .derivative import estimate_derivative

__all__ = [
    "ObjectiveFunction",
    "EvaluationStrategy",
    "FullDatasetStrategy",
    "WeightedDatasetStrategy",
    "MiniBatchStrategy",
    "ErrorFunction",
    "TwoNormRegularizer",
    "OneNormRegularizer",
    "REGULARIZERS",
    "estimate_derivative",
]
