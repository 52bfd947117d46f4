"""
Models - Batch models with flat parameter vectors.

Supported Models:
- LinearModel: Affine regression f(x) = W x + b
- LinearClassifier: Argmax over affine class scores
- ConstantModel: Fixed output vector
- MeanModel: Weighted mean or weighted vote of sub-models

All models auto-register with ModelRegistry on import.

Example:
    from learnkit.models import ModelRegistry, MeanModel

    ensemble = MeanModel()
    ensemble.add_model(ModelRegistry.create("constant", config={"value": 2.0}), weight=1.0)
    ensemble.add_model(ModelRegistry.create("constant", config={"value": 4.0}), weight=3.0)
"""
from __future__ import annotations

from .base import AbstractModel, OutputKind, as_batch
from .registry import ModelRegistry, register
from .linear import LinearClassifier, LinearModel
from .constant import ConstantModel
from .mean_model import MeanModel

__all__ = [
    # Interface
    "AbstractModel",
    "OutputKind",
    "as_batch",
    # Registry
    "ModelRegistry",
    "register",
    # Models
    "LinearModel",
    "LinearClassifier",
    "ConstantModel",
    "MeanModel",
]
