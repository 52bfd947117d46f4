"""
Fixtures for model tests.

Provides:
- Registry isolation between tests
- Constant regression members
- Vote models: linear classifiers that always predict a fixed class
"""
from typing import Callable

import numpy as np
import pytest

from learnkit.models import ConstantModel, LinearClassifier, ModelRegistry


@pytest.fixture(autouse=True)
def isolate_registry():
    """
    Store and restore registry state around each test.

    This ensures tests don't pollute each other with registered models.
    """
    original_models = ModelRegistry._models.copy()
    original_families = {k: list(v) for k, v in ModelRegistry._families.items()}
    original_metadata = {k: v.copy() for k, v in ModelRegistry._metadata.items()}

    yield

    ModelRegistry._models = original_models
    ModelRegistry._families = {k: list(v) for k, v in original_families.items()}
    ModelRegistry._metadata = {k: v.copy() for k, v in original_metadata.items()}


@pytest.fixture
def constant_pair():
    """Two regression members returning 2.0 and 4.0."""
    return ConstantModel(2.0), ConstantModel(4.0)


@pytest.fixture
def vote_model() -> Callable[..., LinearClassifier]:
    """
    Factory for classifiers that predict the same class for every input.

    Zero weights plus a one-hot bias make argmax return predicted_class.
    """
    def make(predicted_class: int, n_classes: int = 3, input_size: int = 1) -> LinearClassifier:
        bias = np.zeros(n_classes)
        bias[predicted_class] = 1.0
        return LinearClassifier(
            input_size=input_size,
            n_classes=n_classes,
            weights=np.zeros((n_classes, input_size)),
            bias=bias,
        )

    return make
