"""
Shared fixtures for learnkit tests.

Provides:
- Synthetic regression and 3-class classification arrays
- LabeledData / WeightedLabeledData built from them
- A linear model with fixed non-trivial parameters
"""
from typing import Tuple

import numpy as np
import pytest

from learnkit.data import LabeledData, WeightedLabeledData
from learnkit.models import LinearModel


# =============================================================================
# DATA FIXTURES - REGRESSION
# =============================================================================

@pytest.fixture
def regression_arrays() -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate a noisy linear regression problem.

    Returns:
        X: (30, 2) inputs
        y: (30, 1) targets, y = x1 - 2 x2 + 0.5 + noise
    """
    np.random.seed(42)
    X = np.random.randn(30, 2)
    y = X @ np.array([1.0, -2.0]) + 0.5 + 0.1 * np.random.randn(30)
    return X, y.reshape(-1, 1)


@pytest.fixture
def regression_data(regression_arrays) -> LabeledData:
    X, y = regression_arrays
    return LabeledData(X, y, batch_size=8)


@pytest.fixture
def sample_weights() -> np.ndarray:
    np.random.seed(7)
    return np.random.uniform(0.5, 1.5, size=30)


@pytest.fixture
def weighted_regression_data(regression_arrays, sample_weights) -> WeightedLabeledData:
    X, y = regression_arrays
    return WeightedLabeledData(X, y, sample_weights, batch_size=8)


# =============================================================================
# DATA FIXTURES - CLASSIFICATION
# =============================================================================

@pytest.fixture
def classification_arrays() -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate 3-class classification data.

    Returns:
        X: (36, 2) inputs
        y: (36,) labels in {0, 1, 2}
    """
    np.random.seed(42)
    X = np.random.randn(36, 2)
    y = np.random.randint(0, 3, size=36)
    return X, y


@pytest.fixture
def classification_data(classification_arrays) -> LabeledData:
    X, y = classification_arrays
    return LabeledData(X, y, batch_size=10)


# =============================================================================
# MODEL FIXTURES
# =============================================================================

@pytest.fixture
def linear_model() -> LinearModel:
    """LinearModel(2 -> 1) with parameters W = [0.3, -0.7], b = 0.1."""
    return LinearModel(input_size=2, output_size=1, weights=[[0.3, -0.7]], bias=[0.1])
