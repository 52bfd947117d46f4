"""
Tests for LabeledData and WeightedLabeledData.

Tests cover:
- Batch partitioning and iteration
- Immutability
- Input validation
- DataFrame construction
"""
import numpy as np
import pandas as pd
import pytest

from learnkit.data import LabeledBatch, LabeledData, WeightedLabeledData
from learnkit.exceptions import InvalidArgumentError, OutOfRangeError


@pytest.fixture
def small_arrays():
    X = np.arange(20, dtype=float).reshape(10, 2)
    y = np.arange(10)
    return X, y


# =============================================================================
# PARTITION TESTS
# =============================================================================

class TestBatchPartition:
    """Tests for splitting samples into batches."""

    def test_batch_sizes_are_balanced(self, small_arrays):
        """10 samples with batch_size=4 give 3 batches of sizes 3, 4, 3."""
        data = LabeledData(*small_arrays, batch_size=4)

        assert data.number_of_batches == 3
        assert data.batch_sizes() == [3, 4, 3]
        assert [len(batch) for batch in data] == [3, 4, 3]

    def test_exact_division(self, small_arrays):
        data = LabeledData(*small_arrays, batch_size=5)
        assert data.batch_sizes() == [5, 5]

    def test_batch_larger_than_dataset(self, small_arrays):
        data = LabeledData(*small_arrays, batch_size=100)
        assert data.number_of_batches == 1
        assert len(data.batch(0)) == 10

    def test_iteration_covers_all_samples_in_order(self, small_arrays):
        X, y = small_arrays
        data = LabeledData(X, y, batch_size=3)

        np.testing.assert_array_equal(np.concatenate([b.inputs for b in data]), X)
        np.testing.assert_array_equal(np.concatenate([b.labels for b in data]), y)

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_batch_index_out_of_range(self, small_arrays, index):
        data = LabeledData(*small_arrays, batch_size=4)
        with pytest.raises(OutOfRangeError):
            data.batch(index)


# =============================================================================
# PROPERTY TESTS
# =============================================================================

class TestLabeledData:
    """Tests for LabeledData properties and validation."""

    def test_properties(self, small_arrays):
        data = LabeledData(*small_arrays, batch_size=4)

        assert data.number_of_elements == 10
        assert len(data) == 10
        assert data.input_shape == (2,)
        assert data.is_weighted is False
        assert data.weights is None
        assert data.sum_of_weights == 10.0

    def test_arrays_are_read_only(self, small_arrays):
        data = LabeledData(*small_arrays)
        with pytest.raises(ValueError):
            data.inputs[0, 0] = 100.0
        with pytest.raises(ValueError):
            data.batch(0).labels[0] = 5

    def test_source_arrays_are_copied(self, small_arrays):
        X, y = small_arrays
        data = LabeledData(X, y)
        X[0, 0] = 100.0
        assert data.inputs[0, 0] == 0.0

    def test_length_mismatch_raises(self):
        with pytest.raises(InvalidArgumentError, match="labels"):
            LabeledData(np.zeros((5, 2)), np.zeros(4))

    def test_empty_raises(self):
        with pytest.raises(InvalidArgumentError, match="at least one"):
            LabeledData(np.zeros((0, 2)), np.zeros(0))

    def test_non_positive_batch_size_raises(self, small_arrays):
        with pytest.raises(InvalidArgumentError, match="batch_size"):
            LabeledData(*small_arrays, batch_size=0)

    def test_unweighted_batch(self, small_arrays):
        batch = LabeledData(*small_arrays).batch(0)
        assert isinstance(batch, LabeledBatch)
        assert batch.is_weighted is False
        assert batch.sum_of_weights == 10.0


# =============================================================================
# WEIGHTED DATA TESTS
# =============================================================================

class TestWeightedLabeledData:
    """Tests for per-sample weights."""

    def test_batches_carry_weights(self, small_arrays):
        weights = np.linspace(0.1, 1.0, 10)
        data = WeightedLabeledData(*small_arrays, weights=weights, batch_size=4)

        assert data.is_weighted is True
        assert data.sum_of_weights == pytest.approx(weights.sum())
        np.testing.assert_array_equal(np.concatenate([b.weights for b in data]), weights)
        assert data.batch(1).sum_of_weights == pytest.approx(weights[3:7].sum())

    def test_with_weights(self, small_arrays):
        data = LabeledData(*small_arrays, batch_size=4).with_weights(np.ones(10))

        assert isinstance(data, WeightedLabeledData)
        assert data.batch_size == 4

    def test_negative_weights_raise(self, small_arrays):
        weights = np.ones(10)
        weights[3] = -1.0
        with pytest.raises(InvalidArgumentError, match="non-negative"):
            WeightedLabeledData(*small_arrays, weights=weights)

    def test_weight_count_mismatch_raises(self, small_arrays):
        with pytest.raises(InvalidArgumentError, match="weights"):
            WeightedLabeledData(*small_arrays, weights=np.ones(9))


# =============================================================================
# DATAFRAME TESTS
# =============================================================================

class TestFromDataFrame:
    """Tests for building datasets from pandas DataFrames."""

    @pytest.fixture
    def df(self):
        np.random.seed(42)
        return pd.DataFrame({
            "x1": np.random.randn(12),
            "x2": np.random.randn(12),
            "label": np.random.randint(0, 3, 12),
            "target_a": np.random.randn(12),
            "target_b": np.random.randn(12),
            "weight": np.random.uniform(0.5, 1.5, 12),
        })

    def test_scalar_labels(self, df):
        data = LabeledData.from_dataframe(df, ["x1", "x2"], "label", batch_size=5)

        assert data.input_shape == (2,)
        assert data.number_of_batches == 3
        np.testing.assert_array_equal(data.labels, df["label"].to_numpy())

    def test_vector_labels(self, df):
        data = LabeledData.from_dataframe(df, ["x1", "x2"], ["target_a", "target_b"])
        assert data.labels.shape == (12, 2)

    def test_weight_column(self, df):
        data = LabeledData.from_dataframe(df, ["x1"], "label", weight_column="weight")

        assert isinstance(data, WeightedLabeledData)
        np.testing.assert_allclose(data.weights, df["weight"].to_numpy())

    def test_missing_column_raises(self, df):
        with pytest.raises(InvalidArgumentError, match="Missing columns"):
            LabeledData.from_dataframe(df, ["x1", "x3"], "label")
