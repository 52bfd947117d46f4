"""
Labeled datasets partitioned into batches.

Objective functions iterate a dataset batch by batch, or draw single batches
for stochastic evaluation. Datasets are immutable: the arrays are copied on
construction and marked read-only.

Usage:
------
    from learnkit.data import LabeledData, WeightedLabeledData

    data = LabeledData(X, y, batch_size=64)
    for batch in data:
        outputs = model(batch.inputs)

    weighted = WeightedLabeledData(X, y, weights=w, batch_size=64)
    weighted.sum_of_weights

    # From a DataFrame
    data = LabeledData.from_dataframe(df, feature_columns=["x1", "x2"], label_column="y")
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..exceptions import InvalidArgumentError, OutOfRangeError

logger = logging.getLogger(__name__)

# Default number of samples per batch
DEFAULT_BATCH_SIZE = 256


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class LabeledBatch:
    """One batch of (input, label) pairs with optional per-sample weights."""
    inputs: np.ndarray
    labels: np.ndarray
    weights: Optional[np.ndarray] = None

    def __len__(self) -> int:
        return len(self.inputs)

    @property
    def size(self) -> int:
        return len(self.inputs)

    @property
    def is_weighted(self) -> bool:
        return self.weights is not None

    @property
    def sum_of_weights(self) -> float:
        """Total weight of the batch (number of samples if unweighted)."""
        if self.weights is None:
            return float(len(self.inputs))
        return float(np.sum(self.weights))


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _read_only(array: np.ndarray) -> np.ndarray:
    array = np.array(array, copy=True)
    array.setflags(write=False)
    return array


def _partition(n_elements: int, batch_size: int) -> List[Tuple[int, int]]:
    """
    Split range(n_elements) into ceil(n / batch_size) contiguous batches.

    Batch sizes differ by at most one, so no batch is much smaller than the others.
    """
    n_batches = -(-n_elements // batch_size)
    bounds = np.linspace(0, n_elements, n_batches + 1).round().astype(int)
    return [(int(start), int(end)) for start, end in zip(bounds[:-1], bounds[1:])]


# =============================================================================
# LABELED DATA
# =============================================================================

class LabeledData:
    """
    In-memory labeled dataset partitioned into batches.

    Args:
        inputs: Array of shape (n_samples, *input_shape)
        labels: Array with n_samples rows (class indices or target vectors)
        batch_size: Maximum number of samples per batch

    Raises:
        InvalidArgumentError: If the arrays are empty or differ in length,
            or batch_size is not positive

    Example:
        >>> data = LabeledData(np.zeros((10, 2)), np.zeros(10), batch_size=4)
        >>> data.number_of_batches, [len(b) for b in data]
        (3, [3, 4, 3])
    """

    def __init__(
        self,
        inputs: np.ndarray,
        labels: np.ndarray,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        inputs = np.asarray(inputs)
        labels = np.asarray(labels)

        if batch_size <= 0:
            raise InvalidArgumentError(f"batch_size must be positive, got {batch_size}")
        if inputs.ndim == 0 or len(inputs) == 0:
            raise InvalidArgumentError("Dataset must contain at least one sample")
        if len(inputs) != len(labels):
            raise InvalidArgumentError(
                f"Got {len(inputs)} inputs but {len(labels)} labels"
            )

        self._inputs = _read_only(inputs)
        self._labels = _read_only(labels)
        self._batch_size = int(batch_size)
        self._bounds = _partition(len(inputs), self._batch_size)

    @property
    def inputs(self) -> np.ndarray:
        return self._inputs

    @property
    def labels(self) -> np.ndarray:
        return self._labels

    @property
    def weights(self) -> Optional[np.ndarray]:
        return None

    @property
    def is_weighted(self) -> bool:
        return False

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def number_of_elements(self) -> int:
        return len(self._inputs)

    @property
    def number_of_batches(self) -> int:
        return len(self._bounds)

    @property
    def input_shape(self) -> Tuple[int, ...]:
        """Shape of a single input sample."""
        return tuple(self._inputs.shape[1:])

    @property
    def sum_of_weights(self) -> float:
        return float(self.number_of_elements)

    def batch_sizes(self) -> List[int]:
        return [end - start for start, end in self._bounds]

    def batch(self, index: int) -> LabeledBatch:
        """
        Return the index-th batch.

        Raises:
            OutOfRangeError: If index is not in [0, number_of_batches)
        """
        if not 0 <= index < len(self._bounds):
            raise OutOfRangeError(
                f"Batch index {index} out of range for {len(self._bounds)} batches"
            )
        start, end = self._bounds[index]
        return self._make_batch(start, end)

    def _make_batch(self, start: int, end: int) -> LabeledBatch:
        return LabeledBatch(inputs=self._inputs[start:end], labels=self._labels[start:end])

    def __iter__(self) -> Iterator[LabeledBatch]:
        for start, end in self._bounds:
            yield self._make_batch(start, end)

    def __len__(self) -> int:
        return self.number_of_elements

    def with_weights(self, weights: np.ndarray) -> "WeightedLabeledData":
        """Attach per-sample weights, keeping the batch size."""
        return WeightedLabeledData(self._inputs, self._labels, weights, self._batch_size)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        feature_columns: Sequence[str],
        label_column: Union[str, Sequence[str]],
        batch_size: int = DEFAULT_BATCH_SIZE,
        weight_column: Optional[str] = None,
    ) -> "LabeledData":
        """
        Build a dataset from DataFrame columns.

        Args:
            df: Source DataFrame
            feature_columns: Columns forming the input vector
            label_column: Label column, or list of columns for vector targets
            batch_size: Maximum number of samples per batch
            weight_column: Optional column with per-sample weights; if given a
                WeightedLabeledData is returned

        Raises:
            InvalidArgumentError: If a column is missing
        """
        label_columns = [label_column] if isinstance(label_column, str) else list(label_column)
        required = list(feature_columns) + label_columns
        if weight_column is not None:
            required.append(weight_column)
        missing = [col for col in required if col not in df.columns]
        if missing:
            raise InvalidArgumentError(f"Missing columns: {missing[:10]}")

        inputs = df[list(feature_columns)].to_numpy(dtype=np.float64)
        if isinstance(label_column, str):
            labels = df[label_column].to_numpy()
        else:
            labels = df[label_columns].to_numpy(dtype=np.float64)

        logger.debug(
            f"Built dataset from DataFrame: {len(df)} rows, "
            f"{len(feature_columns)} features"
        )
        if weight_column is not None:
            weights = df[weight_column].to_numpy(dtype=np.float64)
            return WeightedLabeledData(inputs, labels, weights, batch_size)
        return cls(inputs, labels, batch_size)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(n_elements={self.number_of_elements}, "
            f"n_batches={self.number_of_batches}, input_shape={self.input_shape})"
        )


class WeightedLabeledData(LabeledData):
    """
    Labeled dataset with a non-negative weight per sample.

    Raises:
        InvalidArgumentError: If weights are negative, non-finite, or do not
            match the number of samples
    """

    def __init__(
        self,
        inputs: np.ndarray,
        labels: np.ndarray,
        weights: np.ndarray,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        super().__init__(inputs, labels, batch_size)
        weights = np.asarray(weights, dtype=np.float64).ravel()
        if len(weights) != self.number_of_elements:
            raise InvalidArgumentError(
                f"Got {len(weights)} weights for {self.number_of_elements} samples"
            )
        if not np.all(np.isfinite(weights)) or np.any(weights < 0):
            raise InvalidArgumentError("Sample weights must be finite and non-negative")
        self._weights = _read_only(weights)

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    @property
    def is_weighted(self) -> bool:
        return True

    @property
    def sum_of_weights(self) -> float:
        return float(np.sum(self._weights))

    def _make_batch(self, start: int, end: int) -> LabeledBatch:
        return LabeledBatch(
            inputs=self._inputs[start:end],
            labels=self._labels[start:end],
            weights=self._weights[start:end],
        )


__all__ = [
    "DEFAULT_BATCH_SIZE",
    "LabeledBatch",
    "LabeledData",
    "WeightedLabeledData",
]
