"""Labeled in-memory datasets partitioned into batches."""
from .dataset import DEFAULT_BATCH_SIZE, LabeledBatch, LabeledData, WeightedLabeledData

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "LabeledBatch",
    "LabeledData",
    "WeightedLabeledData",
]
