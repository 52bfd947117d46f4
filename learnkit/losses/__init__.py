"""
Losses - Per-batch loss functions.

Every loss returns the SUM of per-sample losses over a batch, optionally
weighted per sample.

Losses:
- SquaredLoss: 0.5 * ||f(x) - y||^2
- AbsoluteLoss: ||f(x) - y||_2
- CrossEntropy: Softmax log-loss on class scores
- ZeroOneLoss: Misclassification count
"""
from .base import AbstractLoss
from .regression import AbsoluteLoss, SquaredLoss
from .classification import CrossEntropy, ZeroOneLoss, softmax

LOSSES = {
    "squared": SquaredLoss,
    "absolute": AbsoluteLoss,
    "cross_entropy": CrossEntropy,
    "zero_one": ZeroOneLoss,
}

__all__ = [
    "AbstractLoss",
    "SquaredLoss",
    "AbsoluteLoss",
    "CrossEntropy",
    "ZeroOneLoss",
    "softmax",
    "LOSSES",
]
