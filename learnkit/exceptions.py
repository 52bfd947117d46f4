"""
Exception hierarchy for learnkit.

All errors raised by models, losses, datasets and objective functions
derive from LearnKitError. Each concrete error also derives from the
matching builtin so callers can keep catching ValueError / IndexError /
RuntimeError.
"""
from __future__ import annotations


class LearnKitError(Exception):
    """Base class for all learnkit errors."""
    pass


class InvalidArgumentError(LearnKitError, ValueError):
    """Raised when an argument violates a documented contract (e.g. weight <= 0)."""
    pass


class OutOfRangeError(LearnKitError, IndexError):
    """Raised when an index (e.g. a predicted class) exceeds its valid range."""
    pass


class PreconditionError(LearnKitError, RuntimeError):
    """Raised when an object is used before it is ready (e.g. eval before init)."""
    pass


class ModelTypeError(PreconditionError):
    """Raised when model, loss and dataset contracts do not match."""
    pass


__all__ = [
    "LearnKitError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "PreconditionError",
    "ModelTypeError",
]
