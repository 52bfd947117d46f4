"""ErrorFunctionConfig dataclass."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorFunctionConfig:
    """Loss, sampling and regularization settings for an ErrorFunction."""
    loss: str = "squared"
    loss_config: dict[str, Any] = field(default_factory=dict)
    use_mini_batches: bool = False
    regularizer: str | None = None
    regularizer_config: dict[str, Any] = field(default_factory=dict)
    regularization_strength: float = 0.0
    random_seed: int | None = 42

    def __post_init__(self) -> None:
        if not self.loss:
            raise ValueError("loss must be non-empty")
        if self.regularization_strength < 0:
            raise ValueError(
                f"regularization_strength must be non-negative, "
                f"got {self.regularization_strength}"
            )
        if self.regularizer is None and self.regularization_strength > 0:
            raise ValueError("regularization_strength is set but no regularizer is configured")

    def to_dict(self) -> dict[str, Any]:
        return {
            "loss": self.loss,
            "loss_config": dict(self.loss_config),
            "use_mini_batches": self.use_mini_batches,
            "regularizer": self.regularizer,
            "regularizer_config": dict(self.regularizer_config),
            "regularization_strength": self.regularization_strength,
            "random_seed": self.random_seed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ErrorFunctionConfig":
        return cls(**data)
