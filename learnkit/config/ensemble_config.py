"""EnsembleConfig dataclass describing a MeanModel and its members."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

VALID_OUTPUT_KINDS = ("continuous", "class_index")


@dataclass
class MemberConfig:
    """One ensemble member: a registered model name, its weight and constructor config."""
    name: str
    weight: float = 1.0
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Member name must be non-empty")
        if not self.weight > 0:
            raise ValueError(f"Member weight must be positive, got {self.weight}")
        self.weight = float(self.weight)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "weight": self.weight, "config": dict(self.config)}


@dataclass
class EnsembleConfig:
    """Configuration for a MeanModel."""
    output_kind: str = "continuous"
    output_size: int | None = None
    members: list[MemberConfig] = field(default_factory=list)
    parallel: bool = False
    n_workers: int = 4

    def __post_init__(self) -> None:
        """Validate and convert configuration values."""
        if self.output_kind not in VALID_OUTPUT_KINDS:
            raise ValueError(
                f"output_kind must be one of {VALID_OUTPUT_KINDS}, got {self.output_kind}"
            )
        if self.output_size is not None and self.output_size < 0:
            raise ValueError(f"output_size must be non-negative, got {self.output_size}")
        if self.output_kind == "class_index" and not self.output_size:
            raise ValueError("output_size (number of classes) is required for class_index ensembles")
        if self.n_workers <= 0:
            raise ValueError(f"n_workers must be positive, got {self.n_workers}")
        self.members = [
            m if isinstance(m, MemberConfig) else MemberConfig(**m)
            for m in self.members
        ]

    @property
    def total_weight(self) -> float:
        return sum(m.weight for m in self.members)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "output_kind": self.output_kind,
            "output_size": self.output_size,
            "members": [m.to_dict() for m in self.members],
            "parallel": self.parallel,
            "n_workers": self.n_workers,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnsembleConfig":
        """Create EnsembleConfig from dictionary."""
        return cls(**data)
