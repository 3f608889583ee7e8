"""
Constant learning-rate schedule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..serialization._registry import register_component


@register_component("learning_rate", "constant")
@dataclass
class ConstLearningRate:
    """
    Learning-rate schedule returning the same value at every iteration.

    Parameters
    ----------
    learning_rate : float
        Positive learning rate.
    """

    learning_rate: float = 0.01

    def __post_init__(self) -> None:
        self.learning_rate = float(self.learning_rate)
        if self.learning_rate <= 0.0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")

    def get_learning_rate(self, iteration: int) -> float:
        if iteration < 0:
            raise ValueError(f"iteration must be >= 0, got {iteration}")
        return self.learning_rate

    def get_config(self) -> Dict[str, Any]:
        return {"learning_rate": self.learning_rate}

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "ConstLearningRate":
        return cls(**cfg)
