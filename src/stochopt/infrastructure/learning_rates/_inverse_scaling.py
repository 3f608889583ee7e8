"""
Decaying learning-rate schedules.

All schedules in this module are instances of the inverse-scaling family

    eta(k) = eta0 / (intercept + slope * k) ** exponent

which is monotonically non-increasing in `k` for non-negative `slope` and
`exponent`. The inverse-time and inverse square-root schedules fix the
exponent to 1 and 0.5 respectively.
"""

from __future__ import annotations

import math
from typing import Any, Dict

from ..serialization._registry import register_component


@register_component("learning_rate", "inverse_scaling")
class InverseScalingLearningRate:
    """
    Inverse-scaling learning-rate schedule.

    Parameters
    ----------
    initial_learning_rate : float
        Learning rate at iteration 0 when `intercept == 1`. Must be > 0.
    intercept : float, optional
        Constant term of the denominator base. Must be > 0. Defaults to 1.0.
    slope : float, optional
        Coefficient of the iteration counter. Must be >= 0. Defaults to 1.0.
    exponent : float, optional
        Power applied to the denominator base. Must be >= 0. Defaults to 1.0.

    Raises
    ------
    ValueError
        If any hyperparameter is outside its valid range.
    """

    def __init__(
        self,
        initial_learning_rate: float = 0.01,
        *,
        intercept: float = 1.0,
        slope: float = 1.0,
        exponent: float = 1.0,
    ) -> None:
        self.initial_learning_rate = float(initial_learning_rate)
        self.intercept = float(intercept)
        self.slope = float(slope)
        self.exponent = float(exponent)

        if self.initial_learning_rate <= 0.0:
            raise ValueError(
                f"initial_learning_rate must be > 0, got {self.initial_learning_rate}"
            )
        if self.intercept <= 0.0:
            raise ValueError(f"intercept must be > 0, got {self.intercept}")
        if self.slope < 0.0:
            raise ValueError(f"slope must be >= 0, got {self.slope}")
        if self.exponent < 0.0:
            raise ValueError(f"exponent must be >= 0, got {self.exponent}")

    def get_learning_rate(self, iteration: int) -> float:
        """
        Return `eta0 / (intercept + slope * iteration) ** exponent`.

        Raises
        ------
        ValueError
            If `iteration < 0`.
        """
        if iteration < 0:
            raise ValueError(f"iteration must be >= 0, got {iteration}")
        base = self.intercept + self.slope * float(iteration)
        return self.initial_learning_rate / math.pow(base, self.exponent)

    def get_config(self) -> Dict[str, Any]:
        return {
            "initial_learning_rate": self.initial_learning_rate,
            "intercept": self.intercept,
            "slope": self.slope,
            "exponent": self.exponent,
        }

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "InverseScalingLearningRate":
        return cls(**cfg)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(initial_learning_rate="
            f"{self.initial_learning_rate}, intercept={self.intercept}, "
            f"slope={self.slope}, exponent={self.exponent})"
        )


@register_component("learning_rate", "inverse_time")
class InverseTimeLearningRate(InverseScalingLearningRate):
    """
    Inverse-time decay: `eta0 / (1 + decay * k)`.

    Parameters
    ----------
    initial_learning_rate : float
        Learning rate at iteration 0. Must be > 0.
    decay : float
        Decay rate. Must be > 0.
    """

    def __init__(self, initial_learning_rate: float = 0.01, decay: float = 1e-3) -> None:
        if float(decay) <= 0.0:
            raise ValueError(f"decay must be > 0, got {decay}")
        super().__init__(
            initial_learning_rate, intercept=1.0, slope=decay, exponent=1.0
        )
        self.decay = float(decay)

    def get_config(self) -> Dict[str, Any]:
        return {"initial_learning_rate": self.initial_learning_rate, "decay": self.decay}


@register_component("learning_rate", "inverse_sqrt")
class InverseSqrtLearningRate(InverseScalingLearningRate):
    """
    Inverse square-root decay: `eta0 / sqrt(1 + decay * k)`.
    """

    def __init__(self, initial_learning_rate: float = 0.01, decay: float = 1.0) -> None:
        if float(decay) <= 0.0:
            raise ValueError(f"decay must be > 0, got {decay}")
        super().__init__(
            initial_learning_rate, intercept=1.0, slope=decay, exponent=0.5
        )
        self.decay = float(decay)

    def get_config(self) -> Dict[str, Any]:
        return {"initial_learning_rate": self.initial_learning_rate, "decay": self.decay}
