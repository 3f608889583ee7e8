"""
Momentum updaters.

Both updaters keep a velocity buffer shaped like the gradient:

    v <- mu * v + eta * g

Standard momentum applies the velocity directly; Nesterov momentum applies the
look-ahead ``mu * v + eta * g``. Starting from a zero velocity, a zero step
size or a zero gradient keeps the velocity (and the delta) at zero.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

import numpy as np

from ..serialization._registry import register_component
from ._base import DescendUpdater, State


@register_component("updater", "momentum")
class MomentumUpdater(DescendUpdater):
    """
    Gradient descent with classical momentum.

    Parameters
    ----------
    momentum : float, optional
        Velocity decay ``mu`` in [0, 1). Defaults to 0.9.

    Raises
    ------
    ValueError
        If ``momentum`` is outside [0, 1).
    """

    def __init__(self, momentum: float = 0.9) -> None:
        super().__init__()
        self.momentum = float(momentum)
        if not (0.0 <= self.momentum < 1.0):
            raise ValueError(f"momentum must be in [0,1), got {self.momentum}")

    def _init_state(self, size: int) -> State:
        return {"velocity": np.zeros(size, dtype=np.float64)}

    def _velocity(self, gradient: np.ndarray, step_size: float) -> np.ndarray:
        return self.momentum * self._state["velocity"] + step_size * gradient

    def _compute(self, gradient: np.ndarray, step_size: float) -> Tuple[np.ndarray, State]:
        v = self._velocity(gradient, step_size)
        return v.copy(), {"velocity": v}

    def get_config(self) -> Dict[str, Any]:
        return {"momentum": self.momentum}


@register_component("updater", "nesterov")
class NesterovMomentumUpdater(MomentumUpdater):
    """
    Gradient descent with Nesterov momentum.

    Update rule
    -----------
        v <- mu * v + eta * g
        delta = mu * v + eta * g
    """

    def _compute(self, gradient: np.ndarray, step_size: float) -> Tuple[np.ndarray, State]:
        v = self._velocity(gradient, step_size)
        delta = self.momentum * v + step_size * gradient
        return delta, {"velocity": v}
