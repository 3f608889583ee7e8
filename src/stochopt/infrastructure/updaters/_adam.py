"""
Adam updater implementation.

This module provides the Adam descend updater. It maintains exponentially
decaying averages of past gradients (first moment) and past squared
gradients (second moment), and applies bias correction to both estimates.

Design notes
------------
- The bias-correction exponent is the updater's own committed step count. It
  starts at 1 after a `reset()`, so when one minimizer drives the updater
  from initialization it equals the minimizer's iteration counter plus one.
- The step count is part of the accumulator state: it is only advanced when
  `apply()` commits a step, and it is saved and restored with the moments.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

import numpy as np

from ..serialization._registry import register_component
from ._base import DescendUpdater, State


@register_component("updater", "adam")
class AdamUpdater(DescendUpdater):
    """
    Adam updater.

    Update rule
    -----------
    Let ``g_t`` be the gradient at step ``t`` and ``eta`` the step size:

        m_t = beta1 * m_{t-1} + (1 - beta1) * g_t
        v_t = beta2 * v_{t-1} + (1 - beta2) * (g_t ** 2)

        m_hat = m_t / (1 - beta1^t)
        v_hat = v_t / (1 - beta2^t)

        delta = eta * m_hat / (sqrt(v_hat) + eps)

    Parameters
    ----------
    beta1 : float, optional
        Decay of the first moment, in (0, 1). Defaults to 0.9.
    beta2 : float, optional
        Decay of the second moment, in (0, 1). Defaults to 0.999.
    epsilon : float, optional
        Numerical stability epsilon added to the denominator. Must be > 0.
        Defaults to 1e-8.

    Raises
    ------
    ValueError
        If any hyperparameter is outside its valid range.

    Notes
    -----
    - With an identically zero gradient both moments stay at zero and every
      delta is exactly zero.
    """

    def __init__(
        self, beta1: float = 0.9, beta2: float = 0.999, epsilon: float = 1e-8
    ) -> None:
        super().__init__()
        self.beta1 = float(beta1)
        self.beta2 = float(beta2)
        self.epsilon = float(epsilon)

        if not (0.0 < self.beta1 < 1.0) or not (0.0 < self.beta2 < 1.0):
            raise ValueError(f"betas must be in (0,1), got {(self.beta1, self.beta2)}")
        if self.epsilon <= 0.0:
            raise ValueError(f"epsilon must be > 0, got {self.epsilon}")

    @property
    def step_count(self) -> int:
        """
        Number of committed steps since the last reset.
        """
        t = self._state.get("t")
        return 0 if t is None else int(t)

    def _init_state(self, size: int) -> State:
        return {
            "first_moment": np.zeros(size, dtype=np.float64),
            "second_moment": np.zeros(size, dtype=np.float64),
            "t": np.array(0, dtype=np.int64),
        }

    def _compute(self, gradient: np.ndarray, step_size: float) -> Tuple[np.ndarray, State]:
        b1, b2 = self.beta1, self.beta2
        t = int(self._state["t"]) + 1

        m = b1 * self._state["first_moment"] + (1.0 - b1) * gradient
        v = b2 * self._state["second_moment"] + (1.0 - b2) * (gradient * gradient)

        # bias correction
        m_hat = m / (1.0 - b1**t)
        v_hat = v / (1.0 - b2**t)

        delta = step_size * (m_hat / (np.sqrt(v_hat) + self.epsilon))
        return delta, {
            "first_moment": m,
            "second_moment": v,
            "t": np.array(t, dtype=np.int64),
        }

    def get_config(self) -> Dict[str, Any]:
        return {"beta1": self.beta1, "beta2": self.beta2, "epsilon": self.epsilon}
