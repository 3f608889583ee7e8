"""
L2 (ridge) penalties.

`L2Penalty` is smooth: it contributes ``weight * v`` to the gradient and has
no proximal step. `ProximalL2Penalty` has the same value but acts through the
proximal shrink ``v <- v / (1 + w)`` after every gradient step; it is dense,
so its weight is used as configured, without learning-rate scaling.
"""

from __future__ import annotations

import numpy as np

from ..serialization._registry import register_component
from ._base import Penalty, ProximalPenalty


def _half_squared_norm(variables: np.ndarray) -> float:
    v = np.asarray(variables, dtype=np.float64)
    return 0.5 * float(np.dot(v, v))


@register_component("penalty", "l2")
class L2Penalty(Penalty):
    """
    Smooth L2 penalty ``0.5 * ||v||^2`` with gradient ``v``.
    """

    def get_penalty(self, variables: np.ndarray) -> float:
        return _half_squared_norm(variables)

    def get_penalty_gradient(self, variables: np.ndarray) -> np.ndarray:
        return np.array(variables, dtype=np.float64, copy=True)


@register_component("penalty", "proximal_l2")
class ProximalL2Penalty(ProximalPenalty):
    """
    L2 penalty applied as a proportional shrink after each step.
    """

    def get_penalty(self, variables: np.ndarray) -> float:
        return _half_squared_norm(variables)

    def update_variable_for_proximity(
        self, variables: np.ndarray, proximal_weight: float
    ) -> None:
        w = self._check_weight(proximal_weight)
        if w == 0.0:
            return
        variables /= 1.0 + w
