"""
Sparsity-inducing penalties: L1 and elastic net.
"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np

from ..serialization._registry import register_component
from ._base import SparsePenalty, soft_threshold


@register_component("penalty", "l1")
class L1Penalty(SparsePenalty):
    """
    L1 (lasso) penalty ``||v||_1``.

    The proximal operator soft-thresholds every entry toward zero by the
    effective weight, clipping entries whose magnitude does not exceed it.
    """

    def get_penalty(self, variables: np.ndarray) -> float:
        return float(np.sum(np.abs(np.asarray(variables, dtype=np.float64))))

    def update_variable_for_proximity(
        self, variables: np.ndarray, proximal_weight: float
    ) -> None:
        soft_threshold(variables, self._check_weight(proximal_weight))


@register_component("penalty", "elastic_net")
class ElasticNetPenalty(SparsePenalty):
    """
    Elastic-net penalty.

    Value:

        l1_ratio * ||v||_1 + (1 - l1_ratio) * 0.5 * ||v||^2

    Proximal operator for effective weight ``w``: soft-threshold by
    ``l1_ratio * w``, then shrink by ``1 / (1 + (1 - l1_ratio) * w)``.

    Parameters
    ----------
    l1_ratio : float, optional
        Share of the L1 term, in (0, 1]. Defaults to 0.5.
    """

    def __init__(self, l1_ratio: float = 0.5) -> None:
        self.l1_ratio = float(l1_ratio)
        if not (0.0 < self.l1_ratio <= 1.0):
            raise ValueError(f"l1_ratio must be in (0,1], got {self.l1_ratio}")

    def get_penalty(self, variables: np.ndarray) -> float:
        v = np.asarray(variables, dtype=np.float64)
        l1 = float(np.sum(np.abs(v)))
        l2 = 0.5 * float(np.dot(v, v))
        return self.l1_ratio * l1 + (1.0 - self.l1_ratio) * l2

    def update_variable_for_proximity(
        self, variables: np.ndarray, proximal_weight: float
    ) -> None:
        w = self._check_weight(proximal_weight)
        if w == 0.0:
            return
        soft_threshold(variables, self.l1_ratio * w)
        ridge = (1.0 - self.l1_ratio) * w
        if ridge > 0.0:
            variables /= 1.0 + ridge

    def get_config(self) -> Dict[str, Any]:
        return {"l1_ratio": self.l1_ratio}
