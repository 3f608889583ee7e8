from __future__ import annotations

from typing import Any, Dict

import numpy as np


class Penalty:
    """
    Base class for regularization penalties.

    Subclasses override `get_penalty` / `get_penalty_gradient` and, for
    proximal penalties, derive from `ProximalPenalty`.
    """

    def get_penalty(self, variables: np.ndarray) -> float:
        raise NotImplementedError

    def get_penalty_gradient(self, variables: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def is_proximal(self) -> bool:
        return False

    def is_sparse(self) -> bool:
        return False

    def get_config(self) -> Dict[str, Any]:
        return {}

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Penalty":
        return cls(**cfg)

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v}" for k, v in self.get_config().items())
        return f"{self.__class__.__name__}({args})"


class ProximalPenalty(Penalty):
    """
    Penalty applied through a proximal operator after each gradient step.

    The gradient contribution is zero: the penalty acts only through
    `update_variable_for_proximity`.
    """

    def get_penalty_gradient(self, variables: np.ndarray) -> np.ndarray:
        return np.zeros_like(np.asarray(variables, dtype=np.float64))

    def is_proximal(self) -> bool:
        return True

    def update_variable_for_proximity(
        self, variables: np.ndarray, proximal_weight: float
    ) -> None:
        raise NotImplementedError

    @staticmethod
    def _check_weight(proximal_weight: float) -> float:
        w = float(proximal_weight)
        if not w >= 0.0:
            raise ValueError(f"proximal_weight must be >= 0, got {proximal_weight}")
        return w


class SparsePenalty(ProximalPenalty):
    """
    Proximal penalty that shrinks small values exactly to zero.

    Its proximal weight must be scaled by the current learning rate, so a
    minimizer using it requires a learning-rate schedule.
    """

    def is_sparse(self) -> bool:
        return True


def soft_threshold(variables: np.ndarray, threshold: float) -> None:
    """
    In-place soft-thresholding: ``sign(v) * max(|v| - threshold, 0)``.

    A zero threshold leaves every entry bit-for-bit unchanged.
    """
    if threshold == 0.0:
        return
    keep = np.abs(variables) > threshold
    variables[...] = np.where(keep, variables - np.sign(variables) * threshold, 0.0)
