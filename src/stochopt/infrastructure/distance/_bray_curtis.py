"""
Bray-Curtis distance over dense feature matrices.

For two vectors ``a`` and ``b``:

    d(a, b) = sum |a_i - b_i| / sum |a_i + b_i|

When the denominator is zero (for instance when ``a == -b`` everywhere, or
both vectors are zero) the distance is defined as 0 instead of NaN.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._errors import ShapeMismatchError


def bray_curtis(a: np.ndarray, b: np.ndarray) -> float:
    """
    Bray-Curtis distance between two vectors.

    Raises
    ------
    ShapeMismatchError
        If `a` and `b` differ in length.
    """
    a = np.asarray(a, dtype=np.float64).ravel()
    b = np.asarray(b, dtype=np.float64).ravel()
    if a.size != b.size:
        raise ShapeMismatchError("feature vectors", a.size, b.size)

    s1 = float(np.sum(np.abs(a - b)))
    s2 = float(np.sum(np.abs(a + b)))

    # trap division by zero
    if s2 == 0.0:
        return 0.0
    return s1 / s2


class BrayCurtisDistance:
    """
    Bray-Curtis distance between the rows of two feature matrices.

    Parameters
    ----------
    lhs : np.ndarray
        Left-hand features, shape ``(n_lhs, n_features)``.
    rhs : Optional[np.ndarray], optional
        Right-hand features, shape ``(n_rhs, n_features)``. Defaults to `lhs`.
    """

    def __init__(self, lhs: np.ndarray, rhs: Optional[np.ndarray] = None) -> None:
        self.lhs = self._as_matrix(lhs, "lhs")
        self.rhs = self.lhs if rhs is None else self._as_matrix(rhs, "rhs")
        if self.lhs.shape[1] != self.rhs.shape[1]:
            raise ShapeMismatchError("lhs vs rhs features", self.lhs.shape[1], self.rhs.shape[1])

    @staticmethod
    def _as_matrix(x: np.ndarray, what: str) -> np.ndarray:
        m = np.asarray(x, dtype=np.float64)
        if m.ndim != 2:
            raise ValueError(f"{what} must be 2-D, got shape {m.shape}")
        return m

    def compute(self, idx_a: int, idx_b: int) -> float:
        """
        Distance between row `idx_a` of `lhs` and row `idx_b` of `rhs`.
        """
        return bray_curtis(self.lhs[idx_a], self.rhs[idx_b])

    def get_distance_matrix(self) -> np.ndarray:
        """
        All pairwise distances, shape ``(n_lhs, n_rhs)``.
        """
        a = self.lhs[:, None, :]
        b = self.rhs[None, :, :]
        num = np.sum(np.abs(a - b), axis=2)
        den = np.sum(np.abs(a + b), axis=2)
        out = np.zeros_like(num)
        np.divide(num, den, out=out, where=den != 0.0)
        return out
