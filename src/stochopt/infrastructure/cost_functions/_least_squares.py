"""
Dense least-squares cost function with mini-batch sampling.

The cost is the mean squared residual of a linear model over the whole data
set,

    f(w) = 1 / (2n) * ||X w - y||^2,

and the gradient is evaluated on the current mini-batch ``B``:

    grad f_B(w) = 1 / |B| * X_B^T (X_B w - y_B).

Outside a pass (before `begin_sample()` or after `next_sample()` returned
False) the gradient is evaluated on the full data set.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


class LeastSquaresCostFunction:
    """
    Least-squares regression cost over NumPy arrays.

    Parameters
    ----------
    features : np.ndarray
        Design matrix of shape ``(n_samples, n_features)``.
    labels : np.ndarray
        Targets of shape ``(n_samples,)``.
    batch_size : Optional[int], optional
        Mini-batch size. None (default) uses the full data set as a single
        batch.
    shuffle : bool, optional
        Whether to shuffle sample order at the start of each pass.
        Defaults to True.
    seed : Optional[int], optional
        Seed of the shuffling generator.
    initial_variables : Optional[np.ndarray], optional
        Starting weights. Defaults to zeros.

    Raises
    ------
    ValueError
        If shapes are inconsistent or `batch_size < 1`.
    """

    def __init__(
        self,
        features: np.ndarray,
        labels: np.ndarray,
        *,
        batch_size: Optional[int] = None,
        shuffle: bool = True,
        seed: Optional[int] = None,
        initial_variables: Optional[np.ndarray] = None,
    ) -> None:
        x = np.asarray(features, dtype=np.float64)
        y = np.asarray(labels, dtype=np.float64)
        if x.ndim != 2:
            raise ValueError(f"features must be 2-D, got shape {x.shape}")
        if y.shape != (x.shape[0],):
            raise ValueError(
                f"labels must have shape ({x.shape[0]},), got {y.shape}"
            )
        if x.shape[0] == 0:
            raise ValueError("features must contain at least one sample")

        n = x.shape[0]
        if batch_size is None:
            batch_size = n
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")

        self._x = x
        self._y = y
        self._batch_size = int(min(batch_size, n))
        self._shuffle = bool(shuffle)
        self._rng = np.random.default_rng(seed)

        if initial_variables is None:
            self._w = np.zeros(x.shape[1], dtype=np.float64)
        else:
            w0 = np.array(initial_variables, dtype=np.float64, copy=True)
            if w0.shape != (x.shape[1],):
                raise ValueError(
                    f"initial_variables must have shape ({x.shape[1]},), got {w0.shape}"
                )
            self._w = w0

        self._order = np.arange(n)
        self._cursor = n
        self._batch: Optional[np.ndarray] = None

    @property
    def num_samples(self) -> int:
        return int(self._x.shape[0])

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def get_variables(self) -> np.ndarray:
        return self._w

    def get_cost(self) -> float:
        r = self._x @ self._w - self._y
        return 0.5 * float(np.dot(r, r)) / self.num_samples

    def get_gradient(self, variables: np.ndarray) -> np.ndarray:
        w = np.asarray(variables, dtype=np.float64)
        if self._batch is None:
            xb, yb = self._x, self._y
        else:
            xb, yb = self._x[self._batch], self._y[self._batch]
        return xb.T @ (xb @ w - yb) / xb.shape[0]

    def begin_sample(self) -> None:
        n = self.num_samples
        self._order = self._rng.permutation(n) if self._shuffle else np.arange(n)
        self._cursor = 0
        self._batch = None

    def next_sample(self) -> bool:
        n = self.num_samples
        if self._cursor >= n:
            self._batch = None
            return False
        stop = min(self._cursor + self._batch_size, n)
        self._batch = self._order[self._cursor : stop]
        self._cursor = stop
        return True

    def is_true_minibatch(self) -> bool:
        return self._batch_size < self.num_samples
