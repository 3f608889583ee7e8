"""
Domain-level descend-updater contract for stochopt.

This module defines the `IDescendUpdater` protocol, which specifies the
minimal interface required for gradient-transformation strategies (plain
gradient descent, momentum, adaptive methods).

Notes
-----
- Domain contracts are backend-agnostic and do not depend on infrastructure
  implementations.
- An updater turns a raw gradient and a step size into a delta and then
  applies it. The two halves are separate so that everything that can fail
  is checked before the variable vector is touched.
- Sign convention: the delta is subtracted from the variables.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class IDescendUpdater(Protocol):
    """
    Descend updater interface contract.

    Required methods
    ----------------
    - `compute_update(gradient, step_size)` computes and stores a pending
      delta without mutating anything outside the updater.
    - `apply(variables)` commits the pending delta into `variables` in place.
    - `reset()` drops accumulated state so the updater can be reused.
    """

    def compute_update(self, gradient: np.ndarray, step_size: float) -> np.ndarray:
        """
        Compute the delta for one step.

        Implementations lazily size their accumulators on the first call and
        must reject any later gradient of a different length.

        Parameters
        ----------
        gradient : np.ndarray
            Raw gradient vector.
        step_size : float
            Effective step size (base step times learning rate).

        Returns
        -------
        np.ndarray
            The pending delta.
        """
        ...

    def apply(self, variables: np.ndarray) -> None:
        """
        Subtract the pending delta from `variables` in place.

        Must not be called before `compute_update()` for the same step.
        """
        ...

    def reset(self) -> None:
        """
        Drop accumulator state and any pending delta.
        """
        ...
