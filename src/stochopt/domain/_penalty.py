"""
Regularization penalty contracts.

Penalties are polymorphic over two capability axes:

- proximal: the penalty applies a correction to the variables after a
  gradient step (`update_variable_for_proximity`);
- sparse: the penalty shrinks small values exactly to zero, and its proximal
  weight must be scaled by the current learning rate.

A penalty may be neither, proximal but dense, or proximal and sparse. The
capabilities are exposed through `is_proximal()` / `is_sparse()` so a
minimizer can query them once at configuration time.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class IPenalty(Protocol):
    """
    Regularization term contributing to the cost and its gradient.
    """

    def get_penalty(self, variables: np.ndarray) -> float:
        """
        Return the unweighted penalty value at `variables`.
        """
        ...

    def get_penalty_gradient(self, variables: np.ndarray) -> np.ndarray:
        """
        Return the unweighted gradient contribution at `variables`.

        Proximal penalties return zeros; their effect is applied by the
        proximal step instead.
        """
        ...

    def is_proximal(self) -> bool:
        ...

    def is_sparse(self) -> bool:
        ...


@runtime_checkable
class IProximalPenalty(IPenalty, Protocol):
    """
    Penalty that corrects the variables after a gradient step.
    """

    def update_variable_for_proximity(
        self, variables: np.ndarray, proximal_weight: float
    ) -> None:
        """
        Apply the proximal operator to `variables` in place.

        Parameters
        ----------
        variables : np.ndarray
            Variable vector, modified in place.
        proximal_weight : float
            Effective non-negative weight. A zero weight leaves `variables`
            unchanged.
        """
        ...
