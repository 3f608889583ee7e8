"""
Domain-level cost-function contracts for stochopt.

This module defines the protocols a cost function must satisfy to be driven
by the first-order minimizers. The optimization core treats gradient
computation as an opaque capability: it only asks for the current variable
vector, the scalar cost and the gradient vector.

Notes
-----
- Domain contracts are structural (duck-typed); any object exposing the
  required methods can be minimized.
- The variable vector returned by `get_variables()` must be a mutable view
  owned by the cost function. Minimizers update it in place.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class IFirstOrderCostFunction(Protocol):
    """
    Cost function supplying a value and a gradient for a variable vector.

    Required methods
    ----------------
    - `get_variables()` returns the mutable variable vector.
    - `get_gradient(variables)` returns a fresh gradient vector of the same
      length as `variables`.
    - `get_cost()` returns the scalar cost at the current variables.
    """

    def get_variables(self) -> np.ndarray:
        """
        Return the mutable variable vector.

        Returns
        -------
        np.ndarray
            One-dimensional float array. Writes into it change the cost
            function's parameters.
        """
        ...

    def get_gradient(self, variables: np.ndarray) -> np.ndarray:
        """
        Return the gradient at `variables`.

        Parameters
        ----------
        variables : np.ndarray
            The variable vector previously returned by `get_variables()`.

        Returns
        -------
        np.ndarray
            A new array with the same length as `variables`.
        """
        ...

    def get_cost(self) -> float:
        """
        Return the scalar cost at the current variables.
        """
        ...


@runtime_checkable
class IFirstOrderStochasticCostFunction(IFirstOrderCostFunction, Protocol):
    """
    Cost function whose gradient is evaluated on mini-batches.

    A pass over the data starts with `begin_sample()` and then calls
    `next_sample()` until it returns False. Between two calls to
    `next_sample()`, `get_gradient()` refers to the current mini-batch.
    """

    def begin_sample(self) -> None:
        """
        Start a new traversal of the training data.
        """
        ...

    def next_sample(self) -> bool:
        """
        Advance to the next mini-batch.

        Returns
        -------
        bool
            True if a mini-batch is available, False once the pass is over.
        """
        ...

    def is_true_minibatch(self) -> bool:
        """
        Report whether mini-batches are true sub-samples of the data.

        When True, repeated gradient queries at the same variables may yield
        different gradients, so gradient-based convergence tests are not
        meaningful within a pass.
        """
        ...
