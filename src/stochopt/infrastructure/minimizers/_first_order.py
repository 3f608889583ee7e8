"""
Base class for first-order minimizers.

`FirstOrderMinimizer` owns what every gradient-based minimizer shares:

- the cost function being minimized,
- the penalty type and weight, including the penalty's contribution to the
  cost and to the gradient,
- the convergence criterion (gradient norm and/or cost change),
- the lifecycle state machine and its fail-fast guards,
- the declarative table of serializable fields.

Concrete minimizers implement `minimize()`.

Design notes
------------
- Every configurable field is stored as ``self._<name>`` and listed in
  `SERIALIZABLE_FIELDS`, mapped to the setter used to restore it (or None
  when the field is restored directly). Serialization walks this table
  instead of being interleaved with initialization.
- Terminal states are sticky. Only re-initialization leaves them.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional

import numpy as np
from loguru import logger

from ...domain._cost_function import IFirstOrderCostFunction
from ...domain._errors import (
    MinimizerConfigurationError,
    MinimizerStateError,
    ShapeMismatchError,
)
from ...domain._minimizer import MinimizerState
from ...domain._penalty import IPenalty


class FirstOrderMinimizer:
    """
    Abstract first-order minimizer.

    Parameters
    ----------
    fun : Optional[IFirstOrderCostFunction], optional
        Cost function to minimize. May also be set later with
        `set_cost_function()`.

    Attributes
    ----------
    SERIALIZABLE_FIELDS : ClassVar[Dict[str, Optional[str]]]
        Field name -> name of the setter used to restore it.
    """

    SERIALIZABLE_FIELDS: ClassVar[Dict[str, Optional[str]]] = {
        "penalty_type": "set_penalty_type",
        "penalty_weight": "set_penalty_weight",
        "gradient_tolerance": "set_gradient_tolerance",
        "cost_tolerance": "set_cost_tolerance",
    }

    def __init__(self, fun: Optional[IFirstOrderCostFunction] = None) -> None:
        self._fun: Optional[IFirstOrderCostFunction] = None
        self._penalty_type: Optional[IPenalty] = None
        self._penalty_weight: float = 0.0
        self._gradient_tolerance: Optional[float] = None
        self._cost_tolerance: Optional[float] = None
        self._last_cost: Optional[float] = None
        self._state = MinimizerState.UNCONFIGURED
        if fun is not None:
            self.set_cost_function(fun)

    # ---- configuration ----
    def set_cost_function(self, fun: IFirstOrderCostFunction) -> None:
        """
        Set the cost function to minimize.

        Raises
        ------
        MinimizerConfigurationError
            If `fun` is None.
        TypeError
            If `fun` does not implement `IFirstOrderCostFunction`.
        """
        if fun is None:
            raise MinimizerConfigurationError("Cost function must be set", "fun")
        if not isinstance(fun, IFirstOrderCostFunction):
            raise TypeError(
                f"{type(fun).__name__} does not implement IFirstOrderCostFunction"
            )
        self._fun = fun

    def set_penalty_type(self, penalty_type: Optional[IPenalty]) -> None:
        """
        Set (or clear with None) the regularization penalty.

        The penalty may be shared with other minimizers.
        """
        if penalty_type is not None and not isinstance(penalty_type, IPenalty):
            raise TypeError(f"{type(penalty_type).__name__} does not implement IPenalty")
        self._penalty_type = penalty_type

    def set_penalty_weight(self, penalty_weight: float) -> None:
        w = float(penalty_weight)
        if not w >= 0.0:
            raise MinimizerConfigurationError(
                f"Penalty weight ({penalty_weight}) must be non-negative", "penalty_weight"
            )
        self._penalty_weight = w

    def set_gradient_tolerance(self, gradient_tolerance: Optional[float]) -> None:
        self._gradient_tolerance = self._check_tolerance(
            gradient_tolerance, "gradient_tolerance"
        )

    def set_cost_tolerance(self, cost_tolerance: Optional[float]) -> None:
        self._cost_tolerance = self._check_tolerance(cost_tolerance, "cost_tolerance")

    def set_tolerance(
        self,
        gradient_tolerance: Optional[float] = None,
        cost_tolerance: Optional[float] = None,
    ) -> None:
        """
        Configure the convergence criterion.

        Parameters
        ----------
        gradient_tolerance : Optional[float], optional
            Converged when the L2 norm of the (penalized) gradient is at most
            this value. None disables the criterion.
        cost_tolerance : Optional[float], optional
            Converged when two consecutive cost evaluations differ by at most
            this value. None disables the criterion.
        """
        self.set_gradient_tolerance(gradient_tolerance)
        self.set_cost_tolerance(cost_tolerance)

    @staticmethod
    def _check_tolerance(value: Optional[float], name: str) -> Optional[float]:
        if value is None:
            return None
        v = float(value)
        if not v > 0.0:
            raise MinimizerConfigurationError(f"{name} ({value}) must be positive", name)
        return v

    # ---- queries ----
    @property
    def cost_function(self) -> Optional[IFirstOrderCostFunction]:
        return self._fun

    @property
    def penalty_type(self) -> Optional[IPenalty]:
        return self._penalty_type

    @property
    def penalty_weight(self) -> float:
        return self._penalty_weight

    @property
    def state(self) -> MinimizerState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return self._state.is_terminal

    @property
    def converged(self) -> bool:
        return self._state is MinimizerState.CONVERGED

    def get_parameters(self) -> Dict[str, Any]:
        """
        Return every serializable field by name.
        """
        return {name: getattr(self, "_" + name) for name in self.SERIALIZABLE_FIELDS}

    def set_parameters(self, params: Dict[str, Any]) -> None:
        """
        Restore fields produced by `get_parameters()`.

        Fields with a setter go through it (and its validation); the others
        are assigned directly. Unknown names raise `KeyError`.
        """
        for name, value in params.items():
            if name not in self.SERIALIZABLE_FIELDS:
                raise KeyError(f"{self.__class__.__name__} has no field '{name}'")
            setter = self.SERIALIZABLE_FIELDS[name]
            if setter is None:
                setattr(self, "_" + name, value)
            else:
                getattr(self, setter)(value)

    # ---- penalty ----
    def get_penalty(self, variables: np.ndarray) -> float:
        """
        Return ``penalty_weight * penalty(variables)``, or 0 without a penalty.
        """
        if self._penalty_type is None:
            return 0.0
        return self._penalty_weight * float(self._penalty_type.get_penalty(variables))

    def update_gradient(self, gradient: np.ndarray, variables: np.ndarray) -> np.ndarray:
        """
        Return a new gradient with the weighted penalty gradient added.

        The input gradient is never modified.
        """
        out = np.array(gradient, dtype=np.float64, copy=True)
        if self._penalty_type is not None and self._penalty_weight != 0.0:
            out += self._penalty_weight * np.asarray(
                self._penalty_type.get_penalty_gradient(variables), dtype=np.float64
            )
        return out

    def get_cost(self) -> float:
        """
        Return the cost function's cost plus the weighted penalty.
        """
        fun = self._require_cost_function()
        return float(fun.get_cost()) + self.get_penalty(fun.get_variables())

    # ---- convergence ----
    def check_convergence(
        self, cost: Optional[float] = None, gradient: Optional[np.ndarray] = None
    ) -> bool:
        """
        Evaluate the configured convergence criteria.

        Parameters
        ----------
        cost : Optional[float], optional
            Latest cost. Compared against the previous cost passed here.
        gradient : Optional[np.ndarray], optional
            Latest (penalized) gradient.

        Returns
        -------
        bool
            True if a criterion is met; the minimizer is then `CONVERGED`.
        """
        converged = False

        if gradient is not None and self._gradient_tolerance is not None:
            norm = float(np.linalg.norm(gradient))
            if norm <= self._gradient_tolerance:
                logger.debug("gradient norm {} <= {}", norm, self._gradient_tolerance)
                converged = True

        if cost is not None:
            cost = float(cost)
            if self._cost_tolerance is not None and self._last_cost is not None:
                change = abs(cost - self._last_cost)
                if change <= self._cost_tolerance:
                    logger.debug("cost change {} <= {}", change, self._cost_tolerance)
                    converged = True
            self._last_cost = cost

        if converged:
            self._transition(MinimizerState.CONVERGED)
        return converged

    # ---- lifecycle helpers ----
    def minimize(self) -> float:
        raise NotImplementedError

    def _transition(self, state: MinimizerState) -> None:
        if state is self._state:
            return
        if state.is_terminal:
            logger.info("{} -> {}", self.__class__.__name__, state.value)
        else:
            logger.debug("{} -> {}", self.__class__.__name__, state.value)
        self._state = state

    def _require_cost_function(self) -> IFirstOrderCostFunction:
        if self._fun is None:
            raise MinimizerConfigurationError("Cost function must be set", "fun")
        return self._fun

    def _require_stepping(self, op: str) -> None:
        if self._state not in (MinimizerState.INITIALIZED, MinimizerState.RUNNING):
            raise MinimizerStateError(op, self._state.value)

    def _fail(self, op: str, exc: BaseException) -> None:
        logger.error("{} failed during {}: {}", self.__class__.__name__, op, exc)
        self._transition(MinimizerState.FAILED)

    def _query_gradient(self, variables: np.ndarray) -> np.ndarray:
        """
        Fetch the gradient at `variables` and add the penalty contribution.

        Raises
        ------
        ShapeMismatchError
            If the gradient and variable vectors differ in length.
        """
        fun = self._require_cost_function()
        gradient = np.asarray(fun.get_gradient(variables), dtype=np.float64)
        if gradient.shape != np.shape(variables):
            raise ShapeMismatchError(
                "gradient vs variables", int(np.size(variables)), int(gradient.size)
            )
        return self.update_gradient(gradient, variables)
