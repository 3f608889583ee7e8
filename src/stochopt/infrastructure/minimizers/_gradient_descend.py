"""
Deterministic (full-batch) gradient descent minimizer.

Every iteration evaluates the gradient on the whole data set, so one
iteration is one pass: when the iteration budget is spent the minimizer ends
in `PASS_LIMIT_REACHED`. The loop stops earlier when the gradient-norm or
cost-change criterion of `FirstOrderMinimizer` is met.
"""

from __future__ import annotations

from typing import ClassVar, Dict, Optional

import numpy as np
from loguru import logger

from ...domain._descend_updater import IDescendUpdater
from ...domain._errors import MinimizerConfigurationError
from ...domain._learning_rate import ILearningRate
from ...domain._minimizer import MinimizerState
from ..serialization._registry import register_component
from ._first_order import FirstOrderMinimizer


@register_component("minimizer", "gradient_descend")
class GradientDescendMinimizer(FirstOrderMinimizer):
    """
    Batch gradient descent driven by a descend updater.

    Parameters
    ----------
    fun : optional
        Cost function; see `FirstOrderMinimizer`.
    gradient_updater : Optional[IDescendUpdater], optional
        Descend updater. Required before `minimize()`.
    learning_rate : Optional[ILearningRate], optional
        Learning-rate schedule; without one the step size is used as is.
    max_iterations : int, optional
        Iteration budget. Must be > 0. Defaults to 1000.
    step_size : float, optional
        Base step multiplied by the learning rate. Defaults to 1.0.
    """

    SERIALIZABLE_FIELDS: ClassVar[Dict[str, Optional[str]]] = {
        **FirstOrderMinimizer.SERIALIZABLE_FIELDS,
        "learning_rate": "set_learning_rate",
        "gradient_updater": "set_gradient_updater",
        "step_size": "set_step_size",
        "max_iterations": "set_max_iterations",
        "iter_counter": None,
    }

    def __init__(
        self,
        fun=None,
        *,
        gradient_updater: Optional[IDescendUpdater] = None,
        learning_rate: Optional[ILearningRate] = None,
        max_iterations: int = 1000,
        step_size: float = 1.0,
    ) -> None:
        super().__init__(fun)
        self._gradient_updater: Optional[IDescendUpdater] = None
        self._learning_rate: Optional[ILearningRate] = None
        self._iter_counter = 0
        self._max_iterations = 0
        self._step_size = 1.0
        if gradient_updater is not None:
            self.set_gradient_updater(gradient_updater)
        self.set_learning_rate(learning_rate)
        self.set_max_iterations(max_iterations)
        self.set_step_size(step_size)

    def set_gradient_updater(self, gradient_updater: IDescendUpdater) -> None:
        if gradient_updater is None:
            raise MinimizerConfigurationError("Gradient updater must be set", "gradient_updater")
        if not isinstance(gradient_updater, IDescendUpdater):
            raise TypeError(
                f"{type(gradient_updater).__name__} does not implement IDescendUpdater"
            )
        self._gradient_updater = gradient_updater

    def set_learning_rate(self, learning_rate: Optional[ILearningRate]) -> None:
        if learning_rate is not None and not isinstance(learning_rate, ILearningRate):
            raise TypeError(f"{type(learning_rate).__name__} does not implement ILearningRate")
        self._learning_rate = learning_rate

    def set_max_iterations(self, max_iterations: int) -> None:
        if isinstance(max_iterations, bool) or not isinstance(max_iterations, (int, np.integer)):
            raise MinimizerConfigurationError(
                f"max_iterations ({max_iterations!r}) must be an integer",
                "max_iterations",
            )
        if max_iterations <= 0:
            raise MinimizerConfigurationError(
                f"max_iterations ({max_iterations}) must be a positive integer",
                "max_iterations",
            )
        self._max_iterations = int(max_iterations)

    def set_step_size(self, step_size: float) -> None:
        s = float(step_size)
        if not s > 0.0:
            raise MinimizerConfigurationError(
                f"Step size ({step_size}) must be positive", "step_size"
            )
        self._step_size = s

    @property
    def gradient_updater(self) -> Optional[IDescendUpdater]:
        return self._gradient_updater

    @property
    def learning_rate(self) -> Optional[ILearningRate]:
        return self._learning_rate

    @property
    def step_size(self) -> float:
        return self._step_size

    @property
    def iteration_counter(self) -> int:
        return self._iter_counter

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def init_minimization(self) -> None:
        """
        Validate the configuration and reset the counter and updater state.
        """
        self._require_cost_function()
        if self._gradient_updater is None:
            raise MinimizerConfigurationError("Descend updater must be set", "gradient_updater")
        penalty = self._penalty_type
        if penalty is not None and penalty.is_proximal():
            raise MinimizerConfigurationError(
                "GradientDescendMinimizer does not apply proximal penalties; "
                "use a stochastic minimizer",
                "penalty_type",
            )
        self._iter_counter = 0
        self._last_cost = None
        self._gradient_updater.reset()
        self._state = MinimizerState.INITIALIZED

    def minimize(self) -> float:
        """
        Iterate until converged or the iteration budget is spent.

        Returns
        -------
        float
            Final cost, penalty included.
        """
        self.init_minimization()
        fun = self._require_cost_function()

        while not self.is_terminal:
            self._require_stepping("step")
            try:
                variables = fun.get_variables()
                gradient = self._query_gradient(variables)
                if self.check_convergence(gradient=gradient):
                    break

                lr = 1.0
                if self._learning_rate is not None:
                    lr = self._learning_rate.get_learning_rate(self._iter_counter)
                self._gradient_updater.compute_update(gradient, self._step_size * lr)
                self._gradient_updater.apply(variables)
            except Exception as exc:
                self._fail("step", exc)
                raise

            self._iter_counter += 1
            self._state = MinimizerState.RUNNING

            cost = self.get_cost()
            if self.check_convergence(cost=cost):
                break
            if self._iter_counter >= self._max_iterations:
                self._transition(MinimizerState.PASS_LIMIT_REACHED)

        cost = self.get_cost()
        logger.info(
            "{} finished in state {} after {} iterations, cost={:.6g}",
            self.__class__.__name__,
            self._state.value,
            self._iter_counter,
            cost,
        )
        return cost
