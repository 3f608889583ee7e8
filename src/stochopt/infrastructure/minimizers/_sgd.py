"""
Stochastic gradient descent minimizer.

`SGDMinimizer` runs the full multi-pass loop over a stochastic cost function
using the step protocol of `FirstOrderStochasticMinimizer`:

    init_minimization()
    for each pass:
        fun.begin_sample()
        while fun.next_sample():
            step()
        complete_pass(cost)

The loop stops as soon as the minimizer reaches a terminal state.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from ...domain._cost_function import IFirstOrderStochasticCostFunction
from ...domain._descend_updater import IDescendUpdater
from ...domain._learning_rate import ILearningRate
from ..serialization._registry import register_component
from ._history import History
from ._stochastic import FirstOrderStochasticMinimizer


@register_component("minimizer", "sgd")
class SGDMinimizer(FirstOrderStochasticMinimizer):
    """
    Mini-batch stochastic gradient descent.

    Parameters
    ----------
    fun : Optional[IFirstOrderStochasticCostFunction], optional
        Stochastic cost function to minimize.
    gradient_updater : Optional[IDescendUpdater], optional
        Descend updater. Required before `minimize()`.
    learning_rate : Optional[ILearningRate], optional
        Learning-rate schedule.
    num_passes : Optional[int], optional
        Number of passes over the data. Required before `minimize()`.

    Attributes
    ----------
    history : History
        Per-pass records of ``cost``, ``iterations`` and ``learning_rate``
        from the last call to `minimize()`.
    """

    def __init__(
        self,
        fun: Optional[IFirstOrderStochasticCostFunction] = None,
        *,
        gradient_updater: Optional[IDescendUpdater] = None,
        learning_rate: Optional[ILearningRate] = None,
        num_passes: Optional[int] = None,
    ) -> None:
        super().__init__(fun)
        if gradient_updater is not None:
            self.set_gradient_updater(gradient_updater)
        if learning_rate is not None:
            self.set_learning_rate(learning_rate)
        if num_passes is not None:
            self.set_number_passes(num_passes)
        self.history = History()

    def minimize(self) -> float:
        """
        Run all passes and return the final cost (penalty included).

        Raises
        ------
        MinimizerConfigurationError
            If the configuration is incomplete.
        TypeError
            If the cost function does not support mini-batch sampling.
        """
        fun = self._require_cost_function()
        if not isinstance(fun, IFirstOrderStochasticCostFunction):
            raise TypeError(
                f"{type(fun).__name__} does not implement IFirstOrderStochasticCostFunction"
            )

        self.init_minimization()
        self.history.clear()
        return self._run_passes(fun)

    def resume(self) -> float:
        """
        Continue a run restored from a checkpoint and return the final cost.

        Counters and updater accumulators are kept; the remaining passes are
        run and appended to `history`.
        """
        fun = self._require_cost_function()
        if not isinstance(fun, IFirstOrderStochasticCostFunction):
            raise TypeError(
                f"{type(fun).__name__} does not implement IFirstOrderStochasticCostFunction"
            )
        self.resume_minimization()
        return self._run_passes(fun)

    def _run_passes(self, fun: IFirstOrderStochasticCostFunction) -> float:
        cost = self.get_cost()
        while not self.is_terminal:
            fun.begin_sample()
            while fun.next_sample():
                self.step()
                if self.is_terminal:
                    break

            pass_idx = self._cur_passes
            cost = self.get_cost()
            if not self.is_terminal:
                self.complete_pass(cost)

            self.history.append_pass(
                pass_idx,
                {
                    "cost": cost,
                    "iterations": self._iter_counter,
                    "learning_rate": self.get_learning_rate_value(),
                },
            )
            logger.info(
                "pass {}/{} cost={:.6g} iterations={}",
                pass_idx + 1,
                self._num_passes,
                cost,
                self._iter_counter,
            )
        return cost
