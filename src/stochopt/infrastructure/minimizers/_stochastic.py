"""
First-order stochastic minimizer.

`FirstOrderStochasticMinimizer` specializes `FirstOrderMinimizer` for
mini-batch, multi-pass optimization. It owns the descend updater, the
learning-rate schedule, the proximal penalty handling and the pass /
iteration counters, and implements the per-iteration step protocol:

1. query the gradient at the current variables (penalty gradient added),
2. compute the effective step ``step_size * learning_rate(iteration)``,
   or ``step_size`` without a schedule,
3. let the updater compute and apply the delta,
4. apply the proximal correction of a proximal penalty; its weight is
   scaled by the current learning rate when the penalty is sparse,
5. advance the iteration counter.

Design notes
------------
- The pass limit is checked at pass boundaries only, in `complete_pass()`.
  A pass that has started always runs to its end unless a step fails or a
  gradient-based convergence test fires.
- Gradient-norm convergence is tested after each step only when the cost
  function does not use true mini-batches; with sub-sampled mini-batches the
  gradient is noisy and only the per-pass cost criterion applies.
- A step that raises leaves the variables as they were before it and moves
  the minimizer to `FAILED`. There are no retries.
"""

from __future__ import annotations

from typing import ClassVar, Dict, Optional

import numpy as np
from loguru import logger

from ...domain._descend_updater import IDescendUpdater
from ...domain._errors import MinimizerConfigurationError, MinimizerStateError
from ...domain._learning_rate import ILearningRate
from ...domain._minimizer import MinimizerState
from ._first_order import FirstOrderMinimizer


class FirstOrderStochasticMinimizer(FirstOrderMinimizer):
    """
    Base class of stochastic first-order minimizers.

    Parameters
    ----------
    fun : optional
        Cost function; see `FirstOrderMinimizer`.
    """

    SERIALIZABLE_FIELDS: ClassVar[Dict[str, Optional[str]]] = {
        **FirstOrderMinimizer.SERIALIZABLE_FIELDS,
        "learning_rate": "set_learning_rate",
        "gradient_updater": "set_gradient_updater",
        "step_size": "set_step_size",
        "num_passes": "set_number_passes",
        "cur_passes": None,
        "iter_counter": None,
    }

    def __init__(self, fun=None) -> None:
        super().__init__(fun)
        self._gradient_updater: Optional[IDescendUpdater] = None
        self._learning_rate: Optional[ILearningRate] = None
        self._step_size: float = 1.0
        self._num_passes: int = 0
        self._cur_passes: int = 0
        self._iter_counter: int = 0

    # ---- configuration ----
    def set_gradient_updater(self, gradient_updater: IDescendUpdater) -> None:
        """
        Set the descend updater.

        Raises
        ------
        MinimizerConfigurationError
            If `gradient_updater` is None.
        TypeError
            If it does not implement `IDescendUpdater`.
        """
        if gradient_updater is None:
            raise MinimizerConfigurationError("Gradient updater must be set", "gradient_updater")
        if not isinstance(gradient_updater, IDescendUpdater):
            raise TypeError(
                f"{type(gradient_updater).__name__} does not implement IDescendUpdater"
            )
        self._gradient_updater = gradient_updater

    def set_learning_rate(self, learning_rate: Optional[ILearningRate]) -> None:
        """
        Set (or clear with None) the learning-rate schedule.
        """
        if learning_rate is not None and not isinstance(learning_rate, ILearningRate):
            raise TypeError(f"{type(learning_rate).__name__} does not implement ILearningRate")
        self._learning_rate = learning_rate

    def set_number_passes(self, num_passes: int) -> None:
        """
        Set the number of passes over the data.

        Raises
        ------
        MinimizerConfigurationError
            If `num_passes` is not a positive integer.
        """
        if isinstance(num_passes, bool) or not isinstance(num_passes, (int, np.integer)):
            raise MinimizerConfigurationError(
                f"The number ({num_passes!r}) to go through data must be an integer",
                "num_passes",
            )
        if num_passes <= 0:
            raise MinimizerConfigurationError(
                f"The number ({num_passes}) to go through data must be positive",
                "num_passes",
            )
        self._num_passes = int(num_passes)

    def set_step_size(self, step_size: float) -> None:
        """
        Set the base step multiplied by the learning rate. Must be > 0.
        """
        s = float(step_size)
        if not s > 0.0:
            raise MinimizerConfigurationError(
                f"Step size ({step_size}) must be positive", "step_size"
            )
        self._step_size = s

    # ---- queries ----
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
    def num_passes(self) -> int:
        return self._num_passes

    @property
    def cur_passes(self) -> int:
        return self._cur_passes

    @property
    def iteration_counter(self) -> int:
        return self._iter_counter

    def get_learning_rate_value(self) -> float:
        """
        Learning rate at the current iteration, or 1.0 without a schedule.
        """
        if self._learning_rate is None:
            return 1.0
        return float(self._learning_rate.get_learning_rate(self._iter_counter))

    def get_effective_step_size(self) -> float:
        return self._step_size * self.get_learning_rate_value()

    def _is_true_minibatch(self) -> bool:
        is_true_minibatch = getattr(self._fun, "is_true_minibatch", None)
        return bool(is_true_minibatch()) if callable(is_true_minibatch) else False

    # ---- lifecycle ----
    def _validate_configuration(self) -> None:
        self._require_cost_function()
        if self._gradient_updater is None:
            raise MinimizerConfigurationError("Descend updater must be set", "gradient_updater")
        if self._num_passes <= 0:
            raise MinimizerConfigurationError(
                "The number to go through data must be set", "num_passes"
            )
        penalty = self._penalty_type
        if penalty is not None and penalty.is_proximal() and penalty.is_sparse():
            if self._learning_rate is None:
                raise MinimizerConfigurationError(
                    "Learning rate must be set when a sparse penalty (eg, L1) is used",
                    "learning_rate",
                )

    def init_minimization(self) -> None:
        """
        Validate the configuration and reset counters and updater state.

        Raises
        ------
        MinimizerConfigurationError
            If the cost function or updater is missing, the pass budget is
            not set, or a sparse penalty is configured without a
            learning-rate schedule.
        """
        self._validate_configuration()
        self._cur_passes = 0
        self._iter_counter = 0
        self._last_cost = None
        self._gradient_updater.reset()
        self._state = MinimizerState.INITIALIZED

        logger.info(
            "{} initialized: updater={!r} learning_rate={!r} penalty={!r} "
            "penalty_weight={} num_passes={} step_size={}",
            self.__class__.__name__,
            self._gradient_updater,
            self._learning_rate,
            self._penalty_type,
            self._penalty_weight,
            self._num_passes,
            self._step_size,
        )

    def resume_minimization(self) -> None:
        """
        Validate the configuration and continue from restored counters.

        Unlike `init_minimization()`, counters and updater accumulators are
        kept, so a run restored from a checkpoint picks up where it stopped.

        Raises
        ------
        MinimizerStateError
            If the minimizer has already been initialized in this process.
            Only a freshly restored (`UNCONFIGURED`) minimizer can resume;
            terminal states are left only through `init_minimization()`.
        """
        if self._state is not MinimizerState.UNCONFIGURED:
            raise MinimizerStateError("resume", self._state.value)
        self._validate_configuration()
        self._last_cost = None
        self._state = MinimizerState.INITIALIZED
        logger.info(
            "{} resumed at pass {}/{} iteration {}",
            self.__class__.__name__,
            self._cur_passes,
            self._num_passes,
            self._iter_counter,
        )
        if self._cur_passes >= self._num_passes:
            self._transition(MinimizerState.PASS_LIMIT_REACHED)

    def step(self) -> None:
        """
        Perform one update step on the current mini-batch.

        Raises
        ------
        MinimizerStateError
            If the minimizer is not initialized or already terminal.
        ShapeMismatchError
            If the gradient, the variables and the updater state disagree in
            length. The variables are left untouched and the minimizer fails.
        """
        self._require_stepping("step")
        try:
            fun = self._require_cost_function()
            variables = fun.get_variables()
            gradient = self._query_gradient(variables)

            step = self.get_effective_step_size()
            # raises before any mutation when the proximal weight is invalid
            self._proximal_weight()

            self._gradient_updater.compute_update(gradient, step)
            self._gradient_updater.apply(variables)
            self.do_proximal_operation(variables)
        except Exception as exc:
            self._fail("step", exc)
            raise

        logger.debug(
            "iteration {} step={} |g|={}",
            self._iter_counter,
            step,
            float(np.linalg.norm(gradient)),
        )
        self._iter_counter += 1
        self._state = MinimizerState.RUNNING

        if not self._is_true_minibatch():
            self.check_convergence(gradient=gradient)

    def do_proximal_operation(self, variables: np.ndarray) -> None:
        """
        Apply the proximal correction of a proximal penalty, if any.

        The effective weight is the penalty weight, multiplied by the learning
        rate at the current iteration when the penalty is sparse.
        """
        proximal_weight = self._proximal_weight()
        if proximal_weight is not None:
            self._penalty_type.update_variable_for_proximity(variables, proximal_weight)

    def _proximal_weight(self) -> Optional[float]:
        penalty = self._penalty_type
        if penalty is None or not penalty.is_proximal():
            return None

        proximal_weight = self._penalty_weight
        if penalty.is_sparse():
            if self._learning_rate is None:
                raise MinimizerConfigurationError(
                    "Learning rate must be set when a sparse penalty (eg, L1) is used",
                    "learning_rate",
                )
            proximal_weight *= self._learning_rate.get_learning_rate(self._iter_counter)
        return proximal_weight

    def complete_pass(self, cost: Optional[float] = None) -> MinimizerState:
        """
        Record the end of a traversal of the training data.

        Parameters
        ----------
        cost : Optional[float], optional
            Cost at the end of the pass, used by the cost-change criterion.

        Returns
        -------
        MinimizerState
            The state after the pass: `CONVERGED`, `PASS_LIMIT_REACHED` or
            still `RUNNING`.

        Raises
        ------
        MinimizerStateError
            If called before initialization or after a terminal state.
        """
        self._require_stepping("complete a pass")
        self._cur_passes += 1
        self._state = MinimizerState.RUNNING

        if cost is not None and self.check_convergence(cost=cost):
            return self._state
        if self._cur_passes >= self._num_passes:
            self._transition(MinimizerState.PASS_LIMIT_REACHED)
        return self._state
