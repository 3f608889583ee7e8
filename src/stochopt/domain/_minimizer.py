"""
Minimizer contracts and lifecycle states.

A minimizer moves through the following states:

    UNCONFIGURED -> INITIALIZED -> RUNNING -> CONVERGED
                                           -> PASS_LIMIT_REACHED
                                           -> FAILED

`CONVERGED`, `PASS_LIMIT_REACHED` and `FAILED` are terminal and sticky: no
further steps are allowed until the minimizer is re-initialized.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class MinimizerState(str, Enum):
    """
    Lifecycle state of a minimizer.
    """

    UNCONFIGURED = "unconfigured"
    INITIALIZED = "initialized"
    RUNNING = "running"
    CONVERGED = "converged"
    PASS_LIMIT_REACHED = "pass_limit_reached"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """
        Whether no further steps may be taken in this state.
        """
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {
        MinimizerState.CONVERGED,
        MinimizerState.PASS_LIMIT_REACHED,
        MinimizerState.FAILED,
    }
)


@runtime_checkable
class IMinimizer(Protocol):
    """
    Minimizer interface contract.

    Required members
    ----------------
    - `minimize()` runs the optimization and returns the final cost.
    - `state` reports the current lifecycle state.
    """

    def minimize(self) -> float:
        """
        Run the minimization and return the final cost (penalty included).
        """
        ...

    @property
    def state(self) -> MinimizerState:
        ...
