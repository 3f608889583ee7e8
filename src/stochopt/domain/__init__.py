"""
Domain contracts for stochopt.

Protocols describing the collaborators of the optimization core, the
minimizer lifecycle states, and the exceptions raised when a contract is
violated. Nothing in this package depends on infrastructure code.
"""

from ._cost_function import IFirstOrderCostFunction, IFirstOrderStochasticCostFunction
from ._descend_updater import IDescendUpdater
from ._errors import (
    MinimizerConfigurationError,
    MinimizerStateError,
    ShapeMismatchError,
    UpdaterStateError,
)
from ._learning_rate import ILearningRate
from ._minimizer import IMinimizer, MinimizerState
from ._penalty import IPenalty, IProximalPenalty

__all__ = [
    IFirstOrderCostFunction.__name__,
    IFirstOrderStochasticCostFunction.__name__,
    IDescendUpdater.__name__,
    ILearningRate.__name__,
    IMinimizer.__name__,
    IPenalty.__name__,
    IProximalPenalty.__name__,
    MinimizerState.__name__,
    MinimizerConfigurationError.__name__,
    MinimizerStateError.__name__,
    ShapeMismatchError.__name__,
    UpdaterStateError.__name__,
]
