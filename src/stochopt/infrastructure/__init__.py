"""
Concrete implementations of the stochopt domain contracts.

Importing this package registers every built-in updater, learning-rate
schedule, penalty and minimizer in the component registry.
"""

from . import cost_functions, distance, learning_rates, minimizers, penalties, updaters

__all__ = [
    "cost_functions",
    "distance",
    "learning_rates",
    "minimizers",
    "penalties",
    "updaters",
]
