from ._first_order import FirstOrderMinimizer
from ._gradient_descend import GradientDescendMinimizer
from ._history import History
from ._sgd import SGDMinimizer
from ._stochastic import FirstOrderStochasticMinimizer

__all__ = [
    FirstOrderMinimizer.__name__,
    FirstOrderStochasticMinimizer.__name__,
    GradientDescendMinimizer.__name__,
    History.__name__,
    SGDMinimizer.__name__,
]
