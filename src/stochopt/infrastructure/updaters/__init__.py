"""
Descend updaters.

Importing this package registers every built-in updater under the "updater"
kind of the component registry (names: "sgd", "momentum", "nesterov",
"adagrad", "rmsprop", "adadelta", "adam").
"""

from ._base import DescendUpdater
from ._gradient_descend import GradientDescendUpdater
from ._momentum import MomentumUpdater, NesterovMomentumUpdater
from ._adaptive import AdaDeltaUpdater, AdaGradUpdater, RmsPropUpdater
from ._adam import AdamUpdater

__all__ = [
    DescendUpdater.__name__,
    GradientDescendUpdater.__name__,
    MomentumUpdater.__name__,
    NesterovMomentumUpdater.__name__,
    AdaGradUpdater.__name__,
    RmsPropUpdater.__name__,
    AdaDeltaUpdater.__name__,
    AdamUpdater.__name__,
]
