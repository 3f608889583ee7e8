"""
stochopt: first-order stochastic optimization core.

Minimizers drive iterative parameter updates for any cost function that
exposes its variables and gradient, combining pluggable descend updaters,
learning-rate schedules and (proximal) penalties over mini-batch passes.

Typical use:

    fun = LeastSquaresCostFunction(x, y, batch_size=32, seed=0)
    opt = SGDMinimizer(
        fun,
        gradient_updater=AdamUpdater(),
        learning_rate=InverseTimeLearningRate(0.05, decay=0.01),
        num_passes=10,
    )
    final_cost = opt.minimize()
"""

from .domain import (
    IDescendUpdater,
    IFirstOrderCostFunction,
    IFirstOrderStochasticCostFunction,
    ILearningRate,
    IMinimizer,
    IPenalty,
    IProximalPenalty,
    MinimizerConfigurationError,
    MinimizerState,
    MinimizerStateError,
    ShapeMismatchError,
    UpdaterStateError,
)
from .infrastructure.cost_functions import LeastSquaresCostFunction
from .infrastructure.distance import BrayCurtisDistance, bray_curtis
from .infrastructure.learning_rates import (
    ConstLearningRate,
    InverseScalingLearningRate,
    InverseSqrtLearningRate,
    InverseTimeLearningRate,
)
from .infrastructure.minimizers import (
    FirstOrderMinimizer,
    FirstOrderStochasticMinimizer,
    GradientDescendMinimizer,
    History,
    SGDMinimizer,
)
from .infrastructure.penalties import (
    ElasticNetPenalty,
    L1Penalty,
    L2Penalty,
    Penalty,
    ProximalL2Penalty,
    ProximalPenalty,
    SparsePenalty,
)
from .infrastructure.serialization import (
    component_from_config,
    component_to_config,
    load_minimizer_json,
    save_minimizer_json,
)
from .infrastructure.updaters import (
    AdaDeltaUpdater,
    AdaGradUpdater,
    AdamUpdater,
    DescendUpdater,
    GradientDescendUpdater,
    MomentumUpdater,
    NesterovMomentumUpdater,
    RmsPropUpdater,
)
from .config import MinimizerConfig
from .utils import configure_logging

__version__ = "0.1.0"
