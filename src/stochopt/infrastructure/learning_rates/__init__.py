"""
Learning-rate schedules.

Importing this package registers every built-in schedule under the
"learning_rate" kind of the component registry.
"""

from ._constant import ConstLearningRate
from ._inverse_scaling import (
    InverseScalingLearningRate,
    InverseSqrtLearningRate,
    InverseTimeLearningRate,
)

__all__ = [
    ConstLearningRate.__name__,
    InverseScalingLearningRate.__name__,
    InverseSqrtLearningRate.__name__,
    InverseTimeLearningRate.__name__,
]
