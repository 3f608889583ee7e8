"""
Regularization penalties.

Importing this package registers the built-in penalties under the "penalty"
kind of the component registry (names: "l2", "proximal_l2", "l1",
"elastic_net").
"""

from ._base import Penalty, ProximalPenalty, SparsePenalty
from ._l1 import ElasticNetPenalty, L1Penalty
from ._l2 import L2Penalty, ProximalL2Penalty

__all__ = [
    Penalty.__name__,
    ProximalPenalty.__name__,
    SparsePenalty.__name__,
    L1Penalty.__name__,
    ElasticNetPenalty.__name__,
    L2Penalty.__name__,
    ProximalL2Penalty.__name__,
]
