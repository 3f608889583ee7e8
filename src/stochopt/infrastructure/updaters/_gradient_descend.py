"""
Plain gradient-descent updater.

The delta is the gradient scaled by the effective step size. The updater is
stateless apart from the length it was sized to on first use, which is still
enforced on later steps.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ..serialization._registry import register_component
from ._base import DescendUpdater, State


@register_component("updater", "sgd")
class GradientDescendUpdater(DescendUpdater):
    """
    Plain gradient-descent updater.

    Update rule
    -----------
    For gradient ``g`` and step size ``eta``:

        delta = eta * g
        x <- x - delta

    Notes
    -----
    - A zero step size or a zero gradient yields a zero delta.
    """

    def _compute(self, gradient: np.ndarray, step_size: float) -> Tuple[np.ndarray, State]:
        return step_size * gradient, {}
