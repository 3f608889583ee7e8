"""
Learning-rate schedule contract.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ILearningRate(Protocol):
    """
    Maps an iteration counter to a positive step-size multiplier.

    Implementations are pure functions of the counter and of the
    configuration fixed at construction time.
    """

    def get_learning_rate(self, iteration: int) -> float:
        """
        Return the learning rate for a given iteration.

        Parameters
        ----------
        iteration : int
            Non-negative iteration counter.

        Returns
        -------
        float
            Positive multiplier for the step size.
        """
        ...
