"""
Shared machinery for descend updaters.

Every updater splits a step into two halves:

1. `compute_update(gradient, step_size)` validates the gradient, lazily sizes
   the accumulator state on first use, and computes both the delta and the
   *candidate* accumulator state. Nothing outside the updater changes.
2. `apply(variables)` validates the variable vector against the pending
   delta, then commits the accumulator state and subtracts the delta in
   place.

A step rejected by either half leaves the variables and the committed state
exactly as they were.

Subclasses implement `_init_state(size)` and `_compute(gradient, step_size)`.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ...domain._errors import ShapeMismatchError, UpdaterStateError

State = Dict[str, np.ndarray]


def as_vector(x: Any, what: str) -> np.ndarray:
    """
    Convert `x` to a one-dimensional float64 array.

    Raises
    ------
    ValueError
        If `x` is not one-dimensional.
    """
    arr = np.asarray(x, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"{what} must be a 1-D vector, got shape {arr.shape}")
    return arr


class DescendUpdater:
    """
    Base class of the descend-updater family.

    Attributes
    ----------
    size : Optional[int]
        Length the accumulators are sized to, or None before the first
        `compute_update()` (and after `reset()`).
    """

    def __init__(self) -> None:
        self._state: State = {}
        self._size: Optional[int] = None
        self._pending: Optional[Tuple[np.ndarray, State]] = None

    @property
    def size(self) -> Optional[int]:
        return self._size

    def _init_state(self, size: int) -> State:
        return {}

    def _compute(self, gradient: np.ndarray, step_size: float) -> Tuple[np.ndarray, State]:
        raise NotImplementedError

    def compute_update(self, gradient: np.ndarray, step_size: float) -> np.ndarray:
        """
        Compute the delta for one step and keep it pending.

        Parameters
        ----------
        gradient : np.ndarray
            Raw gradient vector.
        step_size : float
            Effective step size. Must be finite and >= 0.

        Returns
        -------
        np.ndarray
            A copy of the pending delta.

        Raises
        ------
        ShapeMismatchError
            If the gradient length differs from the sized accumulator state.
        ValueError
            If the gradient is not 1-D or the step size is invalid.
        """
        g = as_vector(gradient, "gradient")
        step = float(step_size)
        if not math.isfinite(step) or step < 0.0:
            raise ValueError(f"step_size must be finite and >= 0, got {step_size}")

        if self._size is None:
            self._state = self._init_state(g.size)
            self._size = int(g.size)
        elif g.size != self._size:
            raise ShapeMismatchError("gradient vs updater state", self._size, g.size)

        delta, new_state = self._compute(g, step)
        self._pending = (delta, new_state)
        return delta.copy()

    def apply(self, variables: np.ndarray) -> None:
        """
        Commit the pending delta: `variables -= delta`, in place.

        Raises
        ------
        UpdaterStateError
            If no delta is pending.
        ShapeMismatchError
            If `variables` does not match the pending delta.
        TypeError
            If `variables` is not a NumPy array (it could not be updated in
            place).
        """
        if self._pending is None:
            raise UpdaterStateError(self.__class__.__name__)
        if not isinstance(variables, np.ndarray):
            raise TypeError(
                f"variables must be a numpy.ndarray, got {type(variables).__name__}"
            )

        delta, new_state = self._pending
        if variables.shape != delta.shape:
            raise ShapeMismatchError("variables vs pending update", delta.size, variables.size)

        variables -= delta
        self._state.update(new_state)
        self._pending = None

    def update_variable(
        self, variables: np.ndarray, gradient: np.ndarray, step_size: float
    ) -> None:
        """
        Compute and apply one step.
        """
        self.compute_update(gradient, step_size)
        self.apply(variables)

    def reset(self) -> None:
        self._state = {}
        self._size = None
        self._pending = None

    def state_dict(self) -> State:
        """
        Return copies of the committed accumulator arrays.
        """
        return {k: np.array(v, copy=True) for k, v in self._state.items()}

    def load_state_dict(self, state: State) -> None:
        """
        Replace the committed accumulators.

        All non-scalar arrays must share one length, which becomes the
        updater's size. Any pending delta is dropped.

        Raises
        ------
        KeyError
            If `state` lacks an accumulator this updater uses.
        ShapeMismatchError
            If the vector accumulators disagree in length.
        """
        loaded = {k: np.array(v, copy=True) for k, v in state.items()}
        if not loaded:
            self.reset()
            return

        size: Optional[int] = None
        for key, arr in loaded.items():
            if arr.ndim == 0:
                continue
            if size is None:
                size = int(arr.size)
            elif arr.size != size:
                raise ShapeMismatchError(f"accumulator '{key}'", size, arr.size)

        expected = set(self._init_state(size or 0))
        missing = expected - set(loaded)
        if missing:
            raise KeyError(f"missing accumulators for {self.__class__.__name__}: {sorted(missing)}")

        self._state = loaded
        self._size = size
        self._pending = None

    def get_config(self) -> Dict[str, Any]:
        return {}

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "DescendUpdater":
        return cls(**cfg)

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v}" for k, v in self.get_config().items())
        return f"{self.__class__.__name__}({args})"
