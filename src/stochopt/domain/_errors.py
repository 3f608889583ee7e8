"""
Configuration- and execution-related exceptions for stochopt.

This module defines the errors raised by the optimization core when a
minimizer is wired incorrectly, when vectors exchanged during a step disagree
in length, or when an operation is invoked in a state that does not allow it.
They let the framework fail fast and clearly instead of silently truncating,
padding or defaulting.

Notes
-----
- Configuration and shape errors derive from `ValueError` so callers that
  already guard hyperparameter validation keep working.
- State errors derive from `RuntimeError`; they signal misuse of an object's
  lifecycle rather than a bad value.
"""

from __future__ import annotations

from typing import Optional


class MinimizerConfigurationError(ValueError):
    """
    Raised when a minimizer is missing a required collaborator or a configured
    value violates its constraint.

    Typical causes are a missing cost function or descend updater at
    `init_minimization()`, a non-positive pass budget, or a sparse penalty
    without a learning-rate schedule.

    Attributes
    ----------
    field : Optional[str]
        Name of the offending configuration field, when known.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        """
        Initialize the MinimizerConfigurationError.

        Parameters
        ----------
        message : str
            Human-readable description of the violated requirement.
        field : Optional[str], optional
            Name of the configuration field involved.
        """
        super().__init__(message)
        self.field = field


class ShapeMismatchError(ValueError):
    """
    Raised when two vectors that must have equal length do not.

    Used for gradient vs. variable vector checks and for updater accumulator
    state sized on an earlier call.

    Attributes
    ----------
    what : str
        Short description of the compared objects.
    expected : int
        Length that was required.
    got : int
        Length that was supplied.
    """

    def __init__(self, what: str, expected: int, got: int) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        what : str
            Description of what was compared (e.g. "gradient vs variables").
        expected : int
            Required length.
        got : int
            Supplied length.
        """
        super().__init__(f"Length mismatch for {what}: expected {expected}, got {got}.")
        self.what = what
        self.expected = int(expected)
        self.got = int(got)


class UpdaterStateError(RuntimeError):
    """
    Raised when a descend updater is asked to apply a delta it has not computed.
    """

    def __init__(self, updater: str) -> None:
        super().__init__(
            f"{updater}.apply() called without a pending update; "
            "call compute_update() first."
        )
        self.updater = updater


class MinimizerStateError(RuntimeError):
    """
    Raised when a minimizer operation is invoked in a state that forbids it.

    Examples are stepping before `init_minimization()` or after the minimizer
    reached a terminal state (converged, pass limit reached, or failed).

    Attributes
    ----------
    op : str
        The operation that was attempted.
    state : str
        Name of the state the minimizer was in.
    """

    def __init__(self, op: str, state: str) -> None:
        super().__init__(f"Cannot {op} while minimizer is in state '{state}'.")
        self.op = op
        self.state = state
