"""
Adaptive per-parameter updaters: AdaGrad, RMSProp and AdaDelta.

Each of these rescales the gradient element-wise by statistics of past
squared gradients. All of them map a zero gradient to a zero delta, so a
flat cost function leaves the variables untouched no matter how many steps
are taken.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

import numpy as np

from ..serialization._registry import register_component
from ._base import DescendUpdater, State


def _check_epsilon(epsilon: float) -> float:
    eps = float(epsilon)
    if eps <= 0.0:
        raise ValueError(f"epsilon must be > 0, got {eps}")
    return eps


def _check_decay(decay: float) -> float:
    d = float(decay)
    if not (0.0 < d < 1.0):
        raise ValueError(f"decay must be in (0,1), got {d}")
    return d


@register_component("updater", "adagrad")
class AdaGradUpdater(DescendUpdater):
    """
    AdaGrad updater.

    Update rule
    -----------
        G <- G + g ** 2
        delta = eta * g / (sqrt(G) + eps)

    Parameters
    ----------
    epsilon : float, optional
        Stabilizer added to the denominator. Must be > 0. Defaults to 1e-6.
    """

    def __init__(self, epsilon: float = 1e-6) -> None:
        super().__init__()
        self.epsilon = _check_epsilon(epsilon)

    def _init_state(self, size: int) -> State:
        return {"gradient_accuracy": np.zeros(size, dtype=np.float64)}

    def _compute(self, gradient: np.ndarray, step_size: float) -> Tuple[np.ndarray, State]:
        acc = self._state["gradient_accuracy"] + gradient * gradient
        delta = step_size * gradient / (np.sqrt(acc) + self.epsilon)
        return delta, {"gradient_accuracy": acc}

    def get_config(self) -> Dict[str, Any]:
        return {"epsilon": self.epsilon}


@register_component("updater", "rmsprop")
class RmsPropUpdater(DescendUpdater):
    """
    RMSProp updater.

    Update rule
    -----------
        E <- decay * E + (1 - decay) * g ** 2
        delta = eta * g / sqrt(E + eps)

    Parameters
    ----------
    decay : float, optional
        Decay of the squared-gradient average, in (0, 1). Defaults to 0.9.
    epsilon : float, optional
        Stabilizer inside the square root. Must be > 0. Defaults to 1e-6.
    """

    def __init__(self, decay: float = 0.9, epsilon: float = 1e-6) -> None:
        super().__init__()
        self.decay = _check_decay(decay)
        self.epsilon = _check_epsilon(epsilon)

    def _init_state(self, size: int) -> State:
        return {"gradient_accuracy": np.zeros(size, dtype=np.float64)}

    def _compute(self, gradient: np.ndarray, step_size: float) -> Tuple[np.ndarray, State]:
        acc = self.decay * self._state["gradient_accuracy"] + (1.0 - self.decay) * (
            gradient * gradient
        )
        delta = step_size * gradient / np.sqrt(acc + self.epsilon)
        return delta, {"gradient_accuracy": acc}

    def get_config(self) -> Dict[str, Any]:
        return {"decay": self.decay, "epsilon": self.epsilon}


@register_component("updater", "adadelta")
class AdaDeltaUpdater(DescendUpdater):
    """
    AdaDelta updater.

    Update rule
    -----------
        Eg  <- rho * Eg + (1 - rho) * g ** 2
        dx   = sqrt(Edx + eps) / sqrt(Eg + eps) * g
        Edx <- rho * Edx + (1 - rho) * dx ** 2
        delta = eta * dx

    The step size still scales the delta; use a constant learning rate of 1
    to recover the parameter-free form of the method.

    Parameters
    ----------
    decay : float, optional
        ``rho`` in (0, 1). Defaults to 0.9.
    epsilon : float, optional
        Stabilizer. Must be > 0. Defaults to 1e-6.
    """

    def __init__(self, decay: float = 0.9, epsilon: float = 1e-6) -> None:
        super().__init__()
        self.decay = _check_decay(decay)
        self.epsilon = _check_epsilon(epsilon)

    def _init_state(self, size: int) -> State:
        return {
            "gradient_accuracy": np.zeros(size, dtype=np.float64),
            "gradient_delta_accuracy": np.zeros(size, dtype=np.float64),
        }

    def _compute(self, gradient: np.ndarray, step_size: float) -> Tuple[np.ndarray, State]:
        rho = self.decay
        eg = rho * self._state["gradient_accuracy"] + (1.0 - rho) * (gradient * gradient)
        edx_prev = self._state["gradient_delta_accuracy"]
        dx = np.sqrt(edx_prev + self.epsilon) / np.sqrt(eg + self.epsilon) * gradient
        edx = rho * edx_prev + (1.0 - rho) * (dx * dx)
        return step_size * dx, {"gradient_accuracy": eg, "gradient_delta_accuracy": edx}

    def get_config(self) -> Dict[str, Any]:
        return {"decay": self.decay, "epsilon": self.epsilon}
