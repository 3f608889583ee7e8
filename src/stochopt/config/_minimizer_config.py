"""
Declarative configuration for stochastic minimization runs.

A `MinimizerConfig` names every component of an SGD run by its registry key
and carries their hyperparameters, so a run can be described in a YAML file:

```
updater:
  name: adam
  beta1: 0.9
learning_rate:
  name: inverse_time
  initial_learning_rate: 0.05
  decay: 0.01
penalty:
  name: l1
  weight: 0.001
num_passes: 20
step_size: 1.0
cost_tolerance: 1.0e-8
```

`build()` turns the description into a configured `SGDMinimizer`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..domain._errors import MinimizerConfigurationError
from ..infrastructure import learning_rates as _learning_rates  # noqa: F401
from ..infrastructure import penalties as _penalties  # noqa: F401
from ..infrastructure import updaters as _updaters  # noqa: F401
from ..infrastructure.minimizers._sgd import SGDMinimizer
from ..infrastructure.serialization._registry import build_component


@dataclass
class ComponentConfig:
    """Registry key plus constructor hyperparameters of one component."""

    name: str
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(cls, value: Any, what: str) -> "ComponentConfig":
        """
        Accept either a bare name (``"adam"``) or a mapping with a ``name`` key.
        """
        if isinstance(value, str):
            return cls(name=value)
        if isinstance(value, Mapping) and "name" in value:
            params = {k: v for k, v in value.items() if k != "name"}
            return cls(name=str(value["name"]), params=params)
        raise MinimizerConfigurationError(
            f"{what} must be a name or a mapping with a 'name' key, got {value!r}", what
        )


@dataclass
class MinimizerConfig:
    """
    Full description of an SGD minimization run.

    Attributes
    ----------
    updater : ComponentConfig
        Descend updater (kind "updater").
    num_passes : int
        Number of passes over the data.
    learning_rate : Optional[ComponentConfig]
        Learning-rate schedule (kind "learning_rate"), if any.
    penalty : Optional[ComponentConfig]
        Penalty (kind "penalty"), if any.
    penalty_weight : float
        Weight of the penalty.
    step_size : float
        Base step multiplied by the learning rate.
    gradient_tolerance : Optional[float]
        Gradient-norm convergence tolerance.
    cost_tolerance : Optional[float]
        Cost-change convergence tolerance.
    """

    updater: ComponentConfig
    num_passes: int
    learning_rate: Optional[ComponentConfig] = None
    penalty: Optional[ComponentConfig] = None
    penalty_weight: float = 0.0
    step_size: float = 1.0
    gradient_tolerance: Optional[float] = None
    cost_tolerance: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MinimizerConfig":
        """
        Build a config from a plain mapping (e.g. parsed YAML).

        The penalty weight may be given either at the top level
        (``penalty_weight``) or inside the penalty mapping (``weight``).

        Raises
        ------
        MinimizerConfigurationError
            If a required key is missing or an entry is malformed.
        """
        if "updater" not in data:
            raise MinimizerConfigurationError("Config must name an updater", "updater")
        if "num_passes" not in data:
            raise MinimizerConfigurationError("Config must set num_passes", "num_passes")

        penalty = None
        penalty_weight = float(data.get("penalty_weight", 0.0))
        if data.get("penalty") is not None:
            raw = data["penalty"]
            if isinstance(raw, Mapping) and "weight" in raw:
                penalty_weight = float(raw["weight"])
                raw = {k: v for k, v in raw.items() if k != "weight"}
            penalty = ComponentConfig.from_value(raw, "penalty")

        learning_rate = None
        if data.get("learning_rate") is not None:
            learning_rate = ComponentConfig.from_value(data["learning_rate"], "learning_rate")

        return cls(
            updater=ComponentConfig.from_value(data["updater"], "updater"),
            num_passes=data["num_passes"],
            learning_rate=learning_rate,
            penalty=penalty,
            penalty_weight=penalty_weight,
            step_size=float(data.get("step_size", 1.0)),
            gradient_tolerance=data.get("gradient_tolerance"),
            cost_tolerance=data.get("cost_tolerance"),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "MinimizerConfig":
        """
        Load a config from a YAML file.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, Mapping):
            raise MinimizerConfigurationError(
                f"{path}: top level of a minimizer config must be a mapping"
            )
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        def _node(c: Optional[ComponentConfig]) -> Optional[Dict[str, Any]]:
            return None if c is None else {"name": c.name, **c.params}

        return {
            "updater": _node(self.updater),
            "num_passes": self.num_passes,
            "learning_rate": _node(self.learning_rate),
            "penalty": _node(self.penalty),
            "penalty_weight": self.penalty_weight,
            "step_size": self.step_size,
            "gradient_tolerance": self.gradient_tolerance,
            "cost_tolerance": self.cost_tolerance,
        }

    def build(self, fun: Optional[Any] = None) -> SGDMinimizer:
        """
        Instantiate the described components and wire them into an
        `SGDMinimizer`.

        Parameters
        ----------
        fun : optional
            Stochastic cost function to attach.
        """
        minimizer = SGDMinimizer(fun)
        minimizer.set_gradient_updater(
            build_component("updater", self.updater.name, **self.updater.params)
        )
        if self.learning_rate is not None:
            minimizer.set_learning_rate(
                build_component(
                    "learning_rate", self.learning_rate.name, **self.learning_rate.params
                )
            )
        if self.penalty is not None:
            minimizer.set_penalty_type(
                build_component("penalty", self.penalty.name, **self.penalty.params)
            )
        minimizer.set_penalty_weight(self.penalty_weight)
        minimizer.set_number_passes(self.num_passes)
        minimizer.set_step_size(self.step_size)
        minimizer.set_tolerance(self.gradient_tolerance, self.cost_tolerance)
        return minimizer
