import tempfile
import textwrap
import unittest
from pathlib import Path

import numpy as np

from stochopt.config import ComponentConfig, MinimizerConfig
from stochopt.domain import MinimizerConfigurationError, MinimizerState
from stochopt.infrastructure.cost_functions import LeastSquaresCostFunction
from stochopt.infrastructure.learning_rates import InverseTimeLearningRate
from stochopt.infrastructure.minimizers import SGDMinimizer
from stochopt.infrastructure.penalties import ElasticNetPenalty
from stochopt.infrastructure.updaters import AdamUpdater, GradientDescendUpdater


_YAML = textwrap.dedent(
    """
    updater:
      name: adam
      beta1: 0.8
    learning_rate:
      name: inverse_time
      initial_learning_rate: 0.05
      decay: 0.01
    penalty:
      name: elastic_net
      l1_ratio: 0.7
      weight: 0.001
    num_passes: 4
    cost_tolerance: 1.0e-10
    """
)


class TestMinimizerConfig(unittest.TestCase):
    def test_from_dict_accepts_bare_names(self):
        cfg = MinimizerConfig.from_dict({"updater": "sgd", "num_passes": 2})
        self.assertEqual(cfg.updater, ComponentConfig("sgd"))
        self.assertIsNone(cfg.learning_rate)
        self.assertIsNone(cfg.penalty)
        self.assertEqual(cfg.step_size, 1.0)

    def test_missing_required_keys_raise(self):
        with self.assertRaises(MinimizerConfigurationError):
            MinimizerConfig.from_dict({"num_passes": 2})
        with self.assertRaises(MinimizerConfigurationError):
            MinimizerConfig.from_dict({"updater": "sgd"})

    def test_malformed_component_raises(self):
        with self.assertRaises(MinimizerConfigurationError):
            MinimizerConfig.from_dict({"updater": {"beta1": 0.9}, "num_passes": 1})

    def test_from_yaml_and_build(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "run.yaml"
            path.write_text(_YAML, encoding="utf-8")
            cfg = MinimizerConfig.from_yaml(path)

        self.assertEqual(cfg.updater.name, "adam")
        self.assertEqual(cfg.updater.params, {"beta1": 0.8})
        self.assertEqual(cfg.penalty, ComponentConfig("elastic_net", {"l1_ratio": 0.7}))
        self.assertEqual(cfg.penalty_weight, 0.001)

        opt = cfg.build()
        self.assertIsInstance(opt, SGDMinimizer)
        self.assertIsInstance(opt.gradient_updater, AdamUpdater)
        self.assertEqual(opt.gradient_updater.beta1, 0.8)
        self.assertIsInstance(opt.learning_rate, InverseTimeLearningRate)
        self.assertIsInstance(opt.penalty_type, ElasticNetPenalty)
        self.assertEqual(opt.penalty_type.l1_ratio, 0.7)
        self.assertEqual(opt.penalty_weight, 0.001)
        self.assertEqual(opt.num_passes, 4)

    def test_to_dict_roundtrip(self):
        cfg = MinimizerConfig(
            updater=ComponentConfig("momentum", {"momentum": 0.5}),
            num_passes=3,
            learning_rate=ComponentConfig("constant", {"learning_rate": 0.1}),
            penalty_weight=0.0,
        )
        self.assertEqual(MinimizerConfig.from_dict(cfg.to_dict()), cfg)

    def test_build_rejects_invalid_values(self):
        cfg = MinimizerConfig.from_dict({"updater": "sgd", "num_passes": 0})
        with self.assertRaises(MinimizerConfigurationError):
            cfg.build()
        cfg = MinimizerConfig.from_dict({"updater": "newton", "num_passes": 1})
        with self.assertRaises(ValueError):
            cfg.build()

    def test_built_minimizer_runs(self):
        rng = np.random.default_rng(0)
        x = rng.normal(size=(32, 2))
        y = x @ np.array([1.0, -1.0])
        fun = LeastSquaresCostFunction(x, y, batch_size=8, seed=0)
        initial = fun.get_cost()

        cfg = MinimizerConfig.from_dict(
            {
                "updater": "sgd",
                "learning_rate": {"name": "constant", "learning_rate": 0.1},
                "num_passes": 5,
            }
        )
        opt = cfg.build(fun)
        self.assertIsInstance(opt.gradient_updater, GradientDescendUpdater)
        final = opt.minimize()
        self.assertEqual(opt.state, MinimizerState.PASS_LIMIT_REACHED)
        self.assertLess(final, initial)


if __name__ == "__main__":
    unittest.main()
