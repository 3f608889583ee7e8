import math
import unittest

from stochopt.infrastructure.learning_rates import (
    ConstLearningRate,
    InverseScalingLearningRate,
    InverseSqrtLearningRate,
    InverseTimeLearningRate,
)


class TestConstLearningRate(unittest.TestCase):
    def test_constant_for_all_iterations(self):
        lr = ConstLearningRate(0.1)
        for k in (0, 1, 10, 10_000):
            self.assertEqual(lr.get_learning_rate(k), 0.1)

    def test_invalid_values_raise(self):
        with self.assertRaises(ValueError):
            ConstLearningRate(0.0)
        with self.assertRaises(ValueError):
            ConstLearningRate(-1.0)
        with self.assertRaises(ValueError):
            ConstLearningRate(0.1).get_learning_rate(-1)


class TestInverseScalingLearningRate(unittest.TestCase):
    def test_formula(self):
        lr = InverseScalingLearningRate(0.5, intercept=2.0, slope=0.5, exponent=2.0)
        self.assertAlmostEqual(lr.get_learning_rate(0), 0.5 / 4.0)
        self.assertAlmostEqual(lr.get_learning_rate(4), 0.5 / 16.0)

    def test_zero_exponent_is_constant(self):
        lr = InverseScalingLearningRate(0.3, exponent=0.0)
        self.assertEqual(lr.get_learning_rate(0), lr.get_learning_rate(1000))

    def test_invalid_hyperparams_raise(self):
        with self.assertRaises(ValueError):
            InverseScalingLearningRate(0.0)
        with self.assertRaises(ValueError):
            InverseScalingLearningRate(0.1, intercept=0.0)
        with self.assertRaises(ValueError):
            InverseScalingLearningRate(0.1, slope=-1.0)
        with self.assertRaises(ValueError):
            InverseScalingLearningRate(0.1, exponent=-0.5)


class TestInverseTimeLearningRate(unittest.TestCase):
    def test_monotonic_decay(self):
        for decay in (1e-4, 0.1, 1.0, 25.0):
            lr = InverseTimeLearningRate(0.1, decay=decay)
            prev = lr.get_learning_rate(0)
            for k in range(1, 500):
                cur = lr.get_learning_rate(k)
                self.assertLessEqual(cur, prev)
                self.assertGreater(cur, 0.0)
                prev = cur

    def test_formula(self):
        lr = InverseTimeLearningRate(0.2, decay=0.5)
        self.assertAlmostEqual(lr.get_learning_rate(0), 0.2)
        self.assertAlmostEqual(lr.get_learning_rate(2), 0.1)

    def test_decay_must_be_positive(self):
        with self.assertRaises(ValueError):
            InverseTimeLearningRate(0.1, decay=0.0)


class TestInverseSqrtLearningRate(unittest.TestCase):
    def test_formula(self):
        lr = InverseSqrtLearningRate(1.0, decay=1.0)
        self.assertAlmostEqual(lr.get_learning_rate(3), 1.0 / math.sqrt(4.0))

    def test_config_roundtrip(self):
        lr = InverseSqrtLearningRate(0.4, decay=2.0)
        clone = InverseSqrtLearningRate.from_config(lr.get_config())
        self.assertEqual(clone.get_learning_rate(7), lr.get_learning_rate(7))


if __name__ == "__main__":
    unittest.main()
