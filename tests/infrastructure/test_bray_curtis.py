import unittest

import numpy as np

from stochopt.domain import ShapeMismatchError
from stochopt.infrastructure.distance import BrayCurtisDistance, bray_curtis


class TestBrayCurtis(unittest.TestCase):
    def test_identical_vectors(self):
        a = np.array([1.0, 2.0, 3.0])
        self.assertEqual(bray_curtis(a, a), 0.0)

    def test_zero_denominator_is_zero_not_nan(self):
        a = np.array([1.0, -2.0, 0.5])
        d = bray_curtis(a, -a)
        self.assertEqual(d, 0.0)
        self.assertFalse(np.isnan(d))
        self.assertEqual(bray_curtis(np.zeros(3), np.zeros(3)), 0.0)

    def test_known_value(self):
        a = np.array([6.0, 7.0, 4.0])
        b = np.array([10.0, 0.0, 6.0])
        # |a-b| = 4 + 7 + 2, |a+b| = 16 + 7 + 10
        self.assertAlmostEqual(bray_curtis(a, b), 13.0 / 33.0)

    def test_length_mismatch_raises(self):
        with self.assertRaises(ShapeMismatchError):
            bray_curtis(np.ones(2), np.ones(3))


class TestBrayCurtisDistance(unittest.TestCase):
    def test_matrix_matches_pairwise(self):
        lhs = np.array([[6.0, 7.0, 4.0], [1.0, 0.0, 0.0]])
        rhs = np.array([[10.0, 0.0, 6.0], [-1.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        dist = BrayCurtisDistance(lhs, rhs)
        m = dist.get_distance_matrix()
        self.assertEqual(m.shape, (2, 3))
        for i in range(2):
            for j in range(3):
                self.assertAlmostEqual(m[i, j], dist.compute(i, j))
        self.assertEqual(m[1, 1], 0.0)
        self.assertEqual(m[1, 2], 0.0)

    def test_self_distance_diagonal_is_zero(self):
        feats = np.random.default_rng(0).random((4, 5))
        m = BrayCurtisDistance(feats).get_distance_matrix()
        np.testing.assert_allclose(np.diag(m), np.zeros(4))
        np.testing.assert_allclose(m, m.T)

    def test_feature_mismatch_raises(self):
        with self.assertRaises(ShapeMismatchError):
            BrayCurtisDistance(np.ones((2, 3)), np.ones((2, 4)))
        with self.assertRaises(ValueError):
            BrayCurtisDistance(np.ones(3))


if __name__ == "__main__":
    unittest.main()
