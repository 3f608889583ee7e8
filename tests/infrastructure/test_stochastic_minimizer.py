import unittest

import numpy as np

from stochopt.domain import (
    MinimizerConfigurationError,
    MinimizerState,
    MinimizerStateError,
    ShapeMismatchError,
)
from stochopt.infrastructure.learning_rates import ConstLearningRate
from stochopt.infrastructure.minimizers import SGDMinimizer
from stochopt.infrastructure.penalties import L1Penalty, L2Penalty, ProximalL2Penalty
from stochopt.infrastructure.updaters import AdamUpdater, GradientDescendUpdater


class Quadratic:
    """
    f(x) = sum(x ** 2) with gradient 2x; each pass yields `steps_per_pass` samples.
    """

    def __init__(self, x0, steps_per_pass=1):
        self._x = np.array(x0, dtype=np.float64, ndmin=1)
        self._steps_per_pass = steps_per_pass
        self._remaining = 0

    def get_variables(self):
        return self._x

    def get_gradient(self, variables):
        return 2.0 * np.asarray(variables)

    def get_cost(self):
        return float(np.dot(self._x, self._x))

    def begin_sample(self):
        self._remaining = self._steps_per_pass

    def next_sample(self):
        if self._remaining <= 0:
            return False
        self._remaining -= 1
        return True

    def is_true_minibatch(self):
        return False


class WrongGradient(Quadratic):
    def get_gradient(self, variables):
        return np.zeros(np.size(variables) + 1)


def _sgd(fun, lr=0.1, num_passes=1, updater=None):
    return SGDMinimizer(
        fun,
        gradient_updater=updater or GradientDescendUpdater(),
        learning_rate=None if lr is None else ConstLearningRate(lr),
        num_passes=num_passes,
    )


class TestConfiguration(unittest.TestCase):
    def test_number_passes_must_be_positive(self):
        opt = SGDMinimizer()
        for bad in (0, -1):
            with self.subTest(num_passes=bad):
                with self.assertRaises(MinimizerConfigurationError) as ctx:
                    opt.set_number_passes(bad)
                self.assertIn("must be positive", str(ctx.exception))
        opt.set_number_passes(5)
        self.assertEqual(opt.num_passes, 5)

    def test_number_passes_must_be_integer(self):
        opt = SGDMinimizer()
        for bad in (True, 2.5, "3"):
            with self.subTest(num_passes=bad):
                with self.assertRaises(MinimizerConfigurationError):
                    opt.set_number_passes(bad)

    def test_updater_cannot_be_none(self):
        with self.assertRaises(MinimizerConfigurationError) as ctx:
            SGDMinimizer().set_gradient_updater(None)
        self.assertEqual(ctx.exception.field, "gradient_updater")

    def test_cost_function_cannot_be_none(self):
        with self.assertRaises(MinimizerConfigurationError):
            SGDMinimizer().set_cost_function(None)

    def test_init_requires_cost_function_and_updater(self):
        opt = SGDMinimizer(gradient_updater=GradientDescendUpdater(), num_passes=1)
        with self.assertRaises(MinimizerConfigurationError):
            opt.init_minimization()

        opt = SGDMinimizer(Quadratic(1.0), num_passes=1)
        with self.assertRaises(MinimizerConfigurationError):
            opt.init_minimization()
        self.assertEqual(opt.state, MinimizerState.UNCONFIGURED)

    def test_init_requires_num_passes(self):
        opt = SGDMinimizer(Quadratic(1.0), gradient_updater=GradientDescendUpdater())
        with self.assertRaises(MinimizerConfigurationError):
            opt.init_minimization()

    def test_sparse_penalty_requires_learning_rate(self):
        opt = _sgd(Quadratic(1.0), lr=None)
        opt.set_penalty_type(L1Penalty())
        opt.set_penalty_weight(0.1)
        with self.assertRaises(MinimizerConfigurationError) as ctx:
            opt.init_minimization()
        self.assertEqual(ctx.exception.field, "learning_rate")

    def test_dense_penalties_do_not_require_learning_rate(self):
        for penalty in (L2Penalty(), ProximalL2Penalty()):
            with self.subTest(penalty=type(penalty).__name__):
                opt = _sgd(Quadratic(1.0), lr=None)
                opt.set_penalty_type(penalty)
                opt.init_minimization()
                self.assertEqual(opt.state, MinimizerState.INITIALIZED)

    def test_invalid_scalars_raise(self):
        opt = SGDMinimizer()
        with self.assertRaises(MinimizerConfigurationError):
            opt.set_penalty_weight(-0.1)
        with self.assertRaises(MinimizerConfigurationError):
            opt.set_step_size(0.0)
        with self.assertRaises(MinimizerConfigurationError):
            opt.set_gradient_tolerance(-1.0)

    def test_get_parameters(self):
        opt = _sgd(Quadratic(1.0), lr=0.1, num_passes=3)
        params = opt.get_parameters()
        self.assertEqual(params["num_passes"], 3)
        self.assertEqual(params["step_size"], 1.0)
        self.assertIsInstance(params["learning_rate"], ConstLearningRate)
        self.assertIsNone(params["penalty_type"])
        self.assertEqual(params["cur_passes"], 0)
        self.assertEqual(params["iter_counter"], 0)


class TestStepping(unittest.TestCase):
    def test_plain_descent_on_quadratic(self):
        fun = Quadratic(10.0)
        opt = _sgd(fun, lr=0.1)
        opt.init_minimization()
        for _ in range(50):
            opt.step()
        np.testing.assert_allclose(fun.get_variables(), [10.0 * 0.8**50], rtol=1e-9)
        self.assertEqual(opt.iteration_counter, 50)
        self.assertEqual(opt.state, MinimizerState.RUNNING)

    def test_l1_proximal_trace(self):
        fun = Quadratic(10.0)
        opt = _sgd(fun, lr=0.1)
        opt.set_penalty_type(L1Penalty())
        opt.set_penalty_weight(0.05)
        opt.init_minimization()

        trace = []
        for _ in range(10):
            opt.step()
            trace.append(float(fun.get_variables()[0]))

        expected = []
        x = 10.0
        for _ in range(10):
            x = 0.8 * x
            x = np.sign(x) * max(abs(x) - 0.005, 0.0)
            expected.append(x)

        np.testing.assert_allclose(trace[:3], [7.995, 6.391, 5.1078], rtol=1e-12)
        np.testing.assert_allclose(trace, expected, rtol=1e-12)

    def test_l1_clips_to_exact_zero_and_stays(self):
        fun = Quadratic(10.0)
        opt = _sgd(fun, lr=0.1)
        opt.set_penalty_type(L1Penalty())
        opt.set_penalty_weight(0.05)
        opt.init_minimization()
        for _ in range(40):
            opt.step()
        self.assertEqual(float(fun.get_variables()[0]), 0.0)
        opt.step()
        self.assertEqual(float(fun.get_variables()[0]), 0.0)

    def test_proximal_l2_weight_is_not_scaled(self):
        fun = Quadratic(10.0)
        opt = _sgd(fun, lr=None)
        opt.set_step_size(0.1)
        opt.set_penalty_type(ProximalL2Penalty())
        opt.set_penalty_weight(0.25)
        opt.init_minimization()
        opt.step()
        np.testing.assert_allclose(fun.get_variables(), [6.4])

    def test_smooth_l2_adds_to_gradient(self):
        fun = Quadratic(10.0)
        opt = _sgd(fun, lr=0.1)
        opt.set_penalty_type(L2Penalty())
        opt.set_penalty_weight(0.5)
        opt.init_minimization()
        opt.step()
        np.testing.assert_allclose(fun.get_variables(), [7.5])

    def test_update_gradient_returns_new_array(self):
        opt = _sgd(Quadratic(1.0))
        opt.set_penalty_type(L2Penalty())
        opt.set_penalty_weight(1.0)
        g = np.array([1.0, 1.0])
        out = opt.update_gradient(g, np.array([2.0, 3.0]))
        np.testing.assert_array_equal(g, [1.0, 1.0])
        np.testing.assert_allclose(out, [3.0, 4.0])

    def test_adam_step_count_tracks_iterations(self):
        fun = Quadratic([1.0, -1.0])
        updater = AdamUpdater()
        opt = _sgd(fun, updater=updater)
        opt.init_minimization()
        for _ in range(7):
            opt.step()
        self.assertEqual(updater.step_count, opt.iteration_counter)
        opt.init_minimization()
        self.assertEqual(updater.step_count, 0)

    def test_do_proximal_operation_scales_sparse_weight_by_learning_rate(self):
        opt = _sgd(Quadratic([1.0, 1.0]), lr=0.1)
        opt.set_penalty_type(L1Penalty())
        opt.set_penalty_weight(0.05)
        opt.init_minimization()
        v = np.array([1.0, -0.003])
        opt.do_proximal_operation(v)
        np.testing.assert_allclose(v, [0.995, 0.0], rtol=1e-12)

    def test_do_proximal_operation_dense_weight_is_unscaled(self):
        opt = _sgd(Quadratic([1.0, 1.0]), lr=0.1)
        opt.set_penalty_type(ProximalL2Penalty())
        opt.set_penalty_weight(0.25)
        opt.init_minimization()
        v = np.array([2.5, -5.0])
        opt.do_proximal_operation(v)
        np.testing.assert_allclose(v, [2.0, -4.0], rtol=1e-12)

    def test_do_proximal_operation_without_proximal_penalty(self):
        for penalty in (None, L2Penalty()):
            with self.subTest(penalty=type(penalty).__name__):
                opt = _sgd(Quadratic([1.0, 1.0]), lr=0.1)
                if penalty is not None:
                    opt.set_penalty_type(penalty)
                    opt.set_penalty_weight(0.5)
                opt.init_minimization()
                v = np.array([1.0, -2.0])
                opt.do_proximal_operation(v)
                np.testing.assert_array_equal(v, [1.0, -2.0])


class TestStateMachine(unittest.TestCase):
    def test_step_before_init_raises(self):
        opt = _sgd(Quadratic(1.0))
        with self.assertRaises(MinimizerStateError):
            opt.step()

    def test_pass_limit(self):
        opt = _sgd(Quadratic(1.0), num_passes=2)
        opt.init_minimization()
        opt.step()
        self.assertEqual(opt.complete_pass(), MinimizerState.RUNNING)
        opt.step()
        self.assertEqual(opt.complete_pass(), MinimizerState.PASS_LIMIT_REACHED)
        self.assertEqual(opt.cur_passes, 2)
        self.assertTrue(opt.is_terminal)
        with self.assertRaises(MinimizerStateError):
            opt.step()
        with self.assertRaises(MinimizerStateError):
            opt.complete_pass()

    def test_reinit_leaves_terminal_state(self):
        opt = _sgd(Quadratic(1.0), num_passes=1)
        opt.init_minimization()
        opt.step()
        opt.complete_pass()
        opt.init_minimization()
        self.assertEqual(opt.state, MinimizerState.INITIALIZED)
        self.assertEqual((opt.cur_passes, opt.iteration_counter), (0, 0))

    def test_shape_mismatch_fails_without_touching_variables(self):
        fun = WrongGradient([1.0, 2.0])
        opt = _sgd(fun)
        opt.init_minimization()
        with self.assertRaises(ShapeMismatchError):
            opt.step()
        np.testing.assert_array_equal(fun.get_variables(), [1.0, 2.0])
        self.assertEqual(opt.state, MinimizerState.FAILED)
        self.assertEqual(opt.iteration_counter, 0)
        with self.assertRaises(MinimizerStateError):
            opt.step()

    def test_gradient_tolerance_converges(self):
        fun = Quadratic(1.0)
        opt = _sgd(fun, lr=0.1)
        opt.set_gradient_tolerance(1e-3)
        opt.init_minimization()
        steps = 0
        while not opt.is_terminal and steps < 100:
            opt.step()
            steps += 1
        self.assertEqual(opt.state, MinimizerState.CONVERGED)
        self.assertTrue(opt.converged)
        self.assertLess(steps, 100)
        self.assertLessEqual(abs(float(fun.get_variables()[0])), 5e-4)

    def test_cost_tolerance_converges_at_pass_end(self):
        opt = _sgd(Quadratic(1.0), num_passes=10)
        opt.set_cost_tolerance(1.0)
        opt.init_minimization()
        self.assertEqual(opt.complete_pass(cost=1.0), MinimizerState.RUNNING)
        self.assertEqual(opt.complete_pass(cost=0.5), MinimizerState.CONVERGED)

    def test_resume_refused_after_convergence(self):
        opt = _sgd(Quadratic(1.0), lr=0.1)
        opt.set_gradient_tolerance(1e-3)
        opt.init_minimization()
        while not opt.is_terminal:
            opt.step()
        self.assertEqual(opt.state, MinimizerState.CONVERGED)
        counter = opt.iteration_counter
        with self.assertRaises(MinimizerStateError):
            opt.resume_minimization()
        self.assertEqual(opt.state, MinimizerState.CONVERGED)
        self.assertEqual(opt.iteration_counter, counter)
        with self.assertRaises(MinimizerStateError):
            opt.step()

    def test_resume_refused_after_failure_or_init(self):
        opt = _sgd(WrongGradient([1.0, 2.0]))
        opt.init_minimization()
        with self.assertRaises(ShapeMismatchError):
            opt.step()
        with self.assertRaises(MinimizerStateError):
            opt.resume_minimization()
        self.assertEqual(opt.state, MinimizerState.FAILED)

        opt = _sgd(Quadratic(1.0))
        opt.init_minimization()
        with self.assertRaises(MinimizerStateError):
            opt.resume_minimization()
        self.assertEqual(opt.state, MinimizerState.INITIALIZED)


if __name__ == "__main__":
    unittest.main()
