import unittest

from stochopt.domain import (
    MinimizerConfigurationError,
    MinimizerState,
    MinimizerStateError,
    ShapeMismatchError,
    UpdaterStateError,
)


class TestErrors(unittest.TestCase):
    def test_configuration_error_is_value_error(self):
        err = MinimizerConfigurationError("Descend updater must be set", "gradient_updater")
        self.assertIsInstance(err, ValueError)
        self.assertEqual(err.field, "gradient_updater")
        self.assertIn("Descend updater", str(err))

    def test_shape_mismatch_carries_lengths(self):
        err = ShapeMismatchError("gradient vs variables", 3, 4)
        self.assertIsInstance(err, ValueError)
        self.assertEqual((err.expected, err.got), (3, 4))
        self.assertIn("expected 3, got 4", str(err))

    def test_state_errors_are_runtime_errors(self):
        self.assertIsInstance(UpdaterStateError("AdamUpdater"), RuntimeError)
        err = MinimizerStateError("step", "converged")
        self.assertIsInstance(err, RuntimeError)
        self.assertEqual(err.state, "converged")


class TestMinimizerState(unittest.TestCase):
    def test_terminal_states(self):
        self.assertTrue(MinimizerState.CONVERGED.is_terminal)
        self.assertTrue(MinimizerState.PASS_LIMIT_REACHED.is_terminal)
        self.assertTrue(MinimizerState.FAILED.is_terminal)

    def test_non_terminal_states(self):
        self.assertFalse(MinimizerState.UNCONFIGURED.is_terminal)
        self.assertFalse(MinimizerState.INITIALIZED.is_terminal)
        self.assertFalse(MinimizerState.RUNNING.is_terminal)


if __name__ == "__main__":
    unittest.main()
