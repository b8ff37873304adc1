import unittest

import numpy as np

from turnrl.utils import ConstantEpsilonGreedy, VariableEpsilonGreedy


class testExplorationStrategies(unittest.TestCase):
    def test_constant(self):
        rng = np.random.default_rng(0)

        self.assertFalse(any(
            ConstantEpsilonGreedy(0.0).explore(rng) for _ in range(100)))
        self.assertTrue(all(
            ConstantEpsilonGreedy(1.0).explore(rng) for _ in range(100)))

        with self.assertRaises(ValueError):
            ConstantEpsilonGreedy(1.5)

    def test_variable(self):
        rng = np.random.default_rng(0)
        strategy = VariableEpsilonGreedy(lambda n: 1.0 if n < 10 else 0.0)

        self.assertTrue(strategy.explore(rng, 0))
        self.assertFalse(strategy.explore(rng, 10))


if __name__ == "__main__":
    unittest.main()
