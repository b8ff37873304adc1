import tempfile
import unittest

import numpy as np

from turnrl.agents import DeepQLearning
from turnrl.datatypes import BoxSpace, Element
from turnrl.environments import (Environment, GridPosition, GridWorld, Move,
                                 MoveAction, Step, TicTacToe,
                                 TicTacToeAction)
from turnrl.errors import EncodingError


class boxEnv(Environment):
    '''A one-step environment with mixed state dimensions.'''
    state_type = Element
    action_type = Element

    def __init__(self, action_space, **kwargs):
        super().__init__(**kwargs)
        self._action_space = action_space

    def state_space(self):
        return BoxSpace((4,), ((-2.0, 2.0),))

    def action_space(self):
        return self._action_space

    def reset(self):
        return Element([2], [1.0])

    def step(self, action):
        return Step((0.0,), None)


def weights(net):
    return [(layer.weights.copy(), layer.biases.copy()) for layer in net.layers]


class testDeepQLearning(unittest.TestCase):
    def test_networks(self):
        agent = DeepQLearning(seed=0)
        self.assertTrue(agent.try_init(TicTacToe()))

        self.assertEqual(agent.policy_net.layer_sizes, [10, 64, 9])
        self.assertEqual(agent.target_net.layer_sizes, [10, 64, 9])
        for (pw, pb), (tw, tb) in zip(
                weights(agent.policy_net), weights(agent.target_net)):
            np.testing.assert_array_equal(pw, tw)
            np.testing.assert_array_equal(pb, tb)

    def test_rejects_continuous_actions(self):
        agent = DeepQLearning()

        self.assertFalse(agent.try_init(
            boxEnv(BoxSpace((), ((0.0, 1.0),)))))
        self.assertTrue(agent.try_init(boxEnv(BoxSpace((3,)))))

    def test_encode_input(self):
        agent = DeepQLearning()
        agent.try_init(boxEnv(BoxSpace((3,))))

        np.testing.assert_allclose(
            agent.encode_input(Element([2], [1.0])), [0.5, 0.75])
        np.testing.assert_array_equal(agent.encode_input(None), [0.0, 0.0])

    def test_encode_input_dimension_mismatch(self):
        agent = DeepQLearning(seed=0)
        agent.try_init(GridWorld())

        for state in (
                Element([1, 2, 3]), Element([1]), Element([1, 2], [0.5])):
            with self.subTest(state=state):
                with self.assertRaises(EncodingError):
                    agent.encode_input(state)
                with self.assertRaises(EncodingError):
                    agent.predict(state)

    def test_epsilon_zero_is_greedy(self):
        agent = DeepQLearning(exploration_strategy=0.0, seed=0)
        agent.try_init(TicTacToe())
        state = TicTacToe().reset()

        for _ in range(20):
            self.assertEqual(agent.act(state), agent.predict(state))

    def test_predict_is_argmax(self):
        agent = DeepQLearning(seed=0)
        agent.try_init(TicTacToe())
        state = TicTacToe().reset()

        q_values = agent.policy_net.predict(agent.encode_input(state))
        index = int(np.argmax(q_values))
        self.assertEqual(
            agent.predict(state), TicTacToeAction(index // 3, index % 3))

    def test_no_update_before_batch(self):
        agent = DeepQLearning(batch_size=3, buffer_capacity=10, seed=0)
        agent.try_init(GridWorld())
        before = weights(agent.policy_net)

        for _ in range(2):
            self.assertEqual(
                agent.learn(
                    GridPosition(0, 0), MoveAction(Move.DOWN), 1.0,
                    GridPosition(1, 0)),
                {})

        self.assertEqual(len(agent.buffer), 2)
        self.assertEqual(agent.updates, 0)
        for (w0, _), (w1, _) in zip(before, weights(agent.policy_net)):
            np.testing.assert_array_equal(w0, w1)

        result = agent.learn(
            GridPosition(0, 0), MoveAction(Move.DOWN), 1.0, None)
        self.assertIn('loss', result)
        self.assertEqual(agent.updates, 1)

    def test_terminal_target(self):
        agent = DeepQLearning(
            learning_rate=0.001, batch_size=1, buffer_capacity=1, seed=0)
        agent.try_init(GridWorld())
        state = GridPosition(3, 3)
        x = agent.encode_input(state)
        old = agent.policy_net.predict(x)

        agent.learn(state, MoveAction(Move.RIGHT), 10.0, None)
        new = agent.policy_net.predict(x)

        self.assertLess(
            abs(new[Move.RIGHT] - 10.0), abs(old[Move.RIGHT] - 10.0))
        experience = next(iter(agent.buffer))
        self.assertTrue(experience.done)
        self.assertEqual(experience.action, int(Move.RIGHT))
        self.assertEqual(experience.next_state, (0.0, 0.0))

    def test_target_sync(self):
        agent = DeepQLearning(
            batch_size=1, buffer_capacity=5, target_sync_every=2, seed=0)
        agent.try_init(GridWorld())

        def same():
            return all(
                np.array_equal(p[0], t[0]) and np.array_equal(p[1], t[1])
                for p, t in zip(
                    weights(agent.policy_net), weights(agent.target_net)))

        agent.learn(GridPosition(0, 0), MoveAction(Move.DOWN), 1.0,
                    GridPosition(1, 0))
        self.assertFalse(same())

        agent.learn(GridPosition(1, 0), MoveAction(Move.DOWN), 1.0,
                    GridPosition(2, 0))
        self.assertEqual(agent.updates, 2)
        self.assertTrue(same())

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            DeepQLearning(batch_size=0)
        with self.assertRaises(ValueError):
            DeepQLearning(batch_size=20, buffer_capacity=10)
        with self.assertRaises(ValueError):
            DeepQLearning(target_sync_every=0)

    def test_save_load(self):
        with tempfile.TemporaryDirectory() as tmp:
            agent = DeepQLearning(
                batch_size=1, discount_factor=0.7, name='dqn', seed=0,
                save_zipped=False)
            agent.try_init(GridWorld())
            agent.learn(GridPosition(0, 0), MoveAction(Move.UP), 1.0, None)
            agent.save(path=tmp)

            loaded = DeepQLearning(save_zipped=False)
            loaded.load('dqn', tmp)

            self.assertEqual(loaded.discount_factor, 0.7)
            self.assertEqual(loaded.updates, 1)
            self.assertEqual(len(loaded.buffer), 0)
            self.assertEqual(len(agent.buffer), 1)
            for (w0, b0), (w1, b1) in zip(
                    weights(agent.policy_net), weights(loaded.policy_net)):
                np.testing.assert_array_equal(w0, w1)
                np.testing.assert_array_equal(b0, b1)
            self.assertEqual(
                loaded.predict(GridPosition(2, 2)),
                agent.predict(GridPosition(2, 2)))


if __name__ == "__main__":
    unittest.main()
