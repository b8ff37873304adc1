import unittest

from turnrl.agents import Agent, QLearning
from turnrl.environments import (GridPosition, GridWorld, Move, MoveAction,
                                 TicTacToe, TicTacToeAction)
from turnrl.errors import (IncompatibleEnvironmentError,
                           TrainingPreconditionError)
from turnrl.trainer import EpisodeSummary, Trainer, initialize_agents


class scriptedAgent(Agent):
    '''Plays a fixed list of actions and records every learning call.'''
    def __init__(self, actions=(), **kwargs):
        super().__init__(exploration_strategy=0.0, **kwargs)
        self._script = list(actions)
        self.calls = []
        self.resets = 0

    def try_init(self, env):
        self._action_type = env.action_type
        return True

    def predict(self, state):
        return self._script.pop(0)

    def learn(self, state, action, reward, next_state):
        self.calls.append((
            state.discrete_values(), action, reward,
            None if next_state is None else next_state.discrete_values()))
        return {}

    def reset(self):
        super().reset()
        self.resets += 1


class refusingAgent(scriptedAgent):
    def try_init(self, env):
        return False


class testTrainer(unittest.TestCase):
    def test_player_count_mismatch(self):
        with self.assertRaises(TrainingPreconditionError):
            Trainer(TicTacToe(), [scriptedAgent()])
        with self.assertRaises(TrainingPreconditionError):
            Trainer(GridWorld(), [scriptedAgent(), scriptedAgent()])

    def test_initialize_agents(self):
        agent = scriptedAgent()
        initialize_agents(TicTacToe(), [agent, agent])
        self.assertTrue(agent.is_initialized)

        with self.assertRaises(IncompatibleEnvironmentError):
            initialize_agents(GridWorld(), [refusingAgent()])

    def test_single_player(self):
        agent = scriptedAgent(
            [MoveAction(Move.RIGHT), MoveAction(Move.RIGHT)])
        trainer = Trainer(
            GridWorld(start=(4, 2)), [agent], progress_bar=False)
        summary = trainer.run_episode()

        self.assertEqual(summary, EpisodeSummary(2, (101.0,)))
        self.assertEqual(agent.calls, [
            ((4, 2), MoveAction(Move.RIGHT), 1.0, (4, 3)),
            ((4, 3), MoveAction(Move.RIGHT), 100.0, None)])
        self.assertEqual(agent.resets, 1)

    def test_credit_assignment(self):
        x = scriptedAgent([
            TicTacToeAction(0, 0), TicTacToeAction(0, 1),
            TicTacToeAction(0, 2)])
        o = scriptedAgent([TicTacToeAction(1, 0), TicTacToeAction(1, 1)])
        trainer = Trainer(TicTacToe(), [x, o], progress_bar=False)
        summary = trainer.run_episode()

        self.assertEqual(summary.steps, 5)
        self.assertEqual(summary.rewards, (1.0, -1.0))

        self.assertEqual([c[1] for c in x.calls], [
            TicTacToeAction(0, 0), TicTacToeAction(0, 1),
            TicTacToeAction(0, 2)])
        self.assertEqual([c[2] for c in x.calls], [0.0, 0.0, 1.0])
        self.assertIsNotNone(x.calls[0][3])
        self.assertIsNone(x.calls[-1][3])
        # X learns from its first move when it moves again
        self.assertEqual(x.calls[0][3], (1, 0, 0, 2, 0, 0, 0, 0, 0, 0))

        self.assertEqual([c[1] for c in o.calls], [
            TicTacToeAction(1, 0), TicTacToeAction(1, 1)])
        self.assertEqual([c[2] for c in o.calls], [0.0, -1.0])
        self.assertIsNone(o.calls[-1][3])

    def test_illegal_move_credit(self):
        x = scriptedAgent([TicTacToeAction(1, 1)])
        o = scriptedAgent([TicTacToeAction(1, 1)])
        Trainer(TicTacToe(), [x, o], progress_bar=False).run_episode()

        self.assertEqual(x.calls, [
            ((0,) * 10, TicTacToeAction(1, 1), 1.0, None)])
        self.assertEqual(o.calls, [
            ((0, 0, 0, 0, 1, 0, 0, 0, 0, 0), TicTacToeAction(1, 1),
             -100.0, None)])

    def test_self_play(self):
        agent = QLearning(exploration_strategy=0.3, seed=0)
        env = TicTacToe()
        initialize_agents(env, [agent, agent])
        trainer = Trainer(env, [agent, agent], progress_bar=False)

        result = trainer.train(30)

        self.assertEqual(len(result), 30)
        self.assertEqual(
            list(result.columns), ['episode', 'steps', 'reward_0', 'reward_1'])
        self.assertEqual(result['episode'].tolist(), list(range(1, 31)))
        self.assertTrue((result['steps'] >= 2).all())
        self.assertTrue(agent.table.values.any())
        # reset once per episode, even when the agent plays both sides
        self.assertEqual(agent._episode, 30)
        self.assertEqual(trainer.episodes, 30)

    def test_q_learning_on_grid(self):
        agent = QLearning(exploration_strategy=0.5, seed=0)
        env = GridWorld(rows=5, cols=5, start=(2, 0))
        initialize_agents(env, [agent])
        Trainer(env, [agent], progress_bar=False).train(2000)

        self.assertGreater(agent.table.get((2, 1), (Move.RIGHT,)), 50.0)
        self.assertEqual(
            agent.predict(GridPosition(2, 1)), MoveAction(Move.RIGHT))

    def test_empty_training(self):
        agent = scriptedAgent()
        result = Trainer(GridWorld(), [agent], progress_bar=False).train(0)

        self.assertTrue(result.empty)


if __name__ == "__main__":
    unittest.main()
