import contextlib
import io
import pathlib
import tempfile
import unittest

from turnrl.__main__ import main
from turnrl.agents import QLearning, RandomAgent
from turnrl.environments import GridWorld, TicTacToe
from turnrl.session import Session, Task


class testSession(unittest.TestCase):
    def _tasks(self, path=None, save_agents=False):
        q = QLearning(seed=0, save_zipped=False)
        return [
            Task('grid', GridWorld(rows=3, cols=3), [q], episodes=5,
                 path=path, save_agents=save_agents),
            Task('ttt', TicTacToe(), [RandomAgent(seed=1)] * 2, episodes=4,
                 path=path, save_agents=save_agents)]

    def test_in_process(self):
        result = Session('session', self._tasks()).run()

        self.assertEqual(len(result), 9)
        self.assertEqual(
            result['task'].value_counts().to_dict(), {'grid': 5, 'ttt': 4})

    def test_separate_process(self):
        with tempfile.TemporaryDirectory() as tmp:
            session = Session(
                'session', self._tasks(tmp, save_agents=True),
                separate_process=True)
            result = session.run()

            self.assertEqual(len(result), 9)
            self.assertTrue((pathlib.Path(tmp) / 'grid_0.pkl').is_file())
            # an agent playing both sides is saved once
            self.assertEqual(
                len(list(pathlib.Path(tmp).glob('ttt_*'))), 1)

    def test_empty_session(self):
        self.assertTrue(Session('empty', []).run().empty)

    def test_task_arguments(self):
        with self.assertRaises(ValueError):
            Task('bad', GridWorld(), [QLearning()], episodes=-1)


class testCommandLine(unittest.TestCase):
    def test_train_and_save(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                code = main([
                    '--env', 'grid', '--agent', 'q', '--episodes', '5',
                    '--rows', '3', '--cols', '3', '--seed', '1',
                    '--path', tmp, '--output', 'agent'])

            self.assertEqual(code, 0)
            self.assertIn('reward_0', out.getvalue())
            loaded = QLearning(save_zipped=False)
            loaded.load('agent', tmp)
            self.assertEqual(len(loaded.table), 9 * 4)

    def test_self_play(self):
        with tempfile.TemporaryDirectory() as tmp:
            with contextlib.redirect_stdout(io.StringIO()):
                code = main([
                    '--env', 'tictactoe', '--agent', 'dqn', '--episodes',
                    '3', '--seed', '1', '--path', tmp, '--zipped'])

            self.assertEqual(code, 0)
            self.assertTrue(
                (pathlib.Path(tmp) / 'dqn_tictactoe.pbz2').is_file())


if __name__ == "__main__":
    unittest.main()
