import unittest

import numpy as np

from turnrl.datatypes.buffers import Experience, MemoryBuffer


def experience(i: int) -> Experience:
    return Experience(
        state=(float(i),), action=i % 2, reward=float(i),
        next_state=(float(i + 1),), done=False)


class testMemoryBuffer(unittest.TestCase):
    def test_capacity(self):
        with self.assertRaises(ValueError):
            MemoryBuffer(0)

        buffer = MemoryBuffer(3)
        for i in range(5):
            buffer.add_experience(experience(i))
            self.assertLessEqual(len(buffer), 3)

        # the oldest experiences are evicted first
        self.assertEqual([e.reward for e in buffer], [2.0, 3.0, 4.0])

    def test_sample(self):
        buffer = MemoryBuffer(10, np.random.default_rng(0))
        for i in range(10):
            buffer.add_experience(experience(i))

        batch = buffer.sample(10)
        self.assertEqual(len(batch), 10)
        self.assertEqual(len({e.reward for e in batch}), 10)

        with self.assertRaises(ValueError):
            MemoryBuffer(5).sample(1)

    def test_sample_is_seeded(self):
        samples = []
        for _ in range(2):
            buffer = MemoryBuffer(10, np.random.default_rng(42))
            for i in range(10):
                buffer.add_experience(experience(i))
            samples.append([e.reward for e in buffer.sample(4)])

        self.assertEqual(samples[0], samples[1])

    def test_sample_and_unpack(self):
        buffer = MemoryBuffer(4)
        for i in range(4):
            buffer.add_experience(experience(i))

        states, actions, rewards, next_states, dones = \
            buffer.sample_and_unpack(3)

        self.assertEqual(states.shape, (3, 1))
        self.assertEqual(actions.shape, (3,))
        self.assertEqual(rewards.shape, (3,))
        self.assertEqual(next_states.shape, (3, 1))
        self.assertFalse(dones.any())
        np.testing.assert_array_equal(next_states[:, 0], states[:, 0] + 1)

    def test_clear(self):
        buffer = MemoryBuffer(2)
        buffer.add_experience(experience(0))
        buffer.clear()

        self.assertEqual(len(buffer), 0)


if __name__ == "__main__":
    unittest.main()
