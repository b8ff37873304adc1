import unittest

import numpy as np

from turnrl.errors import EncodingError
from turnrl.learners import QTable


class testQTable(unittest.TestCase):
    def test_size(self):
        for state_sizes, action_sizes in (
                ((9, 9), (4,)), ((3,) * 9 + (2,), (3, 3)), ((1,), (1,))):
            with self.subTest(state_sizes=state_sizes):
                table = QTable(state_sizes, action_sizes)
                self.assertEqual(
                    len(table),
                    int(np.prod(state_sizes)) * int(np.prod(action_sizes)))
                self.assertFalse(table.values.any())

    def test_encode(self):
        self.assertEqual(QTable.encode((0, 0), (3, 4)), 0)
        self.assertEqual(QTable.encode((1, 2), (3, 4)), 6)
        self.assertEqual(QTable.encode((2, 3), (3, 4)), 11)
        self.assertEqual(QTable.decode(6, (3, 4)), (1, 2))

        for index in range(24):
            self.assertEqual(
                QTable.encode(QTable.decode(index, (2, 3, 4)), (2, 3, 4)),
                index)

    def test_encode_errors(self):
        with self.assertRaises(EncodingError):
            QTable.encode((1,), (3, 4))
        with self.assertRaises(EncodingError):
            QTable.encode((1, 4), (3, 4))
        with self.assertRaises(EncodingError):
            QTable.encode((1, None), (3, 4))

    def test_offset(self):
        table = QTable((3, 3), (2, 2))
        self.assertEqual(table.offset((1, 2), (1, 0)), 5 * 4 + 2)

    def test_learn(self):
        table = QTable((2,), (3,))
        error = table.learn((1,), (2,), target=5.0, learning_rate=0.5)

        self.assertEqual(error, 5.0)
        self.assertEqual(table.get((1,), (2,)), 2.5)
        np.testing.assert_array_equal(table.row((1,)), [0.0, 0.0, 2.5])
        np.testing.assert_array_equal(table.row((0,)), [0.0, 0.0, 0.0])

    def test_row_is_a_copy(self):
        table = QTable((2,), (2,))
        row = table.row((0,))
        row[0] = 10.0

        self.assertEqual(table.get((0,), (0,)), 0.0)
        with self.assertRaises(ValueError):
            table.values[0] = 1.0


if __name__ == "__main__":
    unittest.main()
