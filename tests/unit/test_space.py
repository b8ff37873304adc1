import unittest

import numpy as np

from turnrl.datatypes import (BoxSpace, DiscreteSpace, Element, Space,
                              enumerate_discrete, space_dims)
from turnrl.errors import EncodingError


class gappy(Space):
    '''Declares discrete dimensions of size 2 at the given indices only.'''
    def __init__(self, indices=(0, 2)):
        self._indices = indices

    def discrete_dim(self, d):
        return 2 if d in self._indices else None

    def continuous_dim(self, d):
        return None


class testSpace(unittest.TestCase):
    def test_discrete_space(self):
        space = DiscreteSpace((3, 4), players=2)

        self.assertEqual(space.discrete_dims(), [3, 4])
        self.assertEqual(space.continuous_dims(), [])
        self.assertIsNone(space.discrete_dim(2))
        self.assertEqual(space.size(), 12)
        self.assertEqual(space.player_count(), 2)
        self.assertTrue(space.is_discrete())

    def test_box_space(self):
        space = BoxSpace((2,), ((0.0, 1.0), (-1.0, 1.0)))

        self.assertEqual(space.discrete_dims(), [2])
        self.assertEqual(space.continuous_dims(), [(0.0, 1.0), (-1.0, 1.0)])
        self.assertFalse(space.is_discrete())

        with self.assertRaises(ValueError):
            BoxSpace((), ((1.0, 1.0),))
        with self.assertRaises(ValueError):
            DiscreteSpace((0,))

    def test_contiguity(self):
        for indices in ((0, 2), (0, 3), (0, 1, 9)):
            with self.subTest(indices=indices):
                with self.assertRaises(ValueError):
                    space_dims(gappy(indices))

        self.assertEqual(
            space_dims(BoxSpace((2, 3), ((0.0, 1.0),))),
            ([2, 3], [(0.0, 1.0)]))

    def test_try_build_counts(self):
        space = BoxSpace((3, 3), ((0.0, 1.0),))

        self.assertIsNotNone(Element.try_build(space, [1, 2], [0.5]))
        self.assertIsNone(Element.try_build(space, [1], [0.5]))
        self.assertIsNone(Element.try_build(space, [1, 2, 0], [0.5]))
        self.assertIsNone(Element.try_build(space, [1, 2]))
        self.assertIsNone(Element.try_build(space, [1, 2], [0.5, 0.5]))

    def test_try_build_bounds(self):
        space = BoxSpace((3,), ((0.0, 1.0),))

        self.assertIsNone(Element.try_build(space, [3], [0.5]))
        self.assertIsNone(Element.try_build(space, [-1], [0.5]))
        self.assertIsNone(Element.try_build(space, [0], [1.0]))

    def test_build_or_raise(self):
        space = DiscreteSpace((2,))
        self.assertEqual(
            Element.build_or_raise(space, [1]).discrete_values(), (1,))
        with self.assertRaises(EncodingError):
            Element.build_or_raise(space, [1, 1])

    def test_encoding_round_trip(self):
        sizes = (2, 3, 2)
        space = DiscreteSpace(sizes)
        for values in enumerate_discrete(sizes):
            elem = Element.try_build(space, values)
            self.assertIsNotNone(elem)
            for d, v in enumerate(values):
                self.assertEqual(elem.discrete(d), v)

    def test_enumeration_order(self):
        self.assertEqual(
            list(enumerate_discrete((2, 2))),
            [(0, 0), (0, 1), (1, 0), (1, 1)])

    def test_is_valid(self):
        elem = Element([1, 1])

        self.assertTrue(elem.is_valid(DiscreteSpace((2, 2))))
        self.assertFalse(elem.is_valid(DiscreteSpace((2, 1))))
        self.assertFalse(elem.is_valid(DiscreteSpace((2,))))
        self.assertFalse(elem.is_valid(DiscreteSpace((2, 2, 2))))
        self.assertFalse(elem.is_valid(BoxSpace((2, 2), ((0.0, 1.0),))))

    def test_gen_random(self):
        rng = np.random.default_rng(0)
        space = BoxSpace((3, 5), ((-2.0, 2.0),))
        for _ in range(200):
            action = Element.gen_random(space, rng)
            self.assertIsNotNone(action)
            self.assertTrue(action.is_valid(space))

    def test_gen_random_is_seeded(self):
        space = DiscreteSpace((10, 10))
        a = [Element.gen_random(space, np.random.default_rng(7))
             for _ in range(3)]
        self.assertEqual(a[0], a[1])
        self.assertEqual(a[1], a[2])

    def test_equality(self):
        self.assertEqual(Element([1], [0.5]), Element([1], [0.5]))
        self.assertNotEqual(Element([1]), Element([0]))
        self.assertEqual(len({Element([1]), Element([1])}), 1)
        self.assertEqual(
            Element([1], [0.5]).to_dict(),
            {'discrete': [1], 'continuous': [0.5]})


if __name__ == "__main__":
    unittest.main()
