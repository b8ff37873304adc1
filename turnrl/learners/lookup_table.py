# -*- coding: utf-8 -*-
'''
QTable class
============

A flat table of action values for discrete state and action spaces.

States and actions are mapped to integers by mixed-radix encoding: walking the
dimensions in declaration order, `index = index * size + value`. The value of
`(state, action)` is stored at `state_index * action_count + action_index`.
Because the last dimension is the least significant digit, action indices
follow the same order as `enumerate_discrete`.
'''

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from turnrl.errors import EncodingError


class QTable:
    '''
    A lookup table of Q-values, allocated once from the sizes of the state
    and action spaces.
    '''

    def __init__(
            self, state_sizes: Sequence[int],
            action_sizes: Sequence[int]) -> None:
        '''
        Arguments
        ---------
        state_sizes:
            sizes of the discrete dimensions of the state space.

        action_sizes:
            sizes of the discrete dimensions of the action space.
        '''
        self._state_sizes = tuple(int(s) for s in state_sizes)
        self._action_sizes = tuple(int(s) for s in action_sizes)
        self._state_count = math.prod(self._state_sizes)
        self._action_count = math.prod(self._action_sizes)
        self._table = np.zeros(self._state_count * self._action_count)

    @property
    def state_sizes(self) -> tuple[int, ...]:
        return self._state_sizes

    @property
    def action_sizes(self) -> tuple[int, ...]:
        return self._action_sizes

    @property
    def state_count(self) -> int:
        return self._state_count

    @property
    def action_count(self) -> int:
        return self._action_count

    @property
    def values(self) -> np.ndarray:
        '''A read-only view of the flat table.'''
        view = self._table.view()
        view.flags.writeable = False
        return view

    @staticmethod
    def encode(values: Sequence[int | None], sizes: Sequence[int]) -> int:
        '''
        Mixed-radix encoding of `values`.

        Raises
        ------
        EncodingError
            The number of values does not match the number of dimensions, or
            a value is out of its dimension's range.
        '''
        if len(values) != len(sizes):
            raise EncodingError(
                f'Expected {len(sizes)} values, got {len(values)}.')

        index = 0
        for value, size in zip(values, sizes):
            if value is None or not 0 <= value < size:
                raise EncodingError(
                    f'Value {value} is out of range for a dimension of '
                    f'size {size}.')
            index = index * size + value

        return index

    @staticmethod
    def decode(index: int, sizes: Sequence[int]) -> tuple[int, ...]:
        '''Inverse of `encode`.'''
        values: list[int] = []
        for size in reversed(sizes):
            index, value = divmod(index, size)
            values.append(value)

        return tuple(reversed(values))

    def state_index(self, state_values: Sequence[int | None]) -> int:
        return self.encode(state_values, self._state_sizes)

    def action_index(self, action_values: Sequence[int | None]) -> int:
        return self.encode(action_values, self._action_sizes)

    def action_values(self, action_index: int) -> tuple[int, ...]:
        return self.decode(action_index, self._action_sizes)

    def offset(
            self, state_values: Sequence[int | None],
            action_values: Sequence[int | None]) -> int:
        return (self.state_index(state_values) * self._action_count
                + self.action_index(action_values))

    def row(self, state_values: Sequence[int | None]) -> np.ndarray:
        '''Q-values of every action of a state, in enumeration order.'''
        start = self.state_index(state_values) * self._action_count
        return self._table[start: start + self._action_count].copy()

    def get(
            self, state_values: Sequence[int | None],
            action_values: Sequence[int | None]) -> float:
        return float(self._table[self.offset(state_values, action_values)])

    def learn(
            self, state_values: Sequence[int | None],
            action_values: Sequence[int | None],
            target: float, learning_rate: float) -> float:
        '''
        Move `Q(s, a)` toward `target`: `Q += learning_rate * (target - Q)`.

        Returns
        -------
        :
            the temporal-difference error `target - Q` before the update.
        '''
        i = self.offset(state_values, action_values)
        error = target - self._table[i]
        self._table[i] += learning_rate * error

        return float(error)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return (f'QTable(states={list(self._state_sizes)}, '
                f'actions={list(self._action_sizes)})')
