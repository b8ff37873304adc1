# -*- coding: utf-8 -*-
'''
MemoryBuffer class
==================

A replay memory that overflows! When the buffer is full, adding a new
`Experience` evicts the oldest one.
'''

from __future__ import annotations

import collections
import dataclasses
from collections.abc import Iterator

import numpy as np


@dataclasses.dataclass(frozen=True)
class Experience:
    '''
    One transition, as seen by the value agent.
    '''
    # the encoded state before the action
    state: tuple[float, ...]
    # index of the chosen action in the action enumeration order
    action: int
    reward: float
    # the encoded next state (all zeros for terminal transitions)
    next_state: tuple[float, ...]
    done: bool


class MemoryBuffer:
    '''
    A fixed-capacity FIFO of `Experience` objects with uniform sampling
    without replacement.
    '''

    def __init__(
            self, capacity: int,
            rng: np.random.Generator | None = None) -> None:
        '''
        Arguments
        ---------
        capacity:
            maximum number of experiences held by the buffer.

        rng:
            random generator used by `sample`. If omitted, an unseeded
            generator is created.

        Raises
        ------
        ValueError
            `capacity` is less than 1.
        '''
        if capacity < 1:
            raise ValueError('capacity should be at least 1.')

        self._capacity = capacity
        self._buffer: collections.deque[Experience] = collections.deque()
        self._rng = rng or np.random.default_rng()

    @property
    def capacity(self) -> int:
        return self._capacity

    def add_experience(self, experience: Experience) -> None:
        '''
        Append an experience, evicting the oldest one if the buffer is full.
        '''
        if len(self._buffer) == self._capacity:
            self._buffer.popleft()

        self._buffer.append(experience)

    def sample(self, batch_size: int) -> list[Experience]:
        '''
        Draw `batch_size` distinct experiences uniformly at random.

        Arguments
        ---------
        batch_size:
            the number of experiences to return.

        Raises
        ------
        ValueError
            `batch_size` exceeds the number of experiences in the buffer.
        '''
        if batch_size > len(self._buffer):
            raise ValueError(
                f'Cannot sample {batch_size} experiences from a buffer '
                f'holding {len(self._buffer)}.')

        indices = self._rng.choice(
            len(self._buffer), size=batch_size, replace=False)

        return [self._buffer[int(i)] for i in indices]

    def sample_and_unpack(
            self, batch_size: int
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        '''
        Draw a batch and return its columns as arrays: states, actions,
        rewards, next states and terminal flags.
        '''
        batch = self.sample(batch_size)

        return (
            np.array([e.state for e in batch], dtype=float),
            np.array([e.action for e in batch], dtype=int),
            np.array([e.reward for e in batch], dtype=float),
            np.array([e.next_state for e in batch], dtype=float),
            np.array([e.done for e in batch], dtype=bool))

    def clear(self) -> None:
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)

    def __iter__(self) -> Iterator[Experience]:
        return iter(self._buffer)

    def __repr__(self) -> str:
        return f'MemoryBuffer({len(self._buffer)}/{self._capacity})'
