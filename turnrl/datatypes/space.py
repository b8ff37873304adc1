# -*- coding: utf-8 -*-
'''
Spaces
======

A generic description of state and action spaces and of their elements.

A space exposes, per dimension index `d`, either a discrete cardinality
(`discrete_dim`) or a continuous range (`continuous_dim`). Dimensions are
numbered from 0 until the first `None`; once `None` is returned for `d`, every
greater index returns `None` as well.

Classes
-------
Space:
    the interface of all spaces.

StateSpace:
    a `Space` that also declares the number of players.

DiscreteSpace:
    a space made of discrete dimensions only.

BoxSpace:
    a space with both discrete and continuous dimensions.

SpaceElem:
    the interface of all points of a space.

Action:
    a `SpaceElem` that can be sampled at random and validated.

State:
    a `SpaceElem` that knows whose turn it is.

Element:
    a generic `Action` and `State` backed by tuples of values.
'''

from __future__ import annotations

import abc
import itertools
import math
from collections.abc import Iterator, Sequence
from typing import TypeVar

import numpy as np

from turnrl.errors import EncodingError

ContinuousRange = tuple[float, float]
ElemType = TypeVar('ElemType', bound='SpaceElem')
ActionType = TypeVar('ActionType', bound='Action')

# indices past the first missing dimension checked for contiguity
GAP_WINDOW = 16


class Space(abc.ABC):
    '''
    The interface of all spaces (state and action).
    '''

    @abc.abstractmethod
    def discrete_dim(self, d: int) -> int | None:
        '''
        The size of discrete dimension `d`, or `None` if there is no such
        dimension.
        '''

    @abc.abstractmethod
    def continuous_dim(self, d: int) -> ContinuousRange | None:
        '''
        The half-open range `(start, end)` of continuous dimension `d`, or
        `None` if there is no such dimension.
        '''

    def discrete_dims(self) -> list[int]:
        '''Sizes of all discrete dimensions, in declaration order.'''
        return list(_walk(self.discrete_dim))

    def continuous_dims(self) -> list[ContinuousRange]:
        '''Ranges of all continuous dimensions, in declaration order.'''
        return list(_walk(self.continuous_dim))

    def is_discrete(self) -> bool:
        return self.continuous_dim(0) is None

    def size(self) -> int:
        '''The number of discrete elements (product of discrete sizes).'''
        return math.prod(self.discrete_dims())


class StateSpace(Space):
    '''
    A `Space` for states, which also declares the number of players.
    '''

    @abc.abstractmethod
    def player_count(self) -> int:
        '''The number of players acting on the environment.'''


class DiscreteSpace(StateSpace):
    '''
    A space with discrete dimensions only, described by a sequence of sizes.
    '''

    def __init__(self, sizes: Sequence[int], players: int = 1) -> None:
        if any(s < 1 for s in sizes):
            raise ValueError(f'Dimension sizes should be positive: {sizes}.')

        self._sizes = tuple(int(s) for s in sizes)
        self._players = players

    def discrete_dim(self, d: int) -> int | None:
        if 0 <= d < len(self._sizes):
            return self._sizes[d]

        return None

    def continuous_dim(self, d: int) -> ContinuousRange | None:
        return None

    def player_count(self) -> int:
        return self._players

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, DiscreteSpace)
            and self._sizes == other._sizes
            and self._players == other._players)

    def __repr__(self) -> str:
        return f'DiscreteSpace({list(self._sizes)})'


class BoxSpace(StateSpace):
    '''
    A space with discrete and continuous dimensions.
    '''

    def __init__(
            self, sizes: Sequence[int] = (),
            ranges: Sequence[ContinuousRange] = (),
            players: int = 1) -> None:
        '''
        Arguments
        ---------
        sizes:
            the size of each discrete dimension.

        ranges:
            the `(start, end)` range of each continuous dimension.

        players:
            number of players.

        Raises
        ------
        ValueError
            A non-positive size or an empty range.
        '''
        if any(s < 1 for s in sizes):
            raise ValueError(f'Dimension sizes should be positive: {sizes}.')
        if any(end <= start for start, end in ranges):
            raise ValueError(f'Ranges should not be empty: {ranges}.')

        self._sizes = tuple(int(s) for s in sizes)
        self._ranges = tuple(
            (float(start), float(end)) for start, end in ranges)
        self._players = players

    def discrete_dim(self, d: int) -> int | None:
        if 0 <= d < len(self._sizes):
            return self._sizes[d]

        return None

    def continuous_dim(self, d: int) -> ContinuousRange | None:
        if 0 <= d < len(self._ranges):
            return self._ranges[d]

        return None

    def player_count(self) -> int:
        return self._players

    def __repr__(self) -> str:
        return f'BoxSpace({list(self._sizes)}, {list(self._ranges)})'


def _walk(dim_fn) -> Iterator:
    d = 0
    while (dim := dim_fn(d)) is not None:
        yield dim
        d += 1


def space_dims(space: Space) -> tuple[list[int], list[ContinuousRange]]:
    '''
    Return the discrete sizes and the continuous ranges of a space.

    Raises
    ------
    ValueError
        The space is not contiguous: a dimension is declared within
        `GAP_WINDOW` indices after the first missing one.
    '''
    discrete = space.discrete_dims()
    continuous = space.continuous_dims()
    if any(
            space.discrete_dim(len(discrete) + i) is not None
            or space.continuous_dim(len(continuous) + i) is not None
            for i in range(1, GAP_WINDOW + 1)):
        raise ValueError(f'{space} declares non-contiguous dimensions.')

    return discrete, continuous


def enumerate_discrete(sizes: Sequence[int]) -> Iterator[tuple[int, ...]]:
    '''
    Iterate over every value vector of a discrete space, starting at all
    zeros. The last dimension varies fastest.
    '''
    return itertools.product(*(range(s) for s in sizes))


class SpaceElem(abc.ABC):
    '''
    A point in a space.
    '''

    @abc.abstractmethod
    def discrete(self, d: int) -> int | None:
        '''The value at discrete dimension `d`, or `None`.'''

    @abc.abstractmethod
    def continuous(self, d: int) -> float | None:
        '''The value at continuous dimension `d`, or `None`.'''

    @classmethod
    @abc.abstractmethod
    def try_build(
            cls: type[ElemType], space: Space,
            discrete: Sequence[int],
            continuous: Sequence[float] = ()) -> ElemType | None:
        '''
        Build an element from discrete and continuous values.

        Returns
        -------
        :
            the element, or `None` if the values do not match the space.
        '''

    @classmethod
    def build_or_raise(
            cls: type[ElemType], space: Space,
            discrete: Sequence[int],
            continuous: Sequence[float] = ()) -> ElemType:
        '''
        Same as `try_build`, but raise instead of returning `None`.

        Raises
        ------
        EncodingError
            The values do not match the space.
        '''
        elem = cls.try_build(space, discrete, continuous)
        if elem is None:
            raise EncodingError(
                f'Cannot build {cls.__qualname__} from discrete={list(discrete)}'
                f' and continuous={list(continuous)} in {space}.')

        return elem

    def discrete_values(self) -> tuple[int, ...]:
        return tuple(_walk(self.discrete))

    def continuous_values(self) -> tuple[float, ...]:
        return tuple(_walk(self.continuous))

    def to_dict(self) -> dict[str, list]:
        return {'discrete': list(self.discrete_values()),
                'continuous': list(self.continuous_values())}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpaceElem) or type(self) is not type(other):
            return NotImplemented

        return (self.discrete_values() == other.discrete_values()
                and self.continuous_values() == other.continuous_values())

    def __hash__(self) -> int:
        return hash((type(self).__qualname__,
                     self.discrete_values(), self.continuous_values()))


class Action(SpaceElem):
    '''
    A `SpaceElem` that supports random sampling and validation.
    '''

    @classmethod
    def gen_random(
            cls: type[ActionType], space: Space,
            rng: np.random.Generator) -> ActionType | None:
        '''
        Draw an action uniformly at random, independently per dimension.

        Arguments
        ---------
        space:
            the action space.

        rng:
            the random generator to draw from.

        Returns
        -------
        :
            the action, or `None` if the sampled values cannot be built.
        '''
        discrete = [int(rng.integers(0, size))
                    for size in space.discrete_dims()]
        continuous = [float(rng.uniform(start, end))
                      for start, end in space.continuous_dims()]

        action = cls.try_build(space, discrete, continuous)
        assert action is None or action.is_valid(space), (
            f'Generated action {action} is not valid in {space}.')

        return action

    def is_valid(self, space: Space) -> bool:
        '''
        Whether every value is within the bound of its dimension, and the
        element and the space have the same dimensions.
        '''
        d = 0
        while True:
            value, size = self.discrete(d), space.discrete_dim(d)
            if value is None and size is None:
                break
            if value is None or size is None or not 0 <= value < size:
                return False
            d += 1

        d = 0
        while True:
            value, bounds = self.continuous(d), space.continuous_dim(d)
            if value is None and bounds is None:
                break
            if value is None or bounds is None:
                return False
            if not bounds[0] <= value < bounds[1]:
                return False
            d += 1

        return True


class State(SpaceElem):
    '''
    A `SpaceElem` that knows which player should move.
    '''

    @abc.abstractmethod
    def current_player(self) -> int:
        '''The index of the player whose move it is.'''


class Element(Action, State):
    '''
    A generic space element backed by tuples of values.

    It can be used both as an action and as a single-player state.
    '''

    def __init__(
            self, discrete: Sequence[int] = (),
            continuous: Sequence[float] = (),
            player: int = 0) -> None:
        self._discrete = tuple(int(v) for v in discrete)
        self._continuous = tuple(float(v) for v in continuous)
        self._player = player

    def discrete(self, d: int) -> int | None:
        if 0 <= d < len(self._discrete):
            return self._discrete[d]

        return None

    def continuous(self, d: int) -> float | None:
        if 0 <= d < len(self._continuous):
            return self._continuous[d]

        return None

    def current_player(self) -> int:
        return self._player

    @classmethod
    def try_build(
            cls, space: Space,
            discrete: Sequence[int],
            continuous: Sequence[float] = ()) -> Element | None:
        discrete_sizes, continuous_ranges = space_dims(space)
        if (len(discrete) != len(discrete_sizes)
                or len(continuous) != len(continuous_ranges)):
            return None

        elem = cls(discrete, continuous)
        if not elem.is_valid(space):
            return None

        return elem

    def __repr__(self) -> str:
        return f'Element({list(self._discrete)}, {list(self._continuous)})'
