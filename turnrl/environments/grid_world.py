# -*- coding: utf-8 -*-
'''
GridWorld class
===============

A single-player grid in which the player should reach the center cell.

The player moves Up, Down, Left or Right. Landing on the center gives a reward
of 100 and ends the episode; any other cell gives `1 / distance` to the
center. Trying to move off the grid keeps the position, gives the reward of
the current cell, and ends the episode.
'''

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from typing import Any

import numpy as np

from turnrl.datatypes.space import Action, DiscreteSpace, Space, State
from turnrl.environments.environment import Environment, Step

CENTER_REWARD = 100.0


class Move(enum.IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


class MoveAction(Action):
    '''
    One of the four moves, encoded as a single discrete dimension of size 4.
    '''

    def __init__(self, move: Move | int) -> None:
        self.move = Move(move)

    def discrete(self, d: int) -> int | None:
        return int(self.move) if d == 0 else None

    def continuous(self, d: int) -> float | None:
        return None

    @classmethod
    def try_build(
            cls, space: Space, discrete: Sequence[int],
            continuous: Sequence[float] = ()) -> MoveAction | None:
        if len(discrete) != 1 or continuous:
            return None
        if not 0 <= discrete[0] < len(Move):
            return None

        return cls(discrete[0])

    def __repr__(self) -> str:
        return f'MoveAction.{self.move.name}'


class GridPosition(State):
    '''
    The (row, column) position of the player.
    '''

    def __init__(self, row: int, col: int) -> None:
        self.row = row
        self.col = col

    def discrete(self, d: int) -> int | None:
        if d == 0:
            return self.row
        if d == 1:
            return self.col

        return None

    def continuous(self, d: int) -> float | None:
        return None

    def current_player(self) -> int:
        return 0

    @classmethod
    def try_build(
            cls, space: Space, discrete: Sequence[int],
            continuous: Sequence[float] = ()) -> GridPosition | None:
        if len(discrete) != 2 or continuous:
            return None

        rows, cols = space.discrete_dim(0), space.discrete_dim(1)
        if rows is None or cols is None:
            return None
        if not (0 <= discrete[0] < rows and 0 <= discrete[1] < cols):
            return None

        return cls(int(discrete[0]), int(discrete[1]))

    def __repr__(self) -> str:
        return f'GridPosition({self.row}, {self.col})'


class GridWorld(Environment[GridPosition, MoveAction]):
    '''
    A `rows` by `cols` grid with the goal in the center cell
    `(rows // 2, cols // 2)`.
    '''
    state_type = GridPosition
    action_type = MoveAction

    def __init__(
            self, rows: int = 9, cols: int = 9,
            start: tuple[int, int] | None = None,
            rng: np.random.Generator | None = None,
            **kwargs: Any) -> None:
        '''
        Arguments
        ---------
        rows:
            number of rows.

        cols:
            number of columns.

        start:
            a fixed starting position. If omitted, each episode starts from a
            random cell other than the center.

        rng:
            random generator for the starting position.
        '''
        super().__init__(**kwargs)

        if rows < 1 or cols < 1:
            raise ValueError('The grid should have at least one cell.')

        self._rows = rows
        self._cols = cols
        self._state_space = DiscreteSpace((rows, cols))
        self._action_space = DiscreteSpace((len(Move),))
        self._center = (rows // 2, cols // 2)
        if start is not None and GridPosition.try_build(
                self._state_space, start) is None:
            raise ValueError(f'Start position {start} is outside the grid.')

        self._start = start
        self._rng = rng or np.random.default_rng()
        self._position = self._center

    def get_config(self) -> dict[str, Any]:
        config = super().get_config()
        config.update(rows=self._rows, cols=self._cols, start=self._start)

        return config

    @property
    def center(self) -> tuple[int, int]:
        return self._center

    @property
    def position(self) -> tuple[int, int]:
        return self._position

    def state_space(self) -> DiscreteSpace:
        return self._state_space

    def action_space(self) -> DiscreteSpace:
        return self._action_space

    def reset(self) -> GridPosition:
        '''
        Move the player to the starting position. A random start never
        lands on the center, unless the grid has a single cell.
        '''
        if self._start is not None:
            self._position = self._start
        elif self._rows * self._cols == 1:
            self._position = (0, 0)
        else:
            self._position = self._center
            while self._position == self._center:
                self._position = (int(self._rng.integers(0, self._rows)),
                                  int(self._rng.integers(0, self._cols)))

        return GridPosition(*self._position)

    def _reward(self) -> tuple[float, bool]:
        if self._position == self._center:
            return CENTER_REWARD, True

        distance = math.dist(self._position, self._center)

        return 1.0 / distance, False

    def step(self, action: MoveAction) -> Step:
        row, col = self._position
        move = action.move
        at_edge = (
            (move is Move.UP and row == 0)
            or (move is Move.DOWN and row == self._rows - 1)
            or (move is Move.LEFT and col == 0)
            or (move is Move.RIGHT and col == self._cols - 1))

        if not at_edge:
            if move is Move.UP:
                row -= 1
            elif move is Move.DOWN:
                row += 1
            elif move is Move.LEFT:
                col -= 1
            else:
                col += 1
            self._position = (row, col)

        reward, done = self._reward()
        if done or at_edge:
            return Step((reward,), None)

        return Step((reward,), GridPosition(row, col))

    def __str__(self) -> str:
        return '\n'.join(
            ''.join(
                'P' if (r, c) == self._position
                else 'G' if (r, c) == self._center
                else '.'
                for c in range(self._cols))
            for r in range(self._rows))
