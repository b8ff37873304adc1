# -*- coding: utf-8 -*-
'''
TicTacToe class
===============

The standard two-player Tic-Tac-Toe game.

The state is the 3-by-3 board (each cell empty, X or O) plus a done flag; X
always moves first, so the player to move follows from the piece counts.
An action is the (row, column) of the cell to mark.

Rewards (X, O):
    * X completes a line: (1, -1); O completes a line: (-1, 1).
    * the board fills up without a line: (0, 0).
    * a move into an occupied cell ends the game: (-100, 1) if X moved,
      (1, -100) if O moved; on a full board, (0, 0).
'''

from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import Any

from turnrl.datatypes.space import Action, DiscreteSpace, Space, State
from turnrl.environments.environment import Environment, Step

WIN_REWARD = 1.0
ILLEGAL_MOVE_PENALTY = -100.0
ILLEGAL_MOVE_OPPONENT_REWARD = 1.0

LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6))


class Cell(enum.IntEnum):
    EMPTY = 0
    X = 1
    O = 2  # noqa: E741


class TicTacToeAction(Action):
    '''
    Mark the cell at (`row`, `col`).
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

    @classmethod
    def try_build(
            cls, space: Space, discrete: Sequence[int],
            continuous: Sequence[float] = ()) -> TicTacToeAction | None:
        if len(discrete) != 2 or continuous:
            return None
        if not all(0 <= v < 3 for v in discrete):
            return None

        return cls(int(discrete[0]), int(discrete[1]))

    def __repr__(self) -> str:
        return f'TicTacToeAction({self.row}, {self.col})'


class TicTacToeBoard(State):
    '''
    A board snapshot. Discrete dimensions 0 to 8 are the cells in row-major
    order (0 empty, 1 X, 2 O); dimension 9 is the done flag.
    '''

    def __init__(
            self, cells: Sequence[int | Cell] | None = None,
            done: bool = False) -> None:
        self.cells: tuple[Cell, ...] = tuple(
            Cell(c) for c in (cells or (Cell.EMPTY,) * 9))
        self.done = done

    def discrete(self, d: int) -> int | None:
        if 0 <= d < 9:
            return int(self.cells[d])
        if d == 9:
            return int(self.done)

        return None

    def continuous(self, d: int) -> float | None:
        return None

    def current_player(self) -> int:
        x_count = self.cells.count(Cell.X)
        o_count = self.cells.count(Cell.O)

        return 0 if x_count == o_count else 1

    def is_full(self) -> bool:
        return Cell.EMPTY not in self.cells

    def winner(self) -> Cell | None:
        for a, b, c in LINES:
            if self.cells[a] != Cell.EMPTY and (
                    self.cells[a] == self.cells[b] == self.cells[c]):
                return self.cells[a]

        return None

    @classmethod
    def try_build(
            cls, space: Space, discrete: Sequence[int],
            continuous: Sequence[float] = ()) -> TicTacToeBoard | None:
        if len(discrete) != 10 or continuous:
            return None
        if not all(0 <= v < 3 for v in discrete[:9]) or discrete[9] not in (0, 1):
            return None

        cells = discrete[:9]
        difference = (sum(1 for c in cells if c == Cell.X)
                      - sum(1 for c in cells if c == Cell.O))
        if difference not in (0, 1):
            return None

        return cls(cells, bool(discrete[9]))

    def __str__(self) -> str:
        symbols = {Cell.EMPTY: '.', Cell.X: 'X', Cell.O: 'O'}
        return '\n'.join(
            ''.join(symbols[c] for c in self.cells[r * 3: r * 3 + 3])
            for r in range(3))

    def __repr__(self) -> str:
        return f'TicTacToeBoard({[int(c) for c in self.cells]}, {self.done})'


class TicTacToe(Environment[TicTacToeBoard, TicTacToeAction]):
    '''
    Two players, X (player 0) and O (player 1), alternate on a 3-by-3 board.
    '''
    state_type = TicTacToeBoard
    action_type = TicTacToeAction

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._state_space = DiscreteSpace((3,) * 9 + (2,), players=2)
        self._action_space = DiscreteSpace((3, 3))
        self._board = TicTacToeBoard()

    @property
    def board(self) -> TicTacToeBoard:
        return self._board

    def state_space(self) -> DiscreteSpace:
        return self._state_space

    def action_space(self) -> DiscreteSpace:
        return self._action_space

    def reset(self) -> TicTacToeBoard:
        self._board = TicTacToeBoard()
        return self._board

    def set_board(self, board: TicTacToeBoard) -> None:
        '''Continue the game from the given board.'''
        self._board = board

    def step(self, action: TicTacToeAction) -> Step:
        mover = self._board.current_player()
        index = action.row * 3 + action.col

        if self._board.cells[index] != Cell.EMPTY:
            if self._board.is_full():
                reward = (0.0, 0.0)
            elif mover == 0:
                reward = (ILLEGAL_MOVE_PENALTY, ILLEGAL_MOVE_OPPONENT_REWARD)
            else:
                reward = (ILLEGAL_MOVE_OPPONENT_REWARD, ILLEGAL_MOVE_PENALTY)
            self._board = TicTacToeBoard(self._board.cells, done=True)

            return Step(reward, None)

        cells = list(self._board.cells)
        cells[index] = Cell.X if mover == 0 else Cell.O
        board = TicTacToeBoard(cells)

        winner = board.winner()
        if winner == Cell.X:
            reward, done = (WIN_REWARD, -WIN_REWARD), True
        elif winner == Cell.O:
            reward, done = (-WIN_REWARD, WIN_REWARD), True
        else:
            reward, done = (0.0, 0.0), board.is_full()

        self._board = TicTacToeBoard(cells, done=done)
        if done:
            return Step(reward, None)

        return Step(reward, self._board)

    def __str__(self) -> str:
        return str(self._board)
