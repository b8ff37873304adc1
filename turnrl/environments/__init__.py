# -*- coding: utf-8 -*-
'''
environments module
===================

Environments are state machines that agents act on.

Classes
-------
Environment:
    the base class of all environments.

Step:
    the result of one transition.

GridWorld:
    a single-player grid in which the player should reach the center.

TicTacToe:
    the two-player Tic-Tac-Toe game.
'''

from turnrl.environments.environment import Environment, Step
from turnrl.environments.grid_world import (GridPosition, GridWorld, Move,
                                            MoveAction)
from turnrl.environments.tic_tac_toe import (Cell, TicTacToe,
                                             TicTacToeAction, TicTacToeBoard)

__all__ = ['Cell',
           'Environment',
           'GridPosition',
           'GridWorld',
           'Move',
           'MoveAction',
           'Step',
           'TicTacToe',
           'TicTacToeAction',
           'TicTacToeBoard']
