# -*- coding: utf-8 -*-
'''
Environment class
=================

The base class of all environments. An environment is a state machine that
receives the action of the player to move and returns a `Step`: one reward per
player and the next state, or `None` if the episode has ended.
'''

from __future__ import annotations

from typing import Any, Generic, NamedTuple, TypeVar

from turnrl.datatypes.space import Action, Space, State, StateSpace
from turnrl.turnrlbase import TurnRLBase

StateType = TypeVar('StateType', bound=State)
ActionType = TypeVar('ActionType', bound=Action)


class Step(NamedTuple):
    '''
    The result of one environment transition.
    '''
    # one reward per player
    reward: tuple[float, ...]
    # `None` means the episode has ended
    next_state: Any | None

    @property
    def is_terminal(self) -> bool:
        return self.next_state is None


class Environment(TurnRLBase, Generic[StateType, ActionType]):
    '''
    The base class of all environments.

    Subclasses set `state_type` and `action_type` to the classes of their
    states and actions, so that agents can build elements of the
    environment's spaces. States returned by `reset` and `step` should be
    treated as immutable snapshots: the trainer keeps them across steps.
    '''
    state_type: type[State] = State
    action_type: type[Action] = Action

    def state_space(self) -> StateSpace:
        raise NotImplementedError

    def action_space(self) -> Space:
        raise NotImplementedError

    def player_count(self) -> int:
        return self.state_space().player_count()

    def reset(self) -> StateType:
        '''Reset the environment and return the initial state.'''
        raise NotImplementedError

    def step(self, action: ActionType) -> Step:
        '''Apply the action of the player to move.'''
        raise NotImplementedError
