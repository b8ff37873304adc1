# -*- coding: utf-8 -*-
'''
QLearning class
===============

A tabular Q-learning agent for environments with discrete state and action
spaces.

The update rule for a transition `(s, a, r, s')` is

    Q(s, a) <- Q(s, a) + alpha * (r + gamma * max_a' Q(s', a') - Q(s, a))

where the max term is 0 for terminal transitions (`s'` is `None`).
'''

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import numpy as np

from turnrl.agents.agent import ALPHA_DEFAULT, Agent
from turnrl.datatypes.space import (Action, DiscreteSpace, State,
                                    enumerate_discrete, space_dims)
from turnrl.environments.environment import Environment
from turnrl.learners.lookup_table import QTable


class QLearning(Agent):
    '''
    A Q-learning agent backed by a `QTable`.
    '''

    def __init__(
            self, learning_rate: float = ALPHA_DEFAULT,
            **kwargs: Any):
        '''
        Arguments
        ---------
        learning_rate:
            alpha, the step size of the update.

        kwargs:
            `exploration_strategy` (epsilon), `discount_factor` (gamma),
            `seed`, and the arguments of `TurnRLBase`.
        '''
        super().__init__(**kwargs)

        if not 0.0 < learning_rate <= 1.0:
            raise ValueError(
                f'learning_rate should be in (0.0, 1.0]. Got {learning_rate}.')

        self._learning_rate = learning_rate
        self._table: QTable | None = None
        self._state_type: type[State] | None = None

    def get_config(self) -> dict[str, Any]:
        config = super().get_config()
        config.update(learning_rate=self._learning_rate)

        return config

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    @property
    def table(self) -> QTable:
        self._check_initialized()
        assert self._table is not None

        return self._table

    def try_init(self, env: Environment) -> bool:
        '''
        Allocate the Q-table from the environment's spaces.

        Returns
        -------
        :
            `False` if either space has a continuous dimension.
        '''
        state_sizes, state_ranges = space_dims(env.state_space())
        action_sizes, action_ranges = space_dims(env.action_space())
        if state_ranges or action_ranges:
            self._logger.warning(
                'Q-learning does not support continuous spaces.')
            return False

        self._table = QTable(state_sizes, action_sizes)
        self._action_sizes = tuple(action_sizes)
        self._action_type = env.action_type
        self._state_type = env.state_type
        self._logger.debug(
            f'Initialized a Q-table of size {len(self._table)}.')

        return True

    def _action_at(self, index: int) -> Action:
        assert self._action_type is not None

        return self._action_type.build_or_raise(
            DiscreteSpace(self._action_sizes),
            self.table.action_values(index))

    def q_values(self, state: State) -> np.ndarray:
        '''Q-values of every action in `state`, in enumeration order.'''
        return self.table.row(state.discrete_values())

    def predict(self, state: State) -> Action:
        '''
        Return the greedy action. Ties keep the first action in enumeration
        order.
        '''
        return self._action_at(int(np.argmax(self.q_values(state))))

    def learn(
            self, state: State, action: Action, reward: float,
            next_state: State | None) -> dict[str, float]:
        if next_state is None:
            max_q_next = 0.0
        else:
            max_q_next = float(np.max(self.q_values(next_state)))

        target = reward + self._discount_factor * max_q_next
        td_error = self.table.learn(
            state.discrete_values(), action.discrete_values(),
            target, self._learning_rate)

        return {'td_error': td_error}

    def predict_all(
            self, state_type: type[State] | None = None
    ) -> Iterator[tuple[State, Action]]:
        '''
        Yield every buildable state of the state space with its greedy
        action.

        Arguments
        ---------
        state_type:
            the class used to build states. Defaults to the state type of
            the environment the agent was initialized with.
        '''
        self._check_initialized()
        state_type = state_type or self._state_type
        assert state_type is not None

        space = DiscreteSpace(self.table.state_sizes)
        for values in enumerate_discrete(self.table.state_sizes):
            state = state_type.try_build(space, values)
            if state is not None:
                yield state, self.predict(state)
