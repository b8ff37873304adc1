# -*- coding: utf-8 -*-
'''
RandomAgent class
=================

An agent that chooses actions uniformly at random and does not learn.
'''

from __future__ import annotations

from typing import Any

from turnrl.agents.agent import Agent
from turnrl.datatypes.space import Action, Space, State
from turnrl.environments.environment import Environment
from turnrl.errors import EncodingError


class RandomAgent(Agent):
    '''
    An agent that always acts at random. It supports discrete and continuous
    action spaces.
    '''

    def __init__(self, **kwargs: Any):
        kwargs['exploration_strategy'] = 1.0
        super().__init__(**kwargs)
        self._action_space: Space | None = None

    def get_config(self) -> dict[str, Any]:
        config = super().get_config()
        config.pop('exploration_strategy')

        return config

    def try_init(self, env: Environment) -> bool:
        self._action_space = env.action_space()
        self._action_type = env.action_type

        return True

    def random_action(self) -> Action:
        self._check_initialized()
        assert self._action_type is not None
        assert self._action_space is not None

        action = self._action_type.gen_random(self._action_space, self._rng)
        if action is None:
            raise EncodingError(
                f'Failed to sample a {self._action_type.__qualname__}.')

        return action

    def predict(self, state: State) -> Action:
        return self.random_action()
