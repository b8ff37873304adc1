# -*- coding: utf-8 -*-
'''
Agent class
===========

The base class of all agents.

An agent is initialized from an environment (`try_init`), chooses actions
(`act` during training, `predict` for the greedy policy) and learns from
transitions (`learn`). `predict` never changes the agent.
'''

from __future__ import annotations

from typing import Any

import numpy as np

from turnrl.datatypes.space import Action, DiscreteSpace, State
from turnrl.environments.environment import Environment
from turnrl.errors import EncodingError
from turnrl.turnrlbase import TurnRLBase
from turnrl.utils.exploration_strategies import (ConstantEpsilonGreedy,
                                                 ExplorationStrategy)

EPSILON_DEFAULT = 0.05
ALPHA_DEFAULT = 0.1
GAMMA_DEFAULT = 0.9


class Agent(TurnRLBase):
    '''
    The base class of all agents.
    '''

    def __init__(
            self,
            exploration_strategy: float | ExplorationStrategy = EPSILON_DEFAULT,
            discount_factor: float = GAMMA_DEFAULT,
            seed: int | None = None,
            rng: np.random.Generator | None = None,
            **kwargs: Any):
        '''
        Arguments
        ---------
        exploration_strategy:
            an `ExplorationStrategy` that decides whether `act` should take a
            random action, or a float epsilon for constant epsilon-greedy.

        discount_factor:
            by what factor should future rewards be discounted? (gamma)

        seed:
            seed of the agent's random generator. Ignored if `rng` is given.

        rng:
            the random generator used for exploration and initialization.
        '''
        super().__init__(**kwargs)

        if isinstance(exploration_strategy, (float, int)):
            self._exploration_strategy = ConstantEpsilonGreedy(
                float(exploration_strategy))
        else:
            self._exploration_strategy = exploration_strategy

        if not 0.0 <= discount_factor <= 1.0:
            self._logger.warning(
                f'{self.__class__.__qualname__} discount_factor should be in'
                f' [0.0, 1.0]. Got {discount_factor}. Clipped.')
        self._discount_factor = min(max(discount_factor, 0.0), 1.0)

        self._seed = seed
        self._rng = rng or np.random.default_rng(seed)
        self._episode: int = 0

        self._action_type: type[Action] | None = None
        self._action_sizes: tuple[int, ...] = ()

    def get_config(self) -> dict[str, Any]:
        config = super().get_config()
        config.update(
            exploration_strategy=self._exploration_strategy,
            discount_factor=self._discount_factor,
            seed=self._seed)

        return config

    @property
    def epsilon(self) -> float | None:
        '''Epsilon of a constant epsilon-greedy strategy, else `None`.'''
        if isinstance(self._exploration_strategy, ConstantEpsilonGreedy):
            return self._exploration_strategy.epsilon

        return None

    @property
    def discount_factor(self) -> float:
        return self._discount_factor

    @property
    def is_initialized(self) -> bool:
        return self._action_type is not None

    def _check_initialized(self) -> None:
        if self._action_type is None:
            raise RuntimeError(
                f'{self.__class__.__qualname__} is not initialized. '
                'Call `try_init` first.')

    def try_init(self, env: Environment) -> bool:
        '''
        Read the spaces of the environment and initialize the agent.

        Returns
        -------
        :
            `False` if the agent does not support the environment's spaces.
        '''
        raise NotImplementedError

    def random_action(self) -> Action:
        '''
        Draw a uniformly random action from the action space.

        Raises
        ------
        EncodingError
            The sampled values cannot be built into an action.
        '''
        self._check_initialized()
        assert self._action_type is not None

        action = self._action_type.gen_random(
            DiscreteSpace(self._action_sizes), self._rng)
        if action is None:
            raise EncodingError(
                f'Failed to sample a {self._action_type.__qualname__}.')

        return action

    def act(self, state: State) -> Action:
        '''
        Return the action to take while learning: a random action with the
        exploration probability, the greedy action otherwise.
        '''
        if self._exploration_strategy.explore(self._rng, self._episode):
            return self.random_action()

        return self.predict(state)

    def learn(
            self, state: State, action: Action, reward: float,
            next_state: State | None) -> dict[str, float]:
        '''
        Learn from a transition. `next_state` is `None` for terminal
        transitions.

        Returns
        -------
        :
            a dictionary of training metrics (possibly empty).
        '''
        return {}

    def predict(self, state: State) -> Action:
        '''Return the most preferred action, without exploration.'''
        raise NotImplementedError

    def reset(self) -> None:
        '''Called by the trainer at the end of each episode.'''
        super().reset()
        self._episode += 1
