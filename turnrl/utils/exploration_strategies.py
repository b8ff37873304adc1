# -*- coding: utf-8 -*-
'''
Exploration strategies
======================

Strategies that decide whether an agent should take a random action.
The random generator is supplied by the caller so that exploration is
reproducible.
'''
from collections.abc import Callable

import numpy as np


class ExplorationStrategy:
    def explore(self, rng: np.random.Generator, episode: int = 0) -> bool:
        return True


class ConstantEpsilonGreedy(ExplorationStrategy):
    def __init__(self, epsilon: float = 0.0) -> None:
        if not 0.0 <= epsilon <= 1.0:
            raise ValueError(f'epsilon should be in [0.0, 1.0]. Got {epsilon}.')

        self._epsilon = epsilon

    @property
    def epsilon(self) -> float:
        return self._epsilon

    def explore(self, rng: np.random.Generator, episode: int = 0) -> bool:
        return bool(rng.random() < self._epsilon)

    def __repr__(self) -> str:
        return f'ConstantEpsilonGreedy({self._epsilon})'


class VariableEpsilonGreedy(ExplorationStrategy):
    '''
    Epsilon-greedy with an episode-dependent epsilon, e.g.
    `VariableEpsilonGreedy(lambda n: 1 / (1 + n / 200))`.
    '''
    def __init__(self, epsilon: Callable[[int], float]) -> None:
        self._epsilon = epsilon

    def explore(self, rng: np.random.Generator, episode: int = 0) -> bool:
        return bool(rng.random() < self._epsilon(episode))
