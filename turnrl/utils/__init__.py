# -*- coding: utf-8 -*-
'''
utils module
============

Classes
-------
ExplorationStrategy:
    decides whether an agent should explore.

ConstantEpsilonGreedy:
    explores with a fixed probability.

VariableEpsilonGreedy:
    explores with a probability that depends on the episode.
'''

from turnrl.utils.exploration_strategies import (ConstantEpsilonGreedy,
                                                 ExplorationStrategy,
                                                 VariableEpsilonGreedy)

__all__ = ['ConstantEpsilonGreedy',
           'ExplorationStrategy',
           'VariableEpsilonGreedy']
