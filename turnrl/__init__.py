# -*- coding: utf-8 -*-
'''
Turn-based reinforcement learning module for Python
===================================================

This module provides a small framework for training reinforcement learning
agents on turn-based, possibly multi-player, environments.

submodules
----------
agents: objects that learn by acting on an environment and observing the
    reward.

environments: objects with an internal state that get an agent's action,
    and return a reward vector and the next state.

learners: the function approximators used by the agents (a lookup table and
    a feed-forward neural network).

datatypes: all custom datatypes used in `turnrl` (spaces, space elements and
    buffers).

trainer: the turn-based training loop.

session: runs independent training tasks, optionally in separate processes.

serving: a read-only prediction facade over trained agents.

turnrlbase: base class for all `turnrl` objects.

utils: all classes that are not part of the agent, environment, trainer
    framework.
'''

FILE_FORMAT = 'pbz2'

__all__ = ['agents',
           'datatypes',
           'environments',
           'errors',
           'learners',
           'serving',
           'session',
           'trainer',
           'turnrlbase',
           'utils']
