# -*- coding: utf-8 -*-
'''
agents module
=============

This module provides different agents in reinforcement learning context.

Classes
-------
Agent
    the base class of all agent classes.

QLearning
    the tabular Q-learning agent.

DeepQLearning
    the agent with a neural network as its Q-function approximator, a replay
    memory and a target network.

RandomAgent
    an agent that randomly chooses an action.
'''

from turnrl.agents.agent import (ALPHA_DEFAULT, EPSILON_DEFAULT,
                                 GAMMA_DEFAULT, Agent)
from turnrl.agents.deep_q_learning import DeepQLearning
from turnrl.agents.q_learning import QLearning
from turnrl.agents.random_agent import RandomAgent

__all__ = ['ALPHA_DEFAULT',
           'EPSILON_DEFAULT',
           'GAMMA_DEFAULT',
           'Agent',
           'DeepQLearning',
           'QLearning',
           'RandomAgent']
