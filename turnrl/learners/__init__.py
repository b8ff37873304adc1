# -*- coding: utf-8 -*-
'''
learners module
===============

The function approximators used by the agents.

Classes
-------
QTable:
    a flat lookup table of Q-values indexed by mixed-radix encoding.

NeuralNetwork:
    a hand-rolled feed-forward network.

Layer:
    a fully connected layer of `NeuralNetwork`.

ActivationFunction:
    ReLU, Sigmoid, Tanh and Linear activations.

LossFunction:
    Mean Squared Error and Binary Cross-Entropy.
'''

from turnrl.learners.activations import ActivationFunction
from turnrl.learners.lookup_table import QTable
from turnrl.learners.losses import LossFunction
from turnrl.learners.neural_network import Layer, NeuralNetwork

__all__ = ['ActivationFunction',
           'Layer',
           'LossFunction',
           'NeuralNetwork',
           'QTable']
