# -*- coding: utf-8 -*-
'''
Activation functions
====================

Activation functions of the neural network. Each function provides its
derivative expressed in terms of the *activated* value, which is what the
network caches during the forward pass.
'''

import enum

import numpy as np


class ActivationFunction(enum.Enum):
    # max(0, x)
    RELU = 'relu'
    # 1 / (1 + exp(-x))
    SIGMOID = 'sigmoid'
    TANH = 'tanh'
    # identity
    LINEAR = 'linear'

    def apply(self, x: np.ndarray) -> np.ndarray:
        '''Apply the function element-wise.'''
        if self is ActivationFunction.RELU:
            return np.maximum(x, 0.0)
        if self is ActivationFunction.SIGMOID:
            with np.errstate(over='ignore'):
                return 1.0 / (1.0 + np.exp(-x))
        if self is ActivationFunction.TANH:
            return np.tanh(x)

        return np.asarray(x, dtype=float)

    def derivative(self, activated: np.ndarray) -> np.ndarray:
        '''
        The derivative of the function, given the activated value `a`.

        ReLU: 1 if a > 0 else 0; Sigmoid: a(1 - a); Tanh: 1 - a^2;
        Linear: 1.
        '''
        a = np.asarray(activated, dtype=float)
        if self is ActivationFunction.RELU:
            return (a > 0.0).astype(float)
        if self is ActivationFunction.SIGMOID:
            return a * (1.0 - a)
        if self is ActivationFunction.TANH:
            return 1.0 - a ** 2

        return np.ones_like(a)
