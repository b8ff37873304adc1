# -*- coding: utf-8 -*-
'''
Loss functions
==============

Loss functions of the neural network and their gradients with respect to the
predicted output.
'''

import enum

import numpy as np

# keeps predictions away from 0 and 1 before taking logs
EPSILON = 1e-10


class LossFunction(enum.Enum):
    MEAN_SQUARED_ERROR = 'mse'
    BINARY_CROSS_ENTROPY = 'bce'

    def loss(self, predicted: np.ndarray, target: np.ndarray) -> float:
        '''
        The scalar loss between `predicted` and `target`, averaged over the
        outputs.
        '''
        p = np.asarray(predicted, dtype=float)
        t = np.asarray(target, dtype=float)
        if self is LossFunction.MEAN_SQUARED_ERROR:
            return float(np.mean((p - t) ** 2))

        p = np.clip(p, EPSILON, 1.0 - EPSILON)
        return float(np.mean(np.where(t == 1.0, -np.log(p), -np.log(1.0 - p))))

    def gradient(
            self, predicted: np.ndarray, target: np.ndarray) -> np.ndarray:
        '''
        The gradient of the loss with respect to the predicted output.

        MSE: (p - t) / n. BCE: 1 / p for a target of 1, -1 / (1 - p)
        otherwise, with p clamped to [EPSILON, 1 - EPSILON].
        '''
        p = np.asarray(predicted, dtype=float)
        t = np.asarray(target, dtype=float)
        if self is LossFunction.MEAN_SQUARED_ERROR:
            return (p - t) / p.size

        p = np.clip(p, EPSILON, 1.0 - EPSILON)
        return np.where(t == 1.0, 1.0 / p, -1.0 / (1.0 - p))
