# -*- coding: utf-8 -*-
'''
NeuralNetwork class
===================

A small feed-forward neural network trained with online (batch size 1)
gradient descent.

The forward pass used for training caches every activated output, and
backpropagation computes the activation derivatives from those cached values.
The inference pass (`predict`) runs the same computation without caching.
'''

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from tqdm import tqdm

from turnrl.learners.activations import ActivationFunction
from turnrl.learners.losses import LossFunction
from turnrl.turnrlbase import TurnRLBase

# weight gradients are clipped to [-MAX_GRADIENT, MAX_GRADIENT]
MAX_GRADIENT = 1.0


class Layer:
    '''
    A fully connected layer: `weights` has one row per output neuron and one
    column per input.
    '''

    def __init__(
            self, input_size: int, output_size: int,
            rng: np.random.Generator | None = None) -> None:
        '''
        Arguments
        ---------
        input_size:
            number of inputs.

        output_size:
            number of neurons.

        rng:
            the generator used to draw the initial weights uniformly from
            [-1, 1). Biases start at zero.
        '''
        if input_size < 1 or output_size < 1:
            raise ValueError('Layer sizes should be positive.')

        _rng = rng or np.random.default_rng()
        self.weights: np.ndarray = _rng.uniform(
            -1.0, 1.0, size=(output_size, input_size))
        self.biases: np.ndarray = np.zeros(output_size)

    @property
    def input_size(self) -> int:
        return self.weights.shape[1]

    @property
    def output_size(self) -> int:
        return self.weights.shape[0]

    def forward(
            self, input: np.ndarray,
            activation: ActivationFunction) -> np.ndarray:
        return activation.apply(self.weights @ input + self.biases)

    def set_weight(
            self, next_neuron: int, current_neuron: int, value: float) -> None:
        self.weights[next_neuron, current_neuron] = value

    def update_bias(self, neuron: int, value: float) -> None:
        self.biases[neuron] = value


class NeuralNetwork(TurnRLBase):
    '''
    A feed-forward neural network with configurable hidden and final
    activations and loss function.
    '''

    def __init__(
            self,
            learning_rate: float = 0.01,
            activation: ActivationFunction = ActivationFunction.SIGMOID,
            final_activation: ActivationFunction = ActivationFunction.SIGMOID,
            loss: LossFunction = LossFunction.MEAN_SQUARED_ERROR,
            layer_sizes: Sequence[int] | None = None,
            rng: np.random.Generator | None = None,
            **kwargs: Any) -> None:
        '''
        Arguments
        ---------
        learning_rate:
            step size of gradient descent.

        activation:
            activation function of the hidden layers.

        final_activation:
            activation function of the last layer.

        loss:
            the loss function to minimize.

        layer_sizes:
            optional widths of all layers, input first. If given,
            `add_layers` is called with it.

        rng:
            random generator for weight initialization.
        '''
        super().__init__(**kwargs)

        if learning_rate <= 0.0:
            raise ValueError('learning_rate should be positive.')

        self._learning_rate = learning_rate
        self._activation = ActivationFunction(activation)
        self._final_activation = ActivationFunction(final_activation)
        self._loss = LossFunction(loss)
        self._rng = rng or np.random.default_rng()
        self._layers: list[Layer] = []
        self._history: list[float] = []

        if layer_sizes is not None:
            self.add_layers(layer_sizes)

    def get_config(self) -> dict[str, Any]:
        config = super().get_config()
        config.update(
            learning_rate=self._learning_rate,
            activation=self._activation,
            final_activation=self._final_activation,
            loss=self._loss,
            layer_sizes=self.layer_sizes or None)

        return config

    @property
    def layers(self) -> list[Layer]:
        return self._layers

    @property
    def layer_sizes(self) -> list[int]:
        if not self._layers:
            return []

        return [self._layers[0].input_size] + [
            layer.output_size for layer in self._layers]

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    @property
    def history(self) -> list[float]:
        '''The loss of every training step so far.'''
        return list(self._history)

    def add_layers(self, layer_sizes: Sequence[int]) -> None:
        '''
        Append `len(layer_sizes) - 1` layers chaining consecutive widths.

        For example, `[4, 5, 3]` creates a network with 4 inputs, one hidden
        layer of 5 neurons and an output layer of 3 neurons.

        Raises
        ------
        ValueError
            Fewer than two sizes, or the first size does not match the
            output width of the current last layer.
        '''
        if len(layer_sizes) < 2:
            raise ValueError('At least two layer sizes are needed.')
        if self._layers and self._layers[-1].output_size != layer_sizes[0]:
            raise ValueError(
                f'The first size ({layer_sizes[0]}) should match the output '
                f'size of the last layer ({self._layers[-1].output_size}).')

        for input_size, output_size in zip(layer_sizes[:-1], layer_sizes[1:]):
            self._layers.append(Layer(input_size, output_size, self._rng))

    def _forward(
            self, input: Sequence[float] | np.ndarray,
            with_cache: bool) -> tuple[list[np.ndarray], np.ndarray]:
        if not self._layers:
            raise RuntimeError('The network has no layers.')

        x = np.asarray(input, dtype=float)
        if x.shape != (self._layers[0].input_size,):
            raise ValueError(
                f'Expected an input of size {self._layers[0].input_size}, '
                f'got shape {x.shape}.')

        cache: list[np.ndarray] = [x] if with_cache else []
        last = len(self._layers) - 1
        for i, layer in enumerate(self._layers):
            x = layer.forward(
                x, self._final_activation if i == last else self._activation)
            if with_cache:
                cache.append(x)

        return cache, x

    def forward(self, input: Sequence[float] | np.ndarray) -> list[np.ndarray]:
        '''
        Forward pass for training: return the input followed by the
        activated output of every layer.
        '''
        return self._forward(input, with_cache=True)[0]

    def predict(self, input: Sequence[float] | np.ndarray) -> np.ndarray:
        '''
        Forward pass for inference: return the output of the last layer.
        '''
        return self._forward(input, with_cache=False)[1]

    def predict_batch(
            self, inputs: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
        return np.array([self.predict(x) for x in inputs])

    def _backpropagate(
            self, cache: list[np.ndarray], target: np.ndarray) -> float:
        output = cache[-1]
        if target.shape != output.shape:
            raise ValueError(
                f'Expected a target of shape {output.shape}, '
                f'got {target.shape}.')

        loss = self._loss.loss(output, target)
        self._history.append(loss)

        delta = (self._loss.gradient(output, target)
                 * self._final_activation.derivative(output))

        # cache[i] is the input of layer i
        for i in range(len(self._layers) - 1, -1, -1):
            layer = self._layers[i]
            previous = cache[i]

            weight_gradients = np.clip(
                np.outer(delta, previous), -MAX_GRADIENT, MAX_GRADIENT)
            layer.weights -= self._learning_rate * weight_gradients
            layer.biases -= self._learning_rate * delta

            if i > 0:
                delta = ((layer.weights.T @ delta)
                         * self._activation.derivative(previous))

        return loss

    def train(
            self,
            inputs: Sequence[Sequence[float]] | np.ndarray,
            targets: Sequence[Sequence[float]] | np.ndarray,
            verbose: bool = False) -> dict[str, float]:
        '''
        Train on paired examples, one example at a time.

        Arguments
        ---------
        inputs:
            the input vectors.

        targets:
            the target output vectors.

        verbose:
            whether to display a progress bar.

        Returns
        -------
        :
            a dictionary with the mean `loss` over the examples.

        Raises
        ------
        ValueError
            `inputs` and `targets` have different lengths.
        '''
        if len(inputs) != len(targets):
            raise ValueError(
                f'Got {len(inputs)} inputs and {len(targets)} targets.')

        losses = [
            self._backpropagate(self.forward(x), np.asarray(y, dtype=float))
            for x, y in tqdm(
                zip(inputs, targets), total=len(inputs),
                desc='Training', disable=not verbose)]

        return {'loss': float(np.mean(losses))} if losses else {}

    def copy_weights_from(self, other: NeuralNetwork) -> None:
        '''
        Copy weights and biases of a network with the same layer sizes.

        Raises
        ------
        ValueError
            The networks have different layer sizes.
        '''
        if other.layer_sizes != self.layer_sizes:
            raise ValueError(
                f'Cannot copy weights of a {other.layer_sizes} network '
                f'into a {self.layer_sizes} network.')

        for mine, theirs in zip(self._layers, other._layers):
            mine.weights = theirs.weights.copy()
            mine.biases = theirs.biases.copy()

    def reset(self) -> None:
        '''Clear the loss history.'''
        self._history.clear()
