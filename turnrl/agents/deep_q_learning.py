# -*- coding: utf-8 -*-
'''
DeepQLearning class
===================

A Q-learning `agent` with a Neural Network Q-function approximator, a replay
memory and a target network.
'''

from __future__ import annotations

import math
from typing import Any

import numpy as np

from turnrl.agents.agent import Agent
from turnrl.datatypes.buffers import Experience, MemoryBuffer
from turnrl.datatypes.space import (Action, ContinuousRange, DiscreteSpace,
                                    State, space_dims)
from turnrl.environments.environment import Environment
from turnrl.errors import EncodingError
from turnrl.learners.activations import ActivationFunction
from turnrl.learners.lookup_table import QTable
from turnrl.learners.losses import LossFunction
from turnrl.learners.neural_network import NeuralNetwork

HIDDEN_UNITS = 64
LEARNING_RATE_DEFAULT = 0.1
BUFFER_CAPACITY_DEFAULT = 10_000
BATCH_SIZE_DEFAULT = 32
TARGET_SYNC_EVERY_DEFAULT = 100


class DeepQLearning(Agent):
    '''
    A Deep Q-learning `agent`.
    '''

    def __init__(
            self,
            learning_rate: float = LEARNING_RATE_DEFAULT,
            activation: ActivationFunction = ActivationFunction.SIGMOID,
            final_activation: ActivationFunction = ActivationFunction.LINEAR,
            loss: LossFunction = LossFunction.MEAN_SQUARED_ERROR,
            buffer_capacity: int = BUFFER_CAPACITY_DEFAULT,
            batch_size: int = BATCH_SIZE_DEFAULT,
            target_sync_every: int = TARGET_SYNC_EVERY_DEFAULT,
            **kwargs: Any):
        '''
        Arguments
        ---------
        learning_rate:
            learning rate of the policy network.

        activation:
            activation of the hidden layer.

        final_activation:
            activation of the output layer.

        loss:
            loss function of the policy network.

        buffer_capacity:
            capacity of the replay memory.

        batch_size:
            number of experiences used in each learning update. No update
            happens until the memory holds at least this many.

        target_sync_every:
            copy the policy network into the target network every
            `target_sync_every` learning updates.
        '''
        super().__init__(**kwargs)

        if batch_size < 1:
            raise ValueError('batch_size should be at least 1.')
        if batch_size > buffer_capacity:
            raise ValueError(
                f'batch_size ({batch_size}) cannot exceed '
                f'buffer_capacity ({buffer_capacity}).')
        if target_sync_every < 1:
            raise ValueError('target_sync_every should be at least 1.')

        self._learning_rate = learning_rate
        self._activation = ActivationFunction(activation)
        self._final_activation = ActivationFunction(final_activation)
        self._loss = LossFunction(loss)
        self._buffer_capacity = buffer_capacity
        self._batch_size = batch_size
        self._target_sync_every = target_sync_every

        self._buffer = MemoryBuffer(buffer_capacity, self._rng)
        self._policy_net: NeuralNetwork | None = None
        self._target_net: NeuralNetwork | None = None
        self._state_sizes: tuple[int, ...] = ()
        self._state_ranges: tuple[ContinuousRange, ...] = ()
        self._updates: int = 0

    def get_config(self) -> dict[str, Any]:
        config = super().get_config()
        config.update(
            learning_rate=self._learning_rate,
            activation=self._activation,
            final_activation=self._final_activation,
            loss=self._loss,
            buffer_capacity=self._buffer_capacity,
            batch_size=self._batch_size,
            target_sync_every=self._target_sync_every)

        return config

    @property
    def buffer(self) -> MemoryBuffer:
        return self._buffer

    @property
    def policy_net(self) -> NeuralNetwork:
        self._check_initialized()
        assert self._policy_net is not None

        return self._policy_net

    @property
    def target_net(self) -> NeuralNetwork:
        self._check_initialized()
        assert self._target_net is not None

        return self._target_net

    @property
    def updates(self) -> int:
        '''Number of learning updates performed so far.'''
        return self._updates

    def _new_network(self, layer_sizes: list[int]) -> NeuralNetwork:
        return NeuralNetwork(
            learning_rate=self._learning_rate,
            activation=self._activation,
            final_activation=self._final_activation,
            loss=self._loss,
            layer_sizes=layer_sizes,
            rng=self._rng,
            name=f'{self._name}_net',
            logger_name=f'{self._name}_net')

    def try_init(self, env: Environment) -> bool:
        '''
        Build the policy and the target networks from the environment's
        spaces.

        Returns
        -------
        :
            `False` if the action space has a continuous dimension or the
            state space has no dimensions.
        '''
        state_sizes, state_ranges = space_dims(env.state_space())
        action_sizes, action_ranges = space_dims(env.action_space())
        if action_ranges:
            self._logger.warning(
                'Deep Q-learning does not support continuous actions.')
            return False

        input_dims = len(state_sizes) + len(state_ranges)
        if not input_dims:
            self._logger.warning('The state space has no dimensions.')
            return False

        output_dims = math.prod(action_sizes)
        layer_sizes = [input_dims, HIDDEN_UNITS, output_dims]

        self._policy_net = self._new_network(layer_sizes)
        self._target_net = self._new_network(layer_sizes)
        self._target_net.copy_weights_from(self._policy_net)

        self._state_sizes = tuple(state_sizes)
        self._state_ranges = tuple(state_ranges)
        self._action_sizes = tuple(action_sizes)
        self._action_type = env.action_type
        self._buffer.clear()
        self._updates = 0
        self._logger.debug(f'Initialized networks of sizes {layer_sizes}.')

        return True

    def encode_input(self, state: State | None) -> np.ndarray:
        '''
        Normalize the state into the network input: discrete values are
        divided by their dimension size, and continuous values are mapped
        from their range onto [0, 1). `None` (terminal) encodes as zeros.

        Raises
        ------
        EncodingError
            The state does not have the dimensions of the state space.
        '''
        if state is None:
            return np.zeros(len(self._state_sizes) + len(self._state_ranges))

        discrete_values = state.discrete_values()
        continuous_values = state.continuous_values()
        if (len(discrete_values) != len(self._state_sizes)
                or len(continuous_values) != len(self._state_ranges)):
            raise EncodingError(
                f'Expected {len(self._state_sizes)} discrete and '
                f'{len(self._state_ranges)} continuous values, got '
                f'{len(discrete_values)} and {len(continuous_values)}.')

        discrete = [
            v / size for v, size in zip(discrete_values, self._state_sizes)]
        continuous = [
            (v - start) / (end - start) for v, (start, end) in zip(
                continuous_values, self._state_ranges)]

        return np.array(discrete + continuous, dtype=float)

    def _action_index(self, action: Action) -> int:
        return QTable.encode(action.discrete_values(), self._action_sizes)

    def predict(self, state: State) -> Action:
        '''
        Return the action with the highest predicted Q-value. Ties keep the
        first action in enumeration order.
        '''
        q_values = self.policy_net.predict(self.encode_input(state))
        index = int(np.argmax(q_values))
        assert self._action_type is not None

        return self._action_type.build_or_raise(
            DiscreteSpace(self._action_sizes),
            QTable.decode(index, self._action_sizes))

    def learn(
            self, state: State, action: Action, reward: float,
            next_state: State | None) -> dict[str, float]:
        '''
        Store the transition and, once the memory holds a full batch, train
        the policy network on a random batch.

        Returns
        -------
        :
            the mean training `loss`, or an empty dictionary if no update
            happened.
        '''
        self._check_initialized()

        self._buffer.add_experience(Experience(
            state=tuple(self.encode_input(state)),
            action=self._action_index(action),
            reward=float(reward),
            next_state=tuple(self.encode_input(next_state)),
            done=next_state is None))

        if len(self._buffer) < self._batch_size:
            return {}

        states, actions, rewards, next_states, dones = \
            self._buffer.sample_and_unpack(self._batch_size)

        targets = self.policy_net.predict_batch(states)
        max_q_next = self.target_net.predict_batch(next_states).max(axis=1)
        targets[np.arange(len(actions)), actions] = np.where(
            dones, rewards, rewards + self._discount_factor * max_q_next)

        metrics = self.policy_net.train(states, targets)

        self._updates += 1
        if self._updates % self._target_sync_every == 0:
            self.target_net.copy_weights_from(self.policy_net)
            self._logger.debug(
                f'Synchronized the target network after {self._updates} '
                'updates.')

        return metrics

    def __getstate__(self):
        state = super().__getstate__()
        state['_buffer'] = MemoryBuffer(self._buffer_capacity, self._rng)

        return state
