# -*- coding: utf-8 -*-
'''
PredictionService class
=======================

A read-only facade that answers greedy-action queries for trained agents.

Requests and responses are JSON objects of the form
`{"discrete": [...], "continuous": [...]}`. The facade only calls `predict`,
so it never changes the agents.
'''

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from turnrl.agents.agent import Agent
from turnrl.environments.environment import Environment
from turnrl.errors import ClientError


class PredictionService:
    '''
    Serve `predict` for a set of named environments.
    '''

    def __init__(
            self,
            agents: Mapping[str, tuple[Agent, Environment]] | None = None
    ) -> None:
        '''
        Arguments
        ---------
        agents:
            a mapping from an environment name to a trained agent and the
            environment that defines the state space.
        '''
        self._agents: dict[str, tuple[Agent, Environment]] = dict(
            agents or {})

    def register(
            self, env_name: str, agent: Agent,
            environment: Environment) -> None:
        self._agents[env_name] = (agent, environment)

    @property
    def environments(self) -> list[str]:
        return sorted(self._agents)

    def _lookup(self, env_name: str) -> tuple[Agent, Environment]:
        try:
            return self._agents[env_name]
        except KeyError:
            raise ClientError(f'Unknown environment: {env_name}.') from None

    @staticmethod
    def _parse(payload: str | bytes | Mapping[str, Any]) -> tuple[
            list[int], list[float]]:
        if isinstance(payload, Mapping):
            data = payload
        else:
            try:
                data = json.loads(payload)
            except (json.JSONDecodeError, UnicodeDecodeError,
                    RecursionError) as e:
                raise ClientError(f'Malformed JSON: {e}') from e

        if not isinstance(data, Mapping):
            raise ClientError('The state should be a JSON object.')

        discrete = data.get('discrete', [])
        continuous = data.get('continuous', [])
        if not isinstance(discrete, list) or not all(
                isinstance(v, int) and not isinstance(v, bool)
                for v in discrete):
            raise ClientError('"discrete" should be a list of integers.')
        if not isinstance(continuous, list) or not all(
                isinstance(v, (int, float)) and not isinstance(v, bool)
                for v in continuous):
            raise ClientError('"continuous" should be a list of numbers.')

        return discrete, [float(v) for v in continuous]

    def predict(
            self, env_name: str,
            payload: str | bytes | Mapping[str, Any]) -> str:
        '''
        Return the greedy action of the agent of `env_name` for the given
        state.

        Arguments
        ---------
        env_name:
            name of a registered environment.

        payload:
            the state, as JSON text or an already decoded object.

        Returns
        -------
        :
            the action, as JSON text.

        Raises
        ------
        ClientError
            Unknown environment, malformed payload, or values that do not
            form a state of the environment.
        '''
        agent, environment = self._lookup(env_name)
        discrete, continuous = self._parse(payload)
        state = environment.state_type.try_build(
            environment.state_space(), discrete, continuous)
        if state is None:
            raise ClientError(
                f'{payload!r} is not a valid state of {env_name}.')

        return json.dumps(agent.predict(state).to_dict())

    def predict_all(self, env_name: str) -> str:
        '''
        Return the greedy policy of the agent of `env_name` over every state
        of its state space.

        Returns
        -------
        :
            a JSON list of `{"state": ..., "action": ...}` objects.

        Raises
        ------
        ClientError
            Unknown environment, or an agent that cannot enumerate its
            policy.
        '''
        agent, environment = self._lookup(env_name)
        if not hasattr(agent, 'predict_all'):
            raise ClientError(
                f'The agent of {env_name} cannot list its policy.')

        return json.dumps([
            {'state': state.to_dict(), 'action': action.to_dict()}
            for state, action in agent.predict_all(environment.state_type)])
