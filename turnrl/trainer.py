# -*- coding: utf-8 -*-
'''
Trainer class
=============

The turn-based training loop.

Each episode, the player to move acts, the environment returns one reward per
player, and the rewards are accumulated for every player. A player learns
from its previous move only when it is about to move again (or when the
episode ends), so the rewards of the opponents' intervening turns are folded
into its transition.
'''

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from typing import Any

import pandas as pd
from tqdm import tqdm

from turnrl.agents.agent import Agent
from turnrl.datatypes.space import Action, State
from turnrl.environments.environment import Environment
from turnrl.errors import (IncompatibleEnvironmentError,
                           TrainingPreconditionError)
from turnrl.turnrlbase import TurnRLBase


@dataclasses.dataclass
class EpisodeSummary:
    '''
    The outcome of one episode.
    '''
    steps: int
    # total reward of each player
    rewards: tuple[float, ...]

    def as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {'steps': self.steps}
        result.update(
            (f'reward_{i}', r) for i, r in enumerate(self.rewards))

        return result


def initialize_agents(env: Environment, agents: Sequence[Agent]) -> None:
    '''
    Call `try_init` once on every distinct agent.

    Raises
    ------
    IncompatibleEnvironmentError
        An agent does not support the spaces of the environment.
    '''
    seen: set[int] = set()
    for agent in agents:
        if id(agent) in seen:
            continue
        seen.add(id(agent))

        if not agent.try_init(env):
            raise IncompatibleEnvironmentError(
                f'{agent} does not support the spaces of {env}.')


class Trainer(TurnRLBase):
    '''
    Train one agent per player on an environment. The same agent may fill
    several player slots (self-play).
    '''

    def __init__(
            self,
            environment: Environment,
            agents: Sequence[Agent],
            progress_bar: bool = True,
            **kwargs: Any):
        '''
        Arguments
        ---------
        environment:
            the environment to train on.

        agents:
            one agent per player, in player order. Agents should already be
            initialized (see `initialize_agents`).

        progress_bar:
            whether `train` displays a progress bar.

        Raises
        ------
        TrainingPreconditionError
            The number of agents does not match the number of players.
        '''
        super().__init__(**kwargs)

        player_count = environment.player_count()
        if len(agents) != player_count:
            raise TrainingPreconditionError(
                f'{environment} has {player_count} players, '
                f'but {len(agents)} agents were given.')

        self._environment = environment
        self._agents = list(agents)
        self._player_count = player_count
        self._progress_bar = progress_bar
        self._episodes: int = 0

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def agents(self) -> list[Agent]:
        return self._agents

    @property
    def episodes(self) -> int:
        '''Number of episodes run so far.'''
        return self._episodes

    def _unique_agents(self) -> list[Agent]:
        unique: dict[int, Agent] = {}
        for agent in self._agents:
            unique.setdefault(id(agent), agent)

        return list(unique.values())

    def run_episode(self) -> EpisodeSummary:
        '''
        Run one episode to the end.

        Raises
        ------
        ValueError
            The environment returned a reward vector of the wrong length.
        '''
        player_count = self._player_count
        accumulated = [0.0] * player_count
        totals = [0.0] * player_count
        pending: list[tuple[State, Action] | None] = [None] * player_count

        state: State | None = self._environment.reset()
        steps = 0
        while state is not None:
            player = state.current_player()
            agent = self._agents[player]

            if pending[player] is not None:
                pending_state, pending_action = pending[player]
                agent.learn(
                    pending_state, pending_action,
                    accumulated[player], state)
                accumulated[player] = 0.0

            action = agent.act(state)
            reward, next_state = self._environment.step(action)
            steps += 1

            if len(reward) != player_count:
                raise ValueError(
                    f'Expected {player_count} rewards, got {len(reward)}.')

            for i, r in enumerate(reward):
                accumulated[i] += r
                totals[i] += r

            pending[player] = (state, action)
            state = next_state

        for player, transition in enumerate(pending):
            if transition is not None:
                self._agents[player].learn(
                    transition[0], transition[1], accumulated[player], None)

        for agent in self._unique_agents():
            agent.reset()

        self._episodes += 1
        summary = EpisodeSummary(steps, tuple(totals))
        self._logger.debug(f'episode {self._episodes}: {summary}')

        return summary

    def train(self, episodes: int) -> pd.DataFrame:
        '''
        Run `episodes` episodes.

        Returns
        -------
        :
            a `DataFrame` with one row per episode: its number, the number
            of steps, and the total reward of each player.
        '''
        rows = []
        for _ in tqdm(
                range(episodes), desc=self._name,
                disable=not self._progress_bar):
            summary = self.run_episode()
            rows.append({'episode': self._episodes, **summary.as_dict()})

        columns = ['episode', 'steps'] + [
            f'reward_{i}' for i in range(self._player_count)]
        result = pd.DataFrame(rows, columns=columns)

        if not result.empty:
            self._logger.info(
                f'{episodes} episodes, mean steps: '
                f'{result["steps"].mean():.2f}, mean rewards: '
                f'{result.iloc[:, 2:].mean().round(4).to_dict()}')

        return result
