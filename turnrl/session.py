# -*- coding: utf-8 -*-
'''
Session and Task classes
========================

A `Task` is one independent training run: an environment, its agents, and
the number of episodes. A `Session` runs a list of tasks, either in the
current process or each in a separate process. Tasks never share objects.
'''

from __future__ import annotations

import multiprocessing
import pathlib
from collections.abc import Sequence
from typing import Any, Literal

import pandas as pd

from turnrl.agents.agent import Agent
from turnrl.environments.environment import Environment
from turnrl.logger import Logger
from turnrl.trainer import Trainer, initialize_agents


class Task:
    '''
    One training run.
    '''

    def __init__(
            self, name: str, environment: Environment,
            agents: Sequence[Agent], episodes: int,
            path: pathlib.PurePath | str | None = None,
            save_agents: bool = False) -> None:
        '''
        Arguments
        ---------
        name:
            name of the task, used as the prefix of saved agent files.

        environment:
            the environment of the run.

        agents:
            one agent per player. Each distinct agent is initialized on the
            environment before training.

        episodes:
            number of episodes to train.

        path:
            where to save the agents.

        save_agents:
            whether to save each distinct agent after training.
        '''
        if episodes < 0:
            raise ValueError('episodes should be non-negative.')

        self.name = name
        self.environment = environment
        self.agents = list(agents)
        self.episodes = episodes
        self.path = pathlib.PurePath(path or '.')
        self.save_agents = save_agents

    def run(self) -> pd.DataFrame:
        initialize_agents(self.environment, self.agents)
        trainer = Trainer(
            self.environment, self.agents, progress_bar=False,
            name=f'{self.name}_trainer')
        result = trainer.train(self.episodes)

        if self.save_agents:
            saved: set[int] = set()
            for i, agent in enumerate(self.agents):
                if id(agent) not in saved:
                    saved.add(id(agent))
                    agent.save(filename=f'{self.name}_{i}', path=self.path)

        return result.assign(task=self.name)


def _run_task(task: Task) -> pd.DataFrame:
    return task.run()


class Session:
    '''
    Run a list of independent tasks.
    '''

    def __init__(
            self, name: str, tasks: Sequence[Task],
            separate_process: bool = False,
            process_type: Literal['spawn', 'fork', 'forkserver'] | None = None,
            processes: int | None = None) -> None:
        '''
        Arguments
        ---------
        name:
            name of the session.

        tasks:
            the tasks to run.

        separate_process:
            whether to run each task in its own process. Worker processes
            train copies of the agents, so use `Task.save_agents` to keep
            the trained agents.

        process_type:
            the start method of the processes. Defaults to `spawn`.

        processes:
            number of worker processes. Defaults to the number of tasks.
        '''
        self._name = name
        self._tasks = list(tasks)
        self._separate_process = separate_process
        self._process_type = process_type or 'spawn'
        self._processes = processes
        self._logger = Logger(logger_name=name)

    @property
    def tasks(self) -> list[Task]:
        return self._tasks

    def run(self) -> pd.DataFrame:
        '''
        Run all tasks.

        Returns
        -------
        :
            the concatenated per-episode statistics of all tasks, with a
            `task` column.
        '''
        if not self._tasks:
            return pd.DataFrame()

        if self._separate_process:
            context = multiprocessing.get_context(self._process_type)
            with context.Pool(
                    self._processes or len(self._tasks)) as pool:
                results: list[Any] = pool.map(_run_task, self._tasks)
        else:
            results = [t.run() for t in self._tasks]

        self._logger.info(
            f'Session {self._name} finished {len(self._tasks)} tasks.')

        return pd.concat(results, ignore_index=True)
