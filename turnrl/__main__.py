# -*- coding: utf-8 -*-
'''
Command line interface
======================

Train an agent on one of the bundled environments, save it, and print the
training statistics.

Example
-------
>>> python -m turnrl --env tictactoe --agent q --episodes 10000 --seed 1
'''

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

import numpy as np

from turnrl.agents import (ALPHA_DEFAULT, EPSILON_DEFAULT, GAMMA_DEFAULT,
                           Agent, DeepQLearning, QLearning, RandomAgent)
from turnrl.environments import Environment, GridWorld, TicTacToe
from turnrl.errors import IncompatibleEnvironmentError
from turnrl.logger import Logger
from turnrl.trainer import Trainer, initialize_agents


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='turnrl',
        description='Train a reinforcement learning agent.')
    parser.add_argument(
        '--env', choices=('grid', 'tictactoe'), default='grid')
    parser.add_argument(
        '--agent', choices=('q', 'dqn', 'random'), default='q')
    parser.add_argument('--episodes', type=int, default=1000)
    parser.add_argument('--rows', type=int, default=9)
    parser.add_argument('--cols', type=int, default=9)
    parser.add_argument('--epsilon', type=float, default=EPSILON_DEFAULT)
    parser.add_argument('--alpha', type=float, default=ALPHA_DEFAULT)
    parser.add_argument('--gamma', type=float, default=GAMMA_DEFAULT)
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument(
        '--output', type=str, default=None,
        help='filename of the saved agent. Defaults to the agent name.')
    parser.add_argument('--path', type=str, default='.')
    parser.add_argument(
        '--zipped', action='store_true',
        help='save as a bz2-compressed pickle.')
    parser.add_argument('--no-save', dest='save', action='store_false')
    parser.add_argument(
        '--log-level', type=str, default='WARNING',
        choices=('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'))

    return parser


def make_environment(args: argparse.Namespace) -> Environment:
    if args.env == 'grid':
        return GridWorld(
            rows=args.rows, cols=args.cols,
            rng=np.random.default_rng(args.seed))

    return TicTacToe()


def make_agent(args: argparse.Namespace) -> Agent:
    level = Logger.level_from_name(args.log_level)
    common = dict(
        discount_factor=args.gamma, seed=args.seed,
        name=f'{args.agent}_{args.env}', logger_level=level,
        save_zipped=args.zipped)

    if args.agent == 'q':
        return QLearning(
            learning_rate=args.alpha, exploration_strategy=args.epsilon,
            **common)
    if args.agent == 'dqn':
        return DeepQLearning(exploration_strategy=args.epsilon, **common)

    return RandomAgent(**common)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = Logger.level_from_name(args.log_level)
    logger = Logger('turnrl', logger_level=level)

    env = make_environment(args)
    agent = make_agent(args)
    # tic-tac-toe is trained by self-play
    agents = [agent] * env.player_count()

    try:
        initialize_agents(env, agents)
    except IncompatibleEnvironmentError as e:
        logger.error(str(e))
        return 1

    trainer = Trainer(env, agents, logger_level=level)
    stats = trainer.train(args.episodes)

    if args.save:
        filename = agent.save(filename=args.output, path=args.path)
        logger.info(f'Saved the agent to {filename}.')

    if not stats.empty:
        print(stats.drop(columns='episode').describe().loc[
            ['mean', 'std', 'min', 'max']].to_string())

    return 0


if __name__ == '__main__':
    sys.exit(main())
