# -*- coding: utf-8 -*-
'''
Logger class
============

Provides the logging capabilities for `turnrl` objects.

Each object gets its own named logger. The logger is picklable: only its
configuration is stored, and the handler is recreated on load.
'''
from __future__ import annotations

import logging
from typing import Any

CRITICAL = logging.CRITICAL
ERROR = logging.ERROR
WARNING = logging.WARNING
INFO = logging.INFO
DEBUG = logging.DEBUG

DEFAULT_FORMAT = ' %(name)s :: %(levelname)-8s :: %(message)s'

LEVELS = {
    'critical': CRITICAL,
    'error': ERROR,
    'warning': WARNING,
    'info': INFO,
    'debug': DEBUG}


class Logger:
    '''
    A thin wrapper around a named `logging.Logger`.
    '''
    def __init__(
            self, logger_name: str, logger_level: int | None = None,
            logger_filename: str | None = None,
            fmt: str | None = None) -> None:
        '''
        Arguments
        ---------
        logger_name:
            The name of the logger.

        logger_level:
            The level of the logger. If not given, defaults to `WARNING`.

        logger_filename:
            The filename of the logger. If not given, messages are written
            to the standard error stream.

        fmt:
            The format of the messages. If not given, defaults to
            `DEFAULT_FORMAT`.
        '''
        self._name = logger_name
        self._level = logger_level or WARNING
        self._filename = logger_filename
        self._fmt = fmt or DEFAULT_FORMAT

        self._logger = logging.getLogger(self._name)
        self._logger.setLevel(self._level)
        if not self._logger.handlers:
            if self._filename is None:
                handler = logging.StreamHandler()
            else:
                handler = logging.FileHandler(self._filename)

            handler.setFormatter(logging.Formatter(fmt=self._fmt))
            self._logger.addHandler(handler)

    @staticmethod
    def level_from_name(name: str) -> int:
        '''
        Convert a level name (e.g. "info") to its `logging` value.

        Raises
        ------
        ValueError
            Unknown level name.
        '''
        try:
            return LEVELS[name.lower()]
        except KeyError:
            raise ValueError(
                f'Unknown logging level: {name}. '
                f'Expected one of {tuple(LEVELS)}.') from None

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> Logger:
        return cls(
            logger_name=config['logger_name'],
            logger_level=config.get('logger_level'),
            logger_filename=config.get('logger_filename'),
            fmt=config.get('fmt'))

    def get_config(self) -> dict[str, Any]:
        config: dict[str, Any] = dict(
            logger_name=self._name,
            logger_level=self._level,
            logger_filename=self._filename)

        if self._fmt != DEFAULT_FORMAT:
            config['fmt'] = self._fmt

        return config

    @property
    def level(self) -> int:
        return self._level

    def debug(self, msg: str):
        self._logger.debug(msg)

    def info(self, msg: str):
        self._logger.info(msg)

    def warning(self, msg: str):
        self._logger.warning(msg)

    def error(self, msg: str):
        self._logger.error(msg)

    def exception(self, msg: str):
        self._logger.exception(msg)

    def critical(self, msg: str):
        self._logger.critical(msg)

    def __getstate__(self):
        return self.get_config()

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__init__(
            logger_name=state['logger_name'],
            logger_level=state.get('logger_level'),
            logger_filename=state.get('logger_filename'),
            fmt=state.get('fmt'))
