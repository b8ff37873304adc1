# -*- coding: utf-8 -*-
'''
TurnRLBase class
================

The base class for all `turnrl` objects. It provides naming, logging,
configuration and persistence.
'''

from __future__ import annotations

import pathlib
from typing import Any

import turnrl
from turnrl.errors import PersistenceError
from turnrl.logger import Logger
from turnrl.pickler import PickleMe


class TurnRLBase:
    '''
    The base class of all classes in the `turnrl` package.
    '''

    def __init__(
            self,
            name: str | None = None,
            path: pathlib.PurePath | str | None = None,
            logger_name: str | None = None,
            logger_level: int | None = None,
            logger_filename: str | None = None,
            persistent_attributes: list[str] | None = None,
            save_zipped: bool | None = None):
        '''
        Arguments
        ---------
        name:
            Name of the instance, also the default filename of `save`.
            Defaults to the lower-case class name.

        path:
            Directory used by `save` and `load`. Defaults to the current
            working directory.

        logger_name:
            Name of the logger. Defaults to `name`.

        logger_level:
            Logging level. Defaults to the level of `turnrl.logger.Logger`.

        logger_filename:
            If given, log messages go to this file instead of stderr.

        persistent_attributes:
            Attributes (without the leading underscore) that keep their
            current value when another instance is loaded into this one.

            Example
            -------
            >>> agent = QLearning(name='mine', persistent_attributes=['name'])
            >>> agent.load('trained_agent')
            >>> agent._name
            'mine'

        save_zipped:
            Whether to save the file as a bz2 archive. If `None`, the value
            of `turnrl.FILE_FORMAT` decides.
        '''
        self._name = name or self.__class__.__qualname__.lower()
        self._path = pathlib.PurePath(path or '.')
        self._save_zipped = save_zipped

        self._persistent_attributes = [
            '_' + p
            for p in (persistent_attributes or [])]

        self._logger = Logger(
            logger_name=logger_name or self._name,
            logger_level=logger_level,
            logger_filename=logger_filename)

    @property
    def name(self) -> str:
        return self._name

    @classmethod
    def _empty_instance(cls):
        return cls()

    @classmethod
    def from_pickle(
            cls, filename: str,
            path: pathlib.PurePath | str | None = None):
        '''
        Load a pickled instance.

        Arguments
        ---------
        filename:
            Name of the pickle file.

        path:
            Path of the pickle file.

        Returns
        -------
        :
            An instance of the class.

        Raises
        ------
        PersistenceError
            The file is missing, corrupted or holds another type of object.
        '''
        instance = cls._empty_instance()
        instance.load(filename=filename, path=path)

        return instance

    @classmethod
    def from_config(cls, config: dict[str, Any]):
        '''
        Create an instance from a configuration dictionary.

        Arguments
        ---------
        config:
            A dictionary of constructor arguments, as returned by
            `get_config`. An optional `internal_states` key holds attributes
            that are set after construction.

        Returns
        -------
        :
            An instance of the class.
        '''
        config = dict(config)
        internal_states = config.pop('internal_states', {})
        instance = cls(**config)
        instance.__dict__.update(internal_states)

        return instance

    def get_config(self) -> dict[str, Any]:
        '''
        Get the configuration of the instance.

        Returns
        -------
        :
            A dictionary of constructor arguments.
        '''
        config: dict[str, Any] = dict(
            name=self._name, path=self._path, save_zipped=self._save_zipped)

        logger_config = self._logger.get_config()
        logger_config.pop('fmt', None)
        config.update(logger_config)
        config['internal_states'] = {
            '_persistent_attributes': self._persistent_attributes}

        return config

    def _file_format(self) -> str:
        if self._save_zipped is None:
            return turnrl.FILE_FORMAT

        return 'pbz2' if self._save_zipped else 'pkl'

    def load(
            self, filename: str,
            path: str | pathlib.PurePath | None = None) -> None:
        '''
        Load an object from a file, replacing the state of this instance.

        Arguments
        ---------
        filename:
            the name of the file to be loaded.

        path:
            the path in which the file is saved.

        Raises
        ------
        PersistenceError
            The file is missing, corrupted or does not contain an instance of
            this class.
        '''
        pickler = PickleMe.get(self._file_format())
        new_instance = pickler.load(filename=filename, path=path or self._path)

        if not isinstance(new_instance, type(self)):
            self._logger.error(
                f'{filename} holds a {type(new_instance).__qualname__}, '
                f'expected {type(self).__qualname__}.')
            raise PersistenceError(
                f'Cannot load {filename} into a {type(self).__qualname__}: '
                f'the file holds a {type(new_instance).__qualname__}.')

        for key in set(
                self._persistent_attributes + ['_persistent_attributes']):
            new_instance.__dict__[key] = self.__dict__[key]

        self.__dict__.update(new_instance.__dict__)

    def save(
            self,
            filename: str | None = None,
            path: str | pathlib.PurePath | None = None
    ) -> pathlib.PurePath:
        '''
        Save the object to a file.

        Arguments
        ---------
        filename:
            the name of the file to be saved. Defaults to the name of the
            instance.

        path:
            the path in which the file should be saved.

        Returns
        -------
        :
            the full path of the saved file.

        Raises
        ------
        PersistenceError
            The file could not be written.
        '''
        pickler = PickleMe.get(self._file_format())
        return pickler.dump(
            obj=self, filename=filename or self._name,
            path=path or self._path)

    def reset(self) -> None:
        ''' Reset the object.'''
        pass

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self._name})'

    def __getstate__(self):
        return self.__dict__.copy()

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
