# -*- coding: utf-8 -*-
'''
Pickler
=======

Low-level persistence of `turnrl` objects using `dill`.

Two formats are available: `pkl` (plain pickle) and `pbz2` (bz2-compressed
pickle). Use `PickleMe.get(ext)` to get the pickler for a format.
'''
from __future__ import annotations

import bz2
import logging
import time
from pathlib import Path, PurePath
from typing import Any, Callable, Protocol

import dill as pickle

from turnrl.errors import PersistenceError

LOAD_ATTEMPTS = 3
RETRY_DELAY = 0.1


class LowLevelPickler(Protocol):
    ext: str

    def dump(
            self, obj: Any, filename: str,
            path: str | PurePath) -> PurePath:
        raise NotImplementedError

    def load(
            self, filename: str,
            path: str | PurePath) -> Any:
        raise NotImplementedError

    def resolve_path(
            self, filename: str,
            path: str | PurePath) -> PurePath:
        _filename = (
            filename if filename.endswith(f'.{self.ext}')
            else f'{filename}.{self.ext}')

        return PurePath(Path(path, _filename).resolve())


class DefaultPickler(LowLevelPickler):
    ext: str = 'pkl'

    @staticmethod
    def _dump(
            obj: Any,
            full_path: PurePath,
            file_fn: Callable[..., Any],
            mode: str) -> PurePath:
        _path = Path(full_path)
        try:
            _path.parent.mkdir(parents=True, exist_ok=True)
            with file_fn(_path, mode) as f:
                pickle.dump(obj, f, pickle.HIGHEST_PROTOCOL)
        except (OSError, pickle.PicklingError) as e:
            logging.error(f'Failed to save {_path}: {e}')
            raise PersistenceError(
                f'Failed to save {_path}: {e}') from e

        return PurePath(_path)

    @staticmethod
    def _load(
            full_path: PurePath,
            file_fn: Callable[..., Any],
            mode: str) -> Any:
        _path = Path(full_path)
        if not _path.is_file():
            raise PersistenceError(f'File not found: {_path}')

        err: Exception | None = None
        for i in range(1, LOAD_ATTEMPTS + 1):
            try:
                with file_fn(_path, mode) as f:
                    return pickle.load(f)
            except (EOFError, pickle.UnpicklingError,
                    AttributeError, ImportError, ValueError) as e:
                # the payload itself is broken, retrying will not help.
                err = e
                break
            except OSError as e:
                err = e
                logging.info(f'Attempt {i} failed to load {_path}.')
                time.sleep(RETRY_DELAY)

        logging.error(f'Corrupted or inaccessible data file: {_path}')
        raise PersistenceError(
            f'Corrupted or inaccessible data file: {_path} ({err})') from err

    def dump(
            self, obj: Any,
            filename: str, path: str | PurePath) -> PurePath:
        return self._dump(
            obj=obj,
            full_path=self.resolve_path(filename, path),
            file_fn=open, mode='wb+')

    def load(
            self, filename: str,
            path: str | PurePath) -> Any:
        return self._load(
            full_path=self.resolve_path(filename, path),
            file_fn=open, mode='rb')


class ZippedPickler(DefaultPickler):
    ext: str = 'pbz2'

    def dump(
            self, obj: Any,
            filename: str, path: str | PurePath) -> PurePath:
        return self._dump(
            obj=obj, full_path=self.resolve_path(filename, path),
            file_fn=bz2.BZ2File, mode='w')

    def load(
            self, filename: str,
            path: str | PurePath) -> Any:
        return self._load(
            full_path=self.resolve_path(filename, path),
            file_fn=bz2.BZ2File, mode='r')


class PicklerManager:
    def __init__(
            self,
            low_level_picklers: list[LowLevelPickler]) -> None:
        self._low_level_picklers = {p.ext: p for p in low_level_picklers}

    def get(self, ext: str) -> LowLevelPickler:
        try:
            return self._low_level_picklers[ext]
        except KeyError:
            raise ValueError(
                f'Unknown file format: {ext}. Available formats: '
                f'{tuple(self._low_level_picklers)}.') from None


PickleMe = PicklerManager(
    low_level_picklers=[DefaultPickler(), ZippedPickler()])
