"""
Logging for the tag_hmm package.

Every component logs under the ``tag_hmm`` logger. A console handler on
stdout is installed once; file handlers are added and removed on request
and only the ones added here are ever touched, so handlers installed by
an embedding application or a test runner are left alone.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import get_config

ROOT_LOGGER_NAME = 'tag_hmm'
DEFAULT_LOG_FILE = 'tag_hmm.log'

Level = Union[int, str]


def _resolve_level(level: Optional[Level]) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


class TagHMMLogger:
    """Owns the package root logger and the handlers attached to it."""

    def __init__(self):
        self._loggers: Dict[str, logging.Logger] = {}
        self._console_handler: Optional[logging.Handler] = None
        self._file_handlers: Dict[str, logging.FileHandler] = {}
        self._formatter = logging.Formatter(get_config('logging', 'format'))

        self.root = logging.getLogger(ROOT_LOGGER_NAME)
        self.root.propagate = False
        self._install_console_handler()
        self.set_level(get_config('logging', 'level'))

        if get_config('logging', 'file_logging'):
            self.enable_file_logging()

    def _install_console_handler(self) -> None:
        if self._console_handler is not None:
            self.root.removeHandler(self._console_handler)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(self._formatter)
        self.root.addHandler(handler)
        self._console_handler = handler

    def _own_handlers(self) -> List[logging.Handler]:
        handlers = list(self._file_handlers.values())
        if self._console_handler is not None:
            handlers.insert(0, self._console_handler)
        return handlers

    def get_logger(self, name: str) -> logging.Logger:
        """Logger for ``name``, placed under the package root unless already there."""
        if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
            full_name = name
        else:
            full_name = f'{ROOT_LOGGER_NAME}.{name}'

        if full_name not in self._loggers:
            self._loggers[full_name] = logging.getLogger(full_name)
        return self._loggers[full_name]

    def set_level(self, level: Optional[Level]) -> None:
        log_level = _resolve_level(level)
        self.root.setLevel(log_level)
        for handler in self._own_handlers():
            handler.setLevel(log_level)

    def enable_file_logging(self, log_file: Optional[Union[str, Path]] = None) -> Path:
        """
        Start writing package log records to ``log_file``.

        Enabling the same file twice keeps a single handler.

        Returns:
            Absolute path of the log file
        """
        if log_file is None:
            log_file = get_config('logging', 'log_file') or DEFAULT_LOG_FILE

        path = Path(os.path.abspath(log_file))
        if str(path) in self._file_handlers:
            return path

        path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(path)
        handler.setLevel(self.root.level)
        handler.setFormatter(self._formatter)
        self.root.addHandler(handler)
        self._file_handlers[str(path)] = handler
        return path

    def disable_file_logging(self, log_file: Optional[Union[str, Path]] = None) -> None:
        """Stop writing to ``log_file``, or to every file enabled here when omitted."""
        if log_file is None:
            paths = list(self._file_handlers)
        else:
            paths = [os.path.abspath(log_file)]

        for path in paths:
            handler = self._file_handlers.pop(path, None)
            if handler is None:
                continue
            self.root.removeHandler(handler)
            handler.close()

    @property
    def log_files(self) -> List[Path]:
        return [Path(p) for p in self._file_handlers]


_logger_manager = TagHMMLogger()


def get_logger(name: str = 'main') -> logging.Logger:
    """Get a logger instance for the specified module/component."""
    return _logger_manager.get_logger(name)


def set_log_level(level: Level):
    """Set the level of the package logger and its handlers."""
    _logger_manager.set_level(level)


def enable_file_logging(log_file: Optional[Union[str, Path]] = None) -> Path:
    return _logger_manager.enable_file_logging(log_file)


def disable_file_logging(log_file: Optional[Union[str, Path]] = None):
    _logger_manager.disable_file_logging(log_file)


def active_log_files() -> List[Path]:
    """Files currently receiving package log records."""
    return _logger_manager.log_files


def get_hmm_logger() -> logging.Logger:
    return get_logger('hmm')


def get_training_logger() -> logging.Logger:
    return get_logger('training')


def get_evaluation_logger() -> logging.Logger:
    return get_logger('evaluation')
