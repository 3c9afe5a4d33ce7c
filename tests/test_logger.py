"""
Tests for the logging infrastructure.
"""

import logging
import os
from pathlib import Path

import pytest

from tag_hmm.logger import (
    ROOT_LOGGER_NAME,
    active_log_files,
    disable_file_logging,
    enable_file_logging,
    get_hmm_logger,
    get_logger,
    set_log_level
)


class TestLoggerNames:
    """Test logger naming under the package root."""

    def test_prefixes_component_names(self):
        assert get_logger('custom').name == f'{ROOT_LOGGER_NAME}.custom'
        assert get_hmm_logger().name == f'{ROOT_LOGGER_NAME}.hmm'

    def test_module_names_are_kept(self):
        assert get_logger('tag_hmm.hmm.viterbi').name == 'tag_hmm.hmm.viterbi'

    def test_loggers_are_cached(self):
        assert get_logger('custom') is get_logger('custom')


class TestLoggerLevels:
    """Test level changes."""

    def test_set_log_level(self):
        root = logging.getLogger(ROOT_LOGGER_NAME)
        original = root.level
        try:
            set_log_level('ERROR')
            assert root.level == logging.ERROR
            assert all(h.level == logging.ERROR for h in root.handlers
                       if not isinstance(h, logging.FileHandler))
        finally:
            set_log_level(original)

    def test_numeric_levels(self):
        root = logging.getLogger(ROOT_LOGGER_NAME)
        original = root.level
        try:
            set_log_level(logging.DEBUG)
            assert root.level == logging.DEBUG
        finally:
            set_log_level(original)

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            set_log_level('LOUD')


def _handlers_for(root, path):
    return [
        h for h in root.handlers
        if isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(path)
    ]


class TestFileLogging:
    """Test file handlers added and removed by the package."""

    def test_file_logging(self, temp_dir):
        log_file = temp_dir / "logs" / "tag_hmm.log"
        root = logging.getLogger(ROOT_LOGGER_NAME)
        original = root.level

        try:
            set_log_level('INFO')
            enable_file_logging(str(log_file))
            enable_file_logging(str(log_file))

            handlers = _handlers_for(root, log_file)
            assert len(handlers) == 1
            assert active_log_files() == [Path(os.path.abspath(log_file))]

            get_logger('file_test').info("written to file")
            handlers[0].flush()
            assert "written to file" in log_file.read_text()
        finally:
            disable_file_logging()
            set_log_level(original)

        assert _handlers_for(root, log_file) == []
        assert active_log_files() == []

    def test_foreign_file_handler_is_ignored(self, temp_dir):
        """Test that a file handler attached by someone else neither blocks nor gets removed."""
        root = logging.getLogger(ROOT_LOGGER_NAME)
        foreign_file = temp_dir / "foreign.log"
        log_file = temp_dir / "tag_hmm.log"

        foreign = logging.FileHandler(foreign_file)
        root.addHandler(foreign)
        try:
            enable_file_logging(log_file)
            assert len(_handlers_for(root, log_file)) == 1

            disable_file_logging()
            assert _handlers_for(root, log_file) == []
            assert foreign in root.handlers
        finally:
            root.removeHandler(foreign)
            foreign.close()

    def test_disable_single_file(self, temp_dir):
        root = logging.getLogger(ROOT_LOGGER_NAME)
        first, second = temp_dir / "first.log", temp_dir / "second.log"

        try:
            enable_file_logging(first)
            enable_file_logging(second)

            disable_file_logging(first)

            assert _handlers_for(root, first) == []
            assert len(_handlers_for(root, second)) == 1
        finally:
            disable_file_logging()
