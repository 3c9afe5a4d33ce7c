"""
Test configuration and fixtures for TagHMM.

This file contains pytest configuration and shared fixtures
for testing the TagHMM system.
"""

import pytest
import tempfile
from pathlib import Path

from tag_hmm.config import reset_config
from tag_hmm.demo import (
    ADJECTIVE, NOUN, CLOWN, KILLER, CRAZY, PROBLEM,
    build_arbitrary_value_model,
    build_killer_clown_model,
    killer_clown_training_set
)
from tag_hmm.train import TaggerTrainer


KILLER_CLOWN_TEXT_CORPUS = """\
# killer clown training sentences
killer/N clown/N
killer/N problem/N
crazy/A problem/N
crazy/A clown/N
problem/N crazy/A clown/N
clown/N crazy/A killer/N
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_config():
    """Restore default configuration after the test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def hand_built_model():
    """Hand-specified adjective/noun model."""
    return build_killer_clown_model()


@pytest.fixture
def training_set():
    """Six tagged adjective/noun sentences."""
    return killer_clown_training_set()


@pytest.fixture
def learned_model(training_set):
    """Adjective/noun model learned with registry order A, N."""
    trainer = TaggerTrainer(
        states=[ADJECTIVE, NOUN],
        observations=[CLOWN, KILLER, CRAZY, PROBLEM]
    )
    return trainer.fit(training_set)


@pytest.fixture
def chain_model():
    """Three-state left-to-right model."""
    return build_arbitrary_value_model()


@pytest.fixture
def text_corpus_file(temp_dir):
    """Killer clown corpus as a word/TAG text file."""
    path = temp_dir / "corpus.txt"
    path.write_text(KILLER_CLOWN_TEXT_CORPUS, encoding="utf-8")
    return path


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
