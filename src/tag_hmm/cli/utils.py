"""
CLI utility functions.

Shared helpers for training from a corpus file and rendering model tables.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..hmm.model import HiddenMarkovModel
from ..hmm.symbols import Observation
from ..io import load_corpus
from ..train import TaggerTrainer
from .errors import handle_cli_error, validate_corpus_file

console = Console()


def handle_error(error: Exception, operation: str, debug: bool = False) -> None:
    """Handle and display errors consistently."""
    handle_cli_error(error, operation, debug)


def train_from_corpus(corpus_file: Path,
                      separator: Optional[str] = None,
                      validate: Optional[bool] = None) -> Tuple[HiddenMarkovModel, dict]:
    """Load a tagged corpus and train a model on it."""
    validate_corpus_file(corpus_file)
    sentences = load_corpus(corpus_file, separator=separator)

    trainer = TaggerTrainer(validate=validate)
    model = trainer.fit(sentences)
    return model, trainer.training_stats


def label(symbol) -> str:
    """Symbol name safe for rich markup."""
    return escape(str(symbol))


def words_to_observations(words: Sequence[str]) -> List[Observation]:
    return [Observation(word) for word in words]


def format_probability(value: float) -> str:
    return f"{value:.4f}" if value else "[dim]0[/dim]"


def build_initial_table(model: HiddenMarkovModel) -> Table:
    table = Table(title="Initial probabilities", min_width=50)
    table.add_column("State", style="cyan")
    table.add_column("P(start)", justify="right")

    pi, _, _ = model.get_parameters()
    for i, state in enumerate(model.states):
        table.add_row(label(state), format_probability(pi[i]))
    return table


def build_transition_table(model: HiddenMarkovModel) -> Table:
    table = Table(title="Transition probabilities (row -> column)", min_width=50)
    table.add_column("From", style="cyan")
    for state in model.states:
        table.add_column(label(state), justify="right")

    _, A, _ = model.get_parameters()
    for i, state in enumerate(model.states):
        table.add_row(label(state), *(format_probability(p) for p in A[i]))
    return table


def build_emission_table(model: HiddenMarkovModel) -> Table:
    table = Table(title="Emission probabilities", min_width=50)
    table.add_column("Observation", style="cyan")
    for state in model.states:
        table.add_column(label(state), justify="right")

    _, _, B = model.get_parameters()
    for j, observation in enumerate(model.observations):
        table.add_row(label(observation), *(format_probability(p) for p in B[:, j]))
    return table


def print_model(model: HiddenMarkovModel) -> None:
    console.print(build_initial_table(model))
    console.print(build_transition_table(model))
    console.print(build_emission_table(model))
