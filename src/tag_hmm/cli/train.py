"""
Training CLI commands.

Commands for estimating HMM parameters from tagged corpora.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..logger import get_logger
from .utils import handle_error, print_model, train_from_corpus

console = Console()
logger = get_logger(__name__)

train_app = typer.Typer(
    name="train",
    help="Model training commands"
)


@train_app.command("show")
def train_show(
    ctx: typer.Context,
    corpus_file: Path = typer.Argument(
        ...,
        help="Tagged corpus (.json or word/TAG text)"
    ),
    separator: Optional[str] = typer.Option(
        None,
        "--separator",
        "-s",
        help="Word/tag separator for text corpora"
    ),
    validate: bool = typer.Option(
        False,
        "--validate",
        help="Require every learned probability row to sum to one"
    )
):
    """
    Learn initial, transition and emission probabilities from a corpus and print them.

    Examples:
    ```
    tag-hmm train show corpus.txt
    tag-hmm train show corpus.json --validate
    ```
    """
    try:
        model, stats = train_from_corpus(corpus_file, separator=separator,
                                         validate=validate or None)

        console.print(Panel.fit(
            f"[bold]Supervised Training[/bold]\n"
            f"Corpus: {corpus_file}\n"
            f"Sentences: {stats['n_sequences']}\n"
            f"Tokens: {stats['n_tokens']}\n"
            f"States: {stats['n_states']}  Observations: {stats['n_observations']}",
            border_style="blue"
        ))

        print_model(model)

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, "train show", ctx.meta.get("debug", False))
