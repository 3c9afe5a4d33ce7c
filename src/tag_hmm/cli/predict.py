"""
Prediction CLI commands.

Commands for tagging and scoring word sequences with a model trained on
the fly from a tagged corpus.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import get_config
from ..logger import get_logger
from .utils import handle_error, label, train_from_corpus, words_to_observations

console = Console()
logger = get_logger(__name__)

predict_app = typer.Typer(
    name="predict",
    help="Tagging and scoring commands"
)


@predict_app.command("tag")
def predict_tag(
    ctx: typer.Context,
    corpus_file: Path = typer.Argument(
        ...,
        help="Tagged training corpus"
    ),
    words: List[str] = typer.Argument(
        ...,
        help="Words to tag"
    ),
    separator: Optional[str] = typer.Option(
        None,
        "--separator",
        "-s",
        help="Word/tag separator for text corpora"
    ),
    details: bool = typer.Option(
        False,
        "--details",
        "-d",
        help="Show per-step path probabilities"
    )
):
    """
    Tag WORDS with their most probable states (Viterbi decoding).

    Examples:
    ```
    tag-hmm predict tag corpus.txt killer crazy clown problem
    ```
    """
    try:
        model, _ = train_from_corpus(corpus_file, separator=separator)
        path = model.decode(words_to_observations(words))

        console.print(label(path))

        if details:
            table = Table(title="Viterbi path", min_width=50)
            table.add_column("t", justify="right")
            table.add_column("Observation", style="cyan")
            table.add_column("State", style="green")
            table.add_column("delta", justify="right")
            table.add_column("P(obs|state)", justify="right")

            for t, node in enumerate(path, start=1):
                table.add_row(str(t), label(node.observation), label(node.state),
                              f"{node.probability:.6g}", f"{node.emission:.4f}")
            console.print(table)

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, "predict tag", ctx.meta.get("debug", False))


@predict_app.command("score")
def predict_score(
    ctx: typer.Context,
    corpus_file: Path = typer.Argument(
        ...,
        help="Tagged training corpus"
    ),
    words: List[str] = typer.Argument(
        ...,
        help="Words to score"
    ),
    separator: Optional[str] = typer.Option(
        None,
        "--separator",
        "-s",
        help="Word/tag separator for text corpora"
    ),
    log: Optional[bool] = typer.Option(
        None,
        "--log/--no-log",
        help="Report log-probability (default: config evaluation.log_probability)"
    )
):
    """
    Likelihood of WORDS under the trained model (scaled forward algorithm).

    Examples:
    ```
    tag-hmm predict score corpus.txt killer clown --log
    ```
    """
    try:
        if log is None:
            log = bool(get_config('evaluation', 'log_probability'))

        model, _ = train_from_corpus(corpus_file, separator=separator)
        value = model.evaluate(words_to_observations(words), log=log)

        quantity = "log P(O)" if log else "P(O)"
        console.print(f"{quantity} = {value:.6g}")

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, "predict score", ctx.meta.get("debug", False))
