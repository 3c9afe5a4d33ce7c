"""
Evaluation CLI commands.

Commands for measuring tagging accuracy on held-out corpora.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..evaluate import evaluate_tagger
from ..io import load_corpus
from ..logger import get_logger
from .errors import validate_corpus_file
from .utils import handle_error, label, train_from_corpus

console = Console()
logger = get_logger(__name__)

evaluate_app = typer.Typer(
    name="evaluate",
    help="Model evaluation commands"
)


@evaluate_app.command("test")
def evaluate_test(
    ctx: typer.Context,
    train_corpus: Path = typer.Argument(
        ...,
        help="Tagged training corpus"
    ),
    test_corpus: Path = typer.Argument(
        ...,
        help="Tagged test corpus"
    ),
    separator: Optional[str] = typer.Option(
        None,
        "--separator",
        "-s",
        help="Word/tag separator for text corpora"
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on test sentences with unknown words instead of skipping them"
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write metrics to a JSON file"
    )
):
    """
    Train on TRAIN_CORPUS and report tagging accuracy on TEST_CORPUS.

    Examples:
    ```
    tag-hmm evaluate test train.txt test.txt -o metrics.json
    ```
    """
    try:
        model, _ = train_from_corpus(train_corpus, separator=separator)

        validate_corpus_file(test_corpus)
        test_sentences = load_corpus(test_corpus, separator=separator)

        results = evaluate_tagger(model, test_sentences, skip_unknown=not strict)

        table = Table(title="Tagging accuracy", min_width=50)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Token accuracy", f"{results['token_accuracy']:.4f}")
        table.add_row("Sentence accuracy", f"{results['sentence_accuracy']:.4f}")
        table.add_row("Sentences", str(results['n_sentences']))
        table.add_row("Tokens", str(results['n_tokens']))
        table.add_row("Skipped sentences", str(results['n_skipped']))
        for state, accuracy in results['per_state_accuracy'].items():
            table.add_row(label(f"Accuracy [{state}]"), f"{accuracy:.4f}")
        console.print(table)

        if output_file is not None:
            report = {
                'token_accuracy': results['token_accuracy'],
                'sentence_accuracy': results['sentence_accuracy'],
                'per_state_accuracy': {str(s): a for s, a in results['per_state_accuracy'].items()},
                'states': [str(s) for s in results['states']],
                'confusion_matrix': results['confusion_matrix'].tolist(),
                'n_sentences': results['n_sentences'],
                'n_tokens': results['n_tokens'],
                'n_skipped': results['n_skipped'],
                'total_log_likelihood': results['total_log_likelihood']
            }
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, 'w') as f:
                json.dump(report, f, indent=2)
            console.print(f"[green]Metrics written to {output_file}[/green]")

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, "evaluate test", ctx.meta.get("debug", False))
