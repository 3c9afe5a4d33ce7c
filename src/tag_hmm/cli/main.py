"""
Main CLI application for TagHMM system.

Provides command-line interface for training, tagging, scoring and evaluation.
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import load_config_file
from ..logger import set_log_level
from .. import demo as reference
from .errors import ConfigurationError, EXIT_CODES, display_usage_examples, handle_cli_error
from .evaluate import evaluate_app
from .predict import predict_app
from .train import train_app

console = Console()

app = typer.Typer(
    name="tag-hmm",
    help="Discrete Hidden Markov Model tagger: Viterbi decoding, forward scoring, supervised training",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True
)

app.add_typer(train_app, name="train")
app.add_typer(predict_app, name="predict")
app.add_typer(evaluate_app, name="evaluate")


@app.command("examples")
def show_examples(
    command: Optional[str] = typer.Argument(
        None,
        help="Show examples for specific command (demo/train/predict/evaluate)"
    )
):
    """Show usage examples for TagHMM commands."""
    display_usage_examples(command)


@app.command("version")
def show_version():
    """Show TagHMM version information."""
    from .. import __version__

    console.print(Panel.fit(
        f"[bold]TagHMM Version {__version__}[/bold]\n"
        f"Discrete Hidden Markov Model tagger\n"
        f"Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        border_style="blue"
    ))


def _pairwise_table(title: str, model) -> Table:
    table = Table(title=title, min_width=50)
    table.add_column("Tags", style="cyan")
    table.add_column("P(killer clown)", justify="right")

    for left in (reference.ADJECTIVE, reference.NOUN):
        for right in (reference.ADJECTIVE, reference.NOUN):
            p = model.get_probability(reference.KILLER.tagged(left), reference.CLOWN.tagged(right))
            table.add_row(f"{left}{right}", f"{p:.4f}")
    return table


@app.command("demo")
def run_demo(ctx: typer.Context):
    """
    Run the reference models: pairwise probabilities, supervised training,
    Viterbi decoding and forward scoring.
    """
    try:
        from ..train import TaggerTrainer

        hand_built = reference.build_killer_clown_model()
        console.print(_pairwise_table("Hand-specified model", hand_built))

        trainer = TaggerTrainer(
            states=[reference.ADJECTIVE, reference.NOUN],
            observations=[reference.CLOWN, reference.KILLER, reference.CRAZY, reference.PROBLEM]
        )
        learned = trainer.fit(reference.killer_clown_training_set())
        console.print(_pairwise_table("Model learned from tagged sentences", learned))

        console.print("\n[bold]Viterbi tagging[/bold]")
        for sentence in reference.KILLER_CLOWN_SENTENCES:
            path = learned.decode(sentence)
            score = learned.evaluate(sentence)
            console.print(f"  {path}    [dim]P(O)={score:.6g}[/dim]")

        chain = reference.build_arbitrary_value_model()
        console.print("\n[bold]Three-state chain[/bold]")
        for observations, _ in reference.ARBITRARY_VALUE_CASES:
            states = chain.viterbi(observations)
            console.print("  " + ", ".join(str(s) for s in states))

    except typer.Exit:
        raise
    except Exception as e:
        handle_cli_error(e, "demo", ctx.meta.get("debug", False))


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging and debug information"
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all output except errors"
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed error traces"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to JSON configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False
    )
):
    """
    TagHMM: discrete Hidden Markov Model tagger.

    \b
    Quick Start:
    1. Inspect a model:  tag-hmm train show corpus.txt
    2. Tag a sentence:   tag-hmm predict tag corpus.txt killer crazy clown
    3. Score a sentence: tag-hmm predict score corpus.txt killer clown --log
    4. Evaluate:         tag-hmm evaluate test train.txt test.txt

    \b
    For examples:        tag-hmm examples
    """
    ctx.meta["verbose"] = verbose
    ctx.meta["quiet"] = quiet
    ctx.meta["debug"] = debug

    if quiet:
        set_log_level('ERROR')
    elif verbose or debug:
        set_log_level('DEBUG')
    else:
        set_log_level('WARNING')

    if config_file:
        try:
            load_config_file(str(config_file))
        except ValueError as e:
            handle_cli_error(
                ConfigurationError(str(e), suggestions=["Configuration files must be valid JSON"]),
                "configuration",
                debug
            )


def cli_main():
    """Main entry point for CLI with error handling."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(EXIT_CODES["general_error"])


if __name__ == "__main__":
    cli_main()
