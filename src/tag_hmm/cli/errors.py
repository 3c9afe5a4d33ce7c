"""
Error handling for CLI commands.

Maps library errors to exit codes and renders them with suggestions.
"""

import traceback
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..exceptions import (
    CorpusError,
    EmptySequenceError,
    InvalidProbabilityError,
    ModelValidationError,
    TrainingError,
    UnregisteredEntityError
)
from ..logger import get_logger

console = Console()
logger = get_logger(__name__)


# Exit codes for different error types
EXIT_CODES = {
    "success": 0,
    "general_error": 1,
    "invalid_usage": 2,
    "corpus_error": 10,
    "model_error": 11,
    "unknown_symbol": 12,
    "config_error": 13
}


class TagHMMCLIError(Exception):
    """Base exception for CLI-specific errors."""

    def __init__(self, message: str, exit_code: int = 1, suggestions: Optional[list] = None):
        self.message = message
        self.exit_code = exit_code
        self.suggestions = suggestions or []
        super().__init__(message)


class CorpusFileError(TagHMMCLIError):
    """Corpus file errors."""

    def __init__(self, message: str, suggestions: Optional[list] = None):
        super().__init__(message, EXIT_CODES["corpus_error"], suggestions)


class ConfigurationError(TagHMMCLIError):
    """Configuration errors."""

    def __init__(self, message: str, suggestions: Optional[list] = None):
        super().__init__(message, EXIT_CODES["config_error"], suggestions)


def exit_code_for(error: Exception) -> int:
    """Exit code for a CLI or library error."""
    if isinstance(error, TagHMMCLIError):
        return error.exit_code
    if isinstance(error, CorpusError):
        return EXIT_CODES["corpus_error"]
    if isinstance(error, UnregisteredEntityError):
        return EXIT_CODES["unknown_symbol"]
    if isinstance(error, (ModelValidationError, TrainingError, InvalidProbabilityError)):
        return EXIT_CODES["model_error"]
    if isinstance(error, EmptySequenceError):
        return EXIT_CODES["invalid_usage"]
    return EXIT_CODES["general_error"]


def suggestions_for(error: Exception) -> List[str]:
    """Suggestions attached to an error, or derived from its type."""
    if isinstance(error, TagHMMCLIError):
        return error.suggestions
    if isinstance(error, UnregisteredEntityError):
        return [
            f"{error.kind.capitalize()} {error.symbol!s} does not occur in the training corpus",
            "Add tagged sentences containing it to the corpus"
        ]
    if isinstance(error, CorpusError):
        return [
            "Text corpora use one sentence per line with word/TAG tokens",
            'JSON corpora use {"sentences": [[["word", "TAG"], ...], ...]}'
        ]
    if isinstance(error, EmptySequenceError):
        return ["Pass at least one word to tag or score"]
    return []


def format_error_message(error: Exception, operation: str, debug: bool = False) -> str:
    """Format error message with context and suggestions."""
    error_type = type(error).__name__

    message_parts = [
        f"[red]Error during {operation}:[/red]",
        f"[red]{error_type}: {escape(str(error))}[/red]"
    ]

    suggestions = suggestions_for(error)
    if suggestions:
        message_parts.append("")
        message_parts.append("[yellow]Suggestions:[/yellow]")
        for suggestion in suggestions:
            message_parts.append(f"  • {escape(suggestion)}")

    if debug:
        message_parts.append("")
        message_parts.append("[dim]Debug information:[/dim]")
        message_parts.append(f"[dim]{escape(traceback.format_exc())}[/dim]")

    return "\n".join(message_parts)


def handle_cli_error(error: Exception, operation: str, debug: bool = False) -> None:
    """Handle CLI errors with rich formatting and helpful messages."""
    exit_code = exit_code_for(error)

    console.print(format_error_message(error, operation, debug))
    console.print(f"\n[dim]For more help, run: tag-hmm {operation.split()[0]} --help[/dim]")

    logger.error(f"CLI error in {operation}: {error}", exc_info=debug)

    raise typer.Exit(exit_code)


def validate_corpus_file(path: Path) -> Path:
    """Validate that a corpus file exists with helpful error messages."""
    if not path.exists():
        suggestions = []

        if path.parent.exists():
            similar_files = [
                file.name for file in path.parent.iterdir()
                if file.name.lower().startswith(path.stem.lower()[:3])
            ]
            if similar_files:
                suggestions.append(f"Did you mean one of: {', '.join(similar_files[:3])}")
        else:
            suggestions.append(f"Directory does not exist: {path.parent}")

        raise CorpusFileError(f"Corpus file not found: {path}", suggestions=suggestions)

    if not path.is_file():
        raise CorpusFileError(f"Corpus path is not a file: {path}")

    return path


def create_usage_examples() -> Dict[str, list]:
    """Create usage examples for different commands."""
    return {
        "demo": [
            "# Run the adjective/noun reference model",
            "tag-hmm demo"
        ],
        "train": [
            "# Learn and print the matrices of a tagged corpus",
            "tag-hmm train show corpus.txt",
            "",
            "# JSON corpora are validated against a schema",
            "tag-hmm train show corpus.json --validate"
        ],
        "predict": [
            "# Tag a sentence",
            "tag-hmm predict tag corpus.txt killer crazy clown problem",
            "",
            "# Log-likelihood of a word sequence",
            "tag-hmm predict score corpus.txt killer clown --log"
        ],
        "evaluate": [
            "# Token accuracy on a held-out corpus",
            "tag-hmm evaluate test train.txt test.txt"
        ]
    }


def display_usage_examples(command: Optional[str] = None) -> None:
    """Display usage examples for commands."""
    examples = create_usage_examples()

    if command and command in examples:
        console.print(Panel.fit(
            f"[bold]{command.title()} Command Examples[/bold]\n\n" +
            "\n".join(examples[command]),
            border_style="green"
        ))
        return

    console.print(Panel.fit("[bold]TagHMM Usage Examples[/bold]", border_style="green"))

    for cmd, cmd_examples in examples.items():
        console.print(f"\n[bold cyan]{cmd.title()} Commands:[/bold cyan]")
        for example in cmd_examples:
            if example.startswith("#"):
                console.print(f"[dim]{example}[/dim]")
            elif example:
                console.print(f"  {example}")
