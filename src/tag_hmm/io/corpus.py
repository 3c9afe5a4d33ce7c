"""
Tagged corpus loading.

A corpus is a list of sentences, each a list of (word, tag) tokens. Two
file formats are accepted:

- JSON: {"sentences": [[["killer", "N"], ["clown", "N"]], ...]},
  validated against CORPUS_SCHEMA
- Text: one sentence per line, whitespace separated "word/TAG" tokens;
  blank lines and lines starting with '#' are skipped

Words become Observation symbols and tags become State symbols.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

import jsonschema

from ..config import get_config
from ..exceptions import CorpusError
from ..hmm.symbols import LabeledObservation, Observation, State
from ..logger import get_logger

logger = get_logger(__name__)

Sentence = List[LabeledObservation]


CORPUS_SCHEMA = {
    "type": "object",
    "properties": {
        "sentences": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "array",
                    "items": {"type": "string", "minLength": 1},
                    "minItems": 2,
                    "maxItems": 2,
                    "description": "[word, tag] pair"
                }
            }
        },
        "description": {
            "type": "string",
            "description": "Free-form corpus description (optional)"
        }
    },
    "required": ["sentences"],
    "additionalProperties": True
}


def make_token(word: str, tag: str) -> LabeledObservation:
    """Tagged token from raw strings."""
    return LabeledObservation(State(tag), Observation(word))


def parse_tagged_sentence(line: str, separator: Optional[str] = None) -> Sentence:
    """
    Parse a line of "word/TAG" tokens.

    The token is split on the last separator, so words may contain it.

    Raises:
        CorpusError: If a token has no separator or an empty side
    """
    if separator is None:
        separator = get_config('corpus', 'token_separator') or '/'

    sentence = []
    for raw_token in line.split():
        word, sep, tag = raw_token.rpartition(separator)
        if not sep or not word or not tag:
            raise CorpusError(f"Malformed token {raw_token!r}: expected word{separator}TAG")
        sentence.append(make_token(word, tag))
    return sentence


def parse_corpus_json(data) -> List[Sentence]:
    """Validate and convert an in-memory JSON corpus."""
    try:
        jsonschema.validate(data, CORPUS_SCHEMA)
    except jsonschema.ValidationError as e:
        raise CorpusError(f"Corpus validation failed: {e.message}")

    return [
        [make_token(word, tag) for word, tag in sentence]
        for sentence in data["sentences"]
    ]


def parse_corpus_text(text: str, separator: Optional[str] = None) -> List[Sentence]:
    """Parse a text corpus with one tagged sentence per line."""
    sentences = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        try:
            sentences.append(parse_tagged_sentence(stripped, separator))
        except CorpusError as e:
            raise CorpusError(f"Line {line_number}: {e}")

    if not sentences:
        raise CorpusError("Corpus contains no sentences")
    return sentences


def load_corpus(path: Union[str, Path], separator: Optional[str] = None) -> List[Sentence]:
    """
    Load a tagged corpus from a JSON or text file.

    Args:
        path: Corpus file; ".json" files are parsed as JSON, anything else as text
        separator: Word/tag separator for text corpora (default: config)

    Returns:
        List of sentences of LabeledObservation

    Raises:
        CorpusError: If the file cannot be read or is malformed
    """
    path = Path(path)
    if not path.exists():
        raise CorpusError(f"Corpus file not found: {path}")

    encoding = get_config('corpus', 'encoding') or 'utf-8'
    logger.debug(f"Loading corpus from: {path}")

    try:
        with open(path, 'r', encoding=encoding) as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusError(f"Failed to read corpus {path}: {e}")

    if path.suffix.lower() == '.json':
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise CorpusError(f"Invalid JSON in corpus file {path}: {e}")
        sentences = parse_corpus_json(data)
    else:
        sentences = parse_corpus_text(content, separator)

    logger.info(f"Loaded {len(sentences)} sentences from {path}")
    return sentences
