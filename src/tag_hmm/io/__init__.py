"""
Corpus I/O module.

Loading of tagged training and test corpora.
"""

from .corpus import (
    CORPUS_SCHEMA,
    load_corpus,
    make_token,
    parse_corpus_json,
    parse_corpus_text,
    parse_tagged_sentence
)

__all__ = [
    "CORPUS_SCHEMA",
    "load_corpus",
    "make_token",
    "parse_corpus_json",
    "parse_corpus_text",
    "parse_tagged_sentence"
]
