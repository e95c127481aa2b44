"""Corpus loading and tokenization."""

from deepchain.data.corpus import DEFAULT_CORPUS, read_corpus, tokenize

__all__ = [
    "DEFAULT_CORPUS",
    "read_corpus",
    "tokenize",
]
