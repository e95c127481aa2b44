"""Corpus acquisition and word tokenization."""

from __future__ import annotations

from pathlib import Path
import re

DEFAULT_CORPUS = "mama myla ramu, ramu myla mama. papa liubit mamu. mama liubit papu. papa gde?"


def read_corpus(path: str | Path) -> str:
    """Read a UTF-8 corpus file."""

    corpus_path = Path(path)
    if not corpus_path.exists():
        raise FileNotFoundError(f"Missing corpus file: {corpus_path}")
    with corpus_path.open("r", encoding="utf-8") as fh:
        return fh.read()


def tokenize(text: str, separator: str = r"\s+") -> list[str]:
    """Split `text` on the `separator` regex, dropping empty tokens."""

    if not separator:
        raise ValueError("separator must be a non-empty pattern.")
    return [token for token in re.split(separator, text) if token]
