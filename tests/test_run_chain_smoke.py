"""Smoke tests for the command-line runner."""

from __future__ import annotations

import json
from pathlib import Path
import subprocess
import sys

from deepchain.data.corpus import read_corpus, tokenize

REPO_ROOT = Path(__file__).resolve().parents[1]


def _run(*args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "runners.run_chain", *args],
        cwd=REPO_ROOT,
        capture_output=True,
        text=True,
        check=check,
    )


def test_word_mode_on_default_corpus() -> None:
    proc = _run("--mode", "word", "--max-depth", "2", "--count", "5", "--rng-seed", "3")

    assert "Deep Markov Chain Summary" in proc.stdout
    assert "mode: word" in proc.stdout
    assert "window_anchor: start" in proc.stdout
    generated_line = next(line for line in proc.stdout.splitlines() if "generated:" in line)
    assert len(generated_line.split("generated:")[1].split()) == 6


def test_char_mode_writes_json(tmp_path: Path) -> None:
    corpus_path = tmp_path / "corpus.txt"
    corpus_path.write_text("abracadabra\nabracadabra\n", encoding="utf-8")
    json_path = tmp_path / "out" / "table.json"

    proc = _run(
        "--mode",
        "char",
        "--corpus-file",
        str(corpus_path),
        "--seed-text",
        "ab",
        "--count",
        "12",
        "--max-depth",
        "3",
        "--rng-seed",
        "1",
        "--sampling",
        "weighted",
        "--print-table",
        "--json-out",
        str(json_path),
    )

    assert "mode: char" in proc.stdout
    assert "sampling: weighted" in proc.stdout
    assert "a(0) -> b |" in proc.stdout
    assert json_path.exists()
    document = json.loads(json_path.read_text(encoding="utf-8"))
    assert document["granularity"] == "char"
    assert document["max_depth"] == 3


def test_corpus_helpers(tmp_path: Path) -> None:
    corpus_path = tmp_path / "corpus.txt"
    corpus_path.write_text("mama myla  ramu,\nramu", encoding="utf-8")

    text = read_corpus(corpus_path)
    assert tokenize(text) == ["mama", "myla", "ramu,", "ramu"]
    assert tokenize(text, " ") == ["mama", "myla", "ramu,\nramu"]
    assert tokenize("a,b;;c", "[,;]") == ["a", "b", "c"]


def test_generation_depth_flag_limits_the_window() -> None:
    proc = _run(
        "--mode",
        "word",
        "--text",
        "one two three one two three",
        "--max-depth",
        "3",
        "--generation-depth",
        "1",
        "--seed-text",
        "one",
        "--count",
        "4",
        "--rng-seed",
        "2",
    )

    generated_line = next(line for line in proc.stdout.splitlines() if "generated:" in line)
    assert generated_line.split("generated:")[1].split() == ["one", "two", "three", "one", "two"]


def test_empty_char_corpus_is_a_usage_error() -> None:
    proc = _run("--mode", "char", "--text", "", check=False)

    assert proc.returncode == 2
    assert "corpus is empty" in proc.stderr
    assert "Traceback" not in proc.stderr
