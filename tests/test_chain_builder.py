"""Transition-table construction for word and character chains."""

from __future__ import annotations

import numpy as np
import pytest

from deepchain.chains.base import ChainConfig
from deepchain.chains.char import CharChain
from deepchain.chains.word import WordChain
from deepchain.data.corpus import DEFAULT_CORPUS, tokenize


@pytest.fixture(scope="module")
def random_words() -> list[str]:
    rng = np.random.default_rng(123)
    alphabet = ["alpha", "beta", "gamma", "delta", "eps"]
    return [alphabet[int(idx)] for idx in rng.integers(0, len(alphabet), size=400)]


def test_word_chain_alternating_corpus() -> None:
    chain = WordChain(ChainConfig(max_depth=1)).fit(["a", "b", "a", "b", "a"])

    assert chain.vocabulary == ["a", "b"]
    assert chain.successors("a", 1) == {"b": 2}
    assert chain.successors("b", 1) == {"a": 2}
    assert len(chain.transitions) == 2
    np.testing.assert_array_equal(
        chain.transitions.to_matrix(1, len(chain.symbols)), np.array([[0, 2], [2, 0]])
    )


def test_word_chain_single_symbol_corpus_has_no_transitions() -> None:
    chain = WordChain(ChainConfig(max_depth=3)).fit(["x"])

    assert len(chain.transitions) == 0
    assert chain.vocabulary == ["x"]
    assert chain.successors("x", 1) == {}


def test_word_chain_records_every_depth_within_bounds() -> None:
    chain = WordChain(ChainConfig(max_depth=2)).fit(["a", "b", "c"])

    assert chain.successors("a", 1) == {"b": 1}
    assert chain.successors("a", 2) == {"c": 1}
    assert chain.successors("b", 1) == {"c": 1}
    assert chain.successors("b", 2) == {}
    assert chain.successors("c", 1) == {}
    assert chain.transitions.depths() == [1, 2]


def test_char_chain_depth_zero_is_adjacent() -> None:
    chain = CharChain(ChainConfig(max_depth=2)).fit("abab")

    assert chain.successors("a", 0) == {"b": 2}
    assert chain.successors("b", 0) == {"a": 1}
    assert chain.successors("a", 1) == {"a": 1}
    assert chain.successors("b", 1) == {"b": 1}
    assert chain.transitions.depths() == [0, 1]
    assert list(chain.depths) == [0, 1]


@pytest.mark.parametrize("max_depth", [1, 2, 4, 7])
def test_word_counts_are_conserved_per_depth(random_words: list[str], max_depth: int) -> None:
    chain = WordChain(ChainConfig(max_depth=max_depth)).fit(random_words)
    n = len(random_words)

    for depth in range(1, max_depth + 1):
        assert chain.transitions.depth_total(depth) == n - depth
        matrix = chain.transitions.to_matrix(depth, len(chain.symbols))
        assert int(matrix.sum()) == n - depth
    assert chain.transitions.depth_total(max_depth + 1) == 0


@pytest.mark.parametrize("max_depth", [1, 3, 5])
def test_char_counts_are_conserved_per_depth(max_depth: int) -> None:
    text = DEFAULT_CORPUS
    chain = CharChain(ChainConfig(max_depth=max_depth)).fit(text)

    for depth in range(max_depth):
        assert chain.transitions.depth_total(depth) == len(text) - depth - 1
    assert chain.transitions.depth_total(max_depth) == 0


def test_depth_longer_than_corpus_only_records_valid_pairs() -> None:
    chain = CharChain(ChainConfig(max_depth=10)).fit("abc")

    assert chain.transitions.depth_total(0) == 2
    assert chain.transitions.depth_total(1) == 1
    assert chain.transitions.depth_total(2) == 0


def test_fit_resets_previous_tables() -> None:
    chain = WordChain(ChainConfig(max_depth=1))
    chain.fit(["old", "words", "here"])
    chain.fit(["new", "new"])

    assert chain.vocabulary == ["new"]
    assert chain.successors("new", 1) == {"new": 1}
    assert chain.successors("old", 1) == {}
    assert len(chain.transitions) == 1


def test_fit_text_tokenizes_on_separator() -> None:
    chain = WordChain(ChainConfig(max_depth=2)).fit_text(DEFAULT_CORPUS, " ")

    assert chain.vocabulary == list(dict.fromkeys(tokenize(DEFAULT_CORPUS, " ")))
    assert chain.successors("mama", 1) == {"myla": 1, "liubit": 1}
    assert chain.successors("mama", 2) == {"ramu,": 1, "papu.": 1}


@pytest.mark.parametrize("max_depth", [0, -1])
def test_non_positive_max_depth_is_rejected(max_depth: int) -> None:
    with pytest.raises(ValueError):
        WordChain(ChainConfig(max_depth=max_depth))
    with pytest.raises(ValueError):
        CharChain(ChainConfig(max_depth=max_depth))


def test_config_rejects_unknown_policies() -> None:
    with pytest.raises(ValueError):
        ChainConfig(sampling="loudest").validate()
    with pytest.raises(ValueError):
        ChainConfig(window_anchor="middle").validate()
    with pytest.raises(ValueError):
        ChainConfig(debug_max_messages=-1).validate()


def test_probability_percentages() -> None:
    chain = WordChain(ChainConfig(max_depth=1)).fit(["a", "b", "a", "c"])

    assert chain.probability("a", "b", 1) == pytest.approx(50.0)
    assert chain.probability("a", "c", 1) == pytest.approx(50.0)
    assert chain.probability("b", "a", 1) == pytest.approx(100.0)
    assert chain.probability("c", "a", 1) == 0.0
    assert chain.probability("unknown", "a", 1) == 0.0
    assert chain.total_count("a", 1) == 2
    assert chain.total_count("a", 4) == 0
