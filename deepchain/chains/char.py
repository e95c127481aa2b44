"""Character-granularity chain: depths 0..max_depth-1, subtractive overlap."""

from __future__ import annotations

from typing import ClassVar, Iterable

from deepchain.chains.base import DeepChain
from deepchain.chains.resolver import MergePolicy

# Line and field separators never become candidates.
SEPARATOR_CHARACTERS = frozenset({"\n", "\t"})

NO_SUCCESSOR = "\x00"


class CharChain(DeepChain[str]):
    """Markov chain over single characters.

    Depth 0 links a character to the one immediately after it, depth `k` to the
    character `k + 1` positions after it. Candidates keep, for each successor,
    the smallest count found across the merged depths.
    """

    merge_policy: ClassVar[MergePolicy] = MergePolicy.OVERLAP
    min_depth: ClassVar[int] = 0
    excluded_symbols: ClassVar[frozenset] = SEPARATOR_CHARACTERS

    def fit(self, sequence: Iterable[str]) -> "CharChain":
        """Build fresh tables from the characters of `sequence`.

        `NO_SUCCESSOR` marks dead ends in generated text, so a corpus holding it
        is rejected.
        """

        characters = list(sequence)
        if NO_SUCCESSOR in characters:
            raise ValueError(f"corpus must not contain the NO_SUCCESSOR character {NO_SUCCESSOR!r}.")
        return super().fit(characters)

    def continue_sequence(self, seed: str, count: int, max_depth: int | None = None) -> str:
        """Return `count` characters continuing `seed`.

        Each step looks at the last `max_depth + 1` characters of the seed plus
        what has been generated so far. When no candidate survives, the
        `NO_SUCCESSOR` character is appended and generation carries on.
        """

        if count < 0:
            raise ValueError("count must be non-negative.")
        depth = self._generation_depth(max_depth)

        text = seed
        appended: list[str] = []
        for _ in range(count):
            window = text[-(depth + 1):]
            next_id = self._next_id([self.symbols.id_of(char) for char in window])
            if next_id is None:
                self._debug_log("CharChain has no successor for window %r", window)
                next_char = NO_SUCCESSOR
            else:
                next_char = self.symbols.symbol_of(next_id)
            appended.append(next_char)
            text += next_char

        return "".join(appended)
