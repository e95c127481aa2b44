"""Word-granularity chain: depths 1..max_depth, intersection narrowing."""

from __future__ import annotations

from typing import ClassVar, Sequence

from deepchain.chains.base import DeepChain
from deepchain.chains.resolver import MergePolicy
from deepchain.data.corpus import tokenize


class WordChain(DeepChain[str]):
    """Markov chain over word tokens.

    Depth `d` links a word to the word `d` positions after it. Candidates are
    the successors of the last word at depth 1, intersected with the deeper
    successor sets of earlier words in the window.
    """

    merge_policy: ClassVar[MergePolicy] = MergePolicy.INTERSECTION
    min_depth: ClassVar[int] = 1

    def fit_text(self, text: str, separator: str = r"\s+") -> "WordChain":
        """Tokenize `text` on the `separator` pattern and fit on the tokens."""

        return self.fit(tokenize(text, separator))

    def generate(
        self,
        count: int,
        max_depth: int | None = None,
        seed: Sequence[str] | None = None,
    ) -> list[str]:
        """Extend a word sequence by `count` words.

        Args:
            count: Number of words to append.
            max_depth: Window length used for narrowing. Defaults to the depth
                the chain was fitted with.
            seed: Words to start from. Unknown words are kept and simply yield
                no candidates. Defaults to one random vocabulary word.

        Returns:
            The starting words followed by `count` generated words. Whenever no
            candidate survives narrowing a random vocabulary word is appended
            instead, so the output always grows by one word per step.
        """

        if count < 0:
            raise ValueError("count must be non-negative.")
        depth = self._generation_depth(max_depth)

        if seed:
            generated = list(seed)
            generated_ids = [self.symbols.id_of(word) for word in generated]
        else:
            start_id = self._random_symbol_id()
            generated = [self.symbols.symbol_of(start_id)]
            generated_ids = [start_id]

        for _ in range(count):
            next_id = self._next_id(generated_ids[-depth:])
            if next_id is None:
                next_id = self._random_symbol_id()
                self._debug_log(
                    "WordChain fallback draw after %r: %r",
                    generated[-1],
                    self.symbols.symbol_of(next_id),
                )
            generated.append(self.symbols.symbol_of(next_id))
            generated_ids.append(next_id)

        return generated
