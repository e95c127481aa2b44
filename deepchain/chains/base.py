"""Generic multi-depth Markov chain shared by word and character models.

A chain records, for every symbol and every lookback depth up to
`max_depth`, how often each successor follows. Subclasses fix:

- the symbol type (words or characters),
- the depth convention (`min_depth`: 1 for words, 0 for characters),
- the merge policy used to narrow candidates at generation time,
- symbols excluded from overlap candidates.

Construction and table storage are shared. `fit` always starts from fresh
tables.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import ClassVar, Generic, Hashable, Iterable, Sequence, TypeVar

import numpy as np

from deepchain.chains.resolver import (
    MergePolicy,
    NarrowingResult,
    WindowAnchor,
    intersect_candidates,
    overlap_candidates,
)
from deepchain.chains.sampler import Sampler, SamplingPolicy
from deepchain.tables.symbol_table import SymbolTable
from deepchain.tables.transition_table import TransitionTable

SymbolT = TypeVar("SymbolT", bound=Hashable)

ChainT = TypeVar("ChainT", bound="DeepChain")


@dataclass(frozen=True)
class ChainConfig:
    """Construction and generation settings for a chain.

    `seed` builds a dedicated generator for the chain; leave it as None to
    share the process-wide generator.
    """

    max_depth: int = 2
    sampling: SamplingPolicy | str = SamplingPolicy.UNIFORM
    window_anchor: WindowAnchor | str = WindowAnchor.START
    seed: int | None = None
    debug: bool = False
    debug_max_messages: int = 20

    def validate(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ValueError("max_depth must be an integer.")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1.")
        if self.debug_max_messages < 0:
            raise ValueError("debug_max_messages must be non-negative.")
        SamplingPolicy(self.sampling)
        WindowAnchor(self.window_anchor)


class DeepChain(Generic[SymbolT]):
    """Symbol tables plus per-depth transition counts for one corpus."""

    merge_policy: ClassVar[MergePolicy]
    min_depth: ClassVar[int]
    # Symbols never offered as overlap candidates.
    excluded_symbols: ClassVar[frozenset] = frozenset()

    def __init__(
        self,
        config: ChainConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        config = config if config is not None else ChainConfig()
        config.validate()
        self.config = config
        self.max_depth = int(config.max_depth)
        self.window_anchor = WindowAnchor(config.window_anchor)
        self.debug = bool(config.debug)
        self.debug_max_messages = int(config.debug_max_messages)

        if rng is None and config.seed is not None:
            rng = np.random.default_rng(config.seed)
        self.sampler = Sampler(config.sampling, rng)

        self.symbols: SymbolTable[SymbolT] = SymbolTable()
        self.transitions = TransitionTable()
        self._debug_messages_emitted = 0
        self._logger = logging.getLogger(__name__)

    @property
    def rng(self) -> np.random.Generator:
        return self.sampler.rng

    @property
    def depths(self) -> range:
        """Depths recorded by `fit`."""

        return range(self.min_depth, self.min_depth + self.max_depth)

    @property
    def vocabulary(self) -> list[SymbolT]:
        return self.symbols.symbols()

    def fit(self: ChainT, sequence: Iterable[SymbolT]) -> ChainT:
        """Build fresh tables from `sequence`.

        Every symbol is interned, including those without any recorded
        transition.
        """

        self.symbols = SymbolTable()
        self.transitions = TransitionTable()
        self._debug_messages_emitted = 0

        symbol_ids = [self.symbols.intern(symbol) for symbol in sequence]
        self._record_sequence(symbol_ids)

        self._logger.debug(
            "%s fitted: symbols=%d vocabulary=%d records=%d max_depth=%d",
            type(self).__name__,
            len(symbol_ids),
            len(self.symbols),
            len(self.transitions),
            self.max_depth,
        )
        return self

    def _record_sequence(self, symbol_ids: Sequence[int]) -> None:
        length = len(symbol_ids)
        for start, context_id in enumerate(symbol_ids):
            for distance in range(1, self.max_depth + 1):
                end = start + distance
                if end >= length:
                    break
                depth = self.min_depth + distance - 1
                self.transitions.record(context_id, depth, symbol_ids[end])

    def successors(self, symbol: SymbolT, depth: int) -> dict[SymbolT, int]:
        """Successor symbol -> count for `symbol` at `depth`; empty if unknown."""

        counts = self.transitions.successors_of(self.symbols.id_of(symbol), depth)
        return {self.symbols.symbol_of(successor): count for successor, count in counts.items()}

    def total_count(self, symbol: SymbolT, depth: int) -> int:
        return self.transitions.total_count(self.symbols.id_of(symbol), depth)

    def probability(self, symbol: SymbolT, successor: SymbolT, depth: int) -> float:
        """Percentage of `symbol` occurrences followed by `successor` at `depth`."""

        symbol_id = self.symbols.id_of(symbol)
        successor_id = self.symbols.id_of(successor)
        return self.transitions.probability(symbol_id, depth, successor_id)

    def resolve(self, window: Sequence[SymbolT]) -> NarrowingResult:
        """Narrow candidates for the symbol following `window` (ids in the result)."""

        return self._resolve_ids([self.symbols.id_of(symbol) for symbol in window])

    def candidates(self, window: Sequence[SymbolT]) -> set[SymbolT] | dict[SymbolT, int]:
        """Like `resolve`, with candidate ids translated back to symbols."""

        found = self.resolve(window).candidates
        if isinstance(found, dict):
            return {self.symbols.symbol_of(successor): count for successor, count in found.items()}
        return {self.symbols.symbol_of(successor) for successor in found}

    def _resolve_ids(self, window_ids: Sequence[int]) -> NarrowingResult:
        result = self._narrow(window_ids)
        if result.stopped_early:
            self._debug_log(
                "%s narrowing stopped: window=%s stopped_at_depth=%d candidates=%d",
                type(self).__name__,
                list(window_ids),
                result.stopped_at_depth,
                len(result.candidates),
            )
        return result

    def _narrow(self, window_ids: Sequence[int]) -> NarrowingResult:
        if self.merge_policy is MergePolicy.INTERSECTION:
            return intersect_candidates(self.transitions, window_ids, anchor=self.window_anchor)
        excluded = frozenset(
            self.symbols.id_of(symbol) for symbol in self.excluded_symbols if symbol in self.symbols
        )
        return overlap_candidates(self.transitions, window_ids, excluded=excluded)

    def _next_id(self, window_ids: Sequence[int]) -> int | None:
        """Sample the next symbol id, or None if no candidate survives."""

        result = self._resolve_ids(window_ids)
        if result.is_empty:
            return None
        return self.sampler.choose(result.candidates)

    def _random_symbol_id(self) -> int:
        if len(self.symbols) == 0:
            raise RuntimeError(f"{type(self).__name__} has an empty vocabulary; call fit() first.")
        return self.sampler.choose_index(len(self.symbols))

    def random_symbol(self) -> SymbolT:
        """Uniformly random vocabulary symbol."""

        return self.symbols.symbol_of(self._random_symbol_id())

    def _generation_depth(self, max_depth: int | None) -> int:
        if max_depth is None:
            return self.max_depth
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1.")
        return int(max_depth)

    def _debug_log(self, message: str, *args: object) -> None:
        if not self.debug or not self._logger.isEnabledFor(logging.DEBUG):
            return
        if self._debug_messages_emitted >= self.debug_max_messages:
            return
        self._logger.debug(message, *args)
        self._debug_messages_emitted += 1

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(max_depth={self.max_depth}, "
            f"vocabulary={len(self.symbols)}, records={len(self.transitions)})"
        )
