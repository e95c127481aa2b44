"""Multi-depth candidate narrowing.

Both merge policies answer the same question: given the trailing window of
already produced symbol ids, which successors are plausible? They start from
the successors of the most recent symbol and fold in deeper evidence one depth
at a time:

- `MergePolicy.INTERSECTION` keeps the set of successors reachable at every
  merged depth. Counts are dropped.
- `MergePolicy.OVERLAP` keeps successors present at every merged depth, each
  with the smallest count seen across those depths.

A merge that would leave nothing is not applied. Narrowing stops there and the
last non-empty result is returned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Mapping, Sequence

from deepchain.tables.transition_table import TransitionTable


class MergePolicy(str, Enum):
    INTERSECTION = "intersection"
    OVERLAP = "overlap"


class WindowAnchor(str, Enum):
    """Where the intersection policy reads the context symbol for depth `d`.

    `START` reads `window[d]`, counting from the oldest symbol in the window.
    Offsets that fall outside the window end narrowing. `END` reads
    `window[-d]`, the symbol lying `d` positions before the one being
    predicted.
    """

    START = "start"
    END = "end"


@dataclass(frozen=True)
class NarrowingResult:
    """Outcome of one resolver call.

    Attributes:
        candidates: `set` of successor ids (intersection) or successor -> count
            mapping (overlap). Empty when nothing is plausible.
        steps: Candidates after each applied merge, shallowest first.
        stopped_at_depth: Depth whose merge was rejected, or None if every
            available depth was merged.
    """

    candidates: AbstractSet[int] | Mapping[int, int]
    steps: list[AbstractSet[int] | Mapping[int, int]] = field(default_factory=list)
    stopped_at_depth: int | None = None

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    @property
    def stopped_early(self) -> bool:
        return self.stopped_at_depth is not None


def intersect_candidates(
    table: TransitionTable,
    window: Sequence[int],
    *,
    anchor: WindowAnchor = WindowAnchor.START,
) -> NarrowingResult:
    """Narrow successors of `window[-1]` at depth 1 by intersecting deeper sets."""

    if len(window) == 0:
        return NarrowingResult(candidates=set())

    candidates = set(table.successors_of(window[-1], 1))
    if not candidates:
        return NarrowingResult(candidates=set())

    steps: list[AbstractSet[int] | Mapping[int, int]] = [frozenset(candidates)]
    for depth in range(2, len(window) + 1):
        offset = depth if anchor is WindowAnchor.START else len(window) - depth
        if offset >= len(window):
            return NarrowingResult(candidates=candidates, steps=steps, stopped_at_depth=depth)

        deeper = table.successors_of(window[offset], depth)
        narrowed = candidates.intersection(deeper)
        if not narrowed:
            return NarrowingResult(candidates=candidates, steps=steps, stopped_at_depth=depth)
        candidates = narrowed
        steps.append(frozenset(candidates))

    return NarrowingResult(candidates=candidates, steps=steps)


def overlap_candidates(
    table: TransitionTable,
    window: Sequence[int],
    *,
    excluded: AbstractSet[int] = frozenset(),
) -> NarrowingResult:
    """Merge successor counts of `window[-1-k]` at depth `k`, keeping minima.

    Successor ids in `excluded` never appear in the result.
    """

    if len(window) == 0:
        return NarrowingResult(candidates={})

    merged = _without(table.successors_of(window[-1], 0), excluded)
    if not merged:
        return NarrowingResult(candidates={})

    steps: list[AbstractSet[int] | Mapping[int, int]] = [dict(merged)]
    for depth in range(1, len(window)):
        deeper = _without(table.successors_of(window[-1 - depth], depth), excluded)
        overlap = {
            successor: min(count, deeper[successor])
            for successor, count in merged.items()
            if successor in deeper
        }
        if not overlap:
            return NarrowingResult(candidates=merged, steps=steps, stopped_at_depth=depth)
        merged = overlap
        steps.append(dict(merged))

    return NarrowingResult(candidates=merged, steps=steps)


def _without(counts: dict[int, int], excluded: AbstractSet[int]) -> dict[int, int]:
    if not excluded:
        return counts
    return {successor: count for successor, count in counts.items() if successor not in excluded}
