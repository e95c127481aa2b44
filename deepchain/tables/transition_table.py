"""Sparse transition counts keyed by (context symbol, depth, successor symbol).

Each `(context, depth)` pair owns one sparse counter holding the successor
counts and their running total, so `total_count` never rescans the table.
Lookups for pairs that were never recorded return empty results instead of
raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np
from numpy.typing import NDArray


@dataclass(slots=True)
class _SparseSuccessorCounts:
    """Sparse successor counts for one (context, depth) pair."""

    total: int = 0
    counts: dict[int, int] = field(default_factory=dict)


class TransitionTable:
    """Aggregated occurrence counts for (context, depth, successor) triples."""

    def __init__(self) -> None:
        self._rows: dict[tuple[int, int], _SparseSuccessorCounts] = {}
        self._num_records = 0

    def record(self, context_id: int, depth: int, successor_id: int, count: int = 1) -> None:
        """Count `count` occurrences of `successor_id` at `depth` after `context_id`."""

        if depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}.")
        if count < 1:
            raise ValueError(f"count must be positive, got {count}.")
        key = (context_id, depth)
        row = self._rows.get(key)
        if row is None:
            row = _SparseSuccessorCounts()
            self._rows[key] = row
        previous = row.counts.get(successor_id, 0)
        if previous == 0:
            self._num_records += 1
        row.counts[successor_id] = previous + count
        row.total += count

    def successors_of(self, context_id: int, depth: int) -> dict[int, int]:
        """Return a copy of the successor -> count mapping (empty if unseen)."""

        row = self._rows.get((context_id, depth))
        if row is None:
            return {}
        return dict(row.counts)

    def total_count(self, context_id: int, depth: int) -> int:
        row = self._rows.get((context_id, depth))
        return 0 if row is None else row.total

    def count(self, context_id: int, depth: int, successor_id: int) -> int:
        row = self._rows.get((context_id, depth))
        if row is None:
            return 0
        return row.counts.get(successor_id, 0)

    def probability(self, context_id: int, depth: int, successor_id: int) -> float:
        """Percentage of `(context, depth)` occurrences followed by `successor_id`.

        Returns 0.0 for pairs that were never recorded.
        """

        row = self._rows.get((context_id, depth))
        if row is None or row.total == 0:
            return 0.0
        return 100.0 * row.counts.get(successor_id, 0) / row.total

    def records(self) -> Iterator[tuple[int, int, int, int]]:
        """Yield `(context_id, depth, successor_id, count)` grouped by (context, depth).

        Pairs come in first-seen order, and so do the successors within a pair.
        """

        for (context_id, depth), row in self._rows.items():
            for successor_id, count in row.counts.items():
                yield context_id, depth, successor_id, count

    def depths(self) -> list[int]:
        return sorted({depth for _, depth in self._rows})

    def depth_total(self, depth: int) -> int:
        """Sum of all counts recorded at `depth`."""

        return sum(row.total for (_, row_depth), row in self._rows.items() if row_depth == depth)

    def to_matrix(self, depth: int, size: int) -> NDArray[np.int64]:
        """Dense `(size, size)` count matrix for one depth, rows are contexts."""

        if size < 0:
            raise ValueError("size must be non-negative.")
        matrix = np.zeros((size, size), dtype=np.int64)
        for (context_id, row_depth), row in self._rows.items():
            if row_depth != depth:
                continue
            for successor_id, count in row.counts.items():
                matrix[context_id, successor_id] = count
        return matrix

    def clear(self) -> None:
        self._rows = {}
        self._num_records = 0

    def __len__(self) -> int:
        return self._num_records

    def __bool__(self) -> bool:
        return self._num_records > 0

    def __repr__(self) -> str:
        return f"TransitionTable(records={self._num_records}, pairs={len(self._rows)})"
