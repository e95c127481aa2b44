"""Candidate sampling with one process-wide random generator."""

from __future__ import annotations

from enum import Enum
from typing import Collection, Mapping

import numpy as np


_PROCESS_RNG: np.random.Generator | None = None


def default_rng() -> np.random.Generator:
    """Return the process-wide generator, creating it on first use."""

    global _PROCESS_RNG
    if _PROCESS_RNG is None:
        _PROCESS_RNG = np.random.default_rng()
    return _PROCESS_RNG


class SamplingPolicy(str, Enum):
    """How one successor is chosen among the surviving candidates."""

    UNIFORM = "uniform"
    WEIGHTED = "weighted"
    MOST_LIKELY = "most_likely"


class Sampler:
    """Draws one symbol id from a candidate set or a candidate -> count mapping.

    Candidates are ordered by ascending id before drawing so a seeded generator
    reproduces the same choice. Sets carry no counts and are treated as if
    every candidate had count 1.
    """

    def __init__(
        self,
        policy: SamplingPolicy | str = SamplingPolicy.UNIFORM,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.policy = SamplingPolicy(policy)
        self.rng = rng if rng is not None else default_rng()

    def choose(self, candidates: Mapping[int, int] | Collection[int]) -> int:
        if not candidates:
            raise ValueError("Cannot sample from an empty candidate set.")

        keys = sorted(candidates)
        if isinstance(candidates, Mapping):
            weights = np.array([candidates[key] for key in keys], dtype=np.float64)
        else:
            weights = np.ones(len(keys), dtype=np.float64)

        if self.policy is SamplingPolicy.UNIFORM:
            return keys[int(self.rng.integers(len(keys)))]
        if self.policy is SamplingPolicy.MOST_LIKELY:
            # np.argmax returns the first maximum, i.e. the lowest id on ties.
            return keys[int(np.argmax(weights))]

        probs = weights / np.sum(weights)
        return keys[int(self.rng.choice(len(keys), p=probs))]

    def choose_index(self, size: int) -> int:
        """Uniform draw in `[0, size)`, used for fallback vocabulary draws."""

        if size <= 0:
            raise ValueError("size must be positive.")
        return int(self.rng.integers(size))
