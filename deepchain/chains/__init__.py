"""Chain construction, candidate narrowing, sampling and generation."""

from deepchain.chains.base import ChainConfig, DeepChain
from deepchain.chains.char import NO_SUCCESSOR, CharChain
from deepchain.chains.resolver import MergePolicy, NarrowingResult, WindowAnchor
from deepchain.chains.sampler import Sampler, SamplingPolicy, default_rng
from deepchain.chains.word import WordChain

__all__ = [
    "ChainConfig",
    "DeepChain",
    "WordChain",
    "CharChain",
    "NO_SUCCESSOR",
    "MergePolicy",
    "NarrowingResult",
    "WindowAnchor",
    "Sampler",
    "SamplingPolicy",
    "default_rng",
]
