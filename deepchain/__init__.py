"""Multi-depth Markov chains over words and characters."""

from deepchain.chains import CharChain, ChainConfig, DeepChain, WordChain

__all__ = [
    "DeepChain",
    "ChainConfig",
    "WordChain",
    "CharChain",
]
