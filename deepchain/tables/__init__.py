"""Symbol interning and transition count storage."""

from deepchain.tables.symbol_table import NOT_FOUND, SymbolTable
from deepchain.tables.transition_table import TransitionTable

__all__ = [
    "NOT_FOUND",
    "SymbolTable",
    "TransitionTable",
]
