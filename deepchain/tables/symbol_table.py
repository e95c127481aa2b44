"""Dense integer identities for words or characters."""

from __future__ import annotations

from typing import Generic, Hashable, Iterator, TypeVar

NOT_FOUND = -1

SymbolT = TypeVar("SymbolT", bound=Hashable)


class SymbolTable(Generic[SymbolT]):
    """Append-only mapping between symbols and zero-based ids.

    Ids are allocated sequentially in first-seen order and never reused. The
    reverse index is a dict so interning and lookup stay O(1) on large corpora.
    """

    __slots__ = ("_symbols", "_ids")

    def __init__(self) -> None:
        self._symbols: list[SymbolT] = []
        self._ids: dict[SymbolT, int] = {}

    def intern(self, symbol: SymbolT) -> int:
        """Return the id of `symbol`, allocating the next id if it is new."""

        symbol_id = self._ids.get(symbol)
        if symbol_id is None:
            symbol_id = len(self._symbols)
            self._symbols.append(symbol)
            self._ids[symbol] = symbol_id
        return symbol_id

    def id_of(self, symbol: SymbolT) -> int:
        """Return the id of `symbol`, or `NOT_FOUND` if it was never interned."""

        return self._ids.get(symbol, NOT_FOUND)

    def symbol_of(self, symbol_id: int) -> SymbolT:
        if symbol_id < 0 or symbol_id >= len(self._symbols):
            raise IndexError(f"Symbol id {symbol_id} out of range [0, {len(self._symbols)}).")
        return self._symbols[symbol_id]

    def symbols(self) -> list[SymbolT]:
        """All symbols in id order."""

        return list(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._ids

    def __iter__(self) -> Iterator[SymbolT]:
        return iter(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolTable(size={len(self._symbols)})"
