"""Structured dumps of a chain's transition table.

Document layout (JSON):

    {
      "granularity": "word" | "char",
      "max_depth": 2,
      "symbols": ["a", "b", ...],
      "transitions": {"a": {"1": {"b": 2}}, ...}
    }

`symbols` lists the vocabulary in id order so a reloaded chain assigns the
same ids. Depth keys are strings because JSON object keys must be.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from deepchain.chains.base import ChainConfig, DeepChain
from deepchain.chains.char import CharChain
from deepchain.chains.word import WordChain

_GRANULARITIES: dict[str, type[DeepChain]] = {
    "word": WordChain,
    "char": CharChain,
}


def _granularity_of(chain: DeepChain) -> str:
    for name, chain_cls in _GRANULARITIES.items():
        if isinstance(chain, chain_cls):
            return name
    raise ValueError(f"Unsupported chain type: {type(chain).__name__}")


def table_to_document(chain: DeepChain) -> dict[str, Any]:
    """Return the chain's full context -> depth -> successor -> count structure."""

    symbols = chain.symbols
    transitions: dict[str, dict[str, dict[str, int]]] = {}
    for context_id, depth, successor_id, count in chain.transitions.records():
        by_depth = transitions.setdefault(symbols.symbol_of(context_id), {})
        by_successor = by_depth.setdefault(str(depth), {})
        by_successor[symbols.symbol_of(successor_id)] = int(count)

    return {
        "granularity": _granularity_of(chain),
        "max_depth": chain.max_depth,
        "symbols": symbols.symbols(),
        "transitions": transitions,
    }


def chain_from_document(
    document: dict[str, Any],
    config: ChainConfig | None = None,
) -> DeepChain:
    """Rebuild a chain from `table_to_document` output.

    `config` supplies sampling settings; its `max_depth` is replaced by the one
    stored in the document.
    """

    for key in ("granularity", "max_depth", "symbols", "transitions"):
        if key not in document:
            raise ValueError(f"Transition document is missing '{key}'.")

    granularity = document["granularity"]
    if granularity not in _GRANULARITIES:
        raise ValueError(f"Unknown granularity: {granularity!r}")

    base_config = config if config is not None else ChainConfig()
    chain_config = ChainConfig(
        max_depth=int(document["max_depth"]),
        sampling=base_config.sampling,
        window_anchor=base_config.window_anchor,
        seed=base_config.seed,
        debug=base_config.debug,
        debug_max_messages=base_config.debug_max_messages,
    )
    chain = _GRANULARITIES[granularity](chain_config)

    for symbol in document["symbols"]:
        chain.symbols.intern(symbol)

    for context, by_depth in document["transitions"].items():
        context_id = chain.symbols.id_of(context)
        if context_id < 0:
            raise ValueError(f"Context symbol {context!r} is not listed in 'symbols'.")
        for raw_depth, by_successor in by_depth.items():
            depth = int(raw_depth)
            if depth not in chain.depths:
                raise ValueError(
                    f"Depth {depth} outside [{chain.depths.start}, {chain.depths.stop})."
                )
            for successor, count in by_successor.items():
                successor_id = chain.symbols.id_of(successor)
                if successor_id < 0:
                    raise ValueError(f"Successor symbol {successor!r} is not listed in 'symbols'.")
                chain.transitions.record(context_id, depth, successor_id, int(count))

    return chain


def write_table(chain: DeepChain, path: str | Path, *, echo: bool = True) -> Path:
    """Write the transition document as JSON and optionally echo it to stdout."""

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    document = table_to_document(chain)
    with out_path.open("w", encoding="utf-8") as fh:
        json.dump(document, fh, indent=2, ensure_ascii=False)
    if echo:
        print(json.dumps(document, indent=2, ensure_ascii=False))
    return out_path


def read_table(path: str | Path, config: ChainConfig | None = None) -> DeepChain:
    in_path = Path(path)
    if not in_path.exists():
        raise FileNotFoundError(f"Missing transition table file: {in_path}")
    with in_path.open("r", encoding="utf-8") as fh:
        document = json.load(fh)
    if not isinstance(document, dict):
        raise ValueError(f"Expected a JSON object in {in_path}.")
    return chain_from_document(document, config)


def _display(symbol: str) -> str:
    return symbol if symbol.isprintable() else repr(symbol)


def format_table(chain: DeepChain) -> Iterator[str]:
    """Yield one `context(depth) -> successor | count` line per record."""

    symbols = chain.symbols
    for context_id, depth, successor_id, count in chain.transitions.records():
        context = _display(symbols.symbol_of(context_id))
        successor = _display(symbols.symbol_of(successor_id))
        yield f"{context}({depth}) -> {successor} | {count}"


def print_table(chain: DeepChain) -> None:
    for line in format_table(chain):
        print(line)
