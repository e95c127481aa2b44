"""Build a deep Markov chain from a corpus and generate text from it.

Usage (from repo root):
    python -m runners.run_chain --mode word --max-depth 2 --count 10
    python -m runners.run_chain --mode word --corpus-file data/corpus.txt --separator "[ ,.]+"
    python -m runners.run_chain --mode char --text "abracadabra" --seed-text "ab" --count 20
    python -m runners.run_chain --mode char --corpus-file data/corpus.txt --json-out out/table.json
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from deepchain.chains.base import ChainConfig, DeepChain
from deepchain.chains.char import NO_SUCCESSOR, CharChain
from deepchain.chains.resolver import WindowAnchor
from deepchain.chains.sampler import SamplingPolicy
from deepchain.chains.word import WordChain
from deepchain.data.corpus import DEFAULT_CORPUS, read_corpus, tokenize
from deepchain.reporting.table_export import print_table, write_table


def _load_text(*, text: str | None, corpus_file: str | None) -> str:
    if text is not None and corpus_file is not None:
        raise ValueError("Pass either --text or --corpus-file, not both.")
    if corpus_file is not None:
        return read_corpus(corpus_file)
    if text is not None:
        return text
    return DEFAULT_CORPUS


def _build_chain(*, mode: str, config: ChainConfig) -> DeepChain:
    if mode == "word":
        return WordChain(config)
    if mode == "char":
        return CharChain(config)
    raise ValueError(f"Unknown mode: {mode}")


def _generate(
    chain: DeepChain,
    *,
    count: int,
    max_depth: int | None,
    seed_text: str | None,
    separator: str,
) -> str:
    if isinstance(chain, WordChain):
        seed = tokenize(seed_text, separator) if seed_text else None
        return " ".join(chain.generate(count, max_depth=max_depth, seed=seed))
    if isinstance(chain, CharChain):
        seed = seed_text if seed_text is not None else chain.random_symbol()
        return seed + chain.continue_sequence(seed, count, max_depth=max_depth)
    raise ValueError(f"Unsupported chain type: {type(chain).__name__}")


def _print_summary(
    *,
    mode: str,
    config: ChainConfig,
    chain: DeepChain,
    corpus_length: int,
    output: str,
) -> None:
    print("Deep Markov Chain Summary")
    print(f"  mode: {mode}")
    print(f"  max_depth: {config.max_depth}")
    print(f"  sampling: {SamplingPolicy(config.sampling).value}")
    if mode == "word":
        print(f"  window_anchor: {WindowAnchor(config.window_anchor).value}")
    print(f"  corpus_symbols: {corpus_length}")
    print(f"  vocabulary_size: {len(chain.symbols)}")
    print(f"  transition_records: {len(chain.transitions)}")
    if mode == "char":
        print(f"  no_successor_steps: {output.count(NO_SUCCESSOR)}")
    print(f"  generated: {output.replace(NO_SUCCESSOR, '')}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate text from a multi-depth Markov chain.")
    parser.add_argument("--mode", choices=("word", "char"), default="word")
    parser.add_argument("--text", type=str, default=None, help="Literal corpus text.")
    parser.add_argument("--corpus-file", type=str, default=None, help="UTF-8 corpus file.")
    parser.add_argument("--separator", type=str, default=r"\s+", help="Word separator regex.")
    parser.add_argument("--max-depth", type=int, default=2)
    parser.add_argument(
        "--generation-depth",
        type=int,
        default=None,
        help="Context window used while generating (defaults to --max-depth).",
    )
    parser.add_argument("--count", type=int, default=10)
    parser.add_argument("--seed-text", type=str, default=None)
    parser.add_argument("--rng-seed", type=int, default=None)
    parser.add_argument(
        "--sampling", choices=[policy.value for policy in SamplingPolicy], default="uniform"
    )
    parser.add_argument(
        "--window-anchor", choices=[anchor.value for anchor in WindowAnchor], default="start"
    )
    parser.add_argument("--print-table", action="store_true")
    parser.add_argument("--json-out", type=str, default=None)
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = ChainConfig(
        max_depth=args.max_depth,
        sampling=args.sampling,
        window_anchor=args.window_anchor,
        seed=args.rng_seed,
        debug=args.debug,
    )
    text = _load_text(text=args.text, corpus_file=args.corpus_file)
    chain = _build_chain(mode=args.mode, config=config)

    if isinstance(chain, WordChain):
        corpus = tokenize(text, args.separator)
    else:
        corpus = list(text)
    try:
        chain.fit(corpus)
    except ValueError as exc:
        parser.error(str(exc))
    if len(chain.symbols) == 0:
        parser.error("corpus is empty; nothing to build a chain from.")

    if args.print_table:
        print_table(chain)

    output = _generate(
        chain,
        count=args.count,
        max_depth=args.generation_depth,
        seed_text=args.seed_text,
        separator=args.separator,
    )

    _print_summary(
        mode=args.mode,
        config=config,
        chain=chain,
        corpus_length=len(corpus),
        output=output,
    )

    if args.json_out is not None:
        out_path = write_table(chain, Path(args.json_out), echo=True)
        print(f"  json_written_to: {out_path}")


if __name__ == "__main__":
    main()
