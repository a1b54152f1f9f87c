"""CLI entrypoint for the crossword constructor."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from xwordgen.core.exceptions import CrosswordError
from xwordgen.data.word_bank import EMERGENCY_WORDS
from xwordgen.engine.generator import GeneratorConfig, PuzzleAssembler
from xwordgen.io.word_source import CsvWordSource, StaticWordSource
from xwordgen.utils.config_loader import config_from_mapping, load_config
from xwordgen.utils.logger import configure_logging, get_logger
from xwordgen.utils.pretty import print_puzzle_stats


def parse_word_args(entries: List[str]) -> List[Any]:
    """Turn ``WORD`` or ``WORD:Clue`` arguments into raw records."""
    records: List[Any] = []
    for entry in entries:
        word, sep, clue = entry.partition(":")
        records.append((clue.strip(), word.strip()) if sep else word.strip())
    return records


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a crossword from a word-and-clue list",
    )
    parser.add_argument(
        "--words-file",
        type=str,
        metavar="PATH_OR_URL",
        help="CSV of clue,word rows (local path or http(s) URL)",
    )
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Explicit words (format: WORD or WORD:Clue)",
    )
    parser.add_argument("--config", type=Path, help="JSON configuration file")
    parser.add_argument("--size", type=int, help="Grid side length in cells")
    parser.add_argument(
        "--black-percentage",
        type=float,
        help="Target block density as a fraction (0.18) or percent (18)",
    )
    parser.add_argument("--target-count", type=int, help="Number of words to select")
    parser.add_argument("--min-length", type=int, help="Shortest accepted word")
    parser.add_argument("--max-length", type=int, help="Longest accepted word")
    parser.add_argument("--max-attempts", type=int, help="Placement attempts per word")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--no-symmetry", action="store_true", help="Disable 180-degree block symmetry")
    parser.add_argument(
        "--use-emergency-words",
        action="store_true",
        help="Fall back to a small built-in word list when the source fails",
    )
    parser.add_argument("--timeout", type=float, default=10.0, help="Word source timeout in seconds")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--pretty", action="store_true", help="Print the grid and clues instead of JSON")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    overrides: Dict[str, Any] = {
        "grid_size": args.size,
        "black_square_percentage": args.black_percentage,
        "target_count": args.target_count,
        "min_length": args.min_length,
        "max_length": args.max_length,
        "max_placement_attempts": args.max_attempts,
        "seed": args.seed,
    }
    if args.no_symmetry:
        overrides["symmetry_enabled"] = False
    if args.use_emergency_words:
        overrides["fallback_words"] = EMERGENCY_WORDS
    if args.config:
        return load_config(args.config, **overrides)
    return config_from_mapping({}, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.words and not args.words_file and not args.use_emergency_words:
        parser.error("provide --words, --words-file or --use-emergency-words")
    if args.words and args.words_file:
        parser.error("--words and --words-file are mutually exclusive")

    try:
        config = build_config(args)
        assembler = PuzzleAssembler(config)
        if args.words_file:
            source = CsvWordSource(args.words_file, timeout_seconds=args.timeout)
        else:
            source = StaticWordSource(parse_word_args(args.words) if args.words else EMERGENCY_WORDS)
        puzzle = assembler.generate_from_source(source, timeout=args.timeout)
    except CrosswordError as exc:
        get_logger("xwordgen").error("%s: %s", type(exc).__name__, exc)
        return 1

    if args.pretty:
        print_puzzle_stats(puzzle)
        return 0

    payload: Dict[str, Any] = puzzle.to_jsonable()
    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
