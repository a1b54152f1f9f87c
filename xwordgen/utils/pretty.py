"""Pretty-print helpers for puzzles."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Optional

from ..core.constants import CellType

if TYPE_CHECKING:
    from ..core.models import Puzzle


SYMBOLS = {
    CellType.BLOCK: "#",
    CellType.EMPTY: ".",
}


def cell_symbol(cell) -> str:
    if cell.type == CellType.LETTER:
        return (cell.letter or "?").upper()
    return SYMBOLS.get(cell.type, ".")


def format_grid(puzzle: Puzzle) -> str:
    width = puzzle.size
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(puzzle.grid):
        row_render = " ".join(f"{cell_symbol(cell):>2}" for cell in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_clues(puzzle: Puzzle) -> str:
    lines: List[str] = []
    for title, words in (("Across", puzzle.across()), ("Down", puzzle.down())):
        if not words:
            continue
        lines.append(title)
        for word in words:
            lines.append(f"  {word.number:>2}. {word.clue} ({word.length})")
    return "\n".join(lines)


def print_puzzle_stats(puzzle: Puzzle, *, label: Optional[str] = None, stream=None) -> None:
    """Print grid, clues and a short summary for a finished puzzle."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(puzzle), file=stream)
    print(file=stream)
    print(format_clues(puzzle), file=stream)

    total = puzzle.size * puzzle.size
    letters = sum(1 for row in puzzle.grid for cell in row if cell.is_letter())
    print(file=stream)
    print(f"Words: {len(puzzle.placed_words)} "
          f"({len(puzzle.across())} across, {len(puzzle.down())} down)", file=stream)
    print(f"Blocks: {puzzle.block_count}/{total} ({puzzle.block_count / total:.1%})", file=stream)
    print(f"Letters: {letters}/{total} ({letters / total:.1%})", file=stream)
    for warning in puzzle.warnings:
        print(f"Warning: {warning}", file=stream)
    for message in puzzle.validation_messages:
        print(f"Note: {message}", file=stream)
