"""Data models supporting the crossword builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import CellType, Direction
from .exceptions import CrosswordWarning


@dataclass(frozen=True)
class Cell:
    """A single grid cell: empty, block, or a letter."""

    type: CellType = CellType.EMPTY
    letter: Optional[str] = None

    @classmethod
    def of(cls, letter: str) -> "Cell":
        return cls(CellType.LETTER, letter)

    def is_block(self) -> bool:
        return self.type == CellType.BLOCK

    def is_letter(self) -> bool:
        return self.type == CellType.LETTER

    def is_empty(self) -> bool:
        return self.type == CellType.EMPTY


EMPTY = Cell()
BLOCK = Cell(CellType.BLOCK)


@dataclass(frozen=True)
class WordEntry:
    """A canonical lowercase word and its clue."""

    word: str
    clue: str

    @property
    def length(self) -> int:
        return len(self.word)


@dataclass(frozen=True)
class PlacedWord:
    """A word seated in the grid. ``number`` is 0 until numbering runs."""

    word: str
    clue: str
    row: int
    col: int
    direction: Direction
    number: int = 0

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = self.direction.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(len(self.word))]

    @property
    def end(self) -> Tuple[int, int]:
        dr, dc = self.direction.step
        return self.row + dr * (len(self.word) - 1), self.col + dc * (len(self.word) - 1)

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "clue": self.clue,
            "row": self.row,
            "col": self.col,
            "direction": self.direction.value,
            "number": self.number,
        }


@dataclass(frozen=True)
class Puzzle:
    """Immutable result of one generation call."""

    size: int
    grid: Tuple[Tuple[Cell, ...], ...]
    placed_words: Tuple[PlacedWord, ...]
    cell_numbers: Tuple[Tuple[int, int, int], ...] = ()
    warnings: Tuple[CrosswordWarning, ...] = field(default=(), compare=False)
    validation_messages: Tuple[str, ...] = ()
    seed: Optional[int] = None

    def cell(self, row: int, col: int) -> Cell:
        return self.grid[row][col]

    def across(self) -> List[PlacedWord]:
        return [word for word in self.placed_words if word.direction == Direction.ACROSS]

    def down(self) -> List[PlacedWord]:
        return [word for word in self.placed_words if word.direction == Direction.DOWN]

    def number_at(self, row: int, col: int) -> Optional[int]:
        for r, c, number in self.cell_numbers:
            if (r, c) == (row, col):
                return number
        return None

    @property
    def block_count(self) -> int:
        return sum(1 for row in self.grid for cell in row if cell.is_block())

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "grid": [
                [{"type": cell.type.value, "letter": cell.letter} for cell in row]
                for row in self.grid
            ],
            "words": [word.to_jsonable() for word in self.placed_words],
            "numbers": [list(entry) for entry in self.cell_numbers],
            "warnings": [str(warning) for warning in self.warnings],
            "validation": list(self.validation_messages),
            "seed": self.seed,
        }
