"""Standard across/down numbering derived from grid geometry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ..core.constants import Direction
from ..core.models import PlacedWord
from ..utils.logger import get_logger
from .grid import GridState


LOGGER = get_logger(__name__)

Position = Tuple[int, int]


@dataclass
class Numbering:
    """Cell labels plus the entry starts they belong to."""

    labels: Dict[Position, int] = field(default_factory=dict)
    across: Dict[Position, int] = field(default_factory=dict)
    down: Dict[Position, int] = field(default_factory=dict)

    def starts(self, direction: Direction) -> Dict[Position, int]:
        return self.across if direction == Direction.ACROSS else self.down

    def as_tuples(self) -> Tuple[Tuple[int, int, int], ...]:
        return tuple((row, col, number) for (row, col), number in self.labels.items())


class Numberer:
    """Row-major scan numbering. Only letter cells are open; empty cells end entries."""

    def number(self, grid: GridState) -> Numbering:
        numbering = Numbering()
        next_number = 1
        for row in range(grid.size):
            for col in range(grid.size):
                starts_across = self.starts_entry(grid, row, col, Direction.ACROSS)
                starts_down = self.starts_entry(grid, row, col, Direction.DOWN)
                if not (starts_across or starts_down):
                    continue
                numbering.labels[(row, col)] = next_number
                if starts_across:
                    numbering.across[(row, col)] = next_number
                if starts_down:
                    numbering.down[(row, col)] = next_number
                next_number += 1
        return numbering

    @staticmethod
    def starts_entry(grid: GridState, row: int, col: int, direction: Direction) -> bool:
        if not grid.is_letter(row, col):
            return False
        dr, dc = direction.step
        prev_row, prev_col = row - dr, col - dc
        if grid.in_bounds(prev_row, prev_col) and grid.is_letter(prev_row, prev_col):
            return False
        next_row, next_col = row + dr, col + dc
        return grid.in_bounds(next_row, next_col) and grid.is_letter(next_row, next_col)

    def assign(
        self, placed: Sequence[PlacedWord], numbering: Numbering
    ) -> Tuple[List[PlacedWord], List[PlacedWord]]:
        """Attach numbers to placed words.

        Returns ``(numbered, unnumbered)``; a word lands in ``unnumbered`` when
        its start cell does not begin an entry in its direction. Numbered
        words are ordered by number, across before down.
        """

        numbered: List[PlacedWord] = []
        unnumbered: List[PlacedWord] = []
        for word in placed:
            number = numbering.starts(word.direction).get((word.row, word.col))
            if number is None:
                LOGGER.warning("'%s' does not start an entry; left unnumbered", word.word)
                unnumbered.append(word)
                continue
            numbered.append(
                PlacedWord(word.word, word.clue, word.row, word.col, word.direction, number)
            )
        numbered.sort(key=lambda word: (word.number, word.direction != Direction.ACROSS))
        return numbered, unnumbered
