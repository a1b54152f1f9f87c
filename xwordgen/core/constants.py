"""Shared constants and enumerations for the crossword builder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellType(str, Enum):
    """All supported cell types in the grid."""

    EMPTY = "EMPTY"
    BLOCK = "BLOCK"
    LETTER = "LETTER"


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def other(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

VOWELS = frozenset("aeiou")

MIN_GRID_SIZE = 5
MAX_GRID_SIZE = 21
DEFAULT_GRID_SIZE = 15

DEFAULT_BLACK_PERCENTAGE = 0.18
MIN_BLACK_PERCENTAGE = 0.0
MAX_BLACK_PERCENTAGE = 0.20

DEFAULT_MAX_PLACEMENT_ATTEMPTS = 500
MIN_VIABLE_WORDS = 5

BRIDGE_MIN_LENGTH = 3
BRIDGE_MAX_LENGTH = 6


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
