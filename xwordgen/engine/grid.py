"""Grid representation and symmetry arithmetic."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from ..core.constants import ORTHOGONAL_STEPS, Bounds, CellType
from ..core.models import BLOCK, EMPTY, Cell


class GridState:
    """Mutable ``size`` x ``size`` cell matrix.

    Pure data container: placement rules live in the block and word placers.
    """

    def __init__(self, size: int) -> None:
        self.size = size
        self.bounds = Bounds(rows=size, cols=size)
        self.cells: List[List[Cell]] = [[EMPTY for _ in range(size)] for _ in range(size)]

    @property
    def center(self) -> int:
        return self.size // 2

    def mirror(self, row: int, col: int) -> Tuple[int, int]:
        return self.size - 1 - row, self.size - 1 - col

    def in_bounds(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def get(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def set(self, row: int, col: int, cell: Cell) -> None:
        self.cells[row][col] = cell

    def set_block(self, row: int, col: int) -> None:
        self.cells[row][col] = BLOCK

    def set_letter(self, row: int, col: int, letter: str) -> None:
        self.cells[row][col] = Cell.of(letter)

    def is_block(self, row: int, col: int) -> bool:
        return self.cells[row][col].type == CellType.BLOCK

    def is_letter(self, row: int, col: int) -> bool:
        return self.cells[row][col].type == CellType.LETTER

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row][col].type == CellType.EMPTY

    def letter(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col].letter

    def neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int]]:
        for dr, dc in ORTHOGONAL_STEPS:
            nr, nc = row + dr, col + dc
            if self.bounds.contains(nr, nc):
                yield nr, nc

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                yield r, c, cell

    def count(self, cell_type: CellType) -> int:
        return sum(1 for _, _, cell in self.iter_cells() if cell.type == cell_type)

    def copy(self) -> "GridState":
        clone = GridState(self.size)
        clone.cells = [list(row) for row in self.cells]
        return clone

    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self.cells)
