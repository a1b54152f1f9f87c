"""Symmetric block placement under density and structure rules."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from ..core.constants import CellType
from ..utils.logger import get_logger
from .connectivity import count_regions, not_block
from .grid import GridState


LOGGER = get_logger(__name__)

Position = Tuple[int, int]


@dataclass
class BlockRules:
    """Structure rules applied to every block proposal."""

    avoid_corners: bool = True
    avoid_2x2_blocks: bool = True
    symmetry: bool = True
    seed_probability: float = 0.3


class BlockPlacer:
    """Lays blocks in mirrored groups while keeping open cells connected."""

    def __init__(self, rules: Optional[BlockRules] = None, rng: Optional[random.Random] = None) -> None:
        self.rules = rules or BlockRules()
        self.rng = rng or random.Random()

    def place_blocks(
        self,
        grid: GridState,
        target_density: float,
        reserved: Iterable[Position] = (),
    ) -> int:
        """Place blocks up to ``floor(size^2 * target_density)`` and return how many landed.

        ``reserved`` cells are never blocked.
        """

        target = math.floor(grid.size * grid.size * target_density)
        reserved_cells: Set[Position] = set(reserved)
        placed = grid.count(CellType.BLOCK)
        if target <= 0:
            return placed

        for position in self.seed_positions(grid):
            if placed >= target:
                break
            placed += self._try_group(grid, self.group(grid, *position), target - placed, reserved_cells)

        for position in self.scan_positions(grid):
            if placed >= target:
                break
            if self.rng.random() >= self.rules.seed_probability:
                continue
            placed += self._try_group(grid, self.group(grid, *position), target - placed, reserved_cells)

        LOGGER.info(
            "Placed %s/%s blocks (%.1f%% of %s cells)",
            placed,
            target,
            100.0 * placed / (grid.size * grid.size),
            grid.size * grid.size,
        )
        return placed

    # ------------------------------------------------------------------
    # Candidate generation
    # ------------------------------------------------------------------
    def seed_positions(self, grid: GridState) -> List[Position]:
        last = grid.size - 1
        center = grid.center
        positions: List[Position] = []
        if not self.rules.avoid_corners:
            positions.append((0, 0))
        positions.extend([(0, center), (center, 0)])
        if center >= 2:
            positions.append((center - 2, center - 2))
        return [pos for pos in positions if 0 <= pos[0] <= last and 0 <= pos[1] <= last]

    def scan_positions(self, grid: GridState) -> List[Position]:
        limit = grid.center if self.rules.symmetry else grid.size
        return [(row, col) for row in range(limit) for col in range(limit)]

    def group(self, grid: GridState, row: int, col: int) -> List[Position]:
        """The cell plus its horizontal, vertical and point mirrors."""

        if not self.rules.symmetry:
            return [(row, col)]
        last = grid.size - 1
        group: List[Position] = []
        for position in ((row, col), (row, last - col), (last - row, col), grid.mirror(row, col)):
            if position not in group:
                group.append(position)
        return group

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def _try_group(
        self, grid: GridState, group: List[Position], budget: int, reserved: Set[Position]
    ) -> int:
        if len(group) > budget:
            return 0
        if not self.accepts(grid, group, reserved):
            return 0
        for row, col in group:
            grid.set_block(row, col)
        LOGGER.debug("Blocked %s", group)
        return len(group)

    def accepts(self, grid: GridState, group: List[Position], reserved: Set[Position] = frozenset()) -> bool:
        for row, col in group:
            if not grid.in_bounds(row, col) or not grid.is_empty(row, col):
                return False
            if (row, col) in reserved:
                return False
            if self.rules.avoid_corners and self.is_corner(grid, row, col):
                return False

        trial = grid.copy()
        for row, col in group:
            trial.set_block(row, col)
        if self.rules.avoid_2x2_blocks and any(
            self.completes_2x2(trial, row, col) for row, col in group
        ):
            return False
        return count_regions(trial, not_block) == 1

    @staticmethod
    def is_corner(grid: GridState, row: int, col: int) -> bool:
        last = grid.size - 1
        return row in (0, last) and col in (0, last)

    @staticmethod
    def completes_2x2(grid: GridState, row: int, col: int) -> bool:
        """True if any 2x2 square containing ``(row, col)`` is all blocks."""

        for top in (row - 1, row):
            for left in (col - 1, col):
                square = [(top, left), (top, left + 1), (top + 1, left), (top + 1, left + 1)]
                if all(grid.in_bounds(r, c) and grid.is_block(r, c) for r, c in square):
                    return True
        return False
