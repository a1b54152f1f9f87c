"""Flood-fill region counting and letter-island bridging."""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterable, List, Optional, Set, Tuple

from ..core.constants import BRIDGE_MAX_LENGTH, BRIDGE_MIN_LENGTH, Direction
from ..core.models import Cell, PlacedWord, WordEntry
from ..utils.logger import get_logger
from .grid import GridState
from .placer import AttemptBudget, WordPlacer


LOGGER = get_logger(__name__)

CellPredicate = Callable[[Cell], bool]
Region = List[Tuple[int, int]]


def not_block(cell: Cell) -> bool:
    return not cell.is_block()


def is_letter(cell: Cell) -> bool:
    return cell.is_letter()


def flood_fill(
    grid: GridState,
    start_row: int,
    start_col: int,
    predicate: CellPredicate,
    visited: Optional[Set[Tuple[int, int]]] = None,
) -> Region:
    """Collect the 4-connected region around ``(start_row, start_col)``.

    Uses an explicit worklist so large grids never hit the recursion limit.
    Cells already in ``visited`` are skipped; reached cells are added to it.
    """

    if visited is None:
        visited = set()
    if not grid.in_bounds(start_row, start_col):
        return []
    if (start_row, start_col) in visited or not predicate(grid.get(start_row, start_col)):
        return []

    region: Region = []
    queue = deque([(start_row, start_col)])
    visited.add((start_row, start_col))
    while queue:
        row, col = queue.popleft()
        region.append((row, col))
        for nr, nc in grid.neighbors(row, col):
            if (nr, nc) in visited or not predicate(grid.get(nr, nc)):
                continue
            visited.add((nr, nc))
            queue.append((nr, nc))
    return region


def find_regions(grid: GridState, predicate: CellPredicate) -> List[Region]:
    visited: Set[Tuple[int, int]] = set()
    regions: List[Region] = []
    for row, col, cell in grid.iter_cells():
        if (row, col) in visited or not predicate(cell):
            continue
        regions.append(flood_fill(grid, row, col, predicate, visited))
    return regions


def count_regions(grid: GridState, predicate: CellPredicate) -> int:
    return len(find_regions(grid, predicate))


def is_connected(grid: GridState) -> bool:
    return count_regions(grid, not_block) == 1


class ConnectivityRepairer:
    """Bridges disconnected letter islands with short words from the pool."""

    def __init__(
        self,
        placer: WordPlacer,
        pool: Iterable[WordEntry],
        min_length: int = BRIDGE_MIN_LENGTH,
        max_length: int = BRIDGE_MAX_LENGTH,
    ) -> None:
        self.placer = placer
        self.grid = placer.grid
        self.bridge_pool = [
            entry for entry in pool if min_length <= entry.length <= max_length
        ]

    def islands(self) -> List[Region]:
        return find_regions(self.grid, is_letter)

    def repair(self) -> List[PlacedWord]:
        """Place bridge words until one island remains or no bridge fits."""

        bridges: List[PlacedWord] = []
        while True:
            islands = self.islands()
            if len(islands) <= 1:
                break
            placed = self._bridge_any(islands)
            if not placed:
                LOGGER.warning("Unable to bridge %s letter islands", len(islands))
                break
            for bridge in placed:
                LOGGER.info(
                    "Bridged islands with '%s' %s at (%s,%s)",
                    bridge.word,
                    bridge.direction.value,
                    bridge.row,
                    bridge.col,
                )
            bridges.extend(placed)
        return bridges

    def _bridge_any(self, islands: List[Region]) -> List[PlacedWord]:
        """Join one island pair, trying single-word bridges before two-word chains."""

        pairs = [
            (islands[first], islands[second])
            for first in range(len(islands))
            for second in range(first + 1, len(islands))
        ]
        for island_a, island_b in pairs:
            bridge = self.find_bridge(island_a, island_b)
            if bridge is not None:
                return [self.placer.place(bridge)]
        for island_a, island_b in pairs:
            chain = self.find_two_word_bridge(island_a, island_b)
            if chain:
                return chain
        return []

    def find_bridge(self, island_a: Region, island_b: Region) -> Optional[PlacedWord]:
        """Return the first legal pool placement crossing both islands."""

        cells_b = set(island_b)
        for entry in self.bridge_pool:
            for candidate in self._placements_through(entry, island_a):
                if not cells_b.intersection(candidate.cells):
                    continue
                if self.placer.is_legal(candidate):
                    return candidate
        return None

    def find_two_word_bridge(self, island_a: Region, island_b: Region) -> List[PlacedWord]:
        """Place a spur off ``island_a`` that a second word can carry to ``island_b``.

        Both words are placed when a chain is found; a spur that leads nowhere
        is removed again. Candidate spurs share the placer's attempt budget.
        """

        budget = AttemptBudget(self.placer.max_attempts)
        for entry in self.bridge_pool:
            for spur in self._placements_through(entry, island_a):
                if not self._within_reach(spur, island_b):
                    continue
                if not budget.spend():
                    return []
                if not self.placer.is_legal(spur):
                    continue
                self.placer.place(spur)
                link = self.find_bridge(spur.cells, island_b)
                if link is not None:
                    return [spur, self.placer.place(link)]
                self.placer.remove(spur)
        return []

    @staticmethod
    def _within_reach(spur: PlacedWord, island: Region, reach: int = BRIDGE_MAX_LENGTH - 1) -> bool:
        return any(
            max(abs(row - r), abs(col - c)) <= reach
            for row, col in spur.cells
            for r, c in island
        )

    def _placements_through(self, entry: WordEntry, island: Region) -> Iterable[PlacedWord]:
        for row, col in island:
            letter = self.grid.letter(row, col)
            for index, char in enumerate(entry.word):
                if char != letter:
                    continue
                for direction in (Direction.ACROSS, Direction.DOWN):
                    dr, dc = direction.step
                    yield PlacedWord(
                        entry.word, entry.clue, row - dr * index, col - dc * index, direction
                    )
