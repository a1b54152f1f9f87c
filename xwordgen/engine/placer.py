"""Intersection-driven word placement.

The placer seats an anchor word across the middle row, then places the
remaining queue greedily: each word goes to the best-scoring legal crossing
with an already placed word, or, when nothing crosses, to a free span of
empty cells (preferring spans near existing letters).
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from ..core.constants import DEFAULT_MAX_PLACEMENT_ATTEMPTS, Direction
from ..core.exceptions import PlacementFailure
from ..core.models import EMPTY, PlacedWord, WordEntry
from ..utils.logger import get_logger
from .grid import GridState


LOGGER = get_logger(__name__)

ANCHOR_MIN_LENGTH = 5
NEAR_DISTANCE = 2


@dataclass
class AttemptBudget:
    """Caps how many candidate placements one word may evaluate."""

    remaining: int

    def spend(self) -> bool:
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True


@dataclass
class PlacementReport:
    placed: List[PlacedWord] = field(default_factory=list)
    dropped: List[WordEntry] = field(default_factory=list)


class WordPlacer:
    """Places words on a :class:`GridState` that already carries its blocks."""

    def __init__(
        self,
        grid: GridState,
        max_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS,
        prevent_isolated_letters: bool = True,
    ) -> None:
        self.grid = grid
        self.max_attempts = max_attempts
        self.prevent_isolated_letters = prevent_isolated_letters
        self.placed: List[PlacedWord] = []
        self._used: Set[str] = set()
        self._owners: Dict[Tuple[int, int], List[PlacedWord]] = defaultdict(list)

    # ------------------------------------------------------------------
    # Queue & anchor
    # ------------------------------------------------------------------
    @staticmethod
    def queue_order(words: Sequence[WordEntry]) -> List[WordEntry]:
        """Longest first; equal lengths keep their incoming order."""
        return sorted(words, key=lambda entry: entry.length, reverse=True)

    @staticmethod
    def choose_anchor(words: Sequence[WordEntry]) -> Optional[WordEntry]:
        for entry in words:
            if entry.length >= ANCHOR_MIN_LENGTH:
                return entry
        return words[0] if words else None

    def anchor_span(self, entry: WordEntry) -> PlacedWord:
        size = self.grid.size
        row = self.grid.center
        col = self.grid.center - entry.length // 2
        col = max(0, min(col, size - entry.length))
        return PlacedWord(entry.word, entry.clue, row, col, Direction.ACROSS)

    def place_anchor(self, entry: WordEntry) -> PlacedWord:
        if entry.length > self.grid.size:
            raise PlacementFailure(
                f"Anchor '{entry.word}' is longer than the {self.grid.size}x{self.grid.size} grid"
            )
        candidate = self.anchor_span(entry)
        if not self.is_legal(candidate):
            raise PlacementFailure(
                f"Anchor '{entry.word}' cannot be seated at ({candidate.row},{candidate.col})"
            )
        LOGGER.info(
            "Anchored '%s' across at (%s,%s)", entry.word, candidate.row, candidate.col
        )
        return self.place(candidate)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def place_all(
        self, words: Sequence[WordEntry], target_count: Optional[int] = None
    ) -> PlacementReport:
        """Anchor the queue then place the rest until it runs dry or hits the target."""

        queue = self.queue_order(words)
        anchor = self.choose_anchor(queue)
        if anchor is None:
            raise PlacementFailure("No words available to anchor the grid")
        target = len(queue) if target_count is None else target_count
        self.place_anchor(anchor)

        report = PlacementReport()
        for entry in queue:
            if len(self.placed) >= target:
                break
            if entry.word in self._used:
                continue
            if self.place_word(entry) is None:
                report.dropped.append(entry)
        report.placed = list(self.placed)
        LOGGER.info(
            "Placed %s/%s words (%s dropped)", len(report.placed), len(queue), len(report.dropped)
        )
        return report

    def place_word(self, entry: WordEntry) -> Optional[PlacedWord]:
        budget = AttemptBudget(self.max_attempts)
        candidate = self.find_intersection_placement(entry, budget)
        if candidate is None:
            candidate = self.find_free_space_placement(entry, budget)
            if candidate is not None:
                LOGGER.debug("No crossing for '%s'; using free space", entry.word)
        if candidate is None:
            LOGGER.debug("Dropping '%s': no legal placement", entry.word)
            return None
        return self.place(candidate)

    # ------------------------------------------------------------------
    # Intersection search
    # ------------------------------------------------------------------
    def candidate_placements(self, entry: WordEntry) -> Iterator[PlacedWord]:
        """Yield every crossing alignment with each placed word.

        Each alignment is followed by its 180 degree rotation about the grid
        centre (same orientation, starting at the mirror of its end cell).
        """

        for placed in list(self.placed):
            direction = placed.direction.other
            dr, dc = direction.step
            placed_cells = placed.cells
            for i, letter in enumerate(entry.word):
                for j, other in enumerate(placed.word):
                    if letter != other:
                        continue
                    row, col = placed_cells[j]
                    candidate = PlacedWord(
                        entry.word, entry.clue, row - dr * i, col - dc * i, direction
                    )
                    yield candidate
                    yield self.rotated(candidate)

    def rotated(self, candidate: PlacedWord) -> PlacedWord:
        row, col = self.grid.mirror(*candidate.end)
        return PlacedWord(candidate.word, candidate.clue, row, col, candidate.direction)

    def find_intersection_placement(
        self, entry: WordEntry, budget: Optional[AttemptBudget] = None
    ) -> Optional[PlacedWord]:
        budget = budget or AttemptBudget(self.max_attempts)
        best: Optional[PlacedWord] = None
        best_score = 0
        for candidate in self.candidate_placements(entry):
            if not budget.spend():
                LOGGER.debug("Attempt budget exhausted for '%s'", entry.word)
                break
            if not self.is_legal(candidate):
                continue
            crossed = len(self.crossed_words(candidate))
            if crossed == 0:
                continue
            score = self.score(candidate, crossed)
            if best is None or score > best_score:
                best, best_score = candidate, score
        return best

    def score(self, candidate: PlacedWord, crossed: Optional[int] = None) -> int:
        if crossed is None:
            crossed = len(self.crossed_words(candidate))
        center = self.grid.center
        distance = abs(candidate.row - center) + abs(candidate.col - center)
        return 2 * candidate.length + 10 * crossed + (self.grid.size - distance)

    def crossed_words(self, candidate: PlacedWord) -> List[PlacedWord]:
        crossed: List[PlacedWord] = []
        for cell in candidate.cells:
            for owner in self._owners.get(cell, ()):
                if owner not in crossed:
                    crossed.append(owner)
        return crossed

    # ------------------------------------------------------------------
    # Free-space fallback
    # ------------------------------------------------------------------
    def free_spans(self, entry: WordEntry) -> Iterator[PlacedWord]:
        size = self.grid.size
        length = entry.length
        for direction in (Direction.ACROSS, Direction.DOWN):
            dr, dc = direction.step
            for major in range(size):
                for minor in range(size - length + 1):
                    row, col = (major, minor) if direction == Direction.ACROSS else (minor, major)
                    if all(self.grid.is_empty(row + dr * i, col + dc * i) for i in range(length)):
                        yield PlacedWord(entry.word, entry.clue, row, col, direction)

    def find_free_space_placement(
        self, entry: WordEntry, budget: Optional[AttemptBudget] = None
    ) -> Optional[PlacedWord]:
        budget = budget or AttemptBudget(self.max_attempts)
        isolated: Optional[PlacedWord] = None
        for candidate in self.free_spans(entry):
            if not budget.spend():
                break
            if not self.is_legal(candidate):
                continue
            if self.is_near_letters(candidate):
                return candidate
            if isolated is None:
                isolated = candidate
        return isolated

    def is_near_letters(self, candidate: PlacedWord, distance: int = NEAR_DISTANCE) -> bool:
        for row, col in candidate.cells:
            for r in range(row - distance, row + distance + 1):
                for c in range(col - distance, col + distance + 1):
                    if self.grid.in_bounds(r, c) and self.grid.is_letter(r, c):
                        return True
        return False

    # ------------------------------------------------------------------
    # Legality
    # ------------------------------------------------------------------
    def is_legal(self, candidate: PlacedWord) -> bool:
        grid = self.grid
        if candidate.word in self._used:
            return False
        cells = candidate.cells
        if not all(grid.in_bounds(r, c) for r, c in cells):
            return False

        dr, dc = candidate.direction.step
        before = (candidate.row - dr, candidate.col - dc)
        end_row, end_col = candidate.end
        after = (end_row + dr, end_col + dc)
        for r, c in (before, after):
            if grid.in_bounds(r, c) and grid.is_letter(r, c):
                return False

        new_letters = 0
        for index, (r, c) in enumerate(cells):
            cell = grid.get(r, c)
            if cell.is_block():
                return False
            if cell.is_letter():
                if cell.letter != candidate.word[index]:
                    return False
                continue
            new_letters += 1
            if self._extends_run(r, c, candidate.direction):
                return False
            if self.prevent_isolated_letters and self._touches_sideways(r, c, dr, dc):
                return False
        if new_letters == 0:
            return False
        return not self._parallel_conflict(candidate)

    def _extends_run(self, row: int, col: int, direction: Direction) -> bool:
        """True if a letter at (row, col) would lengthen a perpendicular word."""

        dr, dc = direction.step
        for side in (1, -1):
            cell = (row + dc * side, col + dr * side)
            for owner in self._owners.get(cell, ()):
                if owner.direction != direction:
                    return True
        return False

    def _touches_sideways(self, row: int, col: int, dr: int, dc: int) -> bool:
        for side in (1, -1):
            r, c = row + dc * side, col + dr * side
            if self.grid.in_bounds(r, c) and self.grid.is_letter(r, c):
                return True
        return False

    def _parallel_conflict(self, candidate: PlacedWord) -> bool:
        """Same-orientation words may not sit within one cell of each other."""

        for placed in self.placed:
            if placed.direction != candidate.direction:
                continue
            if candidate.direction == Direction.ACROSS:
                offset = abs(candidate.row - placed.row)
                start, end = candidate.col, candidate.end[1]
                other_start, other_end = placed.col, placed.end[1]
            else:
                offset = abs(candidate.col - placed.col)
                start, end = candidate.row, candidate.end[0]
                other_start, other_end = placed.row, placed.end[0]
            if offset > 1:
                continue
            if not (end < other_start - 1 or start > other_end + 1):
                return True
        return False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place(self, candidate: PlacedWord) -> PlacedWord:
        for index, (r, c) in enumerate(candidate.cells):
            self.grid.set_letter(r, c, candidate.word[index])
            self._owners[(r, c)].append(candidate)
        self.placed.append(candidate)
        self._used.add(candidate.word)
        LOGGER.debug(
            "Placed '%s' %s at (%s,%s)",
            candidate.word,
            candidate.direction.value,
            candidate.row,
            candidate.col,
        )
        return candidate

    def remove(self, word: PlacedWord) -> None:
        """Undo :meth:`place`; cells shared with other words keep their letter."""

        for r, c in word.cells:
            owners = self._owners[(r, c)]
            owners.remove(word)
            if not owners:
                del self._owners[(r, c)]
                self.grid.set(r, c, EMPTY)
        self.placed.remove(word)
        self._used.discard(word.word)
        LOGGER.debug("Removed '%s'", word.word)
