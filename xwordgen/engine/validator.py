"""Deterministic rule validation for finished puzzles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ..core.constants import CellType
from ..core.exceptions import ValidationError
from ..core.models import PlacedWord
from ..utils.logger import get_logger
from .blocks import BlockPlacer
from .grid import GridState


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


class PuzzleValidator:
    """Runs structural checks over the final grid.

    Hard failures (``messages``) mean an invariant was broken; ``notes`` are
    soft observations such as a block density below the configured minimum.
    """

    def __init__(
        self,
        symmetry: bool = True,
        avoid_2x2_blocks: bool = True,
        min_density: float = 0.0,
        max_density: float = 1.0,
    ) -> None:
        self.symmetry = symmetry
        self.avoid_2x2_blocks = avoid_2x2_blocks
        self.min_density = min_density
        self.max_density = max_density

    def validate(self, grid: GridState, placed: Sequence[PlacedWord]) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_square(grid)
            if self.symmetry:
                self._check_symmetry(grid)
            if self.avoid_2x2_blocks:
                self._check_no_2x2_blocks(grid)
            self._check_words(grid, placed)
            self._check_coverage(grid, placed)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, notes=self._density_notes(grid))

    def _check_square(self, grid: GridState) -> None:
        if len(grid.cells) != grid.size:
            raise ValidationError(f"Grid has {len(grid.cells)} rows, expected {grid.size}")
        for r, row in enumerate(grid.cells):
            if len(row) != grid.size:
                raise ValidationError(f"Row {r} has {len(row)} cells, expected {grid.size}")
            for c, cell in enumerate(row):
                if cell.type == CellType.LETTER and not cell.letter:
                    raise ValidationError(f"Letter cell without a letter at ({r},{c})")

    def _check_symmetry(self, grid: GridState) -> None:
        for r, c, cell in grid.iter_cells():
            mr, mc = grid.mirror(r, c)
            if cell.is_block() != grid.is_block(mr, mc):
                raise ValidationError(f"Block symmetry broken between ({r},{c}) and ({mr},{mc})")

    def _check_no_2x2_blocks(self, grid: GridState) -> None:
        for r in range(grid.size - 1):
            for c in range(grid.size - 1):
                if BlockPlacer.completes_2x2(grid, r, c):
                    raise ValidationError(f"2x2 block square at ({r},{c})")

    def _check_words(self, grid: GridState, placed: Sequence[PlacedWord]) -> None:
        claimed: Dict[Tuple[int, int], str] = {}
        for word in placed:
            for index, (r, c) in enumerate(word.cells):
                if not grid.in_bounds(r, c):
                    raise ValidationError(f"'{word.word}' leaves the grid at ({r},{c})")
                letter = word.word[index]
                if grid.letter(r, c) != letter:
                    raise ValidationError(
                        f"'{word.word}' expects '{letter}' at ({r},{c}), grid has {grid.letter(r, c)!r}"
                    )
                if claimed.setdefault((r, c), letter) != letter:
                    raise ValidationError(f"Placed words disagree at ({r},{c})")

    def _check_coverage(self, grid: GridState, placed: Sequence[PlacedWord]) -> None:
        covered = {cell for word in placed for cell in word.cells}
        for r, c, cell in grid.iter_cells():
            if cell.is_letter() and (r, c) not in covered:
                raise ValidationError(f"Letter at ({r},{c}) belongs to no placed word")

    def _density_notes(self, grid: GridState) -> List[str]:
        total = grid.size * grid.size
        blocks = grid.count(CellType.BLOCK)
        notes: List[str] = []
        if blocks < math.floor(total * self.min_density):
            notes.append(
                f"Block density {blocks / total:.1%} is below the configured minimum {self.min_density:.0%}"
            )
        if blocks > math.floor(total * self.max_density):
            notes.append(
                f"Block density {blocks / total:.1%} exceeds the configured maximum {self.max_density:.0%}"
            )
        return notes
