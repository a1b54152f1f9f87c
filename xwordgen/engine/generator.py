"""Puzzle construction orchestration.

Pipeline: load and filter words, pick the puzzle's words, lay symmetric
blocks, place words from an anchor outwards, bridge letter islands, number
the grid, validate, and freeze the result into a :class:`Puzzle`.
"""

from __future__ import annotations

import random
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.constants import (
    DEFAULT_BLACK_PERCENTAGE,
    DEFAULT_GRID_SIZE,
    DEFAULT_MAX_PLACEMENT_ATTEMPTS,
    MAX_BLACK_PERCENTAGE,
    MAX_GRID_SIZE,
    MIN_BLACK_PERCENTAGE,
    MIN_GRID_SIZE,
    MIN_VIABLE_WORDS,
)
from ..core.exceptions import (
    ConfigError,
    ConnectivityWarning,
    CrosswordWarning,
    GenerationFailedError,
    PartialPlacementWarning,
    ValidationError,
    WordSupplyError,
)
from ..core.models import Puzzle, WordEntry
from ..data.word_bank import RawRecord, WordBank, WordBankConfig
from ..io.word_source import WordSource
from ..utils.logger import get_logger
from .blocks import BlockPlacer, BlockRules
from .connectivity import ConnectivityRepairer, count_regions, is_letter, not_block
from .grid import GridState
from .numbering import Numberer
from .placer import WordPlacer
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)


def as_fraction(value: float) -> float:
    """Accept densities as fractions or percents (``18`` means ``0.18``)."""
    return value / 100.0 if value > 1 else value


@dataclass
class GeneratorConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    min_size: int = MIN_GRID_SIZE
    max_size: int = MAX_GRID_SIZE
    black_square_percentage: float = DEFAULT_BLACK_PERCENTAGE
    min_black_percentage: float = MIN_BLACK_PERCENTAGE
    max_black_percentage: float = MAX_BLACK_PERCENTAGE
    avoid_corners: bool = True
    avoid_2x2_blocks: bool = True
    ensure_connectivity: bool = True
    prevent_isolated_letters: bool = True
    max_placement_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS
    symmetry_enabled: bool = True
    block_seed_probability: float = 0.3
    min_length: int = 3
    max_length: int = 15
    target_count: int = 30
    prefer_longer: bool = True
    min_viable_words: int = MIN_VIABLE_WORDS
    fallback_words: Tuple[str, ...] = ()
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.black_square_percentage = as_fraction(self.black_square_percentage)
        self.min_black_percentage = as_fraction(self.min_black_percentage)
        self.max_black_percentage = as_fraction(self.max_black_percentage)
        self.fallback_words = tuple(self.fallback_words)

    def validate(self) -> None:
        """Reject out-of-range settings before any generation work starts."""

        if not MIN_GRID_SIZE <= self.min_size <= self.max_size <= MAX_GRID_SIZE:
            raise ConfigError(
                f"Size bounds [{self.min_size}, {self.max_size}] must lie within "
                f"[{MIN_GRID_SIZE}, {MAX_GRID_SIZE}]"
            )
        if not self.min_size <= self.grid_size <= self.max_size:
            raise ConfigError(
                f"Grid size {self.grid_size} outside [{self.min_size}, {self.max_size}]"
            )
        if not 0.0 <= self.min_black_percentage <= self.max_black_percentage < 1.0:
            raise ConfigError(
                f"Black square bounds [{self.min_black_percentage}, {self.max_black_percentage}] are invalid"
            )
        if not self.min_black_percentage <= self.black_square_percentage <= self.max_black_percentage:
            raise ConfigError(
                f"Black square percentage {self.black_square_percentage:.0%} outside "
                f"[{self.min_black_percentage:.0%}, {self.max_black_percentage:.0%}]"
            )
        if not 0.0 <= self.block_seed_probability <= 1.0:
            raise ConfigError("Block seed probability must be between 0 and 1")
        if self.min_length < 2 or self.max_length < self.min_length:
            raise ConfigError(f"Invalid word length range [{self.min_length}, {self.max_length}]")
        if self.target_count < 1:
            raise ConfigError("Target word count must be at least 1")
        if self.max_placement_attempts < 1:
            raise ConfigError("Placement attempts must be at least 1")

    def to_word_bank_config(self, rng: Optional[random.Random] = None) -> WordBankConfig:
        return WordBankConfig(
            min_length=self.min_length,
            max_length=self.max_length,
            target_count=self.target_count,
            prefer_longer=self.prefer_longer,
            rng=rng,
        )

    def to_block_rules(self) -> BlockRules:
        return BlockRules(
            avoid_corners=self.avoid_corners,
            avoid_2x2_blocks=self.avoid_2x2_blocks,
            symmetry=self.symmetry_enabled,
            seed_probability=self.block_seed_probability,
        )


class PuzzleAssembler:
    """Runs the construction pipeline once per :meth:`generate` call.

    Every call builds its own grid, queue and word bank; only the random
    source is carried between calls, so a fixed seed reproduces the first
    layout and later calls give fresh attempts.
    """

    def __init__(self, config: GeneratorConfig, rng: Optional[random.Random] = None) -> None:
        config.validate()
        self.config = config
        self.rng = rng or random.Random(config.seed)

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(self, raw_records: Iterable[RawRecord]) -> Puzzle:
        config = self.config
        bank = WordBank(config.to_word_bank_config(self.rng))
        pool = self._load_pool(bank, raw_records)
        selected = bank.select_for_puzzle(
            pool, config.target_count, config.prefer_longer, max_length=config.grid_size
        )
        if not selected:
            raise WordSupplyError(
                f"No words short enough for a {config.grid_size}x{config.grid_size} grid"
            )
        LOGGER.info("Selected %s words for a %sx%s grid", len(selected), config.grid_size, config.grid_size)

        grid = GridState(config.grid_size)
        placer = WordPlacer(grid, config.max_placement_attempts, config.prevent_isolated_letters)
        queue = placer.queue_order(selected)
        anchor = placer.choose_anchor(queue)
        reserved = placer.anchor_span(anchor).cells if anchor else []
        BlockPlacer(config.to_block_rules(), self.rng).place_blocks(
            grid, config.black_square_percentage, reserved
        )

        report = placer.place_all(queue, config.target_count)
        warnings: List[CrosswordWarning] = []
        if report.dropped:
            warnings.append(PartialPlacementWarning(entry.word for entry in report.dropped))

        if config.ensure_connectivity:
            warnings.extend(self._repair_connectivity(placer, pool))

        minimum = min(config.min_viable_words, len(selected))
        if len(placer.placed) < minimum:
            raise GenerationFailedError(
                f"Only {len(placer.placed)} words placed; at least {minimum} required"
            )

        numberer = Numberer()
        numbering = numberer.number(grid)
        numbered, unnumbered = numberer.assign(placer.placed, numbering)
        if unnumbered:
            raise ValidationError(
                "Placed words do not start an entry: "
                + ", ".join(word.word for word in unnumbered)
            )

        validation = self._validator().validate(grid, numbered)
        if not validation.ok:
            raise ValidationError(f"Grid validation failed: {validation.messages}")

        for warning in warnings:
            LOGGER.warning("%s", warning)
        LOGGER.info("Puzzle completed with %s words", len(numbered))
        return Puzzle(
            size=grid.size,
            grid=grid.snapshot(),
            placed_words=tuple(numbered),
            cell_numbers=numbering.as_tuples(),
            warnings=tuple(warnings),
            validation_messages=tuple(validation.notes),
            seed=config.seed,
        )

    def generate_from_source(self, source: WordSource, timeout: Optional[float] = None) -> Puzzle:
        """Fetch records off-thread, wait for them, then run :meth:`generate`."""

        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = source.fetch_async(executor)
            records: Sequence[RawRecord] = future.result(timeout=timeout)
        except FutureTimeout as exc:
            reason = f"Word source timed out after {timeout}s"
            if not self.config.fallback_words:
                raise WordSupplyError(reason) from exc
            records = self._emergency_records(reason)
        except WordSupplyError as exc:
            if not self.config.fallback_words:
                raise
            records = self._emergency_records(str(exc))
        finally:
            executor.shutdown(wait=False)
        return self.generate(records)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _load_pool(self, bank: WordBank, raw_records: Iterable[RawRecord]) -> List[WordEntry]:
        try:
            return bank.load(raw_records)
        except WordSupplyError as exc:
            if not self.config.fallback_words:
                raise
            LOGGER.warning("%s; falling back to %s emergency words", exc, len(self.config.fallback_words))
            return bank.load(self.config.fallback_words)

    def _emergency_records(self, reason: str) -> List[RawRecord]:
        LOGGER.warning("%s; using %s emergency words", reason, len(self.config.fallback_words))
        return list(self.config.fallback_words)

    def _repair_connectivity(self, placer: WordPlacer, pool: Sequence[WordEntry]) -> List[CrosswordWarning]:
        ConnectivityRepairer(placer, pool).repair()
        islands = count_regions(placer.grid, is_letter)
        open_regions = count_regions(placer.grid, not_block)
        if islands > 1 or open_regions > 1:
            return [ConnectivityWarning(max(islands, open_regions))]
        return []

    def _validator(self) -> PuzzleValidator:
        return PuzzleValidator(
            symmetry=self.config.symmetry_enabled,
            avoid_2x2_blocks=self.config.avoid_2x2_blocks,
            min_density=self.config.min_black_percentage,
            max_density=self.config.max_black_percentage,
        )
