"""Word pool validation, filtering and per-puzzle selection."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..core.exceptions import WordSupplyError
from ..core.models import WordEntry
from ..utils.logger import get_logger
from .normalization import clean_word, is_alphabetic, looks_english


LOGGER = get_logger(__name__)

RawRecord = Union[str, Tuple[str, str], Sequence[str]]

EMERGENCY_WORDS: Tuple[str, ...] = (
    "desk",
    "chair",
    "phone",
    "computer",
    "printer",
    "paper",
    "pen",
    "pencil",
)


def fallback_clue(word: str) -> str:
    return f"A {len(word)}-letter word"


@dataclass
class WordBankConfig:
    """Configuration for word filtering and selection."""

    min_length: int = 3
    max_length: int = 15
    target_count: int = 30
    prefer_longer: bool = True
    rng: Optional[random.Random] = None


class WordBank:
    """Turns raw ``(clue, word)`` records into a pool of usable entries."""

    def __init__(self, config: WordBankConfig) -> None:
        self.config = config
        self._rng = config.rng or random.Random()
        self.entries: List[WordEntry] = []

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load(self, raw_records: Iterable[RawRecord]) -> List[WordEntry]:
        """Validate ``raw_records`` and return the retained entries.

        Records are either bare words or ``(clue, word)`` pairs. Raises
        :class:`WordSupplyError` when nothing survives filtering.
        """

        self.entries = []
        seen = set()
        rejected = 0
        for record in raw_records:
            clue, raw_word = self._split_record(record)
            word = clean_word(raw_word)
            if not self.accepts(word):
                rejected += 1
                LOGGER.debug("Rejected word %r", raw_word)
                continue
            if word in seen:
                continue
            seen.add(word)
            self.entries.append(WordEntry(word=word, clue=clue.strip() or fallback_clue(word)))

        if not self.entries:
            raise WordSupplyError(
                f"No usable words between {self.config.min_length} and "
                f"{self.config.max_length} letters ({rejected} rejected)"
            )
        LOGGER.info("Loaded %s words (%s rejected)", len(self.entries), rejected)
        return list(self.entries)

    def accepts(self, word: str) -> bool:
        if not is_alphabetic(word):
            return False
        if not self.config.min_length <= len(word) <= self.config.max_length:
            return False
        return looks_english(word)

    @staticmethod
    def _split_record(record: Optional[RawRecord]) -> Tuple[str, str]:
        """Return ``(clue, word)``; malformed records yield an empty word."""

        if record is None:
            return "", ""
        if isinstance(record, str):
            return "", record
        if len(record) == 0:
            return "", ""
        if len(record) == 1:
            return "", str(record[0] or "")
        clue, word = record[0], record[1]
        return str(clue or ""), str(word or "")

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_for_puzzle(
        self,
        pool: Optional[Sequence[WordEntry]] = None,
        target_count: Optional[int] = None,
        prefer_longer: Optional[bool] = None,
        max_length: Optional[int] = None,
    ) -> List[WordEntry]:
        """Shuffle the pool and return up to ``target_count`` distinct entries.

        With ``prefer_longer`` the shuffled pool is stably sorted longest
        first, so equal-length words keep their random order.
        """

        pool = list(self.entries if pool is None else pool)
        target_count = self.config.target_count if target_count is None else target_count
        prefer_longer = self.config.prefer_longer if prefer_longer is None else prefer_longer
        if max_length is not None:
            pool = [entry for entry in pool if entry.length <= max_length]

        self._rng.shuffle(pool)
        if prefer_longer:
            pool.sort(key=lambda entry: entry.length, reverse=True)

        selected: List[WordEntry] = []
        seen = set()
        for entry in pool:
            if len(selected) >= target_count:
                break
            if entry.word in seen:
                continue
            seen.add(entry.word)
            selected.append(entry)
        LOGGER.debug("Selected %s of %s pooled words", len(selected), len(pool))
        return selected

