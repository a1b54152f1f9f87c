"""Shared helpers for word normalization and the englishness heuristic."""

from __future__ import annotations

import re

from ..core.constants import VOWELS

WORD_RE = re.compile(r"^[a-z]+$")
CONSONANT_RUN_RE = re.compile(r"[b-df-hj-np-tv-z]{4,}")
VOWEL_RUN_RE = re.compile(r"[aeiou]{3,}")
REPEATED_LETTER_RE = re.compile(r"^(.)\1*$")


def clean_word(text: str) -> str:
    """Return the canonical lowercase form of ``text`` (no other rewriting)."""

    if not text:
        return ""
    return text.strip().lower()


def is_alphabetic(word: str) -> bool:
    return bool(WORD_RE.match(word))


def looks_english(word: str) -> bool:
    """Cheap pattern check that rejects strings unlikely to be real words.

    A word passes when it has at least one vowel, no run of four or more
    consonants, no run of three or more vowels, and is not one letter
    repeated.
    """

    if not word or not any(char in VOWELS for char in word):
        return False
    if CONSONANT_RUN_RE.search(word) or VOWEL_RUN_RE.search(word):
        return False
    return not REPEATED_LETTER_RE.match(word)


__all__ = ["clean_word", "is_alphabetic", "looks_english"]
