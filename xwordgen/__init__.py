"""Procedural crossword construction.

This package exposes the public API surface via:

- ``xwordgen.engine.generator.PuzzleAssembler``: runs the construction pipeline.
- ``xwordgen.data.word_bank.WordBank``: filters and selects candidate words.
- ``xwordgen.io.word_source`` sources: CSV files, CSV over HTTP, static lists.
"""

from .core.models import PlacedWord, Puzzle
from .data.word_bank import EMERGENCY_WORDS, WordBank, WordBankConfig
from .engine.generator import GeneratorConfig, PuzzleAssembler
from .io.word_source import CsvWordSource, StaticWordSource

__all__ = [
    "PuzzleAssembler",
    "GeneratorConfig",
    "WordBank",
    "WordBankConfig",
    "EMERGENCY_WORDS",
    "CsvWordSource",
    "StaticWordSource",
    "Puzzle",
    "PlacedWord",
]

__version__ = "0.1.0"
