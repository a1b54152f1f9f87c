import unittest

from xwordgen.core.constants import Direction
from xwordgen.core.models import PlacedWord
from xwordgen.engine.grid import GridState
from xwordgen.engine.validator import PuzzleValidator


def write(grid: GridState, word: PlacedWord) -> PlacedWord:
    for letter, (row, col) in zip(word.word, word.cells):
        grid.set_letter(row, col, letter)
    return word


class PuzzleValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = GridState(7)
        self.placed = [
            write(self.grid, PlacedWord("cared", "", 1, 1, Direction.ACROSS)),
            write(self.grid, PlacedWord("rat", "", 1, 3, Direction.DOWN)),
        ]
        self.validator = PuzzleValidator()

    def test_consistent_grid_passes(self) -> None:
        result = self.validator.validate(self.grid, self.placed)
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_stray_letter_fails(self) -> None:
        self.grid.set_letter(5, 5, "x")
        result = self.validator.validate(self.grid, self.placed)
        self.assertFalse(result.ok)
        self.assertIn("(5,5)", result.messages[0])

    def test_letter_of_dropped_word_fails(self) -> None:
        result = self.validator.validate(self.grid, self.placed[:1])
        self.assertFalse(result.ok)
        self.assertIn("belongs to no placed word", result.messages[0])

    def test_word_disagreeing_with_grid_fails(self) -> None:
        self.grid.set_letter(1, 5, "s")
        result = self.validator.validate(self.grid, self.placed)
        self.assertFalse(result.ok)
        self.assertIn("'cared'", result.messages[0])

    def test_asymmetric_blocks_fail_only_when_symmetry_required(self) -> None:
        self.grid.set_block(0, 0)
        self.assertFalse(self.validator.validate(self.grid, self.placed).ok)
        self.assertTrue(PuzzleValidator(symmetry=False).validate(self.grid, self.placed).ok)

    def test_density_outside_range_is_a_note(self) -> None:
        result = PuzzleValidator(min_density=0.1).validate(self.grid, self.placed)
        self.assertTrue(result.ok)
        self.assertEqual(len(result.notes), 1)


if __name__ == "__main__":
    unittest.main()
