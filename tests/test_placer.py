import unittest

from xwordgen.core.constants import Direction
from xwordgen.core.exceptions import PlacementFailure
from xwordgen.core.models import PlacedWord, WordEntry
from xwordgen.engine.grid import GridState
from xwordgen.engine.placer import AttemptBudget, WordPlacer


def entry(word: str) -> WordEntry:
    return WordEntry(word, f"Clue for {word}")


class AnchorTests(unittest.TestCase):
    def test_anchor_is_centred_on_middle_row(self) -> None:
        placer = WordPlacer(GridState(15))
        anchor = placer.place_anchor(entry("crossword"))
        self.assertEqual((anchor.row, anchor.col, anchor.direction), (7, 3, Direction.ACROSS))
        self.assertEqual(
            "".join(placer.grid.letter(7, col) for col in range(3, 12)), "crossword"
        )

    def test_choose_anchor_prefers_five_letters(self) -> None:
        queue = WordPlacer.queue_order([entry("cat"), entry("lemon"), entry("dog")])
        self.assertEqual(WordPlacer.choose_anchor(queue).word, "lemon")
        self.assertEqual(WordPlacer.choose_anchor([entry("cat"), entry("dog")]).word, "cat")
        self.assertIsNone(WordPlacer.choose_anchor([]))

    def test_anchor_span_is_clamped(self) -> None:
        placer = WordPlacer(GridState(5))
        span = placer.anchor_span(entry("apple"))
        self.assertEqual((span.row, span.col), (2, 0))

    def test_blocked_anchor_raises(self) -> None:
        grid = GridState(5)
        grid.set_block(2, 2)
        with self.assertRaises(PlacementFailure):
            WordPlacer(grid).place_anchor(entry("apple"))

    def test_anchor_longer_than_grid_raises(self) -> None:
        with self.assertRaises(PlacementFailure):
            WordPlacer(GridState(5)).place_anchor(entry("crossword"))


class IntersectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.placer = WordPlacer(GridState(15))
        self.placer.place_anchor(entry("crossword"))

    def test_best_crossing_for_world(self) -> None:
        placed = self.placer.place_word(entry("world"))
        self.assertEqual(
            (placed.row, placed.col, placed.direction), (7, 8, Direction.DOWN)
        )
        self.assertEqual(
            "".join(self.placer.grid.letter(row, 8) for row in range(7, 12)), "world"
        )

    def test_score_rewards_length_crossings_and_centrality(self) -> None:
        centred = PlacedWord("world", "", 7, 8, Direction.DOWN)
        offset = PlacedWord("world", "", 6, 5, Direction.DOWN)
        self.assertEqual(self.placer.score(centred), 34)
        self.assertEqual(self.placer.score(offset), 32)

    def test_rotated_candidate_starts_at_mirror_of_end(self) -> None:
        candidate = PlacedWord("world", "", 7, 8, Direction.DOWN)
        rotated = self.placer.rotated(candidate)
        self.assertEqual((rotated.row, rotated.col, rotated.direction), (3, 6, Direction.DOWN))

    def test_crossing_words_are_reported(self) -> None:
        candidate = PlacedWord("world", "", 7, 8, Direction.DOWN)
        crossed = self.placer.crossed_words(candidate)
        self.assertEqual([word.word for word in crossed], ["crossword"])

    def test_no_shared_letters_uses_free_space_near_letters(self) -> None:
        placed = self.placer.place_word(entry("fig"))
        self.assertIsNotNone(placed)
        self.assertTrue(self.placer.is_near_letters(placed))
        anchor_cells = set(self.placer.placed[0].cells)
        self.assertFalse(anchor_cells.intersection(placed.cells))


class LegalityTests(unittest.TestCase):
    def setUp(self) -> None:
        self.placer = WordPlacer(GridState(15))
        self.placer.place_anchor(entry("crossword"))

    def test_rejects_out_of_bounds(self) -> None:
        self.assertFalse(self.placer.is_legal(PlacedWord("world", "", 12, 8, Direction.DOWN)))

    def test_rejects_letter_mismatch(self) -> None:
        self.assertFalse(self.placer.is_legal(PlacedWord("world", "", 7, 5, Direction.DOWN)))

    def test_rejects_block(self) -> None:
        self.placer.grid.set_block(9, 8)
        self.assertFalse(self.placer.is_legal(PlacedWord("world", "", 7, 8, Direction.DOWN)))

    def test_rejects_letter_touching_end(self) -> None:
        # "dog" ending right before the anchor's first letter
        self.assertFalse(self.placer.is_legal(PlacedWord("dog", "", 7, 0, Direction.ACROSS)))

    def test_rejects_no_new_letters(self) -> None:
        placer = WordPlacer(GridState(5))
        for col, letter in enumerate("cat"):
            placer.grid.set_letter(0, col, letter)
        self.assertFalse(placer.is_legal(PlacedWord("cat", "", 0, 0, Direction.ACROSS)))

    def test_rejects_reused_word(self) -> None:
        self.assertFalse(self.placer.is_legal(PlacedWord("crossword", "", 0, 0, Direction.ACROSS)))

    def test_rejects_parallel_neighbour(self) -> None:
        placer = WordPlacer(GridState(15), prevent_isolated_letters=False)
        placer.place_anchor(entry("crossword"))
        self.assertFalse(placer.is_legal(PlacedWord("lemon", "", 8, 4, Direction.ACROSS)))
        self.assertFalse(placer.is_legal(PlacedWord("ant", "", 6, 0, Direction.ACROSS)))
        self.assertTrue(placer.is_legal(PlacedWord("ant", "", 5, 0, Direction.ACROSS)))

    def test_sideways_contact_only_checked_when_enabled(self) -> None:
        candidate = PlacedWord("lemon", "", 8, 1, Direction.DOWN)
        placer = WordPlacer(GridState(15), prevent_isolated_letters=False)
        placer.place_anchor(entry("crossword"))
        # a loose letter that no placed word owns
        placer.grid.set_letter(10, 2, "x")
        self.placer.grid.set_letter(10, 2, "x")
        self.assertFalse(self.placer.is_legal(candidate))
        self.assertTrue(placer.is_legal(candidate))

    def test_never_extends_a_perpendicular_word(self) -> None:
        for prevent in (True, False):
            placer = WordPlacer(GridState(15), prevent_isolated_letters=prevent)
            placer.place_anchor(entry("crossword"))
            # (7,12) sits right after the anchor's last letter, (7,2) right before its first
            self.assertFalse(placer.is_legal(PlacedWord("ant", "", 6, 12, Direction.DOWN)))
            self.assertFalse(placer.is_legal(PlacedWord("ant", "", 6, 2, Direction.DOWN)))
            self.assertTrue(placer.is_legal(PlacedWord("ant", "", 6, 13, Direction.DOWN)))

    def test_accepts_clean_crossing(self) -> None:
        self.assertTrue(self.placer.is_legal(PlacedWord("world", "", 7, 8, Direction.DOWN)))


class PlaceAllTests(unittest.TestCase):
    def test_unplaceable_words_are_dropped(self) -> None:
        grid = GridState(5)
        for row in (0, 1, 3, 4):
            for col in range(5):
                grid.set_block(row, col)
        placer = WordPlacer(grid)
        report = placer.place_all([entry("apple"), entry("melon")])
        self.assertEqual([word.word for word in report.placed], ["apple"])
        self.assertEqual([word.word for word in report.dropped], ["melon"])

    def test_target_count_stops_placement(self) -> None:
        placer = WordPlacer(GridState(15))
        report = placer.place_all([entry("crossword"), entry("world"), entry("sword")], target_count=2)
        self.assertEqual(len(report.placed), 2)
        self.assertEqual(report.placed[0].word, "crossword")

    def test_empty_queue_raises(self) -> None:
        with self.assertRaises(PlacementFailure):
            WordPlacer(GridState(5)).place_all([])

    def test_placed_words_match_grid(self) -> None:
        placer = WordPlacer(GridState(15))
        words = ["crossword", "world", "garden", "orange", "planet", "river", "window", "sword"]
        report = placer.place_all([entry(word) for word in words])
        for placed in report.placed:
            for index, (row, col) in enumerate(placed.cells):
                self.assertEqual(placer.grid.letter(row, col), placed.word[index])
        self.assertEqual(len({word.word for word in report.placed}), len(report.placed))


class RemoveTests(unittest.TestCase):
    def test_remove_restores_cells_not_shared(self) -> None:
        placer = WordPlacer(GridState(15))
        placer.place_anchor(entry("crossword"))
        world = placer.place_word(entry("world"))

        placer.remove(world)

        self.assertEqual([word.word for word in placer.placed], ["crossword"])
        self.assertEqual(placer.grid.letter(7, 8), "w")
        self.assertTrue(all(placer.grid.is_empty(row, 8) for row in range(8, 12)))
        self.assertTrue(placer.is_legal(world))


class AttemptBudgetTests(unittest.TestCase):
    def test_budget_runs_out(self) -> None:
        budget = AttemptBudget(2)
        self.assertEqual([budget.spend(), budget.spend(), budget.spend()], [True, True, False])

    def test_exhausted_budget_finds_nothing(self) -> None:
        placer = WordPlacer(GridState(15))
        placer.place_anchor(entry("crossword"))
        self.assertIsNone(placer.find_intersection_placement(entry("world"), AttemptBudget(0)))


if __name__ == "__main__":
    unittest.main()
