import random
import unittest

from xwordgen.core.exceptions import WordSupplyError
from xwordgen.data.normalization import clean_word, looks_english
from xwordgen.data.word_bank import EMERGENCY_WORDS, WordBank, WordBankConfig, fallback_clue


class NormalizationTests(unittest.TestCase):
    def test_clean_word_lowercases_and_strips(self) -> None:
        self.assertEqual(clean_word("  CrossWord "), "crossword")
        self.assertEqual(clean_word(""), "")

    def test_looks_english_rejects_unlikely_strings(self) -> None:
        self.assertTrue(looks_english("garden"))
        self.assertFalse(looks_english("rhythm"))
        self.assertFalse(looks_english("strngth"))
        self.assertFalse(looks_english("queue"))
        self.assertFalse(looks_english("aaaa"))


class WordBankLoadTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bank = WordBank(WordBankConfig(min_length=3, max_length=8, rng=random.Random(1)))

    def test_load_filters_and_deduplicates(self) -> None:
        entries = self.bank.load(
            [
                ("Fruit", "Apple"),
                ("Again", "apple"),
                ("Too short", "ox"),
                ("Digits", "abc123"),
                ("Too long", "electricity"),
                "river",
            ]
        )
        words = [entry.word for entry in entries]
        self.assertEqual(words, ["apple", "river"])
        self.assertEqual(entries[0].clue, "Fruit")

    def test_missing_clue_gets_placeholder(self) -> None:
        river, garden = self.bank.load(["river", ("", "garden")])
        self.assertEqual(river.clue, fallback_clue("river"))
        self.assertEqual(garden.clue, "A 6-letter word")

    def test_empty_pool_raises(self) -> None:
        with self.assertRaises(WordSupplyError):
            self.bank.load(["ox", "123", ""])

    def test_emergency_words_pass_filters(self) -> None:
        entries = self.bank.load(EMERGENCY_WORDS)
        self.assertEqual(len(entries), len(EMERGENCY_WORDS))

    def test_malformed_records_are_rejected(self) -> None:
        entries = self.bank.load([None, (), ("Fruit", None), ("Stream", "river")])
        self.assertEqual([entry.word for entry in entries], ["river"])

    def test_only_malformed_records_raise(self) -> None:
        with self.assertRaises(WordSupplyError):
            self.bank.load([None, ()])


class WordBankSelectionTests(unittest.TestCase):
    WORDS = ["apple", "river", "garden", "pencil", "castle", "window", "orange", "planet", "market", "den"]

    def test_selection_respects_target_and_distinctness(self) -> None:
        bank = WordBank(WordBankConfig(target_count=4, rng=random.Random(3)))
        bank.load(self.WORDS)
        selected = bank.select_for_puzzle()
        self.assertEqual(len(selected), 4)
        self.assertEqual(len({entry.word for entry in selected}), 4)

    def test_prefer_longer_orders_longest_first(self) -> None:
        bank = WordBank(WordBankConfig(target_count=20, prefer_longer=True, rng=random.Random(5)))
        bank.load(self.WORDS)
        lengths = [entry.length for entry in bank.select_for_puzzle()]
        self.assertEqual(lengths, sorted(lengths, reverse=True))
        self.assertEqual(len(lengths), len(self.WORDS))

    def test_max_length_excludes_longer_words(self) -> None:
        bank = WordBank(WordBankConfig(rng=random.Random(0)))
        bank.load(self.WORDS)
        selected = bank.select_for_puzzle(max_length=5)
        self.assertTrue(all(entry.length <= 5 for entry in selected))
        self.assertEqual({entry.word for entry in selected}, {"apple", "river", "den"})

    def test_same_seed_gives_same_selection(self) -> None:
        picks = []
        for _ in range(2):
            bank = WordBank(WordBankConfig(target_count=5, prefer_longer=False, rng=random.Random(42)))
            bank.load(self.WORDS)
            picks.append([entry.word for entry in bank.select_for_puzzle()])
        self.assertEqual(picks[0], picks[1])


if __name__ == "__main__":
    unittest.main()
