"""Matcher behavior: scoring contract, normalization, and smart strategies."""

from __future__ import annotations

import unittest

from lazypick.search.fuzzy import (
    FuzzyMatcher,
    HighlightRange,
    Word,
    highlight_ranges,
    highlight_string,
    split_into_words,
)

SAMPLE_TEXTS = (
    "",
    "a",
    "Edit File",
    "open browser",
    "view log files",
    "  spaced   out  ",
    "ÄÖÜ straße",
    "src/lazypick/cli.py",
)


class MatchContractTests(unittest.TestCase):
    def setUp(self) -> None:
        self.matcher = FuzzyMatcher()

    def test_text_matches_itself_with_full_score(self) -> None:
        for text in SAMPLE_TEXTS:
            with self.subTest(text=text):
                found = self.matcher.match(text, text)
                self.assertIsNotNone(found)
                self.assertEqual(found.score, 1.0)

    def test_empty_query_accepts_everything_without_positions(self) -> None:
        for text in SAMPLE_TEXTS:
            with self.subTest(text=text):
                found = self.matcher.match("", text)
                self.assertIsNotNone(found)
                self.assertEqual(found.score, 1.0)
                self.assertEqual(found.positions, ())
                self.assertEqual(found.highlights, ())

    def test_non_empty_query_never_matches_empty_text(self) -> None:
        for query in ("a", "edit", " x "):
            with self.subTest(query=query):
                self.assertIsNone(self.matcher.match(query, ""))

    def test_missing_character_is_no_match(self) -> None:
        self.assertIsNone(self.matcher.match("xyz", "open browser"))
        self.assertIsNone(self.matcher.match("ba", "ab"))

    def test_non_exact_scores_stay_inside_open_interval(self) -> None:
        for query, text in (("ef", "Edit File"), ("vlf", "view log files"), ("o", "open browser")):
            with self.subTest(query=query, text=text):
                found = self.matcher.match(query, text)
                self.assertIsNotNone(found)
                self.assertGreater(found.score, 0.0)
                self.assertLess(found.score, 1.0)

    def test_contiguous_match_beats_scattered_match(self) -> None:
        contiguous = self.matcher.match("abc", "abc.py")
        scattered = self.matcher.match("abc", "a_x_b_x_c.py")

        self.assertGreater(contiguous.score, scattered.score)

    def test_score_does_not_increase_as_gap_grows(self) -> None:
        scores = [self.matcher.match("ab", text).score for text in ("abxx", "axbx", "axxb")]

        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertGreater(scores[0], scores[2])

    def test_earlier_start_scores_higher(self) -> None:
        early = self.matcher.match("log", "log viewer")
        late = self.matcher.match("log", "viewer log")

        self.assertGreater(early.score, late.score)

    def test_case_insensitive_matching_agrees_with_folded_case_sensitive_matching(self) -> None:
        sensitive = FuzzyMatcher(case_sensitive=True)
        pairs = (("edit", "Edit File"), ("EF", "edit file"), ("Straße", "STRASSE"), ("zz", "fizz"), ("q", "abc"))
        for query, text in pairs:
            with self.subTest(query=query, text=text):
                insensitive_hit = self.matcher.match(query.upper(), text.lower()) is not None
                folded_hit = sensitive.match(query.casefold(), text.casefold()) is not None
                self.assertEqual(insensitive_hit, folded_hit)

    def test_case_sensitive_matcher_rejects_case_mismatch(self) -> None:
        sensitive = FuzzyMatcher(case_sensitive=True)

        self.assertIsNone(sensitive.match("E", "edit"))
        self.assertIsNotNone(sensitive.match("e", "edit"))

    def test_min_score_turns_weak_matches_into_no_match(self) -> None:
        strict = FuzzyMatcher(min_score=0.9)

        self.assertIsNone(strict.match("ac", "abc"))
        self.assertIsNotNone(strict.match("abc", "abc"))

    def test_positions_refer_to_original_text_after_space_collapse(self) -> None:
        found = self.matcher.match("ab", "a   b")

        self.assertEqual(found.positions, (0, 4))
        self.assertEqual(found.highlights, (HighlightRange(0, 1), HighlightRange(4, 5)))

    def test_positions_are_strictly_increasing(self) -> None:
        found = self.matcher.match("vlf", "view log files")

        self.assertEqual(list(found.positions), sorted(set(found.positions)))
        self.assertEqual(len(found.positions), 3)

    def test_highlight_generation_can_be_disabled(self) -> None:
        found = FuzzyMatcher(highlight=False).match("ef", "Edit File")

        self.assertEqual(found.highlights, ())
        self.assertEqual(found.positions, (0, 5))

    def test_space_normalization_can_be_disabled(self) -> None:
        raw = FuzzyMatcher(normalize_spaces=False)

        self.assertEqual(raw.normalize("  a  b "), "  a  b ")
        self.assertEqual(self.matcher.normalize("  Foo   BAR "), "foo bar")


class SmartMatchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.matcher = FuzzyMatcher()

    def test_whole_word_outranks_scattered_letters(self) -> None:
        word = self.matcher.smart_match("world", "hello world")
        scattered = self.matcher.smart_match("wrd", "hello world")

        self.assertIsNotNone(word)
        self.assertIsNotNone(scattered)
        self.assertGreater(word.score, scattered.score)

    def test_substring_scores_at_least_point_eight(self) -> None:
        for query, text in (("log", "view log files"), ("e", "a very long sentence here"), ("browser", "open browser")):
            with self.subTest(query=query):
                self.assertGreaterEqual(self.matcher.smart_match(query, text).score, 0.8)

    def test_substring_highlights_the_contiguous_run(self) -> None:
        found = self.matcher.smart_match("world", "hello world")

        self.assertEqual(found.positions, (6, 7, 8, 9, 10))
        self.assertEqual(found.highlights, (HighlightRange(6, 11),))

    def test_prefix_substring_beats_inner_substring(self) -> None:
        prefix = self.matcher.smart_match("edit", "edit file")
        inner = self.matcher.smart_match("edit", "reedit file")

        self.assertGreater(prefix.score, inner.score)

    def test_exact_equality_is_full_score(self) -> None:
        self.assertEqual(self.matcher.smart_match("Open Browser", "open browser").score, 1.0)

    def test_initials_align_with_word_starts(self) -> None:
        found = self.matcher.smart_match("vlf", "view log files")

        self.assertEqual(found.positions, (0, 5, 9))

    def test_falls_back_to_subsequence(self) -> None:
        found = self.matcher.smart_match("opbr", "openbrowser")

        self.assertIsNotNone(found)
        self.assertEqual(found.positions, (0, 1, 4, 5))

    def test_empty_query_matches_with_full_score(self) -> None:
        self.assertEqual(self.matcher.smart_match("", "anything").score, 1.0)

    def test_word_boundary_match_rewards_all_words(self) -> None:
        both = self.matcher.word_boundary_match("edt cfg", "edit configuration")

        self.assertIsNotNone(both)
        self.assertEqual(both.positions[0], 0)
        self.assertLess(both.score, 1.0)


class WordAndHighlightHelperTests(unittest.TestCase):
    def test_split_into_words_on_whitespace_and_punctuation(self) -> None:
        self.assertEqual(
            split_into_words("foo-bar baz"),
            (Word("foo", 0, 3), Word("bar", 4, 7), Word("baz", 8, 11)),
        )

    def test_split_into_words_whitespace_only(self) -> None:
        self.assertEqual(
            split_into_words("foo-bar  baz", split_punctuation=False),
            (Word("foo-bar", 0, 7), Word("baz", 9, 12)),
        )

    def test_split_into_words_empty(self) -> None:
        self.assertEqual(split_into_words("   "), ())

    def test_highlight_ranges_collapses_runs(self) -> None:
        self.assertEqual(
            highlight_ranges((0, 1, 2, 5)),
            (HighlightRange(0, 3), HighlightRange(5, 6)),
        )
        self.assertEqual(highlight_ranges(()), ())

    def test_highlight_string_wraps_runs(self) -> None:
        self.assertEqual(highlight_string("hello", [HighlightRange(1, 3)], "[", "]"), "h[el]lo")

    def test_highlight_string_clips_out_of_range(self) -> None:
        self.assertEqual(highlight_string("hello", [HighlightRange(3, 10)], "[", "]"), "hel[lo]")
        self.assertEqual(highlight_string("hi", [HighlightRange(5, 6)], "[", "]"), "hi")


if __name__ == "__main__":
    unittest.main()
