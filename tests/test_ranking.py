"""Corpus ranking: ordering contract, limits, and the three input shapes."""

from __future__ import annotations

import unittest

from lazypick.picker.types import Candidate
from lazypick.search.fuzzy import FuzzyMatcher
from lazypick.search.ranking import (
    Searchable,
    match_function,
    search,
    search_items,
    search_map,
    search_with_limit,
)

CORPUS = ["edit file", "open browser", "view log files", "edit configuration"]


class SearchOrderingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.matcher = FuzzyMatcher()

    def test_edit_query_ranks_both_edit_entries_first(self) -> None:
        for strategy in ("fuzzy", "smart"):
            with self.subTest(strategy=strategy):
                results = search(self.matcher, "edit", CORPUS, strategy=strategy)
                indices = [hit.index for hit in results]

                self.assertEqual(set(indices[:2]), {0, 3})
                for other in (1, 2):
                    if other in indices:
                        self.assertGreater(indices.index(other), 1)

    def test_results_sorted_by_score_with_stable_ties(self) -> None:
        results = search(self.matcher, "abc", ["abc", "xabc", "abc"])

        self.assertEqual([hit.index for hit in results], [0, 2, 1])
        scores = [hit.match.score for hit in results]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_repeated_searches_are_identical(self) -> None:
        first = search(self.matcher, "e", CORPUS)
        second = search(self.matcher, "e", CORPUS)

        self.assertEqual(first, second)

    def test_no_result_below_min_score(self) -> None:
        strict = FuzzyMatcher(min_score=0.7)
        results = search(strict, "ef", CORPUS + ["e f", "elf"])

        for hit in results:
            self.assertGreaterEqual(hit.match.score, 0.7)

    def test_empty_corpus_yields_no_results(self) -> None:
        self.assertEqual(search(self.matcher, "anything", []), [])

    def test_substring_strategy_requires_contiguous_run(self) -> None:
        results = search(self.matcher, "ac", ["abc", "xacx"], strategy="substring")

        self.assertEqual([hit.index for hit in results], [1])

    def test_unknown_strategy_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            match_function(self.matcher, "telepathy")


class SearchWithLimitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.matcher = FuzzyMatcher()
        self.corpus = CORPUS + ["editor", "ed", "red", "bed", "shed light"]

    def test_limited_results_match_unlimited_prefix(self) -> None:
        full = [hit.index for hit in search(self.matcher, "ed", self.corpus)]
        for limit in range(1, len(self.corpus) + 2):
            with self.subTest(limit=limit):
                limited = search_with_limit(self.matcher, "ed", self.corpus, limit)
                self.assertEqual([hit.index for hit in limited], full[:limit])

    def test_non_positive_limit_returns_nothing(self) -> None:
        self.assertEqual(search_with_limit(self.matcher, "ed", self.corpus, 0), [])
        self.assertEqual(search_with_limit(self.matcher, "ed", self.corpus, -3), [])


class SearchShapeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.matcher = FuzzyMatcher()

    def test_search_map_keeps_insertion_order_on_ties(self) -> None:
        results = search_map(self.matcher, "e", {"exit": 1, "edit": 2, "open": 3})

        self.assertEqual([hit.key for hit in results], ["exit", "edit", "open"])
        self.assertEqual([hit.value for hit in results], [1, 2, 3])

    def test_search_items_uses_search_text(self) -> None:
        candidates = [Candidate(id=str(idx), text=text) for idx, text in enumerate(CORPUS)]
        self.assertIsInstance(candidates[0], Searchable)

        results = search_items(self.matcher, "brow", candidates)

        self.assertEqual(len(results), 1)
        self.assertIs(results[0].item, candidates[1])
        self.assertEqual(results[0].index, 1)


if __name__ == "__main__":
    unittest.main()
