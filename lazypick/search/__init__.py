"""Search package exports.

Combines the single-string matcher, corpus ranking, and context-aware
launcher ranking in one import surface.
"""

from __future__ import annotations

from .fuzzy import (
    FuzzyMatcher,
    HighlightRange,
    Match,
    Word,
    highlight_ranges,
    highlight_string,
    split_into_words,
)
from .ranking import (
    MATCH_STRATEGIES,
    MapMatch,
    Ranked,
    Searchable,
    SearchableMatch,
    match_function,
    search,
    search_items,
    search_map,
    search_with_limit,
)
from .smart import ItemKind, SmartItem, SmartMatch, SmartRanker

__all__ = [
    "FuzzyMatcher",
    "HighlightRange",
    "ItemKind",
    "MATCH_STRATEGIES",
    "MapMatch",
    "Match",
    "Ranked",
    "Searchable",
    "SearchableMatch",
    "SmartItem",
    "SmartMatch",
    "SmartRanker",
    "Word",
    "highlight_ranges",
    "highlight_string",
    "match_function",
    "search",
    "search_items",
    "search_map",
    "search_with_limit",
    "split_into_words",
]
