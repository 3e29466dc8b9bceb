"""Corpus-level ranking on top of ``FuzzyMatcher``.

Every entry point shares one ordering contract: score descending, ties broken
by original corpus position. Repeated searches over an unchanged corpus are
therefore deterministic, and limited searches agree with the unlimited order
restricted to their top ``limit``.
"""

from __future__ import annotations

import heapq
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .fuzzy import FuzzyMatcher, Match

MATCH_STRATEGIES = ("fuzzy", "smart", "substring")


@runtime_checkable
class Searchable(Protocol):
    """Anything that exposes text to match against and text to display."""

    def search_text(self) -> str: ...

    def display_text(self) -> str: ...


@dataclass(frozen=True)
class Ranked:
    """One matched corpus entry and its position in the corpus."""

    index: int
    text: str
    match: Match


@dataclass(frozen=True)
class MapMatch:
    key: str
    value: Any
    match: Match


@dataclass(frozen=True)
class SearchableMatch:
    item: Searchable
    index: int
    match: Match


def match_function(matcher: FuzzyMatcher, strategy: str = "fuzzy") -> Callable[[str, str], Match | None]:
    """Return the matcher method implementing ``strategy``."""
    if strategy == "fuzzy":
        return matcher.match
    if strategy == "smart":
        return matcher.smart_match
    if strategy == "substring":
        return matcher.substring_match
    raise ValueError(f"unknown match strategy: {strategy!r}")


def _iter_ranked(
    matcher: FuzzyMatcher,
    query: str,
    texts: Iterable[str],
    strategy: str,
) -> Iterator[Ranked]:
    match = match_function(matcher, strategy)
    for idx, text in enumerate(texts):
        found = match(query, text)
        if found is None or found.score < matcher.min_score:
            continue
        yield Ranked(index=idx, text=text, match=found)


def _rank_key(ranked: Ranked) -> tuple[float, int]:
    return (-ranked.match.score, ranked.index)


def search(
    matcher: FuzzyMatcher,
    query: str,
    texts: Sequence[str],
    *,
    strategy: str = "fuzzy",
) -> list[Ranked]:
    """Match every text and return the hits best-first."""
    return sorted(_iter_ranked(matcher, query, texts, strategy), key=_rank_key)


def search_with_limit(
    matcher: FuzzyMatcher,
    query: str,
    texts: Sequence[str],
    limit: int,
    *,
    strategy: str = "fuzzy",
) -> list[Ranked]:
    """Return only the top ``limit`` hits, using a partial sort."""
    if limit <= 0 or not texts:
        return []
    if limit >= len(texts):
        return search(matcher, query, texts, strategy=strategy)
    return heapq.nsmallest(limit, _iter_ranked(matcher, query, texts, strategy), key=_rank_key)


def search_map(
    matcher: FuzzyMatcher,
    query: str,
    items: Mapping[str, Any],
    *,
    strategy: str = "fuzzy",
) -> list[MapMatch]:
    """Search mapping keys; ties keep the mapping's iteration order."""
    keys = list(items.keys())
    return [
        MapMatch(key=ranked.text, value=items[ranked.text], match=ranked.match)
        for ranked in search(matcher, query, keys, strategy=strategy)
    ]


def search_items(
    matcher: FuzzyMatcher,
    query: str,
    items: Sequence[Searchable],
    *,
    strategy: str = "fuzzy",
) -> list[SearchableMatch]:
    """Search objects through their ``search_text()``."""
    texts = [item.search_text() for item in items]
    return [
        SearchableMatch(item=items[ranked.index], index=ranked.index, match=ranked.match)
        for ranked in search(matcher, query, texts, strategy=strategy)
    ]
