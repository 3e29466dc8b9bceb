"""Context-aware ranking for launcher items.

Adds additive boosts on top of the base ``smart_match`` score: the item's
context, its kind versus the shape of the query, acronym/prefix/exact hits,
and how often the item has been used. Multi-field items are matched per field
and the best weighted field wins.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .fuzzy import FuzzyMatcher, Match, split_into_words

URL_MARKERS = ("http://", "https://", "ftp://", "www.", ".com", ".org", ".net", ".edu", ".gov")
FIELD_WEIGHTS: dict[str, float] = {
    "name": 1.0,
    "title": 1.0,
    "annotation": 0.9,
    "description": 0.8,
    "project": 0.7,
    "tags": 0.6,
    "command": 0.5,
    "path": 0.4,
    "content": 0.3,
}
DEFAULT_FIELD_WEIGHT = 0.5


class ItemKind(enum.Enum):
    ACTION = "action"
    ANNOTATION = "annotation"
    TASK = "task"
    FILE = "file"
    URL = "url"
    NOTE = "note"


@dataclass(frozen=True)
class SmartItem:
    """Launcher item with optional context label and extra searchable fields."""

    text: str
    context: str = ""
    kind: ItemKind = ItemKind.ACTION
    fields: Mapping[str, str] = field(default_factory=dict)
    data: Any = None


@dataclass(frozen=True)
class SmartMatch:
    item: SmartItem
    index: int
    match: Match
    enhanced_score: float
    boosts: Mapping[str, float]


def field_weight(name: str) -> float:
    return FIELD_WEIGHTS.get(name, DEFAULT_FIELD_WEIGHT)


def is_acronym_match(query: str, text: str) -> bool:
    """Return whether ``query`` spells the initials of ``text``'s words."""
    if not query:
        return False
    words = split_into_words(text)
    if len(words) < 2:
        return False
    acronym = "".join(word.text[0] for word in words)
    return query.casefold() == acronym.casefold()


def is_path_like(text: str) -> bool:
    return "/" in text or "\\" in text or "." in text.strip(".")


def is_url_like(text: str) -> bool:
    lowered = text.casefold()
    return any(marker in lowered for marker in URL_MARKERS)


def matches_word_boundary(query: str, text: str) -> bool:
    if not query:
        return False
    return re.search(r"\b" + re.escape(query.casefold()), text.casefold()) is not None


def kind_boost(kind: ItemKind, query: str) -> float:
    """Boost item kinds that the query's shape suggests."""
    if kind is ItemKind.ACTION and " " not in query:
        return 0.15
    if kind is ItemKind.FILE and (query.startswith(".") or "/" in query):
        return 0.2
    if kind is ItemKind.URL and ("http" in query or "www" in query or ".com" in query):
        return 0.25
    if kind is ItemKind.ANNOTATION and len(query) > 5:
        return 0.1
    return 0.0


class SmartRanker:
    """Rank ``SmartItem`` sequences with boost factors."""

    def __init__(
        self,
        matcher: FuzzyMatcher,
        *,
        context_boosts: Mapping[str, float] | None = None,
        frequency: Mapping[str, int] | None = None,
        acronym_boost: float = 0.3,
        path_boost: float = 0.0,
        url_boost: float = 0.0,
    ) -> None:
        self.matcher = matcher
        self.context_boosts = dict(context_boosts or {})
        self.frequency = dict(frequency or {})
        self.acronym_boost = acronym_boost
        self.path_boost = path_boost
        self.url_boost = url_boost

    def boost_factors(self, query: str, item: SmartItem) -> dict[str, float]:
        """Return the named additive boosts that apply to ``item``."""
        factors: dict[str, float] = {}
        if item.context in self.context_boosts:
            factors["context"] = self.context_boosts[item.context]
        type_boost = kind_boost(item.kind, query)
        if type_boost:
            factors["type"] = type_boost
        if self.acronym_boost and is_acronym_match(query, item.text):
            factors["acronym"] = self.acronym_boost
        if self.path_boost and is_path_like(item.text):
            factors["path"] = self.path_boost
        if self.url_boost and is_url_like(item.text):
            factors["url"] = self.url_boost
        count = self.frequency.get(item.text, 0)
        if count > 0:
            factors["frequency"] = count / 100.0
        if query and query.casefold() == item.text.casefold():
            factors["exact"] = 0.5
        if query and item.text.casefold().startswith(query.casefold()):
            factors["prefix"] = 0.3
        if matches_word_boundary(query, item.text):
            factors["word_boundary"] = 0.2
        return factors

    @staticmethod
    def enhanced_score(base: float, factors: Mapping[str, float]) -> float:
        return min(1.0, base + sum(factors.values()))

    def _best_field_match(self, query: str, item: SmartItem) -> tuple[Match, float] | None:
        candidates = {"name": item.text, **dict(item.fields)}
        best: tuple[Match, float] | None = None
        for name, value in candidates.items():
            found = self.matcher.smart_match(query, value)
            if found is None:
                continue
            weighted = found.score * field_weight(name)
            if best is None or weighted > best[1]:
                best = (found, weighted)
        return best

    def search(self, query: str, items: Sequence[SmartItem]) -> list[SmartMatch]:
        """Match each item on its best field and order by enhanced score."""
        matches: list[SmartMatch] = []
        for idx, item in enumerate(items):
            found = self._best_field_match(query, item)
            if found is None:
                continue
            match, weighted = found
            factors = self.boost_factors(query, item)
            matches.append(
                SmartMatch(
                    item=item,
                    index=idx,
                    match=match,
                    enhanced_score=self.enhanced_score(weighted, factors),
                    boosts=factors,
                )
            )
        matches.sort(key=lambda m: (-m.enhanced_score, -m.match.score, m.index))
        return matches

    def contextual_search(
        self,
        query: str,
        items: Sequence[SmartItem],
        *,
        current_project: str = "",
        current_context: str = "",
    ) -> list[SmartMatch]:
        """Search with boosts for the caller's active project and context."""
        boosts: dict[str, float] = {}
        if current_project:
            boosts[current_project] = 0.3
        if current_context:
            boosts[current_context] = 0.2
        scoped = SmartRanker(
            self.matcher,
            context_boosts=boosts,
            frequency=self.frequency,
            acronym_boost=self.acronym_boost,
            path_boost=self.path_boost,
            url_boost=self.url_boost,
        )
        return scoped.search(query, items)
