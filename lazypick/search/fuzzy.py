"""Approximate string matching for picker queries.

``FuzzyMatcher`` decides whether a query approximately occurs in a candidate
string and scores how well. A miss is ``None``, never an exception. Positions
and highlight ranges always index the caller's original text, even when the
matcher folds case or collapses whitespace before comparing.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass

NORMALIZE_CACHE_MAX_ENTRIES = 4_096
WORD_PUNCTUATION = frozenset("/_-.:,;!?()[]{}<>'\"`|\\@#$%^&*+=~")

SUBSTRING_BASE_SCORE = 0.85
SUBSTRING_PREFIX_BONUS = 0.05
NON_EXACT_SCORE_CEILING = 0.99
NON_EXACT_SCORE_FLOOR = 0.01
ALL_WORDS_MATCHED_MULTIPLIER = 1.2


@dataclass(frozen=True)
class HighlightRange:
    """Half-open ``[start, end)`` run of matched characters."""

    start: int
    end: int


@dataclass(frozen=True)
class Match:
    """Scored result of matching one query against one text."""

    text: str
    score: float
    positions: tuple[int, ...] = ()
    highlights: tuple[HighlightRange, ...] = ()


@dataclass(frozen=True)
class Word:
    """One token of a text with its ``[start, end)`` offsets."""

    text: str
    start: int
    end: int


def split_into_words(text: str, split_punctuation: bool = True) -> tuple[Word, ...]:
    """Tokenize ``text`` on whitespace and, optionally, punctuation.

    Offsets refer to ``text`` itself, so callers can translate word-relative
    positions back into the full string by adding ``Word.start``.
    """
    words: list[Word] = []
    start: int | None = None
    for idx, ch in enumerate(text):
        is_separator = ch.isspace() or (split_punctuation and ch in WORD_PUNCTUATION)
        if is_separator:
            if start is not None:
                words.append(Word(text=text[start:idx], start=start, end=idx))
                start = None
            continue
        if start is None:
            start = idx
    if start is not None:
        words.append(Word(text=text[start:], start=start, end=len(text)))
    return tuple(words)


def highlight_ranges(positions: tuple[int, ...] | list[int]) -> tuple[HighlightRange, ...]:
    """Collapse strictly increasing positions into contiguous runs."""
    if not positions:
        return ()
    ranges: list[HighlightRange] = []
    start = positions[0]
    end = start + 1
    for pos in positions[1:]:
        if pos == end:
            end += 1
            continue
        ranges.append(HighlightRange(start, end))
        start = pos
        end = pos + 1
    ranges.append(HighlightRange(start, end))
    return tuple(ranges)


def highlight_string(
    text: str,
    ranges: tuple[HighlightRange, ...] | list[HighlightRange],
    open_marker: str,
    close_marker: str,
) -> str:
    """Wrap each highlighted run of ``text`` in the given markers.

    Ranges are clipped to the text length and overlapping or out-of-order
    ranges are skipped rather than duplicated.
    """
    if not ranges:
        return text
    out: list[str] = []
    last_end = 0
    for highlight in ranges:
        start = max(last_end, min(highlight.start, len(text)))
        end = min(highlight.end, len(text))
        if end <= start:
            continue
        out.append(text[last_end:start])
        out.append(open_marker)
        out.append(text[start:end])
        out.append(close_marker)
        last_end = end
    out.append(text[last_end:])
    return "".join(out)


def _normalize_with_offsets(text: str, fold_case: bool, collapse_spaces: bool) -> tuple[str, tuple[int, ...]]:
    """Return normalized text plus, per normalized char, its original index."""
    chars: list[str] = []
    offsets: list[int] = []
    pending_space: int | None = None
    for idx, ch in enumerate(text):
        if collapse_spaces and ch.isspace():
            if chars and pending_space is None:
                pending_space = idx
            continue
        if pending_space is not None:
            chars.append(" ")
            offsets.append(pending_space)
            pending_space = None
        folded = ch.casefold() if fold_case else ch
        for part in folded:
            chars.append(part)
            offsets.append(idx)
    return "".join(chars), tuple(offsets)


def _longest_run(positions: list[int]) -> int:
    best = 1
    run = 1
    for prev, cur in zip(positions, positions[1:]):
        if cur == prev + 1:
            run += 1
            best = max(best, run)
        else:
            run = 1
    return best


def subsequence_score(query_len: int, text_len: int, positions: list[int]) -> float:
    """Score a non-exact subsequence alignment into the open interval (0, 1).

    Rewards a long contiguous run, an early first position, and a short text
    relative to the query; penalizes the characters skipped between the first
    and last matched position.
    """
    run_ratio = _longest_run(positions) / query_len
    start_bonus = 1.0 / (1 + positions[0])
    density = query_len / text_len
    gaps = positions[-1] - positions[0] + 1 - len(positions)
    gap_ratio = gaps / text_len
    score = 0.35 * run_ratio + 0.25 * start_bonus + 0.25 * density + 0.15 * (1.0 - gap_ratio)
    return max(NON_EXACT_SCORE_FLOOR, min(NON_EXACT_SCORE_CEILING, score))


def _greedy_from(query: str, text: str, start: int) -> list[int] | None:
    positions: list[int] = []
    cursor = start
    for needle in query:
        idx = text.find(needle, cursor)
        if idx < 0:
            return None
        positions.append(idx)
        cursor = idx + 1
    return positions


def best_subsequence(query: str, text: str) -> tuple[list[int], float] | None:
    """Find the best-scoring in-order alignment of ``query`` inside ``text``.

    Every occurrence of the first query character is tried as an anchor and
    the remaining characters are matched greedily from there.
    """
    if not query or not text:
        return None
    best: tuple[list[int], float] | None = None
    anchor = text.find(query[0])
    while anchor >= 0:
        positions = _greedy_from(query, text, anchor)
        if positions is None:
            break
        score = subsequence_score(len(query), len(text), positions)
        if best is None or score > best[1]:
            best = (positions, score)
        anchor = text.find(query[0], anchor + 1)
    return best


class FuzzyMatcher:
    """Configured matcher; instances carry their own normalization cache."""

    def __init__(
        self,
        *,
        case_sensitive: bool = False,
        min_score: float = 0.1,
        highlight: bool = True,
        normalize_spaces: bool = True,
    ) -> None:
        self.case_sensitive = case_sensitive
        self.min_score = min_score
        self.highlight = highlight
        self.normalize_spaces = normalize_spaces
        self._cache: OrderedDict[str, tuple[str, tuple[int, ...]]] = OrderedDict()

    def _normalized(self, text: str) -> tuple[str, tuple[int, ...]]:
        cached = self._cache.get(text)
        if cached is not None:
            self._cache.move_to_end(text)
            return cached
        result = _normalize_with_offsets(text, not self.case_sensitive, self.normalize_spaces)
        self._cache[text] = result
        while len(self._cache) > NORMALIZE_CACHE_MAX_ENTRIES:
            self._cache.popitem(last=False)
        return result

    def normalize(self, text: str) -> str:
        """Return ``text`` as the matcher compares it."""
        return self._normalized(text)[0]

    def _build(self, text: str, score: float, normalized_positions: list[int] | range, offsets: tuple[int, ...]) -> Match | None:
        if score < self.min_score:
            return None
        positions = tuple(sorted({offsets[pos] for pos in normalized_positions}))
        highlights = highlight_ranges(positions) if self.highlight else ()
        return Match(text=text, score=score, positions=positions, highlights=highlights)

    def match(self, query: str, text: str) -> Match | None:
        """Match ``query`` as a possibly non-contiguous subsequence of ``text``."""
        norm_query = self.normalize(query)
        if not norm_query:
            return Match(text=text, score=1.0)
        norm_text, offsets = self._normalized(text)
        if not norm_text:
            return None
        if norm_query == norm_text:
            return self._build(text, 1.0, range(len(norm_text)), offsets)
        found = best_subsequence(norm_query, norm_text)
        if found is None:
            return None
        positions, score = found
        return self._build(text, score, positions, offsets)

    def substring_match(self, query: str, text: str) -> Match | None:
        """Match ``query`` only as a contiguous run inside ``text``."""
        norm_query = self.normalize(query)
        if not norm_query:
            return Match(text=text, score=1.0)
        norm_text, offsets = self._normalized(text)
        idx = norm_text.find(norm_query)
        if idx < 0:
            return None
        score = SUBSTRING_BASE_SCORE + 0.1 * (len(norm_query) / len(norm_text))
        if idx == 0:
            score += SUBSTRING_PREFIX_BONUS
        score = min(1.0, score) if norm_query == norm_text else min(NON_EXACT_SCORE_CEILING, score)
        return self._build(text, score, range(idx, idx + len(norm_query)), offsets)

    def initials_match(self, query: str, text: str) -> Match | None:
        """Align query characters with the first letters of successive words."""
        norm_query = self.normalize(query).replace(" ", "")
        norm_text, offsets = self._normalized(text)
        if not norm_query:
            return None
        words = split_into_words(norm_text)
        if len(words) < 2 or len(norm_query) > len(words):
            return None
        positions: list[int] = []
        word_idx = 0
        for needle in norm_query:
            while word_idx < len(words) and words[word_idx].text[0] != needle:
                word_idx += 1
            if word_idx >= len(words):
                return None
            positions.append(words[word_idx].start)
            word_idx += 1
        coverage = len(norm_query) / len(words)
        start_bonus = 0.1 if positions[0] == words[0].start else 0.0
        score = min(NON_EXACT_SCORE_CEILING, 0.55 + 0.3 * coverage + start_bonus)
        return self._build(text, score, positions, offsets)

    def word_boundary_match(self, query: str, text: str) -> Match | None:
        """Match query words against text words, then fall back to initials."""
        initials = self.initials_match(query, text)
        if initials is not None:
            return initials

        norm_query = self.normalize(query)
        norm_text, offsets = self._normalized(text)
        query_words = split_into_words(norm_query)
        text_words = split_into_words(norm_text)
        if not query_words or not text_words:
            return None

        all_positions: list[int] = []
        total = 0.0
        matched = 0
        for query_word in query_words:
            best_score = 0.0
            best_positions: list[int] = []
            for word in text_words:
                if query_word.text == word.text:
                    score = 1.0
                    positions = list(range(len(word.text)))
                else:
                    found = best_subsequence(query_word.text, word.text)
                    if found is None:
                        continue
                    positions, score = found
                if score > best_score:
                    best_score = score
                    best_positions = [word.start + pos for pos in positions]
            if best_score > 0.0:
                all_positions.extend(best_positions)
                total += best_score
                matched += 1

        if matched == 0:
            return None
        score = total / len(query_words)
        if matched == len(query_words):
            score *= ALL_WORDS_MATCHED_MULTIPLIER
        score = min(NON_EXACT_SCORE_CEILING, score)
        return self._build(text, score, all_positions, offsets)

    def smart_match(self, query: str, text: str) -> Match | None:
        """Try substring, then word-boundary, then plain subsequence matching."""
        if not self.normalize(query):
            return Match(text=text, score=1.0)
        for strategy in (self.substring_match, self.word_boundary_match, self.match):
            found = strategy(query, text)
            if found is not None:
                return found
        return None


__all__ = [
    "FuzzyMatcher",
    "HighlightRange",
    "Match",
    "Word",
    "best_subsequence",
    "highlight_ranges",
    "highlight_string",
    "split_into_words",
    "subsequence_score",
]
