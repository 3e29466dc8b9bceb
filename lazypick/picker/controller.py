"""Selection controller: the picker's state machine.

The controller owns the query, the filtered view, the cursor, the multi-select
set, and the active mode. Key handling runs on the caller's thread; query
changes are recomputed by a ``DebounceWorker`` thread. Both sides only swap
whole values under ``self._lock``, so a snapshot never sees a half-updated
view.

Multi-select membership is tracked by corpus index. Each new view re-projects
it onto view positions and drops candidates that are no longer visible, so a
confirm always returns exactly the checked rows the user can see.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence

from ..accessibility import describe_announcement, empty_view_announcement, item_announcement
from ..log import get_logger
from ..search.fuzzy import FuzzyMatcher, Match
from ..search.ranking import search, search_with_limit
from .debounce import DebounceWorker
from .key_dispatch import dispatch_key
from .navigation import first_enabled, last_enabled, page_cursor, step_cursor
from .types import (
    Announcement,
    Cancelled,
    Candidate,
    Confirmed,
    ConfirmedMany,
    Mode,
    Outcome,
    PickerConfig,
    PickerSnapshot,
    RankedCandidate,
)

logger = get_logger(__name__)

View = tuple[RankedCandidate, ...]


class SelectionController:
    """Stateful picker over an immutable candidate list."""

    def __init__(
        self,
        candidates: Sequence[Candidate],
        config: PickerConfig | None = None,
        *,
        matcher: FuzzyMatcher | None = None,
        announce: Callable[[Announcement], None] | None = None,
    ) -> None:
        """Build the initial full view and the (lazily started) debounce worker."""
        self.config = config or PickerConfig()
        self.matcher = matcher or FuzzyMatcher(
            case_sensitive=self.config.case_sensitive,
            min_score=self.config.min_score,
        )
        self._announce = announce
        self._candidates: tuple[Candidate, ...] = tuple(candidates)
        self._search_texts = tuple(
            candidate.search_text(self.config.search_descriptions) for candidate in self._candidates
        )
        self._full_view: View = tuple(
            RankedCandidate(candidate=candidate, index=idx, match=Match(text=text, score=1.0))
            for idx, (candidate, text) in enumerate(zip(self._candidates, self._search_texts))
        )

        self._lock = threading.RLock()
        self._query = ""
        self._view_query = ""
        self._view: View = self._full_view
        self._cursor: int | None = first_enabled(self._disabled_flags(self._view))
        self._selected_ids: frozenset[int] = frozenset()
        self._mode = Mode.INTERACTIVE
        self._mode_before_help = Mode.INTERACTIVE
        self._accessibility = self.config.accessibility
        self._outcome: Outcome | None = None
        self.recompute_count = 0
        self._debounce: DebounceWorker[View] = DebounceWorker(
            self.compute_view,
            self._commit_view,
            self.config.debounce_seconds,
        )

    def __enter__(self) -> SelectionController:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    # state access
    @property
    def candidates(self) -> tuple[Candidate, ...]:
        return self._candidates

    @property
    def mode(self) -> Mode:
        with self._lock:
            return self._mode

    @property
    def query(self) -> str:
        with self._lock:
            return self._query

    @property
    def outcome(self) -> Outcome | None:
        with self._lock:
            return self._outcome

    @property
    def accessibility(self) -> bool:
        with self._lock:
            return self._accessibility

    @property
    def discarded_count(self) -> int:
        """Number of recomputations dropped because a newer query superseded them."""
        return self._debounce.discarded

    def snapshot(self) -> PickerSnapshot:
        """Return an immutable copy of everything a renderer needs."""
        with self._lock:
            return PickerSnapshot(
                view=self._view,
                cursor=self._cursor,
                selected=self._selected_positions(),
                query=self._query,
                mode=self._mode,
                total=len(self._candidates),
                multi_select=self.config.multi_select,
                accessibility=self._accessibility,
                pending_search=self._query != self._view_query,
            )

    def current_candidate(self) -> Candidate | None:
        with self._lock:
            if self._cursor is None:
                return None
            return self._view[self._cursor].candidate

    # view computation
    @staticmethod
    def _disabled_flags(view: View) -> list[bool]:
        return [ranked.candidate.disabled for ranked in view]

    def _selected_positions(self) -> frozenset[int]:
        if not self._selected_ids:
            return frozenset()
        return frozenset(pos for pos, ranked in enumerate(self._view) if ranked.index in self._selected_ids)

    def compute_view(self, query: str) -> View:
        """Rank the corpus for ``query``; pure with respect to controller state."""
        if not self.matcher.normalize(query):
            return self._full_view
        strategy = self.config.match_strategy
        limit = self.config.result_limit
        if limit is None:
            ranked = search(self.matcher, query, self._search_texts, strategy=strategy)
        else:
            ranked = search_with_limit(self.matcher, query, self._search_texts, limit, strategy=strategy)
        return tuple(
            RankedCandidate(candidate=self._candidates[hit.index], index=hit.index, match=hit.match)
            for hit in ranked
        )

    def _install_view(self, view: View, query: str) -> None:
        """Swap in a new view; caller holds the lock."""
        self._view = view
        self._view_query = query
        self._cursor = first_enabled(self._disabled_flags(view))
        if self._selected_ids:
            visible = {ranked.index for ranked in view}
            self._selected_ids = self._selected_ids & visible

    def _commit_view(self, generation: int, query: str, view: View) -> bool:
        """Install a worker result unless it is stale or the session ended."""
        with self._lock:
            if self._outcome is not None or not self._debounce.is_current(generation):
                logger.debug(
                    "dropped stale search result",
                    extra={"context": {"query": query, "generation": generation}},
                )
                return False
            self._install_view(view, query)
            self.recompute_count += 1
            logger.debug(
                "search committed",
                extra={"context": {"query": query, "results": len(view), "generation": generation}},
            )
            return True

    def _request_search(self, query: str) -> None:
        """Route a query change through the debounce worker; caller holds the lock."""
        if not self.matcher.normalize(query):
            self._debounce.invalidate()
            self._install_view(self._full_view, query)
            return
        self._debounce.submit(query)

    def wait_for_search(self, timeout: float | None = None) -> bool:
        """Block until queued recomputation has committed or been dropped."""
        return self._debounce.wait_idle(timeout)

    def flush_search(self) -> None:
        """Synchronously bring the view up to date with the current query."""
        with self._lock:
            if self._query == self._view_query:
                return
            self._debounce.invalidate()
            query = self._query
            self._install_view(self.compute_view(query), query)

    # query editing
    def type_text(self, text: str) -> bool:
        if not self.config.allow_search or not text:
            return False
        with self._lock:
            if self._outcome is not None:
                return False
            self._query += text
            self._request_search(self._query)
        return True

    def backspace(self) -> bool:
        with self._lock:
            if self._outcome is not None or not self._query:
                return False
            self._query = self._query[:-1]
            self._request_search(self._query)
        return True

    def set_query(self, query: str) -> None:
        """Replace the whole query, e.g. from a host-provided initial value."""
        with self._lock:
            if self._outcome is not None:
                return
            self._query = query
            self._request_search(query)

    def clear_query(self) -> None:
        """Reset to the full list immediately, skipping the debounce window."""
        with self._lock:
            if self._outcome is not None:
                return
            self._query = ""
            self._debounce.invalidate()
            self._install_view(self._full_view, "")

    # cursor and selection
    def _move(self, compute: Callable[[list[bool], int | None], int | None]) -> None:
        with self._lock:
            if self._outcome is not None:
                return
            self._cursor = compute(self._disabled_flags(self._view), self._cursor)
            accessible = self._accessibility
        if accessible:
            self.speak_current()

    def move_cursor(self, delta: int) -> None:
        self._move(lambda disabled, cursor: step_cursor(disabled, cursor, delta))

    def page(self, direction: int) -> None:
        step = self.config.max_items if direction >= 0 else -self.config.max_items
        self._move(lambda disabled, cursor: page_cursor(disabled, cursor, step))

    def jump_first(self) -> None:
        self._move(lambda disabled, _cursor: first_enabled(disabled))

    def jump_last(self) -> None:
        self._move(lambda disabled, _cursor: last_enabled(disabled))

    def toggle_selection(self) -> bool:
        """Flip multi-select membership of the cursor row."""
        if not self.config.multi_select:
            return False
        with self._lock:
            if self._outcome is not None or self._cursor is None:
                return False
            ranked = self._view[self._cursor]
            if ranked.candidate.disabled:
                return False
            self._selected_ids = self._selected_ids ^ {ranked.index}
        return True

    def clear_selection(self) -> None:
        with self._lock:
            self._selected_ids = frozenset()

    # modes
    def _set_mode(self, mode: Mode) -> None:
        with self._lock:
            self._mode = mode

    def enter_search(self) -> bool:
        """Start a fresh search: clear the query and switch to search mode."""
        if not self.config.allow_search:
            return False
        self.clear_query()
        self._set_mode(Mode.SEARCH)
        return True

    def start_search_with(self, text: str) -> bool:
        """Switch to search mode and append ``text`` to the current query."""
        if not self.config.allow_search:
            return False
        self._set_mode(Mode.SEARCH)
        return self.type_text(text)

    def leave_search(self, clear: bool) -> None:
        if clear:
            self.clear_query()
        self._set_mode(Mode.INTERACTIVE)

    def enter_preview(self) -> bool:
        if self.config.preview is None:
            return False
        self._set_mode(Mode.PREVIEW)
        return True

    def leave_preview(self) -> None:
        self._set_mode(Mode.INTERACTIVE)

    def toggle_help(self) -> None:
        """Flip between help and whatever mode was active before it."""
        with self._lock:
            if self._mode is Mode.HELP:
                self._mode = self._mode_before_help
            else:
                self._mode_before_help = self._mode
                self._mode = Mode.HELP

    # accessibility
    def _emit(self, announcement: Announcement | None) -> None:
        if announcement is not None and self._announce is not None:
            self._announce(announcement)

    def toggle_accessibility(self) -> bool:
        with self._lock:
            self._accessibility = not self._accessibility
            enabled = self._accessibility
        if enabled:
            self.speak_current()
        return enabled

    def speak_current(self) -> None:
        """Announce the cursor row, e.g. ``Item 2 of 5: Open browser``."""
        with self._lock:
            if not self._view:
                announcement = empty_view_announcement(self._query)
            else:
                announcement = item_announcement(
                    self._view,
                    self._cursor,
                    self._selected_positions(),
                    self.config.multi_select,
                )
        self._emit(announcement)

    def describe_current(self) -> None:
        candidate = self.current_candidate()
        if candidate is not None:
            self._emit(describe_announcement(candidate))

    # terminal outcomes
    def _finish(self, outcome: Outcome) -> Outcome:
        with self._lock:
            if self._outcome is not None:
                return self._outcome
            self._outcome = outcome
        self._debounce.stop()
        logger.info("picker finished", extra={"context": {"outcome": type(outcome).__name__}})
        return outcome

    def confirm(self) -> Outcome | None:
        """Confirm the checked rows, or the cursor row when none are checked.

        Returns ``None`` (session continues) when there is nothing to confirm,
        such as an empty view or a disabled cursor row.
        """
        self.flush_search()
        with self._lock:
            if self._outcome is not None:
                return self._outcome
            outcome: Outcome | None = None
            if self.config.multi_select and self._selected_ids:
                chosen = tuple(
                    ranked.candidate for ranked in self._view if ranked.index in self._selected_ids
                )
                if chosen:
                    outcome = ConfirmedMany(candidates=chosen)
            if outcome is None and self._cursor is not None:
                candidate = self._view[self._cursor].candidate
                if not candidate.disabled:
                    outcome = Confirmed(candidate=candidate)
        if outcome is None:
            return None
        return self._finish(outcome)

    def cancel(self) -> Outcome:
        """End the session without a result, discarding query and selection."""
        with self._lock:
            if self._outcome is None:
                self._query = ""
                self._selected_ids = frozenset()
        return self._finish(Cancelled())

    def handle_key(self, key: str) -> Outcome | None:
        """Apply one semantic key; returns the outcome once the session ends."""
        current = self.outcome
        if current is not None:
            return current
        handled, outcome = dispatch_key(self, key)
        if not handled:
            logger.debug("ignored key", extra={"context": {"key": key, "mode": self.mode.value}})
        return outcome

    def close(self) -> None:
        """Stop the background worker without recording an outcome."""
        self._debounce.stop()
