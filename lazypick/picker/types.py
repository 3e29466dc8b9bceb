"""Value types shared by the picker controller, session loop, and renderers."""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..errors import ConfigError
from ..search.fuzzy import Match
from ..search.ranking import MATCH_STRATEGIES

LAYOUTS = ("default", "compact")


@dataclass(frozen=True)
class Candidate:
    """One selectable item. The picker never mutates it."""

    id: str
    text: str
    description: str = ""
    disabled: bool = False
    data: Any = None
    action: Callable[[], Any] | None = None

    def search_text(self, include_description: bool = False) -> str:
        if include_description and self.description:
            return f"{self.text} {self.description}"
        return self.text

    def display_text(self) -> str:
        return self.text


def candidates_from_strings(texts: Sequence[str]) -> list[Candidate]:
    """Wrap plain strings, using their position as the identifier."""
    return [Candidate(id=str(idx), text=text) for idx, text in enumerate(texts)]


class Mode(enum.Enum):
    INTERACTIVE = "interactive"
    SEARCH = "search"
    PREVIEW = "preview"
    HELP = "help"


@dataclass(frozen=True)
class PickerConfig:
    """Behavior and presentation switches for one picker session.

    ``layout`` and ``theme`` are not interpreted by the controller; they are
    handed through to the renderer unchanged.
    """

    title: str = "Select an option"
    prompt: str = "> "
    show_description: bool = True
    allow_search: bool = True
    max_items: int = 10
    min_score: float = 0.1
    case_sensitive: bool = False
    multi_select: bool = False
    vim_mode: bool = True
    accessibility: bool = False
    preview: Callable[[Candidate], str] | None = None
    custom_help: str = ""
    help_callback: Callable[[], str] | None = None
    layout: str = "default"
    theme: str = "default"
    match_strategy: str = "smart"
    search_descriptions: bool = False
    result_limit: int | None = None
    debounce_seconds: float = 0.05

    def __post_init__(self) -> None:
        if self.max_items <= 0:
            raise ConfigError(f"max_items must be >= 1, got {self.max_items}")
        if not 0.0 <= self.min_score <= 1.0:
            raise ConfigError(f"min_score must be within [0, 1], got {self.min_score}")
        if self.match_strategy not in MATCH_STRATEGIES:
            raise ConfigError(f"unknown match strategy: {self.match_strategy!r}")
        if self.layout not in LAYOUTS:
            raise ConfigError(f"unknown layout: {self.layout!r}")
        if self.result_limit is not None and self.result_limit <= 0:
            raise ConfigError(f"result_limit must be >= 1, got {self.result_limit}")
        if self.debounce_seconds < 0:
            raise ConfigError("debounce_seconds must be >= 0")


@dataclass(frozen=True)
class RankedCandidate:
    """A candidate in the filtered view with its corpus index and match."""

    candidate: Candidate
    index: int
    match: Match


@dataclass(frozen=True)
class PickerSnapshot:
    """Immutable, render-ready copy of controller state."""

    view: tuple[RankedCandidate, ...]
    cursor: int | None
    selected: frozenset[int]
    query: str
    mode: Mode
    total: int
    multi_select: bool
    accessibility: bool
    pending_search: bool = False
    help_visible: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "help_visible", self.mode is Mode.HELP)

    @property
    def current(self) -> RankedCandidate | None:
        if self.cursor is None or not 0 <= self.cursor < len(self.view):
            return None
        return self.view[self.cursor]


@dataclass(frozen=True)
class Announcement:
    """Semantic message for assistive output, e.g. ``("navigation", "Item 1 of 3: ...")``."""

    role: str
    text: str


class Outcome:
    """Terminal result of a picker session."""


@dataclass(frozen=True)
class Confirmed(Outcome):
    candidate: Candidate


@dataclass(frozen=True)
class ConfirmedMany(Outcome):
    candidates: tuple[Candidate, ...]


@dataclass(frozen=True)
class Cancelled(Outcome):
    pass
