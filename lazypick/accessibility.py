"""Assistive announcements for picker navigation.

The controller emits ``Announcement(role, text)`` values; this module phrases
them and turns them into either coloured plain text or screen-reader oriented
lines with an explicit role prefix.
"""

from __future__ import annotations

from collections.abc import Sequence

from .picker.types import Announcement, Candidate, RankedCandidate
from .ui_theme import PLAIN_THEME, UITheme

ROLE_PREFIXES: dict[str, str] = {
    "success": "SUCCESS",
    "error": "ERROR",
    "warning": "WARNING",
    "info": "INFO",
}


def item_announcement(
    view: Sequence[RankedCandidate],
    cursor: int | None,
    selected: frozenset[int],
    multi_select: bool,
) -> Announcement | None:
    """Phrase the row under the cursor, e.g. ``Item 3 of 12: Edit file. Selected``."""
    if cursor is None or not 0 <= cursor < len(view):
        return None
    candidate = view[cursor].candidate
    text = f"Item {cursor + 1} of {len(view)}: {candidate.text}"
    if candidate.description:
        text += f". {candidate.description}"
    if candidate.disabled:
        text += ". Unavailable"
    if multi_select and cursor in selected:
        text += ". Selected"
    return Announcement(role="navigation", text=text)


def describe_announcement(candidate: Candidate) -> Announcement:
    """Long-form description of one candidate."""
    text = f"Detailed description for {candidate.text}: {candidate.description or 'no description'}"
    if candidate.data is not None:
        text += f". Additional data available: {type(candidate.data).__name__}"
    return Announcement(role="description", text=text)


def empty_view_announcement(query: str) -> Announcement:
    if query:
        return Announcement(role="warning", text=f"No items match {query}")
    return Announcement(role="warning", text="No items found")


def format_announcement(
    announcement: Announcement,
    *,
    screen_reader: bool,
    theme: UITheme = PLAIN_THEME,
) -> str:
    """Render one announcement as a single line of output.

    Screen-reader output drops colour and spells the role out as a prefix;
    visual output colours by role and omits the prefix.
    """
    if screen_reader:
        prefix = ROLE_PREFIXES.get(announcement.role, announcement.role.upper())
        return f"{prefix}: {announcement.text}"
    color = {
        "success": theme.success,
        "error": theme.error,
        "warning": theme.warning,
        "info": theme.info,
    }.get(announcement.role, "")
    if not color:
        return announcement.text
    return f"{color}{announcement.text}{theme.reset}"


__all__ = [
    "Announcement",
    "describe_announcement",
    "empty_view_announcement",
    "format_announcement",
    "item_announcement",
]
