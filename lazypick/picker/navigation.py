"""Cursor arithmetic over a filtered view.

Functions here take the view's per-row disabled flags and return a new cursor
without touching controller state. Every loop is bounded by the view length,
so an all-disabled view leaves the cursor where it was.
"""

from __future__ import annotations

from collections.abc import Sequence


def first_enabled(disabled: Sequence[bool]) -> int | None:
    """Return the first selectable row, or ``None`` when there is none."""
    for idx, is_disabled in enumerate(disabled):
        if not is_disabled:
            return idx
    return None


def last_enabled(disabled: Sequence[bool]) -> int | None:
    """Return the last selectable row, or ``None`` when there is none."""
    for idx in range(len(disabled) - 1, -1, -1):
        if not disabled[idx]:
            return idx
    return None


def step_cursor(disabled: Sequence[bool], cursor: int | None, delta: int) -> int | None:
    """Move ``delta`` rows with wraparound, skipping disabled rows.

    Skipping continues in the direction of travel. When no row is selectable
    the original cursor is returned unchanged.
    """
    count = len(disabled)
    if count == 0:
        return None
    if cursor is None:
        return first_enabled(disabled) if delta >= 0 else last_enabled(disabled)
    if delta == 0:
        return cursor
    direction = 1 if delta > 0 else -1
    target = (cursor + delta) % count
    for _ in range(count):
        if not disabled[target]:
            return target
        target = (target + direction) % count
    return cursor


def nearest_enabled(disabled: Sequence[bool], index: int, direction: int) -> int | None:
    """Return the closest selectable row from ``index``, preferring ``direction``."""
    count = len(disabled)
    if count == 0:
        return None
    index = max(0, min(index, count - 1))
    step = 1 if direction >= 0 else -1
    probe = index
    while 0 <= probe < count:
        if not disabled[probe]:
            return probe
        probe += step
    probe = index - step
    while 0 <= probe < count:
        if not disabled[probe]:
            return probe
        probe -= step
    return None


def page_cursor(disabled: Sequence[bool], cursor: int | None, delta: int) -> int | None:
    """Move a page of rows, clamping at the ends and wrapping from them.

    A page move from the last selectable row (or the first, going backwards)
    wraps to the opposite end, mirroring single-step wraparound.
    """
    count = len(disabled)
    if count == 0:
        return None
    if cursor is None:
        return first_enabled(disabled) if delta >= 0 else last_enabled(disabled)
    if delta == 0:
        return cursor
    if delta > 0 and cursor == last_enabled(disabled):
        return first_enabled(disabled)
    if delta < 0 and cursor == first_enabled(disabled):
        return last_enabled(disabled)
    target = nearest_enabled(disabled, cursor + delta, delta)
    return cursor if target is None else target
