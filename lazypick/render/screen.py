"""Compose full picker frames from controller snapshots.

``render_screen`` is a pure function of its arguments: it never touches the
controller, so the session can render any snapshot at any time. Every
returned line is clipped and padded to exactly ``width`` columns.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..ansi import fit_ansi_line
from ..picker.types import Mode, PickerConfig, PickerSnapshot, RankedCandidate
from ..search.fuzzy import highlight_string
from ..ui_theme import PLAIN_THEME, UITheme
from .help import render_help_lines, status_hint
from .preview import preview_lines

EMPTY_VIEW_TEXT = "No items found"
SEARCH_PLACEHOLDER = "type to search"
PENDING_MARKER = " ..."
CURSOR_MARKER = "> "
NO_CURSOR_MARKER = "  "


def visible_window(total: int, cursor: int | None, rows: int) -> tuple[int, int]:
    """Return the ``[start, end)`` slice of the view that keeps the cursor on screen."""
    if rows <= 0 or total <= 0:
        return 0, 0
    rows = min(rows, total)
    if cursor is None:
        return 0, rows
    start = min(max(0, cursor - rows + 1), total - rows)
    return start, start + rows


def _item_text(ranked: RankedCandidate, style: str, theme: UITheme) -> str:
    text = ranked.candidate.display_text()
    # Highlights index the search text, which starts with the display text.
    ranges = [h for h in ranked.match.highlights if h.start < len(text)]
    if not ranges or not theme.match_highlight:
        return f"{style}{text}{theme.reset}"
    body = highlight_string(text, ranges, theme.match_highlight, f"{theme.reset}{style}")
    return f"{style}{body}{theme.reset}"


def render_item_row(
    ranked: RankedCandidate,
    *,
    is_cursor: bool,
    is_selected: bool,
    config: PickerConfig,
    theme: UITheme,
    show_description: bool,
) -> str:
    """One list row: cursor marker, optional checkbox, highlighted text, description."""
    candidate = ranked.candidate
    marker = f"{theme.cursor_marker}{CURSOR_MARKER}{theme.reset}" if is_cursor else NO_CURSOR_MARKER
    checkbox = ""
    if config.multi_select:
        box = "[x] " if is_selected else "[ ] "
        checkbox = f"{theme.checkbox}{box}{theme.reset}"
    if candidate.disabled:
        style = theme.item_disabled
    elif is_cursor:
        style = theme.cursor_row
    else:
        style = theme.item
    row = f"{marker}{checkbox}{_item_text(ranked, style, theme)}"
    if show_description and candidate.description:
        row += f" {theme.description}- {candidate.description}{theme.reset}"
    return row


def _header_lines(snapshot: PickerSnapshot, config: PickerConfig, theme: UITheme, width: int) -> list[str]:
    count = f"{len(snapshot.view)}/{snapshot.total}"
    if snapshot.multi_select:
        count += f"  {len(snapshot.selected)} selected"
    if snapshot.accessibility:
        count += "  [a11y]"
    title = f"{theme.title}{config.title}{theme.reset}  {theme.count}{count}{theme.reset}"
    if config.layout == "compact":
        return [title]
    return [title, f"{theme.divider}{'-' * width}{theme.reset}"]


def _prompt_line(snapshot: PickerSnapshot, config: PickerConfig, theme: UITheme) -> str:
    prompt = f"{theme.prompt}{config.prompt}{theme.reset}"
    if snapshot.query:
        line = f"{prompt}{theme.query}{snapshot.query}{theme.reset}"
    elif snapshot.mode is Mode.SEARCH or not config.vim_mode:
        line = f"{prompt}{theme.placeholder}{SEARCH_PLACEHOLDER}{theme.reset}"
    else:
        line = prompt
    if snapshot.pending_search:
        line += f"{theme.status}{PENDING_MARKER}{theme.reset}"
    return line


def _list_lines(snapshot: PickerSnapshot, config: PickerConfig, theme: UITheme, rows: int) -> list[str]:
    if not snapshot.view:
        return [f"{theme.warning}{EMPTY_VIEW_TEXT}{theme.reset}"]
    start, end = visible_window(len(snapshot.view), snapshot.cursor, min(rows, config.max_items))
    show_description = config.show_description and config.layout != "compact"
    lines: list[str] = []
    for pos in range(start, end):
        is_cursor = pos == snapshot.cursor
        lines.append(
            render_item_row(
                snapshot.view[pos],
                is_cursor=is_cursor,
                is_selected=pos in snapshot.selected,
                config=config,
                theme=theme,
                show_description=show_description and is_cursor,
            )
        )
    return lines


def render_screen(
    snapshot: PickerSnapshot,
    config: PickerConfig,
    theme: UITheme = PLAIN_THEME,
    width: int = 80,
    height: int = 24,
    preview: Sequence[str] | None = None,
) -> list[str]:
    """Return the frame for ``snapshot`` as at most ``height`` lines.

    ``preview`` supplies already-formatted preview lines; when omitted in
    preview mode the configured preview callback is invoked for the cursor
    candidate.
    """
    width = max(1, width)
    height = max(1, height)

    if snapshot.mode is Mode.HELP:
        body = render_help_lines(config, theme)
        return [fit_ansi_line(line, width, theme.reset) for line in body[:height]]

    lines = _header_lines(snapshot, config, theme, width)
    lines.append(_prompt_line(snapshot, config, theme))
    footer = [f"{theme.status}{status_hint(snapshot.mode, config)}{theme.reset}"]
    list_rows = max(1, height - len(lines) - len(footer))

    if snapshot.mode is Mode.PREVIEW:
        list_rows = max(1, min(config.max_items, list_rows // 2))
    lines.extend(_list_lines(snapshot, config, theme, list_rows))

    if snapshot.mode is Mode.PREVIEW:
        current = snapshot.current
        if preview is None and config.preview is not None and current is not None:
            preview = preview_lines(config.preview, current.candidate, no_color=theme is PLAIN_THEME)
        lines.append(f"{theme.divider}{'-' * width}{theme.reset}")
        remaining = max(0, height - len(lines) - len(footer))
        lines.extend(list(preview or [])[:remaining])

    lines = lines[: max(0, height - len(footer))] + footer
    return [fit_ansi_line(line, width, theme.reset) for line in lines[:height]]
