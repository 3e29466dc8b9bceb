"""Help screen content and per-mode status hints.

Rendering helpers here are presentation-only and side-effect free.
"""

from __future__ import annotations

from ..picker.types import Mode, PickerConfig
from ..ui_theme import UITheme

# (keys, description) pairs, grouped under a heading.
HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "NAVIGATION",
        (
            ("Up/Down, Ctrl+P/N", "move cursor"),
            ("PgUp/PgDn", "move one page"),
            ("Home/End", "first / last item"),
            ("Enter", "confirm selection"),
            ("Esc, Ctrl+C", "cancel"),
        ),
    ),
    (
        "SEARCH",
        (
            ("type", "filter the list"),
            ("Backspace", "delete last character"),
            ("Ctrl+U", "clear query"),
            ("Enter", "keep query, back to list"),
            ("Esc", "clear query, back to list"),
        ),
    ),
    (
        "SELECTION",
        (
            ("Space/Tab", "toggle item (multi-select)"),
            ("Right", "open preview"),
            ("Left/Esc", "close preview"),
        ),
    ),
    (
        "ACCESSIBILITY",
        (
            ("F12", "toggle accessibility mode"),
            ("Ctrl+S", "speak current item"),
            ("Ctrl+D", "describe current item"),
            ("?/F1", "toggle this help"),
        ),
    ),
)

VIM_HELP_SECTION: tuple[str, tuple[tuple[str, str], ...]] = (
    "VIM",
    (
        ("j/k", "down / up"),
        ("g/G", "first / last item"),
        ("/", "start a new search"),
        ("q", "quit"),
    ),
)


def help_sections(config: PickerConfig) -> list[tuple[str, tuple[tuple[str, str], ...]]]:
    sections = list(HELP_SECTIONS)
    if config.vim_mode:
        sections.insert(1, VIM_HELP_SECTION)
    return sections


def render_help_lines(config: PickerConfig, theme: UITheme) -> list[str]:
    """Return the full help screen body for ``config``.

    Host-supplied text (``help_callback`` wins over ``custom_help``) is
    appended after the built-in key reference.
    """
    lines = [f"{theme.title}{config.title} - help{theme.reset}", ""]
    for heading, entries in help_sections(config):
        lines.append(f"{theme.help_heading}{heading}{theme.reset}")
        key_width = max(len(keys) for keys, _ in entries)
        for keys, description in entries:
            lines.append(
                f"  {theme.help_key}{keys.ljust(key_width)}{theme.reset}  {description}"
            )
        lines.append("")
    extra = config.help_callback() if config.help_callback is not None else config.custom_help
    if extra:
        lines.append(f"{theme.help_heading}MORE{theme.reset}")
        lines.extend(f"  {line}" for line in extra.splitlines())
        lines.append("")
    lines.append(f"{theme.help_dim}Press any key to return{theme.reset}")
    return lines


def status_hint(mode: Mode, config: PickerConfig) -> str:
    """One-line key reminder for the bottom of the screen."""
    if mode is Mode.SEARCH:
        return "type to filter  Enter: done  Esc: clear  Ctrl+U: clear query"
    if mode is Mode.PREVIEW:
        return "Left/Esc: close preview  Enter: confirm  Up/Down: move"
    if mode is Mode.HELP:
        return "any key: close help"
    parts = ["Up/Down: move", "Enter: select"]
    if config.multi_select:
        parts.append("Space: toggle")
    if config.allow_search:
        parts.append("/: search" if config.vim_mode else "type: search")
    if config.preview is not None:
        parts.append("Right: preview")
    parts.append("?: help" if config.vim_mode else "F1: help")
    parts.append("Esc: cancel")
    return "  ".join(parts)
