"""Rendering helpers: snapshot to screen lines, help text, preview colouring."""

from __future__ import annotations

from .help import render_help_lines, status_hint
from .preview import colorize_preview, preview_lines, sanitize_terminal_text
from .screen import EMPTY_VIEW_TEXT, render_item_row, render_screen, visible_window

__all__ = [
    "EMPTY_VIEW_TEXT",
    "colorize_preview",
    "preview_lines",
    "render_help_lines",
    "render_item_row",
    "render_screen",
    "sanitize_terminal_text",
    "status_hint",
    "visible_window",
]
