"""Preview pane text: sanitization and syntax colouring.

Preview text comes from a host callback, so control bytes are neutralized
before it reaches the terminal. Text that looks like a shell command or
source code is coloured with Pygments.
"""

from __future__ import annotations

import re

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import BashLexer, guess_lexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..log import get_logger

logger = get_logger(__name__)

DEFAULT_PREVIEW_STYLE = "monokai"
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_SHELL_HINT_RE = re.compile(r"^\s*(\$ |#!|sudo |git |cd |ls |docker |kubectl |make |npm |pip )")
_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\t"}:
            out.append(ch)
            continue
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_PREVIEW_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_PREVIEW_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def lexer_for_preview(text: str) -> Lexer | None:
    """Pick a lexer for ``text``, or ``None`` when it reads as prose."""
    if _SHELL_HINT_RE.match(text):
        return BashLexer()
    try:
        lexer = guess_lexer(text)
    except ClassNotFound:
        return None
    if lexer.name == "Text only":
        return None
    return lexer


def colorize_preview(text: str, style: str = DEFAULT_PREVIEW_STYLE, *, no_color: bool = False) -> list[str]:
    """Return sanitized preview lines, coloured when the text looks like code."""
    clean = sanitize_terminal_text(text.replace("\r\n", "\n"))
    if no_color or not clean.strip():
        return clean.splitlines()
    lexer = lexer_for_preview(clean)
    if lexer is None:
        return clean.splitlines()
    rendered = highlight(clean, lexer, _formatter_for_style(_normalize_style(style)))
    return rendered.rstrip("\n").splitlines()


def preview_lines(preview, candidate, style: str = DEFAULT_PREVIEW_STYLE, *, no_color: bool = False) -> list[str]:
    """Invoke a host preview callback and format its output.

    A failing callback is reported inline instead of tearing down the picker.
    """
    try:
        text = preview(candidate)
    except Exception as exc:
        logger.warning("preview callback failed", exc_info=True, extra={"context": {"id": candidate.id}})
        return [f"preview unavailable: {exc}"]
    if not text:
        return ["(no preview)"]
    return colorize_preview(str(text), style, no_color=no_color)
