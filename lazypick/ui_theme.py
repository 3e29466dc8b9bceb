"""UI theme definitions and selection helpers.

Themes are ANSI palettes for picker chrome, rows, and match highlights.
Preview syntax colouring uses a separate pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    title: str
    prompt: str
    query: str
    placeholder: str
    cursor_marker: str
    cursor_row: str
    item: str
    item_disabled: str
    match_highlight: str
    description: str
    checkbox: str
    count: str
    status: str
    help_heading: str
    help_key: str
    help_dim: str
    success: str
    error: str
    warning: str
    info: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    prompt="\033[1;38;5;81m",
    query="\033[38;5;229m",
    placeholder="\033[2;38;5;250m",
    cursor_marker="\033[38;5;44m",
    cursor_row="\033[1;38;5;252m",
    item="\033[38;5;252m",
    item_disabled="\033[2;38;5;244m",
    match_highlight="\033[1;38;5;214m",
    description="\033[2;38;5;250m",
    checkbox="\033[38;5;42m",
    count="\033[38;5;109m",
    status="\033[2;38;5;250m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
    success="\033[38;5;42m",
    error="\033[38;5;203m",
    warning="\033[38;5;214m",
    info="\033[38;5;110m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    prompt="\033[1;38;5;45m",
    query="\033[38;5;153m",
    placeholder="\033[2;38;5;110m",
    cursor_marker="\033[38;5;39m",
    cursor_row="\033[1;38;5;153m",
    item="\033[38;5;252m",
    item_disabled="\033[2;38;5;67m",
    match_highlight="\033[1;38;5;117m",
    description="\033[2;38;5;110m",
    checkbox="\033[38;5;84m",
    count="\033[38;5;73m",
    status="\033[2;38;5;110m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
    success="\033[38;5;84m",
    error="\033[38;5;210m",
    warning="\033[38;5;215m",
    info="\033[38;5;117m",
)

HIGH_CONTRAST_THEME = UITheme(
    name="high-contrast",
    divider="\033[97m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;97m",
    prompt="\033[1;97m",
    query="\033[1;93m",
    placeholder="\033[97m",
    cursor_marker="\033[1;93m",
    cursor_row="\033[1;97;40m",
    item="\033[97m",
    item_disabled="\033[37m",
    match_highlight="\033[1;4;93m",
    description="\033[97m",
    checkbox="\033[1;92m",
    count="\033[97m",
    status="\033[97m",
    help_heading="\033[1;4;97m",
    help_key="\033[1;93m",
    help_dim="\033[97m",
    success="\033[1;92m",
    error="\033[1;91m",
    warning="\033[1;93m",
    info="\033[1;96m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    title="",
    prompt="",
    query="",
    placeholder="",
    cursor_marker="",
    cursor_row="",
    item="",
    item_disabled="",
    match_highlight="",
    description="",
    checkbox="",
    count="",
    status="",
    help_heading="",
    help_key="",
    help_dim="",
    success="",
    error="",
    warning="",
    info="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    HIGH_CONTRAST_THEME.name: HIGH_CONTRAST_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower().replace("_", "-")
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "HIGH_CONTRAST_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
