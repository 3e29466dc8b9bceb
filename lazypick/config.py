"""Persistent JSON config helpers.

Stores picker preferences (theme, key bindings, matching thresholds, layout).
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from .errors import ConfigError
from .log import APP_NAME, get_logger
from .picker.types import LAYOUTS
from .ui_theme import available_theme_names

logger = get_logger(__name__)

CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / "config.json"

BOOL_KEYS = ("vim_mode", "accessibility", "case_sensitive")
PREFERENCE_KEYS = ("theme", "layout", "min_score", "max_items") + BOOL_KEYS


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    target = path or CONFIG_PATH
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError):
        logger.warning("ignoring unreadable config", exc_info=True, extra={"context": {"path": str(target)}})
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object], path: Path | None = None) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem and serialization errors are logged and otherwise ignored so a
    read-only config directory never breaks a picker session.
    """
    target = path or CONFIG_PATH
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        logger.warning("could not write config", exc_info=True, extra={"context": {"path": str(target)}})


def _coerce(key: str, value: object) -> Any:
    """Return the validated value for ``key`` or ``None`` when invalid."""
    if key in BOOL_KEYS:
        return value if isinstance(value, bool) else None
    if key == "theme":
        if not isinstance(value, str):
            return None
        name = value.strip().lower().replace("_", "-")
        return name if name in available_theme_names() else None
    if key == "layout":
        return value if value in LAYOUTS else None
    if key == "min_score":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return float(value) if 0.0 <= value <= 1.0 else None
    if key == "max_items":
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value if value >= 1 else None
    return None


def config_overrides(data: dict[str, object] | None = None) -> dict[str, Any]:
    """Translate persisted preferences into ``PickerConfig`` field overrides.

    Unknown keys and out-of-range values are dropped.
    """
    source = load_config() if data is None else data
    overrides: dict[str, Any] = {}
    for key in PREFERENCE_KEYS:
        if key not in source:
            continue
        value = _coerce(key, source[key])
        if value is None:
            logger.info("dropping invalid config value", extra={"context": {"key": key}})
            continue
        overrides[key] = value
    return overrides


def save_preference(key: str, value: object, path: Path | None = None) -> None:
    """Persist one validated preference, keeping the rest of the file."""
    if key not in PREFERENCE_KEYS:
        raise ConfigError(f"unknown preference: {key!r}")
    coerced = _coerce(key, value)
    if coerced is None:
        raise ConfigError(f"invalid value for {key!r}: {value!r}")
    config = load_config(path)
    config[key] = coerced
    save_config(config, path)
