"""Interactive selection: controller, key dispatch, and session loop.

Submodules are imported on first attribute access so that importing
``lazypick.picker.types`` stays free of controller and render imports.
"""

from __future__ import annotations

_EXPORTS = {
    "SelectionController": "controller",
    "dispatch_key": "key_dispatch",
    "pick": "session",
    "pick_simple": "session",
    "run_picker": "session",
    "Announcement": "types",
    "Cancelled": "types",
    "Candidate": "types",
    "Confirmed": "types",
    "ConfirmedMany": "types",
    "Mode": "types",
    "Outcome": "types",
    "PickerConfig": "types",
    "PickerSnapshot": "types",
    "RankedCandidate": "types",
    "candidates_from_strings": "types",
}


def __getattr__(name: str):
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module

    return getattr(import_module(f".{module_name}", __name__), name)


__all__ = sorted(_EXPORTS)
