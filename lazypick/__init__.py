"""Public package surface for lazypick.

Exports ``main`` for programmatic CLI invocation and ``pick`` for embedding
the picker. Implementation lives in submodules under ``lazypick``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def pick(*args, **kwargs):
    """Lazily import the terminal picker; see ``lazypick.picker.session.pick``."""
    from .picker.session import pick as _pick

    return _pick(*args, **kwargs)


__all__ = ["main", "pick"]
