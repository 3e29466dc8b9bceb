"""Exception types surfaced to callers embedding the picker."""

from __future__ import annotations


class LazypickError(Exception):
    """Base class for lazypick failures."""


class InputReadError(LazypickError):
    """The key source could not produce another event.

    Raised out of a picker session when reading input fails outright (closed
    stream, I/O error). A read timeout is not an error; it cancels instead.
    """


class ConfigError(LazypickError, ValueError):
    """A configuration value is out of range or of the wrong type."""
