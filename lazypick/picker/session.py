"""Picker session loop and terminal entry points.

``run_picker`` drives a controller from any key source and render sink, which
is what tests use. ``pick`` wires the real terminal: ``/dev/tty`` input, raw
mode, and full-frame redraws. ``pick_simple`` is the numbered-prompt fallback
used when no terminal is available.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any, TextIO

from ..accessibility import format_announcement
from ..errors import InputReadError
from ..input import KeyReader
from ..log import get_logger
from ..render.screen import render_screen
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .controller import SelectionController
from .types import (
    Announcement,
    Cancelled,
    Candidate,
    Confirmed,
    ConfirmedMany,
    Outcome,
    PickerConfig,
    PickerSnapshot,
)

logger = get_logger(__name__)

DEFAULT_KEY_TIMEOUT_MS = 30_000
TTY_PATH = "/dev/tty"
# Redraw cadence while a debounced search is still pending.
PENDING_REDRAW_MS = 60

ReadKey = Callable[[int], str]
Render = Callable[[PickerSnapshot], None]


def run_picker(
    controller: SelectionController,
    read_key: ReadKey,
    render: Render,
    *,
    key_timeout_ms: int = DEFAULT_KEY_TIMEOUT_MS,
) -> Outcome:
    """Render, read one key, dispatch; repeat until the controller finishes.

    ``read_key(timeout_ms)`` returns a key token, or ``""`` once
    ``key_timeout_ms`` passes without input, which cancels the session.
    ``OSError``/``EOFError`` from the key source surface as
    ``InputReadError``. The debounce worker is stopped on every exit path.
    """
    logger.info(
        "picker session started",
        extra={"context": {"candidates": len(controller.candidates), "timeout_ms": key_timeout_ms}},
    )
    idle_ms = 0
    try:
        while True:
            snapshot = controller.snapshot()
            render(snapshot)
            # Poll faster while a search is in flight so its result gets drawn.
            wait_ms = key_timeout_ms - idle_ms
            if snapshot.pending_search:
                wait_ms = min(PENDING_REDRAW_MS, wait_ms)
            try:
                key = read_key(max(0, wait_ms))
            except (OSError, EOFError) as exc:
                logger.error("reading input failed", exc_info=True)
                raise InputReadError(f"failed to read input: {exc}") from exc
            if not key:
                idle_ms += wait_ms
                if idle_ms >= key_timeout_ms:
                    logger.info("input timed out", extra={"context": {"timeout_ms": key_timeout_ms}})
                    return controller.cancel()
                continue
            idle_ms = 0
            outcome = controller.handle_key(key)
            if outcome is not None:
                return outcome
    finally:
        controller.close()


def pick(
    candidates: Sequence[Candidate],
    config: PickerConfig | None = None,
    *,
    key_timeout_ms: int = DEFAULT_KEY_TIMEOUT_MS,
    no_color: bool = False,
    announce_stream: TextIO | None = None,
    **overrides: Any,
) -> Outcome:
    """Run an interactive picker on the controlling terminal.

    Keyword ``overrides`` replace fields of ``config``. Accessibility
    announcements go to ``announce_stream`` (stderr by default) so they never
    interleave with the drawn frame's stdout.
    """
    config = replace(config or PickerConfig(), **overrides)
    try:
        tty_fd = os.open(TTY_PATH, os.O_RDWR | os.O_NOCTTY)
    except OSError:
        logger.info("no controlling terminal, using numbered prompt")
        return pick_simple(candidates, config)

    stream = announce_stream if announce_stream is not None else sys.stderr

    def announce(announcement: Announcement) -> None:
        stream.write(format_announcement(announcement, screen_reader=controller.accessibility) + "\n")
        stream.flush()

    controller = SelectionController(candidates, config, announce=announce)
    theme = resolve_theme(config.theme, no_color=no_color)

    try:
        terminal = TerminalController(tty_fd, tty_fd)
        with terminal.raw_mode():

            def render(snapshot: PickerSnapshot) -> None:
                width, height = terminal.size()
                terminal.write_frame(render_screen(snapshot, config, theme, width, height))

            return run_picker(
                controller,
                KeyReader(tty_fd),
                render,
                key_timeout_ms=key_timeout_ms,
            )
    finally:
        os.close(tty_fd)


def pick_simple(
    candidates: Sequence[Candidate],
    config: PickerConfig | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> Outcome:
    """Numbered-list prompt for environments without a terminal.

    Multi-select accepts space or comma separated numbers. An empty answer,
    end of input, or an invalid number cancels.
    """
    config = config or PickerConfig()
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    stdout.write(f"{config.title}\n")
    for idx, candidate in enumerate(candidates, start=1):
        suffix = " (unavailable)" if candidate.disabled else ""
        description = f" - {candidate.description}" if config.show_description and candidate.description else ""
        stdout.write(f"  {idx}) {candidate.text}{description}{suffix}\n")
    stdout.write("Numbers separated by spaces: " if config.multi_select else "Number: ")
    stdout.flush()

    answer = stdin.readline()
    tokens = answer.replace(",", " ").split()
    if not tokens:
        return Cancelled()
    chosen: list[Candidate] = []
    for token in tokens if config.multi_select else tokens[:1]:
        if not token.isdigit() or not 1 <= int(token) <= len(candidates):
            return Cancelled()
        candidate = candidates[int(token) - 1]
        if candidate.disabled:
            return Cancelled()
        if candidate not in chosen:
            chosen.append(candidate)
    if config.multi_select:
        return ConfirmedMany(candidates=tuple(chosen))
    return Confirmed(candidate=chosen[0])
