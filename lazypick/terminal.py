"""Terminal control helpers for the picker session.

Owns raw-mode lifecycle, alternate-screen switching, and frame output.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty
from collections.abc import Iterator, Sequence

ENTER_ALT_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_ALT_SCREEN = b"\x1b[?25h\x1b[?1049l"
CLEAR_AND_HOME = "\x1b[H\x1b[2J"


class TerminalController:
    """Manage terminal mode transitions for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._active = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_ALT_SCREEN)
        self._active = True

    def disable_tui_mode(self) -> None:
        """Restore the main screen buffer and the saved tty attributes."""
        os.write(self.stdout_fd, LEAVE_ALT_SCREEN)
        self._active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @property
    def active(self) -> bool:
        return self._active

    def size(self) -> tuple[int, int]:
        """Return ``(columns, lines)`` with a conservative fallback."""
        term = shutil.get_terminal_size((80, 24))
        return max(1, term.columns), max(1, term.lines)

    def write_frame(self, lines: Sequence[str]) -> None:
        """Redraw the whole screen; raw mode needs explicit carriage returns."""
        payload = CLEAR_AND_HOME + "\r\n".join(lines)
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[TerminalController]:
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()
