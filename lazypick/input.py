"""Low-level terminal input decoding.

Reads raw bytes from a tty descriptor and translates them into normalized key
tokens (``"UP"``, ``"ENTER"``, ``"CTRL_C"``, ``"F12"`` or a single typed
character). A timeout yields ``""``; end of input raises ``EOFError``.
Sequences that decode to no known key yield ``UNKNOWN_KEY``, which no mode
binds.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
UNKNOWN_KEY = "UNKNOWN"

CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x13": "CTRL_S",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

# Final byte of ``ESC [ <params> <final>`` sequences.
CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

# Final byte of ``ESC O <final>`` (application mode) sequences.
SS3_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"P": "F1",
    b"Q": "F2",
    b"R": "F3",
    b"S": "F4",
}

# Numeric parameter of ``ESC [ <n> ~`` sequences.
TILDE_KEYS: dict[str, str] = {
    "1": "HOME",
    "7": "HOME",
    "4": "END",
    "8": "END",
    "3": "DELETE",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "11": "F1",
    "24": "F12",
}

MAX_SEQUENCE_BYTES = 16


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class KeyReader:
    """Decode key tokens from one descriptor.

    Bytes read past the end of a key (Alt+key arrives as ``ESC`` plus the key)
    are replayed on the next call and belong to this reader only.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []

    def __call__(self, timeout_ms: int | None = None) -> str:
        return self.read_key(timeout_ms)

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def _decode_text(self, first: bytes) -> str:
        """Complete a multi-byte UTF-8 character started by ``first``."""
        data = first
        for _ in range(_utf8_length(first[0]) - 1):
            nxt = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if nxt is None:
                return UNKNOWN_KEY
            data += nxt
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return UNKNOWN_KEY

    def _decode_escape(self) -> str:
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq == b"O":
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return UNKNOWN_KEY
            return SS3_FINAL_KEYS.get(final, UNKNOWN_KEY)
        if seq != b"[":
            # Alt+key or a lone ESC followed by typing; replay the byte.
            self._pending.append(seq)
            return "ESC"

        params = b""
        while len(params) < MAX_SEQUENCE_BYTES:
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return UNKNOWN_KEY
            if part == b"~":
                number = params.decode("ascii", errors="replace").split(";", 1)[0]
                return TILDE_KEYS.get(number, UNKNOWN_KEY)
            if part.isalpha():
                return CSI_FINAL_KEYS.get(part, UNKNOWN_KEY)
            params += part
        return UNKNOWN_KEY

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Block for one key token, or return ``""`` after ``timeout_ms``.

        Raises ``EOFError`` when the descriptor reaches end of input; ``OSError``
        from the underlying read propagates unchanged.
        """
        if self._pending:
            ch = self._pending.pop(0)
        else:
            if timeout_ms is not None:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
                if not ready:
                    return ""

            ch = os.read(self.fd, 1)
            if not ch:
                raise EOFError("input closed")

        named = CONTROL_KEYS.get(ch)
        if named is not None:
            return named
        if ch == b"\x1b":
            return self._decode_escape()
        return self._decode_text(ch)
