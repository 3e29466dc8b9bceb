"""Regression tests for raw-key decoding.

Covers ESC timing, CSI/SS3 sequences, control-key tokens, and UTF-8 input.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from lazypick.input import UNKNOWN_KEY, KeyReader


class ReadKeyRegressionTests(unittest.TestCase):
    def _read_all(self, data: bytes, count: int = 1) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, data)
            reader = KeyReader(read_fd)
            return [reader.read_key(timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4), ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_application_mode_arrows_and_function_keys(self) -> None:
        self.assertEqual(self._read_all(b"\x1bOA\x1bOP\x1bOQ", 3), ["UP", "F1", "F2"])

    def test_tilde_sequences(self) -> None:
        keys = self._read_all(b"\x1b[5~\x1b[6~\x1b[24~\x1b[1~\x1b[4~", 5)

        self.assertEqual(keys, ["PAGE_UP", "PAGE_DOWN", "F12", "HOME", "END"])

    def test_modified_arrow_maps_to_plain_arrow(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;3D"), ["LEFT"])

    def test_unmapped_sequences_are_unknown_not_escape(self) -> None:
        for data in (b"\x1b[Z", b"\x1b[2~", b"\x1b[15~", b"\x1b[P", b"\x1bOx"):
            with self.subTest(data=data):
                self.assertEqual(self._read_all(data), [UNKNOWN_KEY])

    def test_truncated_sequence_is_unknown(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;"), [UNKNOWN_KEY])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_control_keys(self) -> None:
        keys = self._read_all(b"\x03\x0e\x10\x13\x15\t\x7f\r", 8)

        self.assertEqual(
            keys,
            ["CTRL_C", "CTRL_N", "CTRL_P", "CTRL_S", "CTRL_U", "TAB", "BACKSPACE", "ENTER"],
        )

    def test_multibyte_character_is_one_key(self) -> None:
        self.assertEqual(self._read_all("éx".encode("utf-8"), 2), ["é", "x"])

    def test_truncated_or_invalid_utf8_is_unknown(self) -> None:
        self.assertEqual(self._read_all(b"\xc3"), [UNKNOWN_KEY])
        self.assertEqual(self._read_all(b"\x80"), [UNKNOWN_KEY])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(self._read_all(b""), [""])

    def test_closed_input_raises_eof(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            with self.assertRaises(EOFError):
                KeyReader(read_fd).read_key(timeout_ms=20)
        finally:
            os.close(read_fd)

    def test_replayed_byte_stays_with_its_reader(self) -> None:
        first_read, first_write = os.pipe()
        second_read, second_write = os.pipe()
        try:
            os.write(first_write, b"\x1bb")
            first = KeyReader(first_read)
            second = KeyReader(second_read)

            self.assertEqual(first.read_key(timeout_ms=20), "ESC")
            self.assertEqual(second.read_key(timeout_ms=20), "")
            self.assertEqual(first.read_key(timeout_ms=20), "b")
        finally:
            for fd in (first_read, first_write, second_read, second_write):
                os.close(fd)


if __name__ == "__main__":
    unittest.main()
