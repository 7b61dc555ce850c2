"""Regression tests for descriptor-level key reads.

Uses pipes in place of a terminal to cover ESC timing, sequence assembly,
idle timeouts, end of input, and fatal read errors.
"""

from __future__ import annotations

import errno
import os
import time
import unittest
from unittest import mock

from picoview.errors import TerminalError
from picoview.input import Key, read_byte, read_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        os.close(self.read_fd)
        os.close(self.write_fd)

    def test_single_escape_returns_esc_after_timeout(self) -> None:
        os.write(self.write_fd, b"\x1b")
        started = time.monotonic()
        key = read_key(self.read_fd, timeout_ms=20, escape_timeout_ms=20)
        elapsed = time.monotonic() - started

        self.assertIs(key, Key.ESCAPE)
        self.assertLess(elapsed, 0.5)

    def test_arrow_sequence_is_recognized(self) -> None:
        os.write(self.write_fd, b"\x1b[A")
        self.assertIs(read_key(self.read_fd, timeout_ms=20, escape_timeout_ms=20), Key.UP)

    def test_delete_sequence_is_recognized(self) -> None:
        os.write(self.write_fd, b"\x1b[3~")
        self.assertIs(read_key(self.read_fd, timeout_ms=20, escape_timeout_ms=20), Key.DELETE)

    def test_ss3_home_is_recognized(self) -> None:
        os.write(self.write_fd, b"\x1bOH")
        self.assertIs(read_key(self.read_fd, timeout_ms=20, escape_timeout_ms=20), Key.HOME)

    def test_truncated_tilde_sequence_degrades_to_escape(self) -> None:
        os.write(self.write_fd, b"\x1b[5")
        self.assertIs(read_key(self.read_fd, timeout_ms=20, escape_timeout_ms=20), Key.ESCAPE)

    def test_consecutive_keys_are_read_in_order(self) -> None:
        os.write(self.write_fd, b"\x1b[Bx\x1b[6~")
        keys = [read_key(self.read_fd, timeout_ms=20, escape_timeout_ms=20) for _ in range(3)]
        self.assertEqual(keys, [Key.DOWN, "x", Key.PAGE_DOWN])

    def test_escape_with_unknown_introducer_keeps_following_key(self) -> None:
        os.write(self.write_fd, b"\x1bqz")
        first = read_key(self.read_fd, timeout_ms=20, escape_timeout_ms=20)
        second = read_key(self.read_fd, timeout_ms=20, escape_timeout_ms=20)
        self.assertIs(first, Key.ESCAPE)
        self.assertEqual(second, "z")

    def test_idle_timeout_returns_empty_string(self) -> None:
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")

    def test_read_byte_returns_none_when_nothing_ready(self) -> None:
        self.assertIsNone(read_byte(self.read_fd, 10))

    def test_would_block_is_not_fatal(self) -> None:
        os.write(self.write_fd, b"a")
        with mock.patch("picoview.input.reader.os.read", side_effect=BlockingIOError(errno.EAGAIN, "again")):
            self.assertIsNone(read_byte(self.read_fd, 10))

    def test_other_read_errors_are_fatal(self) -> None:
        os.write(self.write_fd, b"a")
        with mock.patch("picoview.input.reader.os.read", side_effect=OSError(errno.EIO, "Input/output error")):
            with self.assertRaises(TerminalError) as ctx:
                read_byte(self.read_fd, 10)

        self.assertEqual(ctx.exception.operation, "read")
        self.assertEqual(str(ctx.exception), "read: Input/output error")

    def test_end_of_input_is_fatal(self) -> None:
        os.write(self.write_fd, b"q")
        os.close(self.write_fd)
        self.write_fd = os.open(os.devnull, os.O_WRONLY)

        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "q")
        with self.assertRaises(TerminalError) as ctx:
            read_key(self.read_fd, timeout_ms=10)

        self.assertEqual(ctx.exception.operation, "read")
        self.assertEqual(str(ctx.exception), "read: end of input")


if __name__ == "__main__":
    unittest.main()
