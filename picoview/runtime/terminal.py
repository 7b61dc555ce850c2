"""Terminal control helpers for the viewer session.

Owns the raw-mode lifecycle (capture, apply, restore exactly once) and the
window-size query with its cursor-position fallback probe.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

from ..ansi import (
    CLEAR_SCREEN,
    CURSOR_HOME,
    CURSOR_TO_BOTTOM_RIGHT,
    QUERY_CURSOR_POSITION,
    parse_cursor_position_report,
)
from ..errors import TerminalError
from ..input import read_byte
from ..viewport import TerminalSize

logger = logging.getLogger(__name__)

# Deciseconds; a read returns empty once this elapses without input.
READ_TIMEOUT_DECISECONDS = 1
CURSOR_REPORT_MAX_BYTES = 32
CURSOR_REPORT_TIMEOUT_MS = 500


def raw_attributes(saved: list) -> list:
    """Derive raw-mode termios attributes from a saved ``tcgetattr`` list."""
    mode = list(saved)
    mode[tty.IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    mode[tty.OFLAG] &= ~termios.OPOST
    mode[tty.CFLAG] |= termios.CS8
    mode[tty.LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    mode[tty.CC] = list(mode[tty.CC])
    mode[tty.CC][termios.VMIN] = 0
    mode[tty.CC][termios.VTIME] = READ_TIMEOUT_DECISECONDS
    return mode


class TerminalController:
    """Manage raw-mode transitions and screen-level writes for one terminal."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state: list | None = None

    @property
    def raw_enabled(self) -> bool:
        return self._saved_tty_state is not None

    def enable_raw_mode(self) -> None:
        """Capture current attributes and switch the terminal to raw input."""
        try:
            saved = termios.tcgetattr(self.stdin_fd)
        except termios.error as exc:
            raise TerminalError("tcgetattr", exc) from exc
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, raw_attributes(saved))
        except termios.error as exc:
            raise TerminalError("tcsetattr", exc) from exc
        self._saved_tty_state = saved

    def disable_raw_mode(self) -> None:
        """Reapply the captured attributes; later calls are no-ops."""
        saved = self._saved_tty_state
        if saved is None:
            return
        self._saved_tty_state = None
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, saved)
        except termios.error as exc:
            raise TerminalError("tcsetattr", exc) from exc

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/restore."""
        self.enable_raw_mode()
        try:
            yield self
        finally:
            self.disable_raw_mode()

    def write(self, payload: bytes) -> None:
        """Send ``payload`` to the terminal in a single ``os.write``."""
        try:
            os.write(self.stdout_fd, payload)
        except OSError as exc:
            raise TerminalError("write", exc) from exc

    def clear_screen(self) -> None:
        self.write(CLEAR_SCREEN + CURSOR_HOME)

    def window_size(self) -> TerminalSize:
        """Return the terminal size, probing with the cursor when ioctl fails.

        Raises ``TerminalError("get_window_size")`` when neither works.
        """
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError as exc:
            logger.warning("window size query failed (%s); probing cursor position", exc)
        else:
            if size.columns > 0 and size.lines > 0:
                return TerminalSize(rows=size.lines, cols=size.columns)
            logger.warning("window size query reported zero width; probing cursor position")

        self.write(CURSOR_TO_BOTTOM_RIGHT)
        rows, cols = self.cursor_position()
        return TerminalSize(rows=rows, cols=cols)

    def cursor_position(self) -> tuple[int, int]:
        """Ask the terminal where the cursor is via ``ESC [ 6 n``.

        Reads the ``ESC [ rows ; cols R`` reply byte by byte; a missing or
        malformed reply raises ``TerminalError("get_window_size")``.
        """
        self.write(QUERY_CURSOR_POSITION)
        reply = bytearray()
        while len(reply) < CURSOR_REPORT_MAX_BYTES - 1:
            ch = read_byte(self.stdin_fd, CURSOR_REPORT_TIMEOUT_MS)
            if ch is None or ch == b"R":
                break
            reply += ch

        position = parse_cursor_position_report(bytes(reply))
        if position is None or position[0] <= 0 or position[1] <= 0:
            raise TerminalError("get_window_size", ValueError(f"unexpected cursor report {bytes(reply)!r}"))
        return position
