"""VT100/ANSI control sequences emitted and parsed by the viewer.

Output sequences are bytes so frames can be assembled without re-encoding.
The cursor-position report parser backs the window-size fallback probe.
"""

from __future__ import annotations

import re

ESC = b"\x1b"
HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
CLEAR_SCREEN = b"\x1b[2J"
ROW_SEPARATOR = b"\r\n"
QUERY_CURSOR_POSITION = b"\x1b[6n"
CURSOR_TO_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"

CURSOR_POSITION_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)")


def cursor_position(row: int, col: int) -> bytes:
    """Return the escape that moves the cursor to 1-based ``row``/``col``."""
    return f"\x1b[{row};{col}H".encode("ascii")


def parse_cursor_position_report(reply: bytes) -> tuple[int, int] | None:
    """Parse a ``ESC [ rows ; cols`` reply (terminating ``R`` already removed).

    Returns ``None`` unless the reply starts with the CSI introducer and
    carries two integers.
    """
    match = CURSOR_POSITION_REPORT_RE.match(reply)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))
