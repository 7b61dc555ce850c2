"""Frame rendering for the viewer.

A frame is accumulated into one ``bytearray`` and handed to the terminal in
a single write, so the screen never shows a half-drawn state.
"""

from __future__ import annotations

from .. import __version__
from ..ansi import (
    CLEAR_LINE,
    CURSOR_HOME,
    HIDE_CURSOR,
    ROW_SEPARATOR,
    SHOW_CURSOR,
    cursor_position,
)
from ..document import Document
from ..viewport import CursorPosition, ScrollOffset, TerminalSize

FILLER = b"~"


def welcome_banner() -> bytes:
    return f"picoview -- version {__version__}".encode("ascii")


def _banner_row(cols: int) -> bytes:
    """Center the welcome banner in ``cols`` cells, filler in the first cell."""
    banner = welcome_banner()[: max(0, cols)]
    padding = (cols - len(banner)) // 2
    out = bytearray()
    if padding:
        out += FILLER
        padding -= 1
    out += b" " * padding
    out += banner
    return bytes(out)


def draw_rows(buffer: bytearray, document: Document, scroll: ScrollOffset, size: TerminalSize) -> None:
    """Append every visible screen row to ``buffer``.

    Rows inside the document show the slice starting at ``scroll.col``;
    rows past the end show ``~``, except the banner on the vertical-third
    row of an empty document.
    """
    banner_row = size.rows // 3
    for y in range(size.rows):
        file_row = y + scroll.row
        if file_row >= document.line_count:
            if document.is_empty and y == banner_row:
                buffer += _banner_row(size.cols)
            else:
                buffer += FILLER
        else:
            line = document.line(file_row)
            length = max(0, min(len(line) - scroll.col, size.cols))
            buffer += line[scroll.col : scroll.col + length]

        buffer += CLEAR_LINE
        if y < size.rows - 1:
            buffer += ROW_SEPARATOR


def render_frame(
    document: Document,
    cursor: CursorPosition,
    scroll: ScrollOffset,
    size: TerminalSize,
) -> bytes:
    """Build the full-screen redraw payload for one frame."""
    buffer = bytearray()
    buffer += HIDE_CURSOR
    buffer += CURSOR_HOME
    draw_rows(buffer, document, scroll, size)
    buffer += cursor_position(cursor.row - scroll.row + 1, cursor.col - scroll.col + 1)
    buffer += SHOW_CURSOR
    return bytes(buffer)

