"""Cursor movement and scroll-offset model.

Every function here is pure: it takes the current document/cursor/scroll
values and returns new ones, so the dispatcher decides when state changes.
"""

from __future__ import annotations

from dataclasses import dataclass

from .document import Document
from .input.keys import Key


@dataclass(frozen=True)
class CursorPosition:
    """Cursor location in document coordinates (0-based)."""

    row: int = 0
    col: int = 0


@dataclass(frozen=True)
class ScrollOffset:
    """Document coordinate shown in the top-left screen cell."""

    row: int = 0
    col: int = 0


@dataclass(frozen=True)
class TerminalSize:
    rows: int
    cols: int


def clamp_cursor(document: Document, cursor: CursorPosition) -> CursorPosition:
    """Return ``cursor`` with row in ``[0, line_count]`` and column inside its row.

    The row one past the last line is the empty past-EOF row, so its only
    valid column is 0.
    """
    row = max(0, min(cursor.row, document.line_count))
    col = max(0, min(cursor.col, document.line_length(row)))
    if row == cursor.row and col == cursor.col:
        return cursor
    return CursorPosition(row=row, col=col)


def move_cursor(document: Document, cursor: CursorPosition, key: str) -> CursorPosition:
    """Apply one arrow-key movement and clamp the result.

    Left at column 0 wraps to the end of the previous row; Right at the end
    of a row wraps to column 0 of the next one. Non-arrow keys only clamp.
    """
    row, col = cursor.row, cursor.col
    on_line = row < document.line_count

    if key == Key.LEFT:
        if col > 0:
            col -= 1
        elif row > 0:
            row -= 1
            col = document.line_length(row)
    elif key == Key.RIGHT:
        if on_line:
            row_length = document.line_length(row)
            if col < row_length:
                col += 1
            elif col == row_length:
                row += 1
                col = 0
    elif key == Key.UP:
        if row > 0:
            row -= 1
    elif key == Key.DOWN:
        if row < document.line_count:
            row += 1

    return clamp_cursor(document, CursorPosition(row=row, col=col))


def move_home(document: Document, cursor: CursorPosition) -> CursorPosition:
    return clamp_cursor(document, CursorPosition(row=cursor.row, col=0))


def move_end(document: Document, cursor: CursorPosition) -> CursorPosition:
    return clamp_cursor(document, CursorPosition(row=cursor.row, col=document.line_length(cursor.row)))


def page_move(document: Document, cursor: CursorPosition, key: str, rows: int) -> CursorPosition:
    """Move a full screen up or down as ``rows`` single-row steps.

    Each step clamps the column against the row it lands on, so a short
    line in between narrows the final column.
    """
    step = Key.UP if key == Key.PAGE_UP else Key.DOWN
    for _ in range(max(0, rows)):
        moved = move_cursor(document, cursor, step)
        if moved == cursor:
            break
        cursor = moved
    return cursor


def recompute_scroll(scroll: ScrollOffset, cursor: CursorPosition, size: TerminalSize) -> ScrollOffset:
    """Shift ``scroll`` the minimum needed to keep ``cursor`` on screen.

    Idempotent: an already visible cursor returns ``scroll`` unchanged.
    """
    rows = max(1, size.rows)
    cols = max(1, size.cols)
    row_offset, col_offset = scroll.row, scroll.col

    if cursor.row < row_offset:
        row_offset = cursor.row
    if cursor.row >= row_offset + rows:
        row_offset = cursor.row - rows + 1
    if cursor.col < col_offset:
        col_offset = cursor.col
    if cursor.col >= col_offset + cols:
        col_offset = cursor.col - cols + 1

    if row_offset == scroll.row and col_offset == scroll.col:
        return scroll
    return ScrollOffset(row=row_offset, col=col_offset)
