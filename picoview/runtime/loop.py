"""Main interactive event loop and key dispatcher.

Each iteration redraws when state changed, blocks (bounded) for one key,
and dispatches it. All state lives in the ``ViewerState`` passed in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..input import QUIT_KEY, Key, read_key
from ..render import render_frame
from ..viewport import move_cursor, move_end, move_home, page_move, recompute_scroll
from .state import ViewerState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

ARROW_KEYS = frozenset({Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT})
PAGE_KEYS = frozenset({Key.PAGE_UP, Key.PAGE_DOWN})


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_timeout_ms: int
    escape_timeout_ms: int


def handle_key(state: ViewerState, key: str) -> bool:
    """Apply one key to ``state``. Returns ``True`` when the viewer should quit.

    Keys without a navigation meaning are ignored and leave state clean.
    """
    if key == QUIT_KEY:
        return True

    document = state.document
    if key == Key.HOME:
        cursor = move_home(document, state.cursor)
    elif key == Key.END:
        cursor = move_end(document, state.cursor)
    elif key in PAGE_KEYS:
        cursor = page_move(document, state.cursor, key, state.size.rows)
    elif key in ARROW_KEYS:
        cursor = move_cursor(document, state.cursor, key)
    else:
        return False

    state.cursor = cursor
    state.dirty = True
    return False


def draw(state: ViewerState, terminal: TerminalController) -> None:
    """Bring scroll offsets up to date and write one full frame."""
    state.scroll = recompute_scroll(state.scroll, state.cursor, state.size)
    terminal.write(render_frame(state.document, state.cursor, state.scroll, state.size))
    state.dirty = False


def run_main_loop(
    state: ViewerState,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
) -> None:
    """Run the viewer until the quit key, then clear the screen.

    The terminal must already be in raw mode; restoring it is the caller's job.
    """
    while True:
        if state.dirty:
            draw(state, terminal)

        key = read_key(
            stdin_fd,
            timeout_ms=timing.poll_timeout_ms,
            escape_timeout_ms=timing.escape_timeout_ms,
        )
        if key == "":
            continue
        if handle_key(state, key):
            logger.debug("quit at row %d col %d", state.cursor.row, state.cursor.col)
            terminal.clear_screen()
            return
