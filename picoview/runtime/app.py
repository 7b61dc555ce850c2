"""Runtime composition layer for picoview.

Builds the session state, owns the single fatal-error exit path, and runs
the loop inside the raw-mode scope so the terminal is always restored.
"""

from __future__ import annotations

import contextlib
import logging
import os
import signal
import sys

from ..ansi import CLEAR_SCREEN, CURSOR_HOME
from ..document import Document
from ..errors import TerminalError
from .config import load_escape_timeout_ms, load_log_level, load_poll_timeout_ms
from .logs import setup_logging
from .loop import RuntimeLoopTiming, run_main_loop
from .state import ViewerState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
TERMINATING_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def _exit_on_signal(signum, frame) -> None:
    raise SystemExit(EXIT_FATAL)


@contextlib.contextmanager
def exit_on_terminating_signals():
    """Turn SIGTERM/SIGHUP into ``SystemExit`` so ``finally`` blocks still run."""
    previous = {signum: signal.getsignal(signum) for signum in TERMINATING_SIGNALS}
    for signum in TERMINATING_SIGNALS:
        signal.signal(signum, _exit_on_signal)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def report_fatal(stdout_fd: int, error: TerminalError) -> None:
    """Best-effort screen reset followed by a one-line diagnostic on stderr."""
    with contextlib.suppress(OSError):
        os.write(stdout_fd, CLEAR_SCREEN + CURSOR_HOME)
    sys.stderr.write(f"picoview: {error}\n")
    sys.stderr.flush()


def run_viewer(
    document: Document,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> int:
    """Run an interactive session over ``document`` and return the exit code.

    Every ``TerminalError`` raised below, including a failed restore, ends
    here after the raw-mode scope has unwound.
    """
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()

    setup_logging(load_log_level())
    timing = RuntimeLoopTiming(
        poll_timeout_ms=load_poll_timeout_ms(),
        escape_timeout_ms=load_escape_timeout_ms(),
    )
    terminal = TerminalController(stdin_fd, stdout_fd)

    try:
        with exit_on_terminating_signals(), terminal.raw_mode():
            size = terminal.window_size()
            logger.info(
                "session start: %d lines, terminal %dx%d",
                document.line_count,
                size.rows,
                size.cols,
            )
            state = ViewerState(document=document, size=size)
            run_main_loop(state, terminal, stdin_fd, timing)
    except TerminalError as exc:
        logger.error("fatal terminal error: %s", exc, exc_info=exc)
        report_fatal(stdout_fd, exc)
        return EXIT_FATAL

    logger.info("session end")
    return EXIT_OK
