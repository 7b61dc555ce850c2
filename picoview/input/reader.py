"""Low-level terminal input decoding.

Reads raw bytes from stdin with ``select``-bounded waits and hands them to
``decode_key`` until one logical key is complete.
"""

from __future__ import annotations

import os
import select

from ..errors import TerminalError
from .keys import Key, decode_key

ESC_SEQUENCE_TIMEOUT_MS = 100


def read_byte(fd: int, timeout_ms: int | None) -> bytes | None:
    """Read one byte from ``fd``, waiting at most ``timeout_ms``.

    ``None`` means no byte arrived: the wait expired, or the descriptor
    reported a transient would-block/interrupt. An empty read after
    ``select`` reported the descriptor ready is end of input. That and any
    other ``OSError`` are fatal and raised as ``TerminalError("read")``.
    """
    timeout = None if timeout_ms is None else max(0.0, timeout_ms / 1000.0)
    try:
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        ch = os.read(fd, 1)
    except (BlockingIOError, InterruptedError):
        return None
    except OSError as exc:
        raise TerminalError("read", exc) from exc
    if not ch:
        raise TerminalError("read", EOFError("end of input"))
    return ch


def read_key(
    fd: int,
    timeout_ms: int | None = None,
    escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS,
) -> str:
    """Block for one key and return it.

    Returns ``""`` when nothing arrives within ``timeout_ms`` so the caller
    can run idle work. Bytes following ESC are each awaited for at most
    ``escape_timeout_ms``; a sequence cut short yields ``Key.ESCAPE``.
    """
    first = read_byte(fd, timeout_ms)
    if first is None:
        return ""

    window = first
    key = decode_key(window)
    while key is None:
        nxt = read_byte(fd, escape_timeout_ms)
        if nxt is None:
            return Key.ESCAPE
        window += nxt
        key = decode_key(window)
    return key
