"""Logical key values and the pure escape-sequence decoder.

``decode_key`` works over a bounded byte window so escape handling can be
tested without a terminal; ``reader`` feeds it bytes as they arrive.
"""

from __future__ import annotations

from enum import Enum

ESC_BYTE = 0x1B
MAX_SEQUENCE_BYTES = 4


class Key(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    HOME = "HOME"
    END = "END"
    DELETE = "DELETE"
    PAGE_UP = "PAGE_UP"
    PAGE_DOWN = "PAGE_DOWN"
    ESCAPE = "ESC"


def ctrl_key(ch: str) -> str:
    """Return the literal key produced by Ctrl+``ch``."""
    return chr(ord(ch) & 0x1F)


QUIT_KEY = ctrl_key("q")

# ESC [ <letter>
_CSI_LETTER_KEYS: dict[bytes, Key] = {
    b"A": Key.UP,
    b"B": Key.DOWN,
    b"C": Key.RIGHT,
    b"D": Key.LEFT,
    b"H": Key.HOME,
    b"F": Key.END,
}

# ESC [ <digit> ~
_CSI_TILDE_KEYS: dict[bytes, Key] = {
    b"1": Key.HOME,
    b"2": Key.END,
    b"3": Key.DELETE,
    b"5": Key.PAGE_UP,
    b"6": Key.PAGE_DOWN,
    b"7": Key.HOME,
    b"8": Key.END,
}

# ESC O <letter>
_SS3_KEYS: dict[bytes, Key] = {
    b"H": Key.HOME,
    b"F": Key.END,
}


def decode_key(window: bytes) -> str | None:
    """Decode the key at the start of ``window``.

    Returns ``None`` while the window is a valid but incomplete prefix and
    more bytes should be read. Bytes other than ESC are literal keys;
    escape sequences that are not recognised degrade to ``Key.ESCAPE``.
    """
    if not window:
        return None
    if window[0] != ESC_BYTE:
        return window[:1].decode("latin-1")
    if len(window) < 2:
        return None

    introducer = window[1:2]
    if introducer not in (b"[", b"O"):
        return Key.ESCAPE
    if len(window) < 3:
        return None

    final = window[2:3]
    if introducer == b"O":
        return _SS3_KEYS.get(final, Key.ESCAPE)
    if not final.isdigit():
        return _CSI_LETTER_KEYS.get(final, Key.ESCAPE)
    if len(window) < MAX_SEQUENCE_BYTES:
        return None
    if window[3:4] != b"~":
        return Key.ESCAPE
    return _CSI_TILDE_KEYS.get(final, Key.ESCAPE)
