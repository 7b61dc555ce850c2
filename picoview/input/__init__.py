"""Input-layer public API for key decoding.

Pure decoding (``decode_key``) is split from descriptor reads (``read_key``)
so escape handling can be exercised without a terminal.
"""

from .keys import QUIT_KEY, Key, ctrl_key, decode_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_byte, read_key

__all__ = [
    "Key",
    "QUIT_KEY",
    "ctrl_key",
    "decode_key",
    "read_byte",
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
]
