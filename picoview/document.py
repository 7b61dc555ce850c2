"""In-memory line store for the viewed file.

Lines are raw bytes without their terminators; the store is filled once
during load and only read afterwards.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class Document:
    def __init__(self, lines: list[bytes] | None = None) -> None:
        self._lines: list[bytes] = list(lines) if lines else []

    @classmethod
    def load(cls, path: Path) -> Document:
        """Read ``path`` as bytes and split it into lines.

        Every trailing ``\\r``/``\\n`` is stripped per line and a final line
        without a terminator is kept. ``OSError`` propagates to the caller.
        """
        data = Path(path).read_bytes()
        document = cls()
        pieces = data.split(b"\n")
        if pieces and pieces[-1] == b"":
            pieces.pop()
        for piece in pieces:
            document.append_line(piece.rstrip(b"\r\n"))
        logger.debug("loaded %s (%d lines)", path, document.line_count)
        return document

    def append_line(self, line: bytes) -> None:
        self._lines.append(bytes(line))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def line(self, row: int) -> bytes:
        return self._lines[row]

    def line_length(self, row: int) -> int:
        """Return the byte length of ``row``, or 0 at and past end-of-document."""
        if 0 <= row < len(self._lines):
            return len(self._lines[row])
        return 0
