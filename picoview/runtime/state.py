from __future__ import annotations

from dataclasses import dataclass, field

from ..document import Document
from ..viewport import CursorPosition, ScrollOffset, TerminalSize


@dataclass
class ViewerState:
    document: Document
    size: TerminalSize
    cursor: CursorPosition = field(default_factory=CursorPosition)
    scroll: ScrollOffset = field(default_factory=ScrollOffset)
    dirty: bool = True
