"""Fatal error type shared by terminal, input, and runtime layers.

Raised where a terminal operation fails and propagated untouched to the
runtime app, which restores the terminal before reporting it.
"""

from __future__ import annotations


class TerminalError(Exception):
    """Unrecoverable terminal or I/O failure tagged with the failing operation."""

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(operation, cause)

    def __str__(self) -> str:
        if self.cause is None:
            return self.operation
        reason = getattr(self.cause, "strerror", None)
        if reason is None and len(self.cause.args) == 2 and isinstance(self.cause.args[1], str):
            # termios.error carries (errno, message) without strerror.
            reason = self.cause.args[1]
        return f"{self.operation}: {reason or self.cause}"
