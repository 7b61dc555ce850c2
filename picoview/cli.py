"""Command-line front door for picoview.

Parses the optional file argument and loads it before the terminal is
touched, then dispatches into the interactive viewer runtime.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .document import Document
from .runtime import run_viewer


def load_document(path: Path | None) -> Document:
    """Return the document for ``path``, or an empty one when no path is given.

    Load failures end the process with status 1 and a ``<path>: <reason>``
    message.
    """
    if path is None:
        return Document()
    try:
        return Document.load(path)
    except OSError as exc:
        raise SystemExit(f"{path}: {exc.strerror or exc}") from exc


def main() -> int:
    """Parse CLI arguments and run the viewer; returns the process exit code."""
    parser = argparse.ArgumentParser(
        prog="picoview",
        description="View a text file in the terminal with cursor navigation (Ctrl-Q quits).",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to open read-only. Omit for an empty buffer.")
    args = parser.parse_args()

    path = Path(args.path) if args.path is not None else None
    document = load_document(path)
    return run_viewer(document)


if __name__ == "__main__":
    raise SystemExit(main())
