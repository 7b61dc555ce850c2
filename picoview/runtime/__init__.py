"""Viewer session: terminal control, main loop, config and logging."""

from .app import run_viewer

__all__ = ["run_viewer"]
