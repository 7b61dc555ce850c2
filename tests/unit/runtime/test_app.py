"""Tests for the top-level viewer entry point and its fatal-error funnel."""

from __future__ import annotations

import contextlib
import io
import os
import signal
import unittest
from unittest import mock

from picoview.document import Document
from picoview.errors import TerminalError
from picoview.runtime import app


class RunViewerFatalPathTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("picoview.runtime.app.setup_logging")
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_non_terminal_stdin_exits_with_status_one(self) -> None:
        stdin_r, stdin_w = os.pipe()
        stdout_r, stdout_w = os.pipe()
        stderr = io.StringIO()
        try:
            with mock.patch("sys.stderr", stderr):
                code = app.run_viewer(Document([b"x"]), stdin_fd=stdin_r, stdout_fd=stdout_w)
            written = os.read(stdout_r, 1024)
        finally:
            for fd in (stdin_r, stdin_w, stdout_r, stdout_w):
                os.close(fd)

        self.assertEqual(code, 1)
        self.assertEqual(written, b"\x1b[2J\x1b[H")
        self.assertTrue(stderr.getvalue().startswith("picoview: tcgetattr: "))

    def test_error_inside_session_restores_terminal_before_reporting(self) -> None:
        events: list[str] = []
        controller = mock.MagicMock()

        @contextlib.contextmanager
        def raw_mode():
            events.append("enter")
            try:
                yield controller
            finally:
                events.append("restore")

        controller.raw_mode.side_effect = raw_mode
        controller.window_size.side_effect = TerminalError("get_window_size", ValueError("no reply"))

        def fake_report(stdout_fd, error):
            events.append(f"report:{error}")

        with mock.patch("picoview.runtime.app.TerminalController", return_value=controller), mock.patch(
            "picoview.runtime.app.report_fatal", side_effect=fake_report
        ):
            code = app.run_viewer(Document(), stdin_fd=0, stdout_fd=1)

        self.assertEqual(code, 1)
        self.assertEqual(events, ["enter", "restore", "report:get_window_size: no reply"])

    def test_signal_handlers_are_restored_after_session(self) -> None:
        before = {signum: signal.getsignal(signum) for signum in app.TERMINATING_SIGNALS}
        with app.exit_on_terminating_signals():
            for signum in app.TERMINATING_SIGNALS:
                self.assertIs(signal.getsignal(signum), app._exit_on_signal)
        after = {signum: signal.getsignal(signum) for signum in app.TERMINATING_SIGNALS}
        self.assertEqual(before, after)

    def test_terminating_signal_raises_system_exit(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            app._exit_on_signal(signal.SIGTERM, None)
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
