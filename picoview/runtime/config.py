"""Read-only JSON config helpers.

Holds input timing and log verbosity. The file is never written; malformed
or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "picoview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_ESCAPE_TIMEOUT_MS = 100
DEFAULT_POLL_TIMEOUT_MS = 100
DEFAULT_LOG_LEVEL = "WARNING"
MAX_TIMEOUT_MS = 1000


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_timeout_ms(key: str, default: int) -> int:
    """Read a millisecond timeout constrained to ``[1, MAX_TIMEOUT_MS]``.

    Booleans, non-integers, and out-of-range values fall back to ``default``.
    """
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < 1 or value > MAX_TIMEOUT_MS:
        return default
    return value


def load_escape_timeout_ms() -> int:
    """Per-byte wait used to complete an escape sequence."""
    return _load_timeout_ms("escape_timeout_ms", DEFAULT_ESCAPE_TIMEOUT_MS)


def load_poll_timeout_ms() -> int:
    """Idle wait between key reads in the main loop."""
    return _load_timeout_ms("poll_timeout_ms", DEFAULT_POLL_TIMEOUT_MS)


def load_log_level() -> str:
    """Return a valid ``logging`` level name, defaulting to ``WARNING``."""
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    name = value.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name
