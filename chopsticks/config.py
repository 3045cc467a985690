"""Persistent JSON config helpers.

Stores the snippet-file override, the command shell, the highlight style
and the list pane width.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "chopsticks"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_SHELL = "/bin/sh"
DEFAULT_STYLE = "monokai"
DEFAULT_LIST_PANE_PERCENT = 50.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored; config is a convenience, not user data.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_nonempty_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_snippets_path() -> Path | None:
    """Return the configured snippet document path, if any."""
    value = _load_nonempty_string("snippets_path")
    if value is None:
        return None
    return Path(value).expanduser()


def load_shell() -> str:
    """Return the shell used to interpret snippet commands."""
    return _load_nonempty_string("shell") or DEFAULT_SHELL


def load_style() -> str:
    """Return the Pygments style used to color commands."""
    return _load_nonempty_string("style") or DEFAULT_STYLE


def load_list_pane_percent() -> float:
    """Read the list column width constrained to the open interval (0, 100)."""
    value = load_config().get("list_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_LIST_PANE_PERCENT
    if value <= 0 or value >= 100:
        return DEFAULT_LIST_PANE_PERCENT
    return float(value)


def save_list_pane_percent(percent: float) -> None:
    """Persist the list column width, clamped to ``[10, 90]``."""
    config = load_config()
    config["list_pane_percent"] = round(max(10.0, min(90.0, float(percent))), 2)
    save_config(config)
