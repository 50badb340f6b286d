"""Persistent JSON config helpers.

Stores the UI theme, raw-mode highlight style, starting tab, network name and
log level. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .runtime.state import TabId, is_tab_id

APP_NAME = "daodash"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored; an unwritable config
    must never stop the dashboard.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception as exc:
        logger.debug("could not save config to %s: %s", CONFIG_PATH, exc)


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_string(key: str, value: str) -> None:
    stripped = str(value).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    _save_string("theme", theme_name)


def load_style_name() -> str | None:
    """Load the pygments style used to highlight raw JSON."""
    return _load_string("style")


def load_default_tab() -> TabId | None:
    value = _load_string("default_tab")
    if value is None:
        return None
    value = value.lower()
    return value if is_tab_id(value) else None


def load_network() -> str | None:
    value = _load_string("network")
    return value.lower() if value else None


def load_log_level() -> str | None:
    """Return a logging level name, ignoring anything ``logging`` would reject."""
    value = _load_string("log_level")
    if value is None:
        return None
    value = value.upper()
    return value if value in LOG_LEVELS else None
