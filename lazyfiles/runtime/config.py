"""Persistent JSON config helpers.

Stores explorer behaviour options (preview, hidden files, delete policy,
confirmation). All access is defensive: malformed or missing config falls
back safely to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "lazyfiles"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class ExplorerOptions:
    """Behaviour switches for one explorer session."""

    show_preview: bool = True
    show_hidden: bool = True
    permanent_delete: bool = True
    confirm_fs_actions: bool = True
    preview_max_lines: int = 200
    focus_poll_seconds: float = 1.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    location never breaks the explorer.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not save config %s: %s", CONFIG_PATH, exc)


def _coerce(value: object, default: object) -> object:
    """Return ``value`` when it matches the type of ``default``, else ``default``.

    Booleans are never accepted for numeric options and numbers never for
    boolean ones. Numeric options must be positive.
    """
    if isinstance(default, bool):
        return value if isinstance(value, bool) else default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value <= 0:
        return default
    if isinstance(default, int):
        return value if isinstance(value, int) else default
    return float(value)


def load_options() -> ExplorerOptions:
    """Load ``ExplorerOptions`` from config, keeping defaults for bad keys."""
    data = load_config()
    defaults = ExplorerOptions()
    values: dict[str, object] = {}
    for option in fields(ExplorerOptions):
        default = getattr(defaults, option.name)
        if option.name in data:
            values[option.name] = _coerce(data[option.name], default)
    return ExplorerOptions(**values)


def save_options(options: ExplorerOptions) -> None:
    """Persist every option while keeping unrelated config keys."""
    config = load_config()
    config.update(asdict(options))
    save_config(config)


__all__ = [
    "CONFIG_PATH",
    "ExplorerOptions",
    "load_config",
    "save_config",
    "load_options",
    "save_options",
]
