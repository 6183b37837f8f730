"""Configuration file management for pushup-league.

Reads and writes ~/.pushup-league/config.json for settings that don't belong
in the user state (e.g., database location, auto-locking).
"""
from __future__ import annotations

import json
from pathlib import Path

DEFAULT_CONFIG_PATH: Path = Path.home() / ".pushup-league" / "config.json"


def load_config(config_path: Path | None = None) -> dict:
    """Load config from JSON file. Returns {} if file missing or invalid."""
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}


def save_config(data: dict, config_path: Path | None = None) -> None:
    """Write config dict to JSON file. Creates parent dirs if needed."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def get_db_path(config_path: Path | None = None) -> Path | None:
    """Return the configured database path, or None to use the default."""
    config = load_config(config_path)
    raw = config.get("db_path")
    if raw:
        return Path(raw).expanduser()
    return None


def set_db_path(path: Path, config_path: Path | None = None) -> None:
    """Persist the database path to config."""
    config = load_config(config_path)
    config["db_path"] = str(path)
    save_config(config, config_path)


def get_auto_lock(config_path: Path | None = None) -> bool:
    """Whether a day is locked automatically after logging a workout."""
    return bool(load_config(config_path).get("auto_lock", False))


def set_auto_lock(enabled: bool, config_path: Path | None = None) -> None:
    config = load_config(config_path)
    config["auto_lock"] = bool(enabled)
    save_config(config, config_path)
