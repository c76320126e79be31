"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores user preferences that must be known before opening the DB (db_folder,
log_level). Config lives in ~/.finance_tracker/config.json.
"""
import json
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".finance_tracker"
CONFIG_FILE = CONFIG_DIR / "config.json"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def load_config() -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict) -> None:
    """Creates the config dir if needed; atomic write via .tmp + os.replace()."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    tmp = CONFIG_FILE.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, CONFIG_FILE)
    finally:
        tmp.unlink(missing_ok=True)


def get_db_folder() -> str | None:
    """Return config["db_folder"] or None if not set."""
    return load_config().get("db_folder")


def set_db_folder(path: str | None) -> None:
    """Update db_folder in config and save."""
    config = load_config()
    if path is None:
        config.pop("db_folder", None)
    else:
        config["db_folder"] = path
    save_config(config)


def get_log_level() -> str:
    level = str(load_config().get("log_level", "INFO")).upper()
    return level if level in LOG_LEVELS else "INFO"


def set_log_level(level: str) -> None:
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    config = load_config()
    config["log_level"] = level
    save_config(config)


def get_log_file() -> Path:
    return CONFIG_DIR / "logs.txt"
