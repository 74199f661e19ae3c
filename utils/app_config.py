"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores user preferences that must be known before opening the DB (the data
folder and the log level). Config lives in ~/.expenseiq/config.json to avoid a
bootstrapping problem.
"""
import json
import logging
import os
from pathlib import Path

import structlog

CONFIG_DIR = Path.home() / ".expenseiq"
CONFIG_FILE = CONFIG_DIR / "config.json"
SEED_ENV_VAR = "EXPENSEIQ_SEED"

logger = structlog.get_logger()


def load_config(path: Path | None = None) -> dict:
    """Returns {} on a missing or corrupt file; never raises."""
    try:
        with open(path or CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("config_unreadable", error=str(e))
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict, path: Path | None = None) -> None:
    """Creates the config folder if needed; atomic write via .tmp + os.replace()."""
    target = path or CONFIG_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, target)
    except OSError as e:
        logger.warning("config_save_failed", error=str(e))
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
    level = str(load_config().get("log_level", "WARNING")).upper()
    return level if isinstance(logging.getLevelName(level), int) else "WARNING"


def get_random_seed() -> int | None:
    """Integer seed from EXPENSEIQ_SEED, or None for a non-deterministic source."""
    raw = os.environ.get(SEED_ENV_VAR, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("seed_ignored", variable=SEED_ENV_VAR, value=raw)
        return None
