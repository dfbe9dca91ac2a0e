"""Configuration loading for tradejournal.

Settings live in a TOML file, by default ``~/.config/tradejournal/config.toml``.
The ``TRADEJOURNAL_CONFIG`` environment variable points at another file.
Values missing from the file fall back to DEFAULT_CONFIG.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TRADEJOURNAL_CONFIG"

CONFIG_DIR = Path.home() / ".config" / "tradejournal"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "tradejournal.db"

DEFAULT_CONFIG: dict = {
    "storage": {
        "db_path": str(DEFAULT_DB_PATH),
    },
    "defaults": {
        "fee_rate": 0.1,
        "leverage": 1.0,
        "timeframe": "1h",
    },
    "display": {
        "currency": "$",
        "top_symbols": 10,
    },
    "journal": {
        "seed_sample_data": False,
    },
}


def get_config_path() -> Path:
    """Path of the config file, honoring the environment override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def _merge(base: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration, layered over the defaults.

    A missing file is not an error. A file that cannot be parsed is logged
    and ignored.

    Args:
        path: Optional config file path. Uses get_config_path() if not provided.

    Returns:
        Configuration dictionary.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        user_config = toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Could not read config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    return _merge(DEFAULT_CONFIG, user_config)


def get_db_path(config: dict) -> Path:
    """Database path from config, with ``~`` expanded."""
    return Path(config.get("storage", {}).get("db_path", str(DEFAULT_DB_PATH))).expanduser()
