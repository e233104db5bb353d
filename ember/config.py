from __future__ import annotations

import logging
import os
from pathlib import Path

# Defaults
_DEFAULT_HISTORY_FILE = ".ember_history"
_DEFAULT_HISTORY_LENGTH = 1000
_DEFAULT_LOG_LEVEL = "WARNING"


def path_from_env(var: str, default: Path) -> Path:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return Path(raw.strip()).expanduser()


def get_history_path() -> Path:
    return path_from_env('EMBER_HISTORY_PATH', Path.home() / _DEFAULT_HISTORY_FILE)


def get_history_length() -> int:
    raw = os.environ.get('EMBER_HISTORY_LENGTH', '')
    try:
        length = int(raw)
    except ValueError:
        return _DEFAULT_HISTORY_LENGTH
    # readline treats a negative length as "unlimited"; keep that meaning
    return length if length != 0 else _DEFAULT_HISTORY_LENGTH


def get_log_level() -> int:
    name = os.environ.get('EMBER_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.WARNING
