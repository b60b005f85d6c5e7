"""Behaviour constants: edit here to tweak limits and where data lives.

Each value can be overridden from the environment with the matching
SHOPLIST_* variable.
"""

import os
from pathlib import Path

ENV_PREFIX = "SHOPLIST"


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(f"{ENV_PREFIX}_{name}")
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(f"{ENV_PREFIX}_{name}")
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(f"{ENV_PREFIX}_{name}")
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


# ── Names ─────────────────────────────────────────────────────────────────────
MAX_TASK_NAME_LENGTH = _env_int("MAX_TASK_NAME", 30)
DEFAULT_LIST_NAME = _env_str("DEFAULT_LIST_NAME", "My list")

# ── Storage ───────────────────────────────────────────────────────────────────
DATA_DIR = _env_path("DATA_DIR", Path.home() / ".shoplist")

TASK_LISTS_KEY = "taskLists"
CURRENT_LIST_KEY = "currentList"
LAST_SELECTED_INDEX_KEY = "lastSelectedIndex"

NO_SELECTION = -1
