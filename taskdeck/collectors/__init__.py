"""Collector helpers and package exports.

Collectors are read-only adapters over snapshot files written by the task
tracker and the agent backend. They never raise on bad input; problems are
reported in ``Snapshot.errors``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TASKS_FILE = "tasks.json"
SESSIONS_FILE = "sessions.json"


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("unable to read %s: %s", path, exc)
        return None


def rows_from_value(value: object, *keys: str) -> list[dict]:
    if isinstance(value, list):
        return [row for row in value if isinstance(row, dict)]
    if not isinstance(value, dict):
        return []
    for key in keys:
        rows = value.get(key)
        if isinstance(rows, list):
            return [row for row in rows if isinstance(row, dict)]
    return []


def env_data_dir() -> Path:
    return Path(os.environ.get("TASKDECK_DIR", Path.home() / ".taskdeck"))
