"""Task snapshot collector."""

from __future__ import annotations

import logging
from pathlib import Path

from taskdeck.collectors import TASKS_FILE, read_json, rows_from_value
from taskdeck.models import Snapshot, Task

logger = logging.getLogger(__name__)


def parse_tasks(rows: list[dict]) -> tuple[list[Task], list[str]]:
    tasks: list[Task] = []
    errors: list[str] = []
    seen: set[str] = set()
    for position, row in enumerate(rows):
        if not row.get("uuid"):
            errors.append(f"task #{position} has no uuid")
            continue
        task = Task.from_dict(row)
        if task.uuid in seen:
            errors.append(f"duplicate uuid {task.uuid}")
            continue
        seen.add(task.uuid)
        tasks.append(task)
    # sorted() is stable, so equal urgencies keep export order.
    tasks = sorted(tasks, key=lambda task: -task.urgency)
    return tasks, errors


def collect(data_dir: Path) -> Snapshot:
    path = data_dir / TASKS_FILE
    if not path.exists():
        return Snapshot(
            key="tasks",
            title="Tasks",
            status="warn",
            meta={"count": 0},
            errors=[f"{TASKS_FILE} missing"],
        )

    raw = read_json(path)
    if raw is None:
        return Snapshot(
            key="tasks",
            title="Tasks",
            status="warn",
            meta={"count": 0},
            errors=[f"{TASKS_FILE} invalid"],
        )

    tasks, errors = parse_tasks(rows_from_value(raw, "tasks", "items"))
    if errors:
        logger.warning("task snapshot: %s", "; ".join(errors))
    return Snapshot(
        key="tasks",
        title="Tasks",
        status="warn" if errors else "ok",
        items=tasks,
        meta={"count": len(tasks)},
        errors=errors,
    )
