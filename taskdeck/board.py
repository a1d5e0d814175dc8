"""Board model: partitions tasks into status columns and owns per-column selection."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from taskdeck.formatting import parse_tw_date
from taskdeck.models import Task

TODO = "TODO"
IN_PROGRESS = "IN PROGRESS"
DONE = "DONE"
COLUMNS: tuple[str, ...] = (TODO, IN_PROGRESS, DONE)


def column_for(task: Task, today: date | None = None) -> str | None:
    """Board column of a task, or None when the task is not shown on the board.

    pending -> TODO, or IN PROGRESS once started; completed -> DONE only when
    it ended today or later.
    waiting, deleted, recurring templates and unknown statuses are excluded.
    """
    if task.status == "pending":
        return IN_PROGRESS if task.start else TODO
    if task.status == "completed":
        finished = parse_tw_date(task.end)
        if finished is not None and finished >= (today or date.today()):
            return DONE
    return None


def partition(tasks: Iterable[Task], today: date | None = None) -> dict[str, list[Task]]:
    columns: dict[str, list[Task]] = {name: [] for name in COLUMNS}
    today = today or date.today()
    for task in tasks:
        name = column_for(task, today)
        if name is not None:
            columns[name].append(task)
    return columns


def clamp_index(index: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


def reconcile_index(previous_key: str | None, previous_index: int, keys: list[str]) -> int:
    """Follow the previously selected identity, else clamp the old index."""
    if previous_key is not None and previous_key in keys:
        return keys.index(previous_key)
    return clamp_index(previous_index, len(keys))


class BoardModel:
    def __init__(self, tasks: Iterable[Task] = (), today: date | None = None):
        # None means "the current date" at every partition.
        self.today = today
        self.columns: dict[str, list[Task]] = partition(tasks, today)
        self.active_column = 0
        self.indices: list[int] = [0] * len(COLUMNS)

    # -------------------- queries --------------------
    def column_name(self, column: int | None = None) -> str:
        return COLUMNS[self.active_column if column is None else column]

    def tasks_in(self, column: int) -> list[Task]:
        return self.columns[COLUMNS[column]]

    def selected_index(self) -> int:
        return self.indices[self.active_column]

    def selected_task(self) -> Task | None:
        tasks = self.tasks_in(self.active_column)
        if not tasks:
            return None
        return tasks[self.selected_index()]

    def first_non_empty_column(self) -> int:
        for column in range(len(COLUMNS)):
            if self.tasks_in(column):
                return column
        return 0

    def is_empty(self) -> bool:
        return not any(self.columns.values())

    # -------------------- snapshot --------------------
    def apply_snapshot(self, tasks: Iterable[Task]) -> None:
        previous = {
            column: (self._uuid_at(column), self.indices[column]) for column in range(len(COLUMNS))
        }
        self.columns = partition(tasks, self.today)
        for column, (uuid, index) in previous.items():
            keys = [task.uuid for task in self.tasks_in(column)]
            self.indices[column] = reconcile_index(uuid, index, keys)

    def _uuid_at(self, column: int) -> str | None:
        tasks = self.tasks_in(column)
        if not tasks:
            return None
        return tasks[clamp_index(self.indices[column], len(tasks))].uuid

    # -------------------- navigation --------------------
    def navigate(self, direction: str) -> bool:
        step = {"up": -1, "down": 1}[direction]
        column = self.active_column
        target = clamp_index(self.indices[column] + step, len(self.tasks_in(column)))
        moved = target != self.indices[column]
        self.indices[column] = target
        return moved

    def move_column(self, direction: str) -> None:
        step = {"left": -1, "right": 1}[direction]
        self.active_column = (self.active_column + step) % len(COLUMNS)

    def counts(self) -> dict[str, int]:
        return {name: len(tasks) for name, tasks in self.columns.items()}
