"""Read-only task detail overlay with its Edit/Close button row."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from taskdeck.formatting import (
    PLACEHOLDER,
    format_tw_date,
    is_overdue,
    priority_label,
    short_uuid,
)
from taskdeck.keys import KeyEvent
from taskdeck.models import Task

BUTTONS = ("edit", "close")
BUTTON_LABELS = {"edit": "Edit", "close": "Close"}
BUTTON_KEYS = {"edit": "e", "close": "Esc"}

EDIT = "edit"
CLOSE = "close"
HANDLED = "handled"

PRIORITY_TOKENS = {"H": "priority_h", "M": "priority_m", "L": "priority_l"}


@dataclass(frozen=True)
class DetailRow:
    label: str
    value: str
    token: str = "fg_normal"
    present: bool = True


def detail_rows(task: Task, today: date | None = None) -> list[DetailRow]:
    rows = [
        DetailRow("Priority", priority_label(task.priority), PRIORITY_TOKENS.get(task.priority or "", "fg_muted"), bool(task.priority)),
        DetailRow("Project", task.project or PLACEHOLDER, "project" if task.project else "fg_muted", bool(task.project)),
        DetailRow("Tags", ", ".join(task.tags) if task.tags else PLACEHOLDER, "fg_normal" if task.tags else "fg_muted", bool(task.tags)),
    ]
    if task.due:
        overdue = is_overdue(task.due, today)
        value = format_tw_date(task.due) + (" OVERDUE" if overdue else "")
        rows.append(DetailRow("Due", value, "error" if overdue else "fg_normal"))
    else:
        rows.append(DetailRow("Due", PLACEHOLDER, "fg_muted", False))
    rows.extend(
        [
            DetailRow("Status", task.status),
            DetailRow("UUID", short_uuid(task.uuid), "fg_muted"),
            DetailRow("Created", format_tw_date(task.entry), "fg_normal" if task.entry else "fg_muted", bool(task.entry)),
            DetailRow("Modified", format_tw_date(task.modified), "fg_normal" if task.modified else "fg_muted", bool(task.modified)),
        ]
    )
    return rows


def first_annotation(task: Task) -> str | None:
    if not task.annotations:
        return None
    return task.annotations[0].description


class DetailOverlay:
    def __init__(self, task: Task):
        self.task = task
        self.focus = 0

    @property
    def focused_button(self) -> str:
        return BUTTONS[self.focus]

    def toggle(self) -> None:
        self.focus = 1 - self.focus

    def handle_key(self, event: KeyEvent) -> str | None:
        """Returns EDIT or CLOSE when an action completes, HANDLED for focus moves."""
        if event.ctrl or event.meta:
            return None
        if event.name == "tab":
            self.toggle()
            return HANDLED
        if event.name == "left":
            self.focus = 0
            return HANDLED
        if event.name == "right":
            self.focus = 1
            return HANDLED
        if event.name == "return":
            return self.focused_button
        if event.name == "e" and not event.shift:
            return EDIT
        if event.name == "escape":
            return CLOSE
        return None
