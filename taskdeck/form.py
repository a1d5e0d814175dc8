"""Create/edit form: field focus, priority cycling, free-text editing and DTO assembly."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from taskdeck.keys import KeyEvent
from taskdeck.models import CreateTaskDto, Task, UpdateTaskDto

logger = logging.getLogger(__name__)

FIELDS = ("description", "project", "priority", "tags", "due")
FIELD_LABELS = {
    "description": "Description",
    "project": "Project",
    "priority": "Priority",
    "tags": "Tags",
    "due": "Due",
}
TEXT_FIELDS = ("description", "project", "tags", "due")
PRIORITY_CYCLE = ("", "L", "M", "H")
VALIDATION_HINT = "Description is required"

SUBMIT = "submit"
CANCEL = "cancel"
HANDLED = "handled"


def parse_tags(raw: str) -> list[str]:
    return [token.strip() for token in raw.split(",") if token.strip()]


@dataclass
class FormDraft:
    description: str = ""
    project: str = ""
    priority: str = ""
    tags: str = ""
    due: str = ""

    @classmethod
    def from_task(cls, task: Task) -> "FormDraft":
        return cls(
            description=task.description,
            project=task.project or "",
            priority=task.priority or "",
            tags=", ".join(task.tags),
            due=task.due or "",
        )

    @property
    def is_valid(self) -> bool:
        return bool(self.description.strip())

    def values(self) -> dict[str, Any]:
        """Field values as the tracker sees them; empty means absent."""
        return {
            "description": self.description.strip(),
            "project": self.project.strip(),
            "priority": self.priority,
            "tags": parse_tags(self.tags),
            "due": self.due.strip(),
        }


class FormController:
    def __init__(self, mode: str = "create", task: Task | None = None):
        if mode not in ("create", "edit"):
            raise ValueError(f"unknown form mode: {mode}")
        if mode == "edit" and task is None:
            raise ValueError("edit form needs a task")
        self.mode = mode
        self.task = task
        self.draft = FormDraft.from_task(task) if task is not None else FormDraft()
        self.focus = 0
        self.submit_attempted = False

    @property
    def title(self) -> str:
        return "New Task" if self.mode == "create" else "Edit Task"

    @property
    def focused_field(self) -> str:
        return FIELDS[self.focus]

    @property
    def show_validation(self) -> bool:
        return self.submit_attempted and not self.draft.is_valid

    # -------------------- focus --------------------
    def next_field(self) -> None:
        self.focus = (self.focus + 1) % len(FIELDS)

    def previous_field(self) -> None:
        self.focus = (self.focus - 1) % len(FIELDS)

    # -------------------- editing --------------------
    def cycle_priority(self, step: int = 1) -> str:
        current = PRIORITY_CYCLE.index(self.draft.priority) if self.draft.priority in PRIORITY_CYCLE else 0
        self.draft.priority = PRIORITY_CYCLE[(current + step) % len(PRIORITY_CYCLE)]
        return self.draft.priority

    def insert_text(self, text: str) -> bool:
        name = self.focused_field
        if name not in TEXT_FIELDS:
            return False
        setattr(self.draft, name, getattr(self.draft, name) + text)
        return True

    def backspace(self) -> bool:
        name = self.focused_field
        if name not in TEXT_FIELDS:
            return False
        setattr(self.draft, name, getattr(self.draft, name)[:-1])
        return True

    def handle_key(self, event: KeyEvent) -> str | None:
        """Apply one key; returns SUBMIT, CANCEL, HANDLED, or None when the key means nothing here."""
        if event.ctrl or event.meta:
            return None
        if event.name == "escape":
            return CANCEL
        if event.name == "return":
            return SUBMIT
        if event.name == "tab":
            if event.shift:
                self.previous_field()
            else:
                self.next_field()
            return HANDLED
        if self.focused_field == "priority":
            if event.name in ("right", "space"):
                self.cycle_priority(1)
                return HANDLED
            if event.name == "left":
                self.cycle_priority(-1)
                return HANDLED
            return None
        if event.name == "backspace":
            self.backspace()
            return HANDLED
        text = event.text
        if text is not None:
            self.insert_text(text)
            return HANDLED
        return None

    # -------------------- submit --------------------
    def build_dto(self) -> CreateTaskDto | UpdateTaskDto | None:
        """DTO for the current draft, or None (with the hint raised) when invalid."""
        self.submit_attempted = True
        if not self.draft.is_valid:
            logger.info("form submit rejected: empty description")
            return None
        values = self.draft.values()
        if self.mode == "create":
            return CreateTaskDto(
                description=values["description"],
                project=values["project"] or None,
                priority=values["priority"] or None,
                tags=tuple(values["tags"]),
                due=values["due"] or None,
            )
        return UpdateTaskDto(uuid=self.task.uuid, changes=self._changes(values))

    def _changes(self, values: dict[str, Any]) -> dict[str, Any]:
        original = FormDraft.from_task(self.task).values()
        return {name: value for name, value in values.items() if value != original[name]}
