"""Shared model contracts for snapshots flowing into the board core and DTOs flowing out."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

TASK_STATUSES = ("pending", "completed", "deleted", "waiting", "recurring")
PRIORITIES = ("H", "M", "L")
TASK_ACTIONS = ("start", "stop", "done")

_TASK_FIELDS = (
    "uuid",
    "status",
    "description",
    "project",
    "priority",
    "tags",
    "due",
    "scheduled",
    "wait",
    "depends",
    "annotations",
    "start",
    "end",
    "entry",
    "modified",
    "urgency",
)


@dataclass(frozen=True)
class Annotation:
    entry: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"entry": self.entry, "description": self.description}


@dataclass(frozen=True)
class Task:
    """Borrowed snapshot of one tracker task.

    Attributes the board does not know about (user-defined attributes and
    anything newer than this model) are kept in ``extras`` and written back
    untouched by ``to_dict``.
    """

    uuid: str
    status: str = "pending"
    description: str = ""
    project: str | None = None
    priority: str | None = None
    tags: tuple[str, ...] = ()
    due: str | None = None
    scheduled: str | None = None
    wait: str | None = None
    depends: str | None = None
    annotations: tuple[Annotation, ...] = ()
    start: str | None = None
    end: str | None = None
    entry: str | None = None
    modified: str | None = None
    urgency: float = 0.0
    extras: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Task":
        annotations = tuple(
            Annotation(entry=str(row.get("entry", "")), description=str(row.get("description", "")))
            for row in raw.get("annotations") or []
            if isinstance(row, dict)
        )
        depends = raw.get("depends")
        if isinstance(depends, list):
            depends = ",".join(str(dep) for dep in depends)
        priority = raw.get("priority")
        try:
            urgency = float(raw.get("urgency") or 0.0)
        except (TypeError, ValueError):
            urgency = 0.0
        return cls(
            uuid=str(raw["uuid"]),
            status=str(raw.get("status", "pending")),
            description=str(raw.get("description", "")),
            project=raw.get("project") or None,
            priority=priority if priority in PRIORITIES else None,
            tags=tuple(str(tag) for tag in raw.get("tags") or []),
            due=raw.get("due") or None,
            scheduled=raw.get("scheduled") or None,
            wait=raw.get("wait") or None,
            depends=depends or None,
            annotations=annotations,
            start=raw.get("start") or None,
            end=raw.get("end") or None,
            entry=raw.get("entry") or None,
            modified=raw.get("modified") or None,
            urgency=urgency,
            extras={key: value for key, value in raw.items() if key not in _TASK_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "uuid": self.uuid,
            "status": self.status,
            "description": self.description,
        }
        for name in ("project", "priority", "due", "scheduled", "wait", "depends", "start", "end", "entry", "modified"):
            value = getattr(self, name)
            if value:
                payload[name] = value
        if self.tags:
            payload["tags"] = list(self.tags)
        if self.annotations:
            payload["annotations"] = [note.to_dict() for note in self.annotations]
        if self.urgency:
            payload["urgency"] = self.urgency
        payload.update(self.extras)
        return payload


@dataclass(frozen=True)
class TerminalSession:
    id: str
    name: str
    status: str = "running"
    pr_number: int | None = None
    task_uuid: str | None = None
    created_at: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "TerminalSession":
        pr_number = raw.get("prNumber", raw.get("pr_number"))
        try:
            pr_number = int(pr_number) if pr_number is not None else None
        except (TypeError, ValueError):
            pr_number = None
        return cls(
            id=str(raw["id"]),
            name=str(raw.get("name") or raw["id"]),
            status=str(raw.get("status", "running")),
            pr_number=pr_number,
            task_uuid=raw.get("taskUuid") or raw.get("task_uuid") or None,
            created_at=raw.get("createdAt") or raw.get("created_at") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, "name": self.name, "status": self.status}
        if self.pr_number is not None:
            payload["prNumber"] = self.pr_number
        if self.task_uuid:
            payload["taskUuid"] = self.task_uuid
        if self.created_at:
            payload["createdAt"] = self.created_at
        return payload


@dataclass(frozen=True)
class CreateTaskDto:
    description: str
    project: str | None = None
    priority: str | None = None
    tags: tuple[str, ...] = ()
    due: str | None = None
    recur: str | None = None
    depends: str | None = None

    def __post_init__(self) -> None:
        if not self.description.strip():
            raise ValueError("description is required")

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"description": self.description}
        for name in ("project", "priority", "due", "recur", "depends"):
            value = getattr(self, name)
            if value:
                payload[name] = value
        if self.tags:
            payload["tags"] = list(self.tags)
        return payload


@dataclass(frozen=True)
class UpdateTaskDto:
    """Partial update: only changed fields are carried.

    A cleared field is carried as an empty value so the tracker removes it.
    """

    uuid: str
    changes: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"uuid": self.uuid, **self.changes}


@dataclass(frozen=True)
class TaskAction:
    action: str
    uuid: str

    def to_dict(self) -> dict[str, str]:
        return {"action": self.action, "uuid": self.uuid}


@dataclass
class Snapshot:
    key: str
    title: str
    status: str = "ok"
    items: list[Any] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "title": self.title,
            "status": self.status,
            "items": [item.to_dict() if hasattr(item, "to_dict") else item for item in self.items],
            "meta": self.meta,
            "errors": self.errors,
        }
