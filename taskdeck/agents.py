"""Agent pane model: ordered session list with identity-following selection."""

from __future__ import annotations

from typing import Iterable

from taskdeck.board import clamp_index, reconcile_index
from taskdeck.formatting import short_uuid
from taskdeck.models import TerminalSession
from taskdeck.theme import ThemeEngine

STATUS_TOKENS = {
    "running": "success",
    "done": "fg_dim",
    "failed": "error",
}
DEFAULT_STATUS_TOKEN = "fg_dim"
STATUS_DOT = "●"


def status_token(status: str) -> str:
    return STATUS_TOKENS.get(status, DEFAULT_STATUS_TOKEN)


def metadata_line(session: TerminalSession) -> str | None:
    parts: list[str] = []
    if session.pr_number is not None:
        parts.append(f"PR #{session.pr_number}")
    if session.task_uuid:
        parts.append(f"task:{short_uuid(session.task_uuid)}")
    return " | ".join(parts) if parts else None


class AgentPaneModel:
    def __init__(self, sessions: Iterable[TerminalSession] = (), theme: ThemeEngine | None = None):
        self.sessions: list[TerminalSession] = list(sessions)
        self.index = 0
        self.theme = theme or ThemeEngine()

    def selected_session(self) -> TerminalSession | None:
        if not self.sessions:
            return None
        return self.sessions[self.index]

    def apply_snapshot(self, sessions: Iterable[TerminalSession]) -> None:
        current = self.selected_session()
        self.sessions = list(sessions)
        keys = [session.id for session in self.sessions]
        self.index = reconcile_index(current.id if current else None, self.index, keys)

    def navigate(self, direction: str) -> bool:
        step = {"up": -1, "down": 1}[direction]
        target = clamp_index(self.index + step, len(self.sessions))
        moved = target != self.index
        self.index = target
        return moved

    def status_color(self, session: TerminalSession) -> str:
        return self.theme.color(status_token(session.status))

    def sessions_for_task(self, uuid: str) -> list[TerminalSession]:
        return [session for session in self.sessions if session.task_uuid == uuid]
