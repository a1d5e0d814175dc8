"""Agent session snapshot collector."""

from __future__ import annotations

from pathlib import Path

from taskdeck.collectors import SESSIONS_FILE, read_json, rows_from_value
from taskdeck.formatting import parse_iso_timestamp
from taskdeck.models import Snapshot, TerminalSession


def _created_sort_key(session: TerminalSession) -> tuple[int, float]:
    created_at = parse_iso_timestamp(session.created_at)
    if created_at is None:
        return (0, float("-inf"))
    return (1, created_at.timestamp())


def collect(data_dir: Path) -> Snapshot:
    raw = read_json(data_dir / SESSIONS_FILE) if (data_dir / SESSIONS_FILE).exists() else []
    if raw is None:
        return Snapshot(
            key="sessions",
            title="Agents",
            status="warn",
            meta={"count": 0, "running": 0},
            errors=[f"{SESSIONS_FILE} invalid"],
        )

    sessions: list[TerminalSession] = []
    errors: list[str] = []
    for row in rows_from_value(raw, "sessions", "items"):
        if not row.get("id"):
            errors.append("session without id")
            continue
        sessions.append(TerminalSession.from_dict(row))

    # Oldest first; sessions without a timestamp lead in file order.
    sessions.sort(key=_created_sort_key)
    return Snapshot(
        key="sessions",
        title="Agents",
        status="warn" if errors else "ok",
        items=sessions,
        meta={
            "count": len(sessions),
            "running": len([s for s in sessions if s.status == "running"]),
        },
        errors=errors,
    )
