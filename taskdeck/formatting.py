"""Shared text and date formatting helpers for human-facing panels."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

PLACEHOLDER = "None"

PRIORITY_LABELS = {
    "H": "High",
    "M": "Medium",
    "L": "Low",
}

PRIORITY_SHORT = {
    "H": "HIGH",
    "M": "MED",
    "L": "LOW",
}

# Tracker date codes look like 20260214T120000Z.
TW_DATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})(?:T(\d{2})(\d{2})(\d{2})Z?)?$")


def parse_iso_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_tw_date(value: str | None) -> date | None:
    if not value:
        return None
    text = value.strip()
    match = TW_DATE_RE.match(text)
    if match:
        year, month, day = (int(part) for part in match.group(1, 2, 3))
        try:
            return date(year, month, day)
        except ValueError:
            return None
    parsed = parse_iso_timestamp(text)
    return parsed.date() if parsed is not None else None


def format_due(value: str | None) -> str:
    """Short month/day form used on cards, raw passthrough when unparseable."""
    if not value:
        return PLACEHOLDER
    parsed = parse_tw_date(value)
    if parsed is None:
        return value
    return parsed.strftime("%m/%d")


def format_tw_date(value: str | None) -> str:
    if not value:
        return PLACEHOLDER
    parsed = parse_tw_date(value)
    if parsed is None:
        return value
    return parsed.isoformat()


def is_overdue(value: str | None, today: date | None = None) -> bool:
    parsed = parse_tw_date(value)
    if parsed is None:
        return False
    return parsed < (today or date.today())


def priority_label(priority: str | None) -> str:
    return PRIORITY_LABELS.get(priority or "", PLACEHOLDER)


def short_uuid(value: str | None) -> str:
    return (value or "")[:8]


def compact_relative_age(age_seconds: float | int | None) -> str:
    if age_seconds is None:
        return "n/a"

    seconds = max(0, int(age_seconds))
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def session_age(created_at: str | None, now: datetime | None = None) -> str:
    parsed = parse_iso_timestamp(created_at)
    if parsed is None:
        return "n/a"
    current = now or datetime.now(timezone.utc)
    return compact_relative_age((current - parsed).total_seconds())
