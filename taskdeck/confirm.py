"""Yes/no confirmation dialog used before destructive requests."""

from __future__ import annotations

from typing import Any

from taskdeck.keys import KeyEvent

CONFIRM = "confirm"
CANCEL = "cancel"


class ConfirmDialog:
    def __init__(self, message: str, subject: Any = None):
        self.message = message
        self.subject = subject

    def handle_key(self, event: KeyEvent) -> str | None:
        if event.ctrl or event.meta:
            return None
        if event.name == "y":
            return CONFIRM
        if event.name in ("n", "escape"):
            return CANCEL
        return None
