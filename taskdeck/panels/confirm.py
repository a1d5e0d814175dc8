"""Confirmation dialog renderer."""

from __future__ import annotations

from rich.console import Group
from rich.text import Text

from taskdeck.confirm import ConfirmDialog
from taskdeck.panels import gradient_label, pane_panel
from taskdeck.theme import ThemeEngine


def render(dialog: ConfirmDialog, theme: ThemeEngine):
    buttons = Text()
    buttons.append(" [Y] ", style=f"bold {theme.color('success')}")
    buttons.append("Yes    ", style=theme.color("fg_dim"))
    buttons.append(" [N] ", style=f"bold {theme.color('error')}")
    buttons.append("No", style=theme.color("fg_dim"))
    body = Group(Text(dialog.message, style=theme.color("fg_normal")), Text(""), buttons)
    return pane_panel(theme, body, gradient_label(theme, "Confirm", "dialog", True), "dialog", True)
