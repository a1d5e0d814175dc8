"""Create/edit form overlay renderer."""

from __future__ import annotations

from rich.table import Table
from rich.text import Text

from taskdeck.form import FIELD_LABELS, FIELDS, VALIDATION_HINT, FormController
from taskdeck.formatting import PLACEHOLDER, priority_label
from taskdeck.panels import gradient_label, pane_panel
from taskdeck.theme import ThemeEngine

PLACEHOLDERS = {
    "description": "Task description (required)",
    "project": "project name",
    "tags": "comma separated, e.g. bug, urgent",
    "due": "e.g. 2026-02-14 or tomorrow",
}
PRIORITY_TOKENS = {"": "fg_muted", "H": "priority_h", "M": "priority_m", "L": "priority_l"}


def _field_value(theme: ThemeEngine, form: FormController, name: str, focused: bool) -> Text:
    if name == "priority":
        label = priority_label(form.draft.priority) if form.draft.priority else PLACEHOLDER
        text = Text(label, style=f"bold {theme.color(PRIORITY_TOKENS[form.draft.priority])}")
        if focused:
            text.append("   [←/→] cycle", style=theme.color("fg_dim"))
        return text
    value = getattr(form.draft, name)
    background = f" on {theme.color('bg_selected')}" if focused else ""
    if not value:
        text = Text(PLACEHOLDERS[name], style=f"{theme.color('fg_muted')}{background}")
    else:
        text = Text(value, style=f"{theme.color('fg_normal')}{background}")
    if focused:
        text.append("▏", style=theme.color("accent_primary"))
    return text


def render(form: FormController, theme: ThemeEngine):
    table = Table(box=None, show_header=False, expand=True, pad_edge=False)
    table.add_column("field", no_wrap=True, width=14)
    table.add_column("value", overflow="fold")

    for index, name in enumerate(FIELDS):
        focused = index == form.focus
        label_style = f"bold {theme.color('fg_normal')}" if focused else theme.color("fg_dim")
        label = Text(("> " if focused else "  ") + FIELD_LABELS[name], style=label_style)
        table.add_row(label, _field_value(theme, form, name, focused))
        if name == "description" and form.show_validation:
            table.add_row("", Text(VALIDATION_HINT, style=f"bold {theme.color('error')}"))

    table.add_row("", "")
    table.add_row(
        "",
        Text("[Tab] next  [Shift+Tab] prev  [Enter] save  [Esc] cancel", style=theme.color("fg_dim")),
    )
    title = gradient_label(theme, form.title, "dialog", True)
    return pane_panel(theme, table, title, "dialog", True)
