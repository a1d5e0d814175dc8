"""Task detail overlay renderer."""

from __future__ import annotations

from datetime import date

from rich.console import Group
from rich.text import Text

from taskdeck.detail import BUTTON_KEYS, BUTTON_LABELS, BUTTONS, DetailOverlay, detail_rows, first_annotation
from taskdeck.panels import gradient_label, gradient_rule, kv_table, pane_panel
from taskdeck.theme import ThemeEngine


def _value(theme: ThemeEngine, row, tags: tuple[str, ...]) -> Text:
    if row.label == "Tags" and row.present:
        text = Text()
        for index, tag in enumerate(tags):
            if index:
                text.append(", ", style=theme.color("fg_muted"))
            text.append(tag, style=theme.tag_color(tag))
        return text
    return Text(row.value, style=theme.color(row.token))


def button_row(theme: ThemeEngine, overlay: DetailOverlay) -> Text:
    text = Text()
    for name in BUTTONS:
        focused = overlay.focused_button == name
        style = f"bold {theme.color('fg_primary')} on {theme.color('bg_selected')}" if focused else theme.color("fg_dim")
        text.append(f" [{BUTTON_KEYS[name]}] {BUTTON_LABELS[name]} ", style=style)
        text.append("  ")
    return text


def render(overlay: DetailOverlay, theme: ThemeEngine, today: date | None = None, width: int = 60):
    task = overlay.task
    rows = [(row.label, _value(theme, row, task.tags)) for row in detail_rows(task, today)]
    annotation = first_annotation(task)

    body = Group(
        Text(task.description, style=f"bold {theme.color('fg_primary')}"),
        gradient_rule(theme, width, "dialog", True),
        kv_table(rows, theme.color("fg_dim")),
        gradient_rule(theme, width, "dialog", True),
        Text("Description", style=f"bold {theme.color('accent_secondary')}"),
        Text(annotation, style=theme.color("fg_normal")) if annotation else Text("No description", style=theme.color("fg_muted")),
        Text(""),
        button_row(theme, overlay),
    )
    title = gradient_label(theme, "Task", "dialog", True)
    return pane_panel(theme, body, title, "dialog", True)
