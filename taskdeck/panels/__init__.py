"""Panel rendering helpers."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from taskdeck.theme import ThemeEngine

LEFT_CAP = "\ue0b6"
RIGHT_CAP = "\ue0b4"


def gradient_label(theme: ThemeEngine, label: str, kind: str, is_active: bool) -> Text:
    """Pill-style header: each character sits on its own gradient step."""
    start, end = theme.pane_gradient(kind, is_active)
    text = Text()
    text.append(LEFT_CAP, style=start)
    for char, color in theme.gradient_text(label, start, end):
        text.append(char, style=f"bold {theme.color('fg_primary')} on {color}")
    text.append(RIGHT_CAP, style=end)
    return text


def gradient_rule(theme: ThemeEngine, width: int, kind: str, is_active: bool) -> Text:
    start, end = theme.pane_gradient(kind, is_active)
    text = Text()
    for _char, color in theme.gradient_text("─" * max(width, 1), start, end):
        text.append("─", style=color)
    return text


def empty_state(theme: ThemeEngine, *lines: str) -> Text:
    return Text("\n".join(lines), style=theme.color("fg_dim"))


def kv_table(rows: list[tuple[str, Text]], key_style: str) -> Table:
    table = Table(box=None, show_header=False, expand=True, pad_edge=False)
    table.add_column("key", style=key_style, no_wrap=True)
    table.add_column("value", overflow="fold")
    for key, value in rows:
        table.add_row(key, value)
    return table


def pane_panel(theme: ThemeEngine, body, title: Text, kind: str, is_active: bool) -> Panel:
    return Panel(
        body,
        title=title,
        title_align="left",
        border_style=theme.border_color(kind, is_active),
        padding=(0, 1),
    )
