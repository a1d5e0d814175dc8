"""Board renderer: one lane per column, task cards inside."""

from __future__ import annotations

from datetime import date

from rich import box
from rich.columns import Columns
from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from taskdeck.board import COLUMNS, BoardModel
from taskdeck.formatting import PRIORITY_SHORT, format_due, is_overdue
from taskdeck.models import Task
from taskdeck.panels import empty_state, gradient_label
from taskdeck.theme import ThemeEngine, darken

PRIORITY_TOKENS = {"H": "priority_h", "M": "priority_m", "L": "priority_l"}
TAG_BG_FACTOR = 0.35


def task_card(theme: ThemeEngine, task: Task, selected: bool, today: date | None = None) -> Text:
    card = Text(no_wrap=False, overflow="fold")
    marker = "▸ " if selected else "  "
    title_style = f"bold {theme.color('fg_primary')}" if selected else theme.color("fg_normal")
    if selected:
        title_style += f" on {theme.color('bg_selected')}"
    card.append(marker, style=theme.color("accent_primary"))
    card.append(task.description or "<untitled>", style=title_style)

    meta = Text()
    if task.priority:
        meta.append(PRIORITY_SHORT.get(task.priority, task.priority), style=f"bold {theme.color(PRIORITY_TOKENS[task.priority])}")
        meta.append(" ")
    if task.project:
        meta.append(f" {task.project} ", style=f"{theme.color('fg_primary')} on {theme.color('project')}")
        meta.append(" ")
    for tag in task.tags:
        meta.append(f" {tag} ", style=f"{theme.color('fg_normal')} on {darken(theme.tag_color(tag), TAG_BG_FACTOR)}")
        meta.append(" ")
    if task.due:
        token = "error" if is_overdue(task.due, today) else "fg_dim"
        meta.append(f"due {format_due(task.due)}", style=theme.color(token))
    if meta.plain:
        card.append("\n  ")
        card.append_text(meta)
    return card


def _lane_panel(theme: ThemeEngine, board: BoardModel, column: int, is_active_pane: bool, today: date | None) -> Panel:
    tasks = board.tasks_in(column)
    is_active = is_active_pane and board.active_column == column
    title = gradient_label(theme, f"{COLUMNS[column]} ({len(tasks)})", "board", is_active)

    if not tasks:
        body = empty_state(theme, "No tasks")
    else:
        cards = [
            task_card(theme, task, is_active and index == board.indices[column], today)
            for index, task in enumerate(tasks)
        ]
        body = Group(*cards)

    return Panel(
        body,
        title=title,
        title_align="left",
        border_style=theme.border_color("board", is_active),
        box=_box(is_active),
        padding=(0, 1),
    )


def _box(is_active: bool):
    return box.DOUBLE if is_active else box.SQUARE


def render(board: BoardModel, theme: ThemeEngine, is_active_pane: bool, today: date | None = None):
    lanes = [_lane_panel(theme, board, column, is_active_pane, today) for column in range(len(COLUMNS))]
    return Columns(lanes, equal=True, expand=True, padding=(0, 1))
