"""Agents panel renderer."""

from __future__ import annotations

from datetime import datetime

from rich.table import Table
from rich.text import Text

from taskdeck.agents import STATUS_DOT, AgentPaneModel, metadata_line
from taskdeck.formatting import session_age
from taskdeck.panels import empty_state, gradient_label, pane_panel
from taskdeck.theme import ThemeEngine


def render(agents: AgentPaneModel, theme: ThemeEngine, is_active: bool, now: datetime | None = None):
    title = gradient_label(theme, f"AGENTS ({len(agents.sessions)})", "agents", is_active)

    if not agents.sessions:
        body = empty_state(theme, "No agents running", "", "Sessions appear here once spawned")
        return pane_panel(theme, body, title, "agents", is_active)

    table = Table(box=None, expand=True, show_header=False, pad_edge=False)
    table.add_column("Agent", overflow="fold", ratio=3)
    table.add_column("Age", justify="right", no_wrap=True)

    for index, session in enumerate(agents.sessions):
        selected = is_active and index == agents.index
        name_style = f"bold {theme.color('fg_primary')}" if selected else theme.color("fg_normal")
        row_style = f"on {theme.color('bg_selected')}" if selected else ""

        cell = Text()
        cell.append(f"{STATUS_DOT} ", style=agents.status_color(session))
        cell.append(session.name, style=name_style)
        meta = metadata_line(session)
        if meta:
            cell.append(f"\n  {meta}", style=theme.color("fg_dim"))

        age = session_age(session.created_at, now) if now is not None else ""
        table.add_row(cell, Text(age, style=theme.color("fg_muted")), style=row_style)

    return pane_panel(theme, table, title, "agents", is_active)
