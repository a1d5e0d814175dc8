"""Filter bar renderer: query input, active term chips and suggestions."""

from __future__ import annotations

from rich.console import Group
from rich.text import Text

from taskdeck.filtering import FilterBar, parse_terms
from taskdeck.theme import ThemeEngine

PLACEHOLDER = "e.g. project:work +urgent priority:H"
FILTER_HINTS = "[Enter] apply  [Esc] clear & close  [Tab] suggestions"


def _chips(theme: ThemeEngine, query: str) -> Text:
    text = Text()
    text.append("Active: ", style=theme.color("fg_muted"))
    for index, term in enumerate(parse_terms(query)):
        if index:
            text.append(" ")
        text.append(f"[{term}]", style=f"bold {theme.color('success')}")
    return text


def render(bar: FilterBar, theme: ThemeEngine):
    line = Text(no_wrap=True, overflow="ellipsis")
    line.append("/ Filter: ", style=f"bold {theme.color('accent_primary')}")
    if bar.text:
        line.append(bar.text, style=theme.color("fg_normal"))
    else:
        line.append(PLACEHOLDER, style=theme.color("fg_muted"))
    if not bar.show_suggestions:
        line.append("▏", style=theme.color("accent_primary"))

    parts = [line]
    if parse_terms(bar.text):
        parts.append(_chips(theme, bar.text))
    parts.append(Text(FILTER_HINTS, style=theme.color("fg_dim")))

    if bar.show_suggestions:
        for index, item in enumerate(bar.visible_suggestions()):
            selected = index == bar.selected
            style = f"bold {theme.color('fg_primary')} on {theme.color('bg_selected')}" if selected else theme.color("fg_dim")
            parts.append(Text(("> " if selected else "  ") + item, style=style))
    return Group(*parts)


def render_applied(query: str, theme: ThemeEngine) -> Text:
    text = Text(no_wrap=True, overflow="ellipsis")
    text.append("Filter: ", style=f"bold {theme.color('accent_primary')}")
    text.append(query, style=theme.color("fg_normal"))
    text.append("  (press / to edit, Esc in filter to clear)", style=theme.color("fg_dim"))
    return text
