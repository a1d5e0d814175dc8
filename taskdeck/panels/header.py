"""Header and status bar renderers."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from taskdeck.navigation import AGENTS, NavigationController
from taskdeck.panels.filter import FILTER_HINTS
from taskdeck.theme import ThemeEngine

BOARD_HINTS = "[←/→] column  [↑/↓] task  [Enter] open  [n] new  [/] filter  [s/S] start/stop  [d] done  [Tab] agents  [q] quit"
AGENT_HINTS = "[↑/↓] agent  [Enter] attach  [K] kill  [r] refresh  [Tab] board  [q] quit"
DETAIL_HINTS = "[e] edit  [Esc] close  [Tab/←/→] button  [Enter] activate"
FORM_HINTS = "[Tab] next field  [Enter] save  [Esc] cancel"
CONFIRM_HINTS = "[y] yes  [n/Esc] no"


def hints_for(controller: NavigationController) -> str:
    overlay = controller.state.overlay
    if overlay == "form":
        return FORM_HINTS
    if overlay == "detail":
        return DETAIL_HINTS
    if overlay == "confirm":
        return CONFIRM_HINTS
    if controller.filter_bar is not None:
        return FILTER_HINTS
    if controller.active_pane == AGENTS:
        return AGENT_HINTS
    return BOARD_HINTS


def render(controller: NavigationController, theme: ThemeEngine, profile_name: str, layout_mode: str) -> Panel:
    counts = controller.board.counts()
    text = Text()
    text.append("Profile: ", style=theme.color("fg_dim"))
    text.append(profile_name, style=f"bold {theme.color('fg_normal')}")
    for name, count in counts.items():
        text.append(f"   {name}: ", style=theme.color("fg_dim"))
        text.append(str(count), style=f"bold {theme.color('fg_normal')}")
    text.append("   Agents: ", style=theme.color("fg_dim"))
    text.append(str(len(controller.agents.sessions)), style=f"bold {theme.color('fg_normal')}")
    text.append("   Layout: ", style=theme.color("fg_dim"))
    text.append(layout_mode, style=f"bold {theme.color('fg_normal')}")
    return Panel(
        text,
        title="[bold]Task Deck[/bold]",
        title_align="left",
        border_style=theme.color("accent_secondary"),
    )


def render_status(controller: NavigationController, theme: ThemeEngine, message: str = "") -> Text:
    text = Text(no_wrap=True, overflow="ellipsis")
    if message:
        text.append(message, style=f"bold {theme.color('accent_primary')}")
        text.append("  ")
    text.append(hints_for(controller), style=theme.color("fg_dim"))
    return text
