"""Responsive layout mode selection by terminal width."""

from __future__ import annotations

PANE_RATIOS = {
    "medium": (3, 1),
    "wide": (4, 1),
}


def select_layout_mode(width: int) -> str:
    if width < 100:
        return "narrow"
    if width < 160:
        return "medium"
    return "wide"


def pane_ratios(mode: str) -> tuple[int, int] | None:
    """(board, agents) width ratios side by side; None stacks the panes."""
    return PANE_RATIOS.get(mode)
