"""Deterministic color derivation: gradients, dimming and stable tag colors.

Colors are ``#rrggbb`` strings, which rich accepts directly as styles.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

PANE_KINDS = ("board", "agents", "dialog")
INACTIVE_FACTOR = 0.5

DEFAULT_COLORS: dict[str, str] = {
    "bg": "#0a2131",
    "bg_selected": "#133347",
    "border_dim": "#1a4050",
    "fg_primary": "#ffffff",
    "fg_normal": "#e8e4dc",
    "fg_dim": "#c0bab0",
    "fg_muted": "#8a9098",
    "accent_primary": "#fc6529",
    "accent_secondary": "#6a88a8",
    "success": "#5aaa6a",
    "error": "#e05555",
    "warning": "#d4a74a",
    "priority_h": "#e05555",
    "priority_m": "#fc6529",
    "priority_l": "#5aaa6a",
    "project": "#2a8a7a",
    "separator": "#1a4050",
}

DEFAULT_TAG_PALETTE: tuple[str, ...] = (
    "#e05555",
    "#5aaa6a",
    "#fc6529",
    "#6a88a8",
    "#8a7aaa",
    "#d4a74a",
    "#5aaaa0",
    "#c8a070",
)

DEFAULT_GRADIENTS: dict[str, tuple[str, str]] = {
    "board": ("#fc6529", "#d4a74a"),
    "agents": ("#5aaaa0", "#2a7a8a"),
    "dialog": ("#5a7aaa", "#2a4a7a"),
}


def parse_hex(color: str) -> tuple[int, int, int]:
    text = color.lstrip("#")
    if len(text) != 6:
        raise ValueError(f"invalid color: {color!r}")
    try:
        return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)
    except ValueError as exc:
        raise ValueError(f"invalid color: {color!r}") from exc


def to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _clamp(value: int) -> int:
    return min(255, max(0, value))


def lerp(a: str, b: str, t: float) -> str:
    start = parse_hex(a)
    end = parse_hex(b)
    channels = [_round_half_away(s + (e - s) * t) for s, e in zip(start, end)]
    return to_hex(*channels)


def darken(color: str, factor: float) -> str:
    channels = [_clamp(_round_half_away(c * factor)) for c in parse_hex(color)]
    return to_hex(*channels)


def stable_hash(text: str) -> int:
    """djb2 over UTF-16 code units, wrapped to a signed 32-bit int at each step."""
    value = 5381
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        value = (value * 33 + code) & 0xFFFFFFFF
        if value >= 0x80000000:
            value -= 0x100000000
    return abs(value)


def gradient_positions(length: int) -> list[float]:
    if length <= 1:
        return [0.0] * length
    return [i / (length - 1) for i in range(length)]


@dataclass(frozen=True)
class ThemeConfig:
    colors: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(DEFAULT_COLORS)))
    tag_palette: tuple[str, ...] = DEFAULT_TAG_PALETTE
    gradients: Mapping[str, tuple[str, str]] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_GRADIENTS))
    )

    def __post_init__(self) -> None:
        if len(self.tag_palette) < 8:
            raise ValueError("tag palette needs at least 8 colors")
        for color in (*self.colors.values(), *self.tag_palette):
            parse_hex(color)
        for kind in PANE_KINDS:
            if kind not in self.gradients:
                raise ValueError(f"missing gradient for pane kind: {kind}")


class ThemeEngine:
    def __init__(self, config: ThemeConfig | None = None):
        self.config = config or ThemeConfig()

    def color(self, token: str) -> str:
        return self.config.colors.get(token, self.config.colors["fg_normal"])

    def tag_color(self, tag: str) -> str:
        palette = self.config.tag_palette
        return palette[stable_hash(tag) % len(palette)]

    def pane_gradient(self, kind: str, is_active: bool) -> tuple[str, str]:
        start, end = self.config.gradients[kind]
        if is_active:
            return start, end
        return darken(start, INACTIVE_FACTOR), darken(end, INACTIVE_FACTOR)

    def border_color(self, kind: str, is_active: bool) -> str:
        if not is_active:
            return self.color("border_dim")
        start, end = self.pane_gradient(kind, True)
        return lerp(start, end, 0.5)

    def gradient_text(self, label: str, start: str, end: str) -> list[tuple[str, str]]:
        return [(char, lerp(start, end, t)) for char, t in zip(label, gradient_positions(len(label)))]
