"""Profile resolution and user config merging for the dashboard."""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType

from taskdeck.theme import DEFAULT_COLORS, DEFAULT_GRADIENTS, PANE_KINDS, ThemeConfig, parse_hex

CORE_PANELS = ["header", "board", "agents"]

BUILTIN_PROFILES: dict[str, dict] = {
    "default": {
        "panels": CORE_PANELS,
        "refresh_seconds": 5,
    },
    "board": {
        "panels": ["header", "board"],
        "refresh_seconds": 5,
    },
}


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"config path not found: {config_path}")

    try:
        config = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc
    if not isinstance(config, dict):
        raise ValueError("config must be a JSON object")
    return config


def _color_overrides(value: object) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError("colors must be an object of token -> #rrggbb")
    overrides: dict[str, str] = {}
    for token, color in value.items():
        if token not in DEFAULT_COLORS:
            raise ValueError(f"unknown color token: {token}")
        parse_hex(str(color))
        overrides[token] = "#" + str(color).lstrip("#").lower()
    return overrides


def _gradient_overrides(value: object) -> dict[str, tuple[str, str]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError("gradients must be an object of pane -> [start, end]")
    overrides: dict[str, tuple[str, str]] = {}
    for kind, stops in value.items():
        if kind not in PANE_KINDS:
            raise ValueError(f"unknown pane kind: {kind}")
        if not isinstance(stops, list) or len(stops) != 2:
            raise ValueError(f"gradient for {kind} must be [start, end]")
        for stop in stops:
            parse_hex(str(stop))
        overrides[kind] = (str(stops[0]), str(stops[1]))
    return overrides


def resolve_profile(profile: str, config_path: str | None = None) -> dict:
    if profile not in BUILTIN_PROFILES:
        raise ValueError(f"unknown profile: {profile}")

    resolved = dict(BUILTIN_PROFILES[profile])
    user_config = load_user_config(config_path)

    selected_profile = user_config.get("profile")
    if selected_profile:
        if selected_profile not in BUILTIN_PROFILES:
            raise ValueError(f"unknown profile in config: {selected_profile}")
        resolved = dict(BUILTIN_PROFILES[selected_profile])
        profile = selected_profile

    if "refresh_seconds" in user_config:
        value = int(user_config["refresh_seconds"])
        resolved["refresh_seconds"] = max(1, value)

    panel_config = user_config.get("panels")
    allowed = list(resolved["panels"])
    if isinstance(panel_config, dict):
        # disable map: {"agents": false}
        resolved["panels"] = [panel for panel in allowed if panel_config.get(panel, True)]
    elif isinstance(panel_config, list) and panel_config:
        # explicit order
        filtered = [p for p in panel_config if p in allowed]
        if filtered:
            resolved["panels"] = filtered

    resolved["colors"] = _color_overrides(user_config.get("colors"))
    resolved["gradients"] = _gradient_overrides(user_config.get("gradients"))

    palette = user_config.get("tag_palette")
    if palette is not None:
        if not isinstance(palette, list) or len(palette) < 8:
            raise ValueError("tag_palette must list at least 8 colors")
        for color in palette:
            parse_hex(str(color))
        resolved["tag_palette"] = [str(color) for color in palette]

    resolved["name"] = profile
    return resolved


def build_theme(profile: dict) -> ThemeConfig:
    """Freeze a resolved profile's palette; the result is shared, never mutated."""
    colors = {**DEFAULT_COLORS, **profile.get("colors", {})}
    gradients = {**DEFAULT_GRADIENTS, **profile.get("gradients", {})}
    kwargs = {
        "colors": MappingProxyType(colors),
        "gradients": MappingProxyType(gradients),
    }
    if profile.get("tag_palette"):
        kwargs["tag_palette"] = tuple(profile["tag_palette"])
    return ThemeConfig(**kwargs)
