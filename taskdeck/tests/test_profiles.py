from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from taskdeck.profiles import CORE_PANELS, build_theme, resolve_profile  # noqa: E402
from taskdeck.theme import DEFAULT_COLORS, DEFAULT_TAG_PALETTE  # noqa: E402


class ProfileTests(unittest.TestCase):
    def _resolve(self, config: object, profile: str = "default") -> dict:
        with tempfile.TemporaryDirectory() as tmp:
            cfg_path = Path(tmp) / "cfg.json"
            cfg_path.write_text(json.dumps(config))
            return resolve_profile(profile, str(cfg_path))

    def test_default(self):
        profile = resolve_profile("default")
        self.assertEqual(profile["name"], "default")
        self.assertEqual(profile["panels"], CORE_PANELS)
        self.assertEqual(profile["colors"], {})

    def test_board_profile_has_no_agents(self):
        self.assertNotIn("agents", resolve_profile("board")["panels"])

    def test_disable_panel_map(self):
        profile = self._resolve({"panels": {"agents": False}})
        self.assertEqual(profile["panels"], ["header", "board"])

    def test_explicit_order(self):
        profile = self._resolve({"panels": ["board", "header", "bogus"]})
        self.assertEqual(profile["panels"], ["board", "header"])

    def test_profile_selected_by_config(self):
        profile = self._resolve({"profile": "board"})
        self.assertEqual(profile["name"], "board")

    def test_refresh_floor(self):
        self.assertEqual(self._resolve({"refresh_seconds": 0})["refresh_seconds"], 1)

    def test_unknown_profile(self):
        with self.assertRaises(ValueError):
            resolve_profile("legacy")

    def test_missing_config(self):
        with self.assertRaises(ValueError):
            resolve_profile("default", "/nonexistent/taskdeck.json")

    def test_color_override(self):
        profile = self._resolve({"colors": {"accent_primary": "#ABCDEF"}})
        self.assertEqual(profile["colors"], {"accent_primary": "#abcdef"})
        theme = build_theme(profile)
        self.assertEqual(theme.colors["accent_primary"], "#abcdef")
        self.assertEqual(theme.colors["error"], DEFAULT_COLORS["error"])

    def test_bad_colors(self):
        with self.assertRaises(ValueError):
            self._resolve({"colors": {"accent_primary": "orange"}})
        with self.assertRaises(ValueError):
            self._resolve({"colors": {"not_a_token": "#000000"}})

    def test_short_tag_palette(self):
        with self.assertRaises(ValueError):
            self._resolve({"tag_palette": ["#000000"] * 7})

    def test_tag_palette_override(self):
        palette = ["#0000%02x" % n for n in range(8)]
        theme = build_theme(self._resolve({"tag_palette": palette}))
        self.assertEqual(list(theme.tag_palette), palette)
        self.assertEqual(tuple(build_theme(resolve_profile("default")).tag_palette), tuple(DEFAULT_TAG_PALETTE))

    def test_gradient_override(self):
        theme = build_theme(self._resolve({"gradients": {"board": ["#111111", "#222222"]}}))
        self.assertEqual(tuple(theme.gradients["board"]), ("#111111", "#222222"))


if __name__ == "__main__":
    unittest.main()
