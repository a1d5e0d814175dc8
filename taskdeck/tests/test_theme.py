from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from taskdeck.theme import (  # noqa: E402
    DEFAULT_TAG_PALETTE,
    ThemeConfig,
    ThemeEngine,
    darken,
    gradient_positions,
    lerp,
    stable_hash,
)

SAMPLES = ["#000000", "#ffffff", "#fc6529", "#0a2131", "#5aaa6a"]


class LerpTests(unittest.TestCase):
    def test_same_color_is_fixed_point(self):
        for color in SAMPLES:
            for t in (0.0, 0.25, 0.5, 0.73, 1.0):
                self.assertEqual(lerp(color, color, t), color)

    def test_endpoints(self):
        self.assertEqual(lerp("#fc6529", "#0a2131", 0), "#fc6529")
        self.assertEqual(lerp("#fc6529", "#0a2131", 1), "#0a2131")

    def test_midpoint_rounds_half_away_from_zero(self):
        # 0.5 rounds up to 1; banker's rounding would give 0.
        self.assertEqual(lerp("#000000", "#ffffff", 0.5), "#808080")
        self.assertEqual(lerp("#000000", "#010101", 0.5), "#010101")


class DarkenTests(unittest.TestCase):
    def test_identity_and_black(self):
        for color in SAMPLES:
            self.assertEqual(darken(color, 1.0), color)
            self.assertEqual(darken(color, 0.0), "#000000")

    def test_half(self):
        self.assertEqual(darken("#fc6529", 0.5), "#7e3315")

    def test_clamped(self):
        self.assertEqual(darken("#808080", 3.0), "#ffffff")


class StableHashTests(unittest.TestCase):
    def test_known_value(self):
        self.assertEqual(stable_hash("bug"), 193487683)

    def test_repeatable(self):
        self.assertEqual(stable_hash("feature"), stable_hash("feature"))

    def test_wraps_to_32_bits_and_stays_non_negative(self):
        value = stable_hash("a considerably longer tag name that overflows")
        self.assertGreaterEqual(value, 0)
        self.assertLessEqual(value, 2**31)

    def test_empty_string_is_seed(self):
        self.assertEqual(stable_hash(""), 5381)


class ThemeEngineTests(unittest.TestCase):
    def test_tag_color_is_stable(self):
        theme = ThemeEngine()
        self.assertEqual(theme.tag_color("bug"), theme.tag_color("bug"))
        self.assertEqual(theme.tag_color("bug"), DEFAULT_TAG_PALETTE[193487683 % len(DEFAULT_TAG_PALETTE)])

    def test_inactive_gradient_is_darkened(self):
        theme = ThemeEngine()
        start, end = theme.pane_gradient("board", True)
        self.assertEqual(theme.pane_gradient("board", False), (darken(start, 0.5), darken(end, 0.5)))

    def test_inactive_border_is_dim(self):
        theme = ThemeEngine()
        self.assertEqual(theme.border_color("agents", False), theme.color("border_dim"))

    def test_palette_needs_eight_colors(self):
        with self.assertRaises(ValueError):
            ThemeConfig(tag_palette=("#000000",) * 7)

    def test_single_character_label_sits_at_start(self):
        self.assertEqual(gradient_positions(1), [0.0])
        self.assertEqual(gradient_positions(3), [0.0, 0.5, 1.0])
        theme = ThemeEngine()
        self.assertEqual(theme.gradient_text("X", "#ff0000", "#0000ff"), [("X", "#ff0000")])


if __name__ == "__main__":
    unittest.main()
