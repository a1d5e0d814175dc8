from __future__ import annotations

import unittest
from datetime import date, datetime, timezone
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from taskdeck.formatting import (  # noqa: E402
    compact_relative_age,
    format_due,
    format_tw_date,
    is_overdue,
    parse_tw_date,
    priority_label,
    session_age,
)


class DateTests(unittest.TestCase):
    def test_tracker_date_code(self):
        self.assertEqual(parse_tw_date("20260214T120000Z"), date(2026, 2, 14))
        self.assertEqual(format_due("20260214T120000Z"), "02/14")
        self.assertEqual(format_tw_date("20260214T120000Z"), "2026-02-14")

    def test_iso_date_accepted(self):
        self.assertEqual(parse_tw_date("2026-02-14T08:00:00Z"), date(2026, 2, 14))

    def test_unparseable_passes_through(self):
        self.assertIsNone(parse_tw_date("tomorrow"))
        self.assertEqual(format_due("tomorrow"), "tomorrow")
        self.assertFalse(is_overdue("tomorrow", date(2026, 3, 1)))

    def test_absent_is_placeholder(self):
        self.assertEqual(format_due(None), "None")
        self.assertEqual(format_tw_date(""), "None")

    def test_overdue(self):
        self.assertTrue(is_overdue("20260214T120000Z", today=date(2026, 3, 1)))
        self.assertFalse(is_overdue("20260214T120000Z", today=date(2026, 2, 14)))


class LabelTests(unittest.TestCase):
    def test_priority(self):
        self.assertEqual(priority_label("H"), "High")
        self.assertEqual(priority_label(None), "None")

    def test_age(self):
        self.assertEqual(compact_relative_age(None), "n/a")
        self.assertEqual(compact_relative_age(59), "59s ago")
        self.assertEqual(compact_relative_age(7200), "2h ago")
        now = datetime(2026, 2, 14, 12, 5, tzinfo=timezone.utc)
        self.assertEqual(session_age("2026-02-14T12:00:00Z", now), "5m ago")
        self.assertEqual(session_age(None, now), "n/a")


if __name__ == "__main__":
    unittest.main()
