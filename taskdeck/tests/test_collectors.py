from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from taskdeck.collectors import sessions as sessions_collector  # noqa: E402
from taskdeck.collectors import tasks as tasks_collector  # noqa: E402


class TaskCollectorTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_warns(self):
        snapshot = tasks_collector.collect(self.data_dir)
        self.assertEqual(snapshot.status, "warn")
        self.assertEqual(snapshot.items, [])

    def test_invalid_json_warns(self):
        (self.data_dir / "tasks.json").write_text("{not json")
        snapshot = tasks_collector.collect(self.data_dir)
        self.assertEqual(snapshot.status, "warn")
        self.assertEqual(snapshot.errors, ["tasks.json invalid"])

    def test_sorted_by_urgency_keeping_ties_in_order(self):
        rows = [
            {"uuid": "a", "description": "low", "urgency": 1.0},
            {"uuid": "b", "description": "high", "urgency": 9.5},
            {"uuid": "c", "description": "tie one", "urgency": 3},
            {"uuid": "d", "description": "tie two", "urgency": 3},
        ]
        (self.data_dir / "tasks.json").write_text(json.dumps(rows))
        snapshot = tasks_collector.collect(self.data_dir)
        self.assertEqual(snapshot.status, "ok")
        self.assertEqual([task.uuid for task in snapshot.items], ["b", "c", "d", "a"])
        self.assertEqual(snapshot.meta, {"count": 4})

    def test_rows_without_uuid_and_duplicates(self):
        rows = [{"description": "orphan"}, {"uuid": "a"}, {"uuid": "a"}]
        (self.data_dir / "tasks.json").write_text(json.dumps({"tasks": rows}))
        snapshot = tasks_collector.collect(self.data_dir)
        self.assertEqual(snapshot.status, "warn")
        self.assertEqual([task.uuid for task in snapshot.items], ["a"])
        self.assertEqual(len(snapshot.errors), 2)


class SessionCollectorTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_is_empty(self):
        snapshot = sessions_collector.collect(self.data_dir)
        self.assertEqual(snapshot.status, "ok")
        self.assertEqual(snapshot.items, [])

    def test_oldest_first(self):
        rows = [
            {"id": "new", "name": "new", "createdAt": "2026-02-14T12:00:00Z"},
            {"id": "old", "name": "old", "createdAt": "2026-02-13T12:00:00Z", "prNumber": 4},
            {"id": "bare", "name": "bare", "status": "failed"},
        ]
        (self.data_dir / "sessions.json").write_text(json.dumps(rows))
        snapshot = sessions_collector.collect(self.data_dir)
        self.assertEqual([s.id for s in snapshot.items], ["bare", "old", "new"])
        self.assertEqual(snapshot.items[1].pr_number, 4)
        self.assertEqual(snapshot.meta, {"count": 3, "running": 2})

    def test_invalid_json_warns(self):
        (self.data_dir / "sessions.json").write_text("[")
        self.assertEqual(sessions_collector.collect(self.data_dir).status, "warn")


if __name__ == "__main__":
    unittest.main()
