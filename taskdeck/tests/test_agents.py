from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from taskdeck.agents import AgentPaneModel, metadata_line  # noqa: E402
from taskdeck.models import TerminalSession  # noqa: E402
from taskdeck.theme import ThemeEngine  # noqa: E402


def session(sid: str, status: str = "running", **kwargs) -> TerminalSession:
    return TerminalSession(id=sid, name=f"Agent {sid}", status=status, **kwargs)


class StatusColorTests(unittest.TestCase):
    def setUp(self):
        self.theme = ThemeEngine()
        self.agents = AgentPaneModel(theme=self.theme)

    def test_known_statuses(self):
        self.assertEqual(self.agents.status_color(session("a", "running")), self.theme.color("success"))
        self.assertEqual(self.agents.status_color(session("a", "done")), self.theme.color("fg_dim"))
        self.assertEqual(self.agents.status_color(session("a", "failed")), self.theme.color("error"))

    def test_unknown_status_falls_back_to_dim(self):
        color = self.agents.status_color(session("a", "queued"))
        self.assertIsNotNone(color)
        self.assertEqual(color, self.theme.color("fg_dim"))


class MetadataLineTests(unittest.TestCase):
    def test_pr_and_task(self):
        line = metadata_line(session("a", pr_number=142, task_uuid="0123456789abcdef"))
        self.assertEqual(line, "PR #142 | task:01234567")

    def test_pr_only(self):
        self.assertEqual(metadata_line(session("a", pr_number=7)), "PR #7")

    def test_task_only(self):
        self.assertEqual(metadata_line(session("a", task_uuid="abcdef0123")), "task:abcdef01")

    def test_neither(self):
        self.assertIsNone(metadata_line(session("a")))


class AgentSelectionTests(unittest.TestCase):
    def test_follows_session_id(self):
        agents = AgentPaneModel([session("a"), session("b"), session("c")])
        agents.navigate("down")
        agents.apply_snapshot([session("x"), session("a"), session("c"), session("b")])
        self.assertEqual(agents.selected_session().id, "b")
        self.assertEqual(agents.index, 3)

    def test_follows_id_not_task_uuid(self):
        agents = AgentPaneModel([session("a", task_uuid="t1"), session("b", task_uuid="t2")])
        agents.navigate("down")
        agents.apply_snapshot([session("c", task_uuid="t2"), session("a", task_uuid="t1")])
        self.assertEqual(agents.index, 1)
        self.assertEqual(agents.selected_session().id, "a")

    def test_removed_selection_clamps(self):
        agents = AgentPaneModel([session("a"), session("b"), session("c")])
        agents.navigate("down")
        agents.navigate("down")
        agents.apply_snapshot([session("a")])
        self.assertEqual(agents.index, 0)

    def test_empty_pane(self):
        agents = AgentPaneModel([])
        agents.navigate("down")
        self.assertEqual(agents.index, 0)
        self.assertIsNone(agents.selected_session())

    def test_sessions_for_task(self):
        agents = AgentPaneModel([session("a", task_uuid="t1"), session("b"), session("c", task_uuid="t1")])
        self.assertEqual([s.id for s in agents.sessions_for_task("t1")], ["a", "c"])


if __name__ == "__main__":
    unittest.main()
