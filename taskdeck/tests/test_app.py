from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from taskdeck.app import Outbox, _is_quit  # noqa: E402
from taskdeck.keys import KeyEvent, decode_keys  # noqa: E402
from taskdeck.models import Task, TerminalSession  # noqa: E402
from taskdeck.navigation import NavigationController  # noqa: E402


class OutboxTests(unittest.TestCase):
    def test_records_kill_and_action(self):
        outbox = Outbox()
        controller = NavigationController(
            [Task(uuid="t1", description="One")],
            [TerminalSession(id="s1", name="agent")],
            callbacks=outbox.callbacks(),
        )
        for event in decode_keys("s\tKy"):
            controller.handle_key(event)
        self.assertEqual(
            outbox.records,
            [
                {"type": "action", "action": "start", "uuid": "t1"},
                {"type": "kill", "session": "s1"},
            ],
        )
        self.assertTrue(outbox.refresh_requested)


class QuitKeyTests(unittest.TestCase):
    def test_q_types_into_filter_instead_of_quitting(self):
        controller = NavigationController([Task(uuid="t1", description="One")])
        self.assertTrue(_is_quit(controller, KeyEvent("q")))
        controller.handle_key(KeyEvent("/"))
        self.assertFalse(_is_quit(controller, KeyEvent("q")))
        self.assertTrue(_is_quit(controller, KeyEvent("c", ctrl=True)))


if __name__ == "__main__":
    unittest.main()
