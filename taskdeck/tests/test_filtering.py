from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from taskdeck.filtering import APPLY, CLEAR, HANDLED, FilterBar, filter_tasks, matches, suggestions_for  # noqa: E402
from taskdeck.keys import KeyEvent, decode_keys  # noqa: E402
from taskdeck.models import Task  # noqa: E402

TASKS = [
    Task(uuid="1", description="Fix login bug", project="web.auth", priority="H", tags=("bug",)),
    Task(uuid="2", description="Write release notes", project="docs", tags=("chore",)),
    Task(uuid="3", description="Refactor login form", project="web", priority="M"),
    Task(uuid="4", description="Plan offsite"),
]


def uuids(query: str) -> list[str]:
    return [task.uuid for task in filter_tasks(TASKS, query)]


class MatchTests(unittest.TestCase):
    def test_words_match_description_case_insensitively(self):
        self.assertEqual(uuids("LOGIN"), ["1", "3"])
        self.assertEqual(uuids("login form"), ["3"])

    def test_project_includes_sub_projects(self):
        self.assertEqual(uuids("project:web"), ["1", "3"])
        self.assertEqual(uuids("project:web.auth"), ["1"])
        self.assertEqual(uuids("project:"), ["4"])

    def test_tags(self):
        self.assertEqual(uuids("+bug"), ["1"])
        self.assertEqual(uuids("-bug"), ["2", "3", "4"])

    def test_priority(self):
        self.assertEqual(uuids("priority:h"), ["1"])
        self.assertEqual(uuids("priority: project:docs"), ["2"])

    def test_empty_query_keeps_everything(self):
        self.assertEqual(uuids("   "), ["1", "2", "3", "4"])
        self.assertTrue(matches(TASKS[3], ""))


class SuggestionTests(unittest.TestCase):
    def test_projects_tags_priorities(self):
        self.assertEqual(
            suggestions_for(TASKS),
            [
                "project:docs",
                "project:web",
                "project:web.auth",
                "+bug",
                "+chore",
                "priority:H",
                "priority:M",
                "priority:L",
            ],
        )


class FilterBarTests(unittest.TestCase):
    def type(self, bar: FilterBar, keys: str) -> list:
        return [bar.handle_key(event) for event in decode_keys(keys)]

    def test_enter_applies_and_escape_clears(self):
        bar = FilterBar()
        self.assertEqual(self.type(bar, "+bug"), [HANDLED] * 4)
        self.assertEqual(bar.handle_key(KeyEvent("return")), APPLY)
        self.assertEqual(bar.text, "+bug")
        self.assertEqual(bar.handle_key(KeyEvent("escape")), CLEAR)

    def test_tab_completes_last_term(self):
        bar = FilterBar("login pro", suggestions_for(TASKS))
        bar.handle_key(KeyEvent("tab"))
        self.assertTrue(bar.show_suggestions)
        self.assertEqual(bar.visible_suggestions(), ["project:docs", "project:web", "project:web.auth"])
        bar.handle_key(KeyEvent("tab"))
        self.assertEqual(bar.handle_key(KeyEvent("return")), HANDLED)
        self.assertEqual(bar.text, "login project:web ")
        self.assertFalse(bar.show_suggestions)

    def test_shift_tab_cycles_back(self):
        bar = FilterBar("", suggestions_for(TASKS))
        bar.handle_key(KeyEvent("tab"))
        bar.handle_key(KeyEvent("tab", shift=True))
        self.assertEqual(bar.selected, len(bar.visible_suggestions()) - 1)

    def test_escape_closes_suggestions_first(self):
        bar = FilterBar("x", suggestions_for(TASKS))
        bar.handle_key(KeyEvent("tab"))
        self.assertEqual(bar.handle_key(KeyEvent("escape")), HANDLED)
        self.assertFalse(bar.show_suggestions)
        self.assertEqual(bar.text, "x")

    def test_backspace(self):
        bar = FilterBar("abc")
        bar.handle_key(KeyEvent("backspace"))
        self.assertEqual(bar.text, "ab")


if __name__ == "__main__":
    unittest.main()
