"""Board filter bar: query editing, suggestions and local task matching.

A query is whitespace-separated terms, all of which must match:
``project:<name>`` (the project or any sub-project), ``+tag`` / ``-tag``,
``priority:<H|M|L>`` (empty value means no priority), and bare words, matched
case-insensitively against the description.
"""

from __future__ import annotations

import logging
from typing import Iterable

from taskdeck.keys import KeyEvent
from taskdeck.models import PRIORITIES, Task

logger = logging.getLogger(__name__)

APPLY = "apply"
CLEAR = "clear"
HANDLED = "handled"

MAX_SUGGESTIONS = 10


def parse_terms(query: str) -> list[str]:
    return query.split()


def term_matches(task: Task, term: str) -> bool:
    if term.startswith("project:"):
        name = term[len("project:") :]
        project = task.project or ""
        if not name:
            return not project
        return project == name or project.startswith(name + ".")
    if term.startswith("priority:"):
        return (task.priority or "") == term[len("priority:") :].upper()
    if term.startswith("+") and len(term) > 1:
        return term[1:] in task.tags
    if term.startswith("-") and len(term) > 1:
        return term[1:] not in task.tags
    return term.casefold() in task.description.casefold()


def matches(task: Task, query: str) -> bool:
    return all(term_matches(task, term) for term in parse_terms(query))


def filter_tasks(tasks: Iterable[Task], query: str) -> list[Task]:
    if not query.strip():
        return list(tasks)
    return [task for task in tasks if matches(task, query)]


def suggestions_for(tasks: Iterable[Task]) -> list[str]:
    """Completion candidates: projects, then tags, then priorities."""
    projects: list[str] = []
    tags: list[str] = []
    for task in tasks:
        if task.project and task.project not in projects:
            projects.append(task.project)
        for tag in task.tags:
            if tag not in tags:
                tags.append(tag)
    return (
        [f"project:{name}" for name in sorted(projects)]
        + [f"+{tag}" for tag in sorted(tags)]
        + [f"priority:{level}" for level in PRIORITIES]
    )


class FilterBar:
    def __init__(self, text: str = "", suggestions: Iterable[str] = ()):
        self.text = text
        self.suggestions = list(suggestions)
        self.show_suggestions = False
        self.selected = 0

    def visible_suggestions(self) -> list[str]:
        terms = parse_terms(self.text)
        last = terms[-1].casefold() if terms and not self.text.endswith(" ") else ""
        found = [item for item in self.suggestions if last in item.casefold()]
        return found[:MAX_SUGGESTIONS]

    def _cycle(self, step: int) -> None:
        count = len(self.visible_suggestions())
        if count:
            self.selected = (self.selected + step) % count

    def accept_suggestion(self) -> None:
        visible = self.visible_suggestions()
        if visible and self.selected < len(visible):
            terms = parse_terms(self.text)
            if terms and not self.text.endswith(" "):
                terms[-1] = visible[self.selected]
            else:
                terms.append(visible[self.selected])
            self.text = " ".join(terms) + " "
        self.show_suggestions = False

    def handle_key(self, event: KeyEvent) -> str | None:
        """Returns APPLY or CLEAR when the bar should close, HANDLED otherwise."""
        if event.ctrl or event.meta:
            return None
        if event.name == "tab":
            if not self.show_suggestions:
                if not event.shift:
                    self.show_suggestions = True
                    self.selected = 0
            else:
                self._cycle(-1 if event.shift else 1)
            return HANDLED
        if event.name == "return":
            if self.show_suggestions:
                self.accept_suggestion()
                return HANDLED
            return APPLY
        if event.name == "escape":
            if self.show_suggestions:
                self.show_suggestions = False
                return HANDLED
            return CLEAR
        if self.show_suggestions and event.name in ("up", "down"):
            count = len(self.visible_suggestions())
            if count:
                step = 1 if event.name == "down" else -1
                self.selected = max(0, min(self.selected + step, count - 1))
            return HANDLED
        if event.name == "backspace":
            self.text = self.text[:-1]
            self.selected = 0
            return HANDLED
        text = event.text
        if text is not None:
            self.text += text
            self.selected = 0
            return HANDLED
        return None
