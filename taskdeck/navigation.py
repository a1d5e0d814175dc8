"""Top-level focus state machine over the board, the agent pane and modal overlays.

States: board focused, agents focused, filter bar, detail overlay, form
overlay, confirm dialog. Overlays and the filter bar capture every key; only
the focused pane sees navigation keys when nothing captures input. All
routing goes through one ``KeyRouter`` built here.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Iterable

from taskdeck.agents import AgentPaneModel
from taskdeck.board import COLUMNS, DONE, IN_PROGRESS, TODO, BoardModel
from taskdeck.confirm import CONFIRM, ConfirmDialog
from taskdeck.detail import CLOSE, EDIT, DetailOverlay
from taskdeck.filtering import APPLY, CLEAR, FilterBar, filter_tasks, suggestions_for
from taskdeck.form import CANCEL, SUBMIT, FormController, FormDraft
from taskdeck.keys import KeyEvent, KeyRouter
from taskdeck.models import Task, TaskAction, TerminalSession
from taskdeck.theme import ThemeEngine

logger = logging.getLogger(__name__)

BOARD = "board"
AGENTS = "agents"

VERTICAL = {"up": "up", "k": "up", "down": "down", "j": "down"}
HORIZONTAL = {"left": "left", "h": "left", "right": "right", "l": "right"}


def _direction(event: KeyEvent, table: dict[str, str]) -> str | None:
    # Shifted letters are commands of their own (K kills an agent); shifted arrows still move.
    if event.shift and len(event.name) == 1:
        return None
    return table.get(event.name)


@dataclass
class Callbacks:
    on_submit: Callable[[Any], None] | None = None
    on_cancel: Callable[[], None] | None = None
    on_edit: Callable[[Task], None] | None = None
    on_close: Callable[[], None] | None = None
    on_task_action: Callable[[TaskAction], None] | None = None
    on_attach: Callable[[TerminalSession], None] | None = None
    on_kill: Callable[[TerminalSession], None] | None = None
    on_refresh: Callable[[], None] | None = None

    def fire(self, name: str, *args: Any) -> None:
        callback = getattr(self, name)
        if callback is not None:
            callback(*args)


@dataclass(frozen=True)
class SelectionState:
    active_pane: str
    board_column: int
    board_index: int
    agent_index: int
    overlay: str | None = None
    overlay_mode: str | None = None
    overlay_task: str | None = None
    overlay_session: str | None = None
    draft: FormDraft | None = None
    filter_active: bool = False
    filter_text: str = ""

    def to_dict(self) -> dict[str, Any]:
        payload = dataclasses.asdict(self)
        payload["board_column_name"] = COLUMNS[self.board_column]
        return payload


class NavigationController:
    def __init__(
        self,
        tasks: Iterable[Task] = (),
        sessions: Iterable[TerminalSession] = (),
        theme: ThemeEngine | None = None,
        callbacks: Callbacks | None = None,
        agent_pane: bool = True,
        today: date | None = None,
    ):
        self.theme = theme or ThemeEngine()
        self.tasks: list[Task] = list(tasks)
        self.board = BoardModel(self.tasks, today)
        self.agents = AgentPaneModel(sessions, self.theme)
        self.callbacks = callbacks or Callbacks()
        self.agent_pane = agent_pane
        self.active_pane = BOARD
        self.overlay: DetailOverlay | FormController | ConfirmDialog | None = None
        self.filter_bar: FilterBar | None = None
        self.filter_text = ""
        self._origin: tuple[str, int] | None = None
        self._seen_tasks = not self.board.is_empty()
        self.board.active_column = self.board.first_non_empty_column()
        self.router = KeyRouter(
            precedence=[
                ("form", lambda: isinstance(self.overlay, FormController)),
                ("detail", lambda: isinstance(self.overlay, DetailOverlay)),
                ("confirm", lambda: isinstance(self.overlay, ConfirmDialog)),
                ("filter", lambda: self.filter_bar is not None),
                ("agents", lambda: self.active_pane == AGENTS),
                ("board", lambda: self.active_pane == BOARD),
            ],
            handlers={
                "form": self._form_key,
                "detail": self._detail_key,
                "confirm": self._confirm_key,
                "filter": self._filter_key,
                "agents": self._agents_key,
                "board": self._board_key,
            },
        )

    # -------------------- state --------------------
    @property
    def state(self) -> SelectionState:
        overlay = None
        mode = None
        task_uuid = None
        session_id = None
        draft = None
        if isinstance(self.overlay, DetailOverlay):
            overlay = "detail"
            task_uuid = self.overlay.task.uuid
        elif isinstance(self.overlay, FormController):
            overlay = "form"
            mode = self.overlay.mode
            task_uuid = self.overlay.task.uuid if self.overlay.task else None
            draft = dataclasses.replace(self.overlay.draft)
        elif isinstance(self.overlay, ConfirmDialog):
            overlay = "confirm"
            session_id = self.overlay.subject.id
        return SelectionState(
            active_pane=self.active_pane,
            board_column=self.board.active_column,
            board_index=self.board.selected_index(),
            agent_index=self.agents.index,
            overlay=overlay,
            overlay_mode=mode,
            overlay_task=task_uuid,
            overlay_session=session_id,
            draft=draft,
            filter_active=self.filter_bar is not None,
            filter_text=self.filter_bar.text if self.filter_bar is not None else self.filter_text,
        )

    @property
    def captures_input(self) -> bool:
        """True while an overlay or the filter bar owns every key."""
        return self.overlay is not None or self.filter_bar is not None

    def handle_key(self, event: KeyEvent) -> bool:
        return self.router.dispatch(event)

    def apply_snapshot(
        self,
        tasks: Iterable[Task] | None = None,
        sessions: Iterable[TerminalSession] | None = None,
    ) -> None:
        """Swap in fresh snapshots; only call between key events."""
        if tasks is not None:
            self.tasks = list(tasks)
            self._rebuild_board()
            if not self._seen_tasks and not self.board.is_empty():
                self._seen_tasks = True
                if not self.captures_input and self.active_pane == BOARD:
                    self.board.active_column = self.board.first_non_empty_column()
            if self.filter_bar is not None:
                self.filter_bar.suggestions = suggestions_for(self.tasks)
            if isinstance(self.overlay, DetailOverlay):
                self._refresh_detail()
        if sessions is not None:
            self.agents.apply_snapshot(sessions)
            if isinstance(self.overlay, ConfirmDialog):
                session = self.overlay.subject
                if all(s.id != session.id for s in self.agents.sessions):
                    logger.info("session %s gone; dropping kill confirmation", session.id)
                    self._restore_origin()

    def _rebuild_board(self) -> None:
        self.board.apply_snapshot(filter_tasks(self.tasks, self.filter_text))

    def _refresh_detail(self) -> None:
        uuid = self.overlay.task.uuid
        fresh = next(
            (task for tasks in self.board.columns.values() for task in tasks if task.uuid == uuid),
            None,
        )
        if fresh is None:
            logger.info("task %s left the board; closing detail", uuid)
            self.close_detail()
            return
        self.overlay.task = fresh

    # -------------------- transitions --------------------
    def switch_pane(self) -> bool:
        if not self.agent_pane:
            return False
        self.active_pane = AGENTS if self.active_pane == BOARD else BOARD
        return True

    def open_detail(self) -> bool:
        task = self.board.selected_task()
        if task is None:
            return False
        self._remember_origin()
        self.overlay = DetailOverlay(task)
        logger.info("open detail %s", task.uuid)
        return True

    def open_create_form(self) -> None:
        self._remember_origin()
        self.overlay = FormController("create")
        logger.info("open create form")

    def open_edit_form(self) -> None:
        if not isinstance(self.overlay, DetailOverlay):
            return
        task = self.overlay.task
        self.overlay = FormController("edit", task)
        self.callbacks.fire("on_edit", task)
        logger.info("open edit form %s", task.uuid)

    def close_detail(self) -> None:
        self._restore_origin()
        self.callbacks.fire("on_close")

    def submit_form(self) -> bool:
        if not isinstance(self.overlay, FormController):
            return False
        dto = self.overlay.build_dto()
        if dto is None:
            return False
        self.callbacks.fire("on_submit", dto)
        column = self._origin[1] if self._origin is not None else self.board.active_column
        self.overlay = None
        self._origin = None
        self.active_pane = BOARD
        self.board.active_column = column
        logger.info("form submitted (%s)", type(dto).__name__)
        return True

    def cancel_form(self) -> None:
        self._restore_origin()
        self.callbacks.fire("on_cancel")
        logger.info("form cancelled")

    def open_filter(self) -> None:
        self.filter_bar = FilterBar(self.filter_text, suggestions_for(self.tasks))
        logger.info("open filter bar")

    def apply_filter(self, query: str) -> None:
        self.filter_text = query.strip()
        self.filter_bar = None
        self._rebuild_board()
        logger.info("filter applied: %r (%d tasks)", self.filter_text, sum(self.board.counts().values()))

    def clear_filter(self) -> None:
        self.apply_filter("")

    def request_kill(self) -> bool:
        session = self.agents.selected_session()
        if session is None:
            return False
        self._remember_origin()
        self.overlay = ConfirmDialog(f"Kill agent {session.name}?", session)
        return True

    def _remember_origin(self) -> None:
        self._origin = (self.active_pane, self.board.active_column)

    def _restore_origin(self) -> None:
        # Indices are left alone: apply_snapshot already reconciled them by identity.
        if self._origin is not None:
            self.active_pane, self.board.active_column = self._origin
        self.overlay = None
        self._origin = None

    # -------------------- key consumers --------------------
    def _form_key(self, event: KeyEvent) -> bool:
        outcome = self.overlay.handle_key(event)
        if outcome == SUBMIT:
            self.submit_form()
            return True
        if outcome == CANCEL:
            self.cancel_form()
            return True
        return outcome is not None

    def _detail_key(self, event: KeyEvent) -> bool:
        outcome = self.overlay.handle_key(event)
        if outcome == EDIT:
            self.open_edit_form()
            return True
        if outcome == CLOSE:
            self.close_detail()
            return True
        return outcome is not None

    def _confirm_key(self, event: KeyEvent) -> bool:
        outcome = self.overlay.handle_key(event)
        if outcome is None:
            return False
        session = self.overlay.subject
        self._restore_origin()
        if outcome == CONFIRM:
            self.callbacks.fire("on_kill", session)
            logger.info("kill requested for %s", session.id)
        return True

    def _filter_key(self, event: KeyEvent) -> bool:
        outcome = self.filter_bar.handle_key(event)
        if outcome == APPLY:
            self.apply_filter(self.filter_bar.text)
            return True
        if outcome == CLEAR:
            self.clear_filter()
            return True
        return outcome is not None

    def _agents_key(self, event: KeyEvent) -> bool:
        if event.ctrl or event.meta:
            return False
        if event.name == "tab":
            self.switch_pane()
            return True
        if event.name == "k" and event.shift:
            return self.request_kill()
        direction = _direction(event, VERTICAL)
        if direction is not None:
            self.agents.navigate(direction)
            return True
        if event.name == "return":
            session = self.agents.selected_session()
            if session is None:
                return False
            self.callbacks.fire("on_attach", session)
            return True
        if event.name == "r":
            self.callbacks.fire("on_refresh")
            return True
        return False

    def _board_key(self, event: KeyEvent) -> bool:
        if event.ctrl or event.meta:
            return False
        name = event.name
        if name == "tab":
            return self.switch_pane()
        horizontal = _direction(event, HORIZONTAL)
        if horizontal is not None:
            self.board.move_column(horizontal)
            return True
        vertical = _direction(event, VERTICAL)
        if vertical is not None:
            self.board.navigate(vertical)
            return True
        if name == "return":
            return self.open_detail()
        if name == "n" and not event.shift:
            self.open_create_form()
            return True
        if name == "/":
            self.open_filter()
            return True
        if name in ("s", "d"):
            return self._task_action(name, event.shift)
        if name == "r":
            self.callbacks.fire("on_refresh")
            return True
        return False

    def _task_action(self, name: str, shift: bool) -> bool:
        task = self.board.selected_task()
        if task is None:
            return False
        column = self.board.column_name()
        if name == "s" and not shift and column == TODO:
            action = "start"
        elif name == "s" and shift and column == IN_PROGRESS:
            action = "stop"
        elif name == "d" and not shift and column != DONE:
            action = "done"
        else:
            return False
        self.callbacks.fire("on_task_action", TaskAction(action, task.uuid))
        logger.info("task action %s %s", action, task.uuid)
        return True
