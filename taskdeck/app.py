"""Dashboard entrypoint: CLI, snapshot refresh, key loop and screen composition."""

from __future__ import annotations

import argparse
import json
import logging
import os
import select
import sys
import time
from datetime import date, datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live

from taskdeck.collectors import env_data_dir
from taskdeck.collectors.sessions import collect as collect_sessions
from taskdeck.collectors.tasks import collect as collect_tasks
from taskdeck.confirm import ConfirmDialog
from taskdeck.detail import DetailOverlay
from taskdeck.form import FormController
from taskdeck.keys import KeyEvent, decode_keys
from taskdeck.layout import pane_ratios, select_layout_mode
from taskdeck.models import CreateTaskDto, Snapshot
from taskdeck.navigation import BOARD, AGENTS, Callbacks, NavigationController
from taskdeck.panels.agents import render as render_agents
from taskdeck.panels.board import render as render_board
from taskdeck.panels.confirm import render as render_confirm
from taskdeck.panels.detail import render as render_detail
from taskdeck.panels.filter import render as render_filter
from taskdeck.panels.filter import render_applied as render_filter_applied
from taskdeck.panels.form import render as render_form
from taskdeck.panels.header import render as render_header
from taskdeck.panels.header import render_status
from taskdeck.profiles import build_theme, resolve_profile
from taskdeck.theme import ThemeEngine

logger = logging.getLogger(__name__)

POLL_SECONDS = 0.1


class Outbox:
    """Records everything the core emits so a wrapper can forward it to the backends."""

    def __init__(self):
        self.records: list[dict] = []
        self.message = ""
        self.refresh_requested = False

    def callbacks(self) -> Callbacks:
        return Callbacks(
            on_submit=self.on_submit,
            on_cancel=self.on_cancel,
            on_edit=self.on_edit,
            on_close=self.on_close,
            on_task_action=self.on_task_action,
            on_attach=self.on_attach,
            on_kill=self.on_kill,
            on_refresh=self.on_refresh,
        )

    def _record(self, kind: str, payload: dict, message: str) -> None:
        self.records.append({"type": kind, **payload})
        self.message = message
        logger.info("%s: %s", kind, json.dumps(payload, sort_keys=True))

    def on_submit(self, dto) -> None:
        if isinstance(dto, CreateTaskDto):
            self._record("create", dto.to_dict(), f"Created: {dto.description}")
        else:
            self._record("update", dto.to_dict(), f"Updated {dto.uuid[:8]}")
        self.refresh_requested = True

    def on_task_action(self, action) -> None:
        self._record("action", action.to_dict(), f"{action.action} {action.uuid[:8]}")
        self.refresh_requested = True

    def on_attach(self, session) -> None:
        self._record("attach", {"session": session.id}, f"Attach {session.name}")

    def on_kill(self, session) -> None:
        self._record("kill", {"session": session.id}, f"Kill {session.name}")
        self.refresh_requested = True

    def on_refresh(self) -> None:
        self.refresh_requested = True
        self.message = "Refreshing..."

    def on_edit(self, task) -> None:
        self.message = f"Editing {task.uuid[:8]}"

    def on_close(self) -> None:
        self.message = ""

    def on_cancel(self) -> None:
        self.message = "Cancelled"


def configure_logging(log_file: str | None, level: str, live: bool) -> None:
    root = logging.getLogger("taskdeck")
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    if log_file:
        handler: logging.Handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=2, encoding="utf-8")
    elif live:
        # stderr would draw over the live screen
        return
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def _collect_core(data_dir: Path) -> dict[str, Snapshot]:
    return {
        "tasks": collect_tasks(data_dir),
        "sessions": collect_sessions(data_dir),
    }


def _refresh(controller: NavigationController, data_dir: Path) -> dict[str, Snapshot]:
    data = _collect_core(data_dir)
    controller.apply_snapshot(tasks=data["tasks"].items, sessions=data["sessions"].items)
    return data


def render_screen(
    controller: NavigationController,
    theme: ThemeEngine,
    profile: dict,
    width: int,
    today: date | None = None,
    now: datetime | None = None,
    message: str = "",
):
    """Pure projection of controller state; same inputs give the same renderable."""
    mode = select_layout_mode(width)
    panels = profile.get("panels", [])
    overlay = controller.overlay

    header = render_header(controller, theme, profile["name"], mode) if "header" in panels else None
    status = render_status(controller, theme, message)

    if isinstance(overlay, FormController):
        body = render_form(overlay, theme)
    elif isinstance(overlay, DetailOverlay):
        body = render_detail(overlay, theme, today, width=max(min(width - 8, 76), 10))
    elif isinstance(overlay, ConfirmDialog):
        body = render_confirm(overlay, theme)
    else:
        body = None

    if body is None:
        board = render_board(controller.board, theme, controller.active_pane == BOARD, today)
        if controller.filter_bar is not None:
            board = Group(render_filter(controller.filter_bar, theme), board)
        elif controller.filter_text:
            board = Group(render_filter_applied(controller.filter_text, theme), board)
        agents = None
        if "agents" in panels:
            agents = render_agents(controller.agents, theme, controller.active_pane == AGENTS, now)
        ratios = pane_ratios(mode)
        if agents is not None and ratios is not None:
            body = Layout()
            body.split_row(
                Layout(board, name="board", ratio=ratios[0]),
                Layout(agents, name="agents", ratio=ratios[1]),
            )
        else:
            body = Group(*[part for part in (board, agents) if part is not None])

    if isinstance(body, Layout):
        layout = Layout()
        parts = [Layout(header, name="header", size=3)] if header is not None else []
        parts += [Layout(body, name="body"), Layout(status, name="status", size=1)]
        layout.split_column(*parts)
        return layout

    return Group(*[part for part in (header, body, status) if part is not None])


def _json_output(profile: dict, controller: NavigationController, data: dict[str, Snapshot]) -> str:
    payload = {
        "profile": profile["name"],
        "collected_at": datetime.now(timezone.utc).isoformat(),
        "selection": controller.state.to_dict(),
        "columns": {name: [task.uuid for task in tasks] for name, tasks in controller.board.columns.items()},
        "tasks": data["tasks"].to_dict(),
        "sessions": data["sessions"].to_dict(),
    }
    return json.dumps(payload, indent=2, default=str)


def _poll_keys(fd: int, timeout: float) -> str:
    """Read whatever is pending on fd (escape sequences arrive in one chunk)."""
    readable, _, _ = select.select([fd], [], [], timeout)
    if not readable:
        return ""
    try:
        return os.read(fd, 64).decode("utf-8", errors="ignore")
    except OSError:
        return ""


def _is_quit(controller: NavigationController, event: KeyEvent) -> bool:
    if event.ctrl and event.name == "c":
        return True
    return not controller.captures_input and event.name == "q" and not event.shift


def run_live(
    console: Console,
    controller: NavigationController,
    theme: ThemeEngine,
    profile: dict,
    data_dir: Path,
    refresh_seconds: int,
    outbox: Outbox,
) -> None:
    """Live screen: keys are applied one at a time, snapshots only between them.

    Uses termios non-canonical mode (ICANON/ECHO off, VMIN=0/VTIME=0) rather
    than raw mode so rich's alternate screen keeps working over SSH.
    """
    fd = sys.stdin.fileno()
    old_settings = None
    if sys.stdin.isatty():
        import termios

        old_settings = termios.tcgetattr(fd)
        new = termios.tcgetattr(fd)
        new[3] &= ~(termios.ICANON | termios.ECHO)
        new[6][termios.VMIN] = 0
        new[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSADRAIN, new)

    def build_renderable():
        now = datetime.now(timezone.utc)
        return render_screen(
            controller, theme, profile, console.size.width, today=date.today(), now=now, message=outbox.message
        )

    next_refresh = time.monotonic() + refresh_seconds
    try:
        with Live(build_renderable(), console=console, screen=True, auto_refresh=False) as live:
            while True:
                if old_settings is not None:
                    chunk = _poll_keys(fd, POLL_SECONDS)
                else:
                    time.sleep(POLL_SECONDS)
                    chunk = ""
                dirty = False
                for event in decode_keys(chunk):
                    if _is_quit(controller, event):
                        return
                    dirty = controller.handle_key(event) or dirty
                if outbox.refresh_requested or time.monotonic() >= next_refresh:
                    outbox.refresh_requested = False
                    _refresh(controller, data_dir)
                    next_refresh = time.monotonic() + refresh_seconds
                    dirty = True
                if dirty:
                    live.update(build_renderable(), refresh=True)
    except KeyboardInterrupt:
        pass
    finally:
        if old_settings is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Task board and agent sessions dashboard")
    parser.add_argument("-l", "--live", action="store_true", help="Run interactive dashboard")
    parser.add_argument("--json", action="store_true", help="Emit JSON payload")
    parser.add_argument("--profile", default=os.environ.get("TASKDECK_PROFILE", "default"), help="Profile name: default|board")
    parser.add_argument("--config", help="Optional JSON config file for panel/theme overrides")
    parser.add_argument("--refresh", type=int, help="Refresh interval seconds override")
    parser.add_argument("--data-dir", help="Directory holding tasks.json and sessions.json (default TASKDECK_DIR)")
    parser.add_argument("--log-file", help="Write logs to this file (rotated)")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default WARNING)")
    args = parser.parse_args(argv)

    try:
        profile = resolve_profile(args.profile, args.config)
        theme = ThemeEngine(build_theme(profile))
    except ValueError as exc:
        parser.error(str(exc))

    configure_logging(args.log_file, args.log_level, args.live)

    refresh_seconds = max(1, int(args.refresh or profile.get("refresh_seconds", 5)))
    data_dir = Path(args.data_dir) if args.data_dir else env_data_dir()

    outbox = Outbox()
    data = _collect_core(data_dir)
    for snapshot in data.values():
        for error in snapshot.errors:
            logger.warning("%s: %s", snapshot.key, error)
    controller = NavigationController(
        tasks=data["tasks"].items,
        sessions=data["sessions"].items,
        theme=theme,
        callbacks=outbox.callbacks(),
        agent_pane="agents" in profile["panels"],
    )

    if args.json:
        print(_json_output(profile, controller, data))
        return 0

    console = Console()

    if args.live:
        run_live(console, controller, theme, profile, data_dir, refresh_seconds, outbox)
        for record in outbox.records:
            print(json.dumps(record, sort_keys=True))
        return 0

    now = datetime.now(timezone.utc)
    console.print(render_screen(controller, theme, profile, console.size.width, today=date.today(), now=now))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
