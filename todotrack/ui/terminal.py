from __future__ import annotations

import contextlib
import curses
import locale
import logging
from pathlib import Path

from todotrack.config import Settings
from todotrack.domain.enums import Intent, TaskState
from todotrack.domain.view_state import ViewState
from todotrack.infra.repository import TaskList
from todotrack.services.task_service import TaskService

from .rows import Row, layout_rows

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 100
ESCAPE = 27
ENTER_KEYS = (10, 13, curses.KEY_ENTER)
BACKSPACE_KEYS = (8, 127, curses.KEY_BACKSPACE)

KEY_INTENTS: dict[int, Intent] = {
    curses.KEY_UP: Intent.MOVE_UP,
    ord("k"): Intent.MOVE_UP,
    curses.KEY_DOWN: Intent.MOVE_DOWN,
    ord("j"): Intent.MOVE_DOWN,
    curses.KEY_RIGHT: Intent.ADVANCE,
    ord("l"): Intent.ADVANCE,
    curses.KEY_LEFT: Intent.RESET,
    ord("h"): Intent.RESET,
    ord("p"): Intent.MARK_PRIORITY,
    ord("!"): Intent.MARK_PRIORITY,
    ord("a"): Intent.APPEND,
    ord("q"): Intent.QUIT,
    ESCAPE: Intent.QUIT,
    **{key: Intent.ADVANCE for key in ENTER_KEYS},
}

# Color pair number per state.
STATE_COLORS: dict[TaskState, tuple[int, int]] = {
    TaskState.NOT_STARTED: (1, curses.COLOR_WHITE),
    TaskState.PRIORITY: (2, curses.COLOR_RED),
    TaskState.DOING: (3, curses.COLOR_CYAN),
    TaskState.IN_REVIEW: (4, curses.COLOR_YELLOW),
    TaskState.DONE: (5, curses.COLOR_GREEN),
}

HELP_LINE = "↑↓ move  → advance  ← reset  p priority  a add  q quit"
ASCII_HELP_LINE = "up/down move  right advance  left reset  p priority  a add  q quit"


def intent_for_key(key: int | str) -> Intent | None:
    if isinstance(key, str):
        if len(key) != 1:
            return None
        key = ord(key)
    return KEY_INTENTS.get(key)


class TerminalView:
    def __init__(self, stdscr, settings: Settings, list_path: Path) -> None:
        self.stdscr = stdscr
        self.settings = settings
        self.list_path = list_path
        self.status = ""

        with contextlib.suppress(curses.error):
            curses.curs_set(0)
        self.stdscr.keypad(True)
        self.stdscr.timeout(POLL_INTERVAL_MS)

        self.has_colors = curses.has_colors()
        self.state_attrs: dict[TaskState, int] = {}
        if self.has_colors:
            curses.start_color()
            for state, (pair, fg) in STATE_COLORS.items():
                curses.init_pair(pair, fg, curses.COLOR_BLACK)
                self.state_attrs[state] = curses.color_pair(pair)
        else:
            self.state_attrs = {state: curses.A_BOLD for state in STATE_COLORS}
            self.state_attrs[TaskState.DONE] = curses.A_DIM

    def visible_rows(self) -> int:
        height, _ = self.stdscr.getmaxyx()
        # title line on top, status line at the bottom
        return max(height - 2, 1)

    def draw(self, task_list: TaskList, view: ViewState) -> None:
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()
        if height < 3 or width < 2:
            self.stdscr.refresh()
            return

        title = f"{self.list_path}  ({task_list.count()} tasks)"
        self._put(0, 0, title, width, curses.A_BOLD)

        rows = layout_rows(
            list(task_list),
            view,
            self.visible_rows(),
            unicode_glyphs=self.settings.unicode_glyphs,
            week_headers=self.settings.week_headers,
        )
        for offset, row in enumerate(rows):
            self._draw_row(1 + offset, row, width)

        footer = self.status or (HELP_LINE if self.settings.unicode_glyphs else ASCII_HELP_LINE)
        self._put(height - 1, 0, footer, width, curses.A_DIM)
        self.stdscr.refresh()

    def _draw_row(self, y: int, row: Row, width: int) -> None:
        if row.is_header:
            self._put(y, 0, row.prefix, width, curses.A_DIM)
            return
        base = curses.A_STANDOUT if row.selected else curses.A_NORMAL
        x = self._put(y, 0, row.prefix, width, base)
        x = self._put(y, x, row.glyph, width, base | self.state_attrs[row.state])
        self._put(y, x, row.text, width, base)

    def _put(self, y: int, x: int, text: str, width: int, attr: int) -> int:
        # The last column is left empty; writing there moves the cursor off screen.
        room = width - 1 - x
        if room <= 0 or not text:
            return x
        self.stdscr.addnstr(y, x, text, room, attr)
        return x + min(len(text), room)

    def read_key(self) -> int | str | None:
        try:
            return self.stdscr.get_wch()
        except curses.error:
            return None

    def read_intent(self) -> Intent | None:
        key = self.read_key()
        if key is None or key == curses.KEY_RESIZE:
            return None
        return intent_for_key(key)

    def prompt(self, label: str) -> str | None:
        """Read one line on the status row. Enter submits, Esc cancels."""
        height, width = self.stdscr.getmaxyx()
        buffer: list[str] = []
        with contextlib.suppress(curses.error):
            curses.curs_set(1)
        try:
            while True:
                line = f"{label} {''.join(buffer)}"
                self.stdscr.move(height - 1, 0)
                self.stdscr.clrtoeol()
                self._put(height - 1, 0, line, width, curses.A_NORMAL)
                self.stdscr.refresh()
                key = self.read_key()
                if key is None:
                    continue
                code = ord(key) if isinstance(key, str) and len(key) == 1 else key
                if code == ESCAPE:
                    return None
                if code in ENTER_KEYS:
                    text = "".join(buffer).strip()
                    return text or None
                if code in BACKSPACE_KEYS:
                    if buffer:
                        buffer.pop()
                    continue
                if isinstance(key, str) and key.isprintable():
                    buffer.append(key)
        finally:
            with contextlib.suppress(curses.error):
                curses.curs_set(0)


def _loop(stdscr, service: TaskService, settings: Settings, list_path: Path) -> None:
    terminal = TerminalView(stdscr, settings, list_path)
    while True:
        rows = terminal.visible_rows()
        service.view.clamp(service.task_list.count(), rows)
        terminal.draw(service.task_list, service.view)

        intent = terminal.read_intent()
        if intent is None:
            continue
        text = None
        if intent == Intent.APPEND:
            text = terminal.prompt("New task:")
            if text is None:
                terminal.status = ""
                continue
        try:
            keep_running = service.apply(intent, rows, text)
        except ValueError as exc:
            terminal.status = str(exc)
            continue
        terminal.status = ""
        if not keep_running:
            return


def run_interactive(service: TaskService, settings: Settings, list_path: Path) -> None:
    """Run the key loop until the user quits. The caller saves the list afterwards."""
    locale.setlocale(locale.LC_ALL, "")
    service.task_list.sort()
    logger.info("Interactive view started with %s tasks", service.task_list.count())
    curses.wrapper(_loop, service, settings, list_path)
