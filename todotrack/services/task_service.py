from __future__ import annotations

import logging
import time
from collections.abc import Callable

from todotrack.domain.entities import TaskRecord
from todotrack.domain.enums import Intent, TaskState
from todotrack.domain.view_state import ViewState
from todotrack.infra.repository import TaskList

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def advance(record: TaskRecord, now: int) -> None:
    if record.state in (TaskState.NOT_STARTED, TaskState.PRIORITY):
        record.state = TaskState.DOING
        record.started_at = now
    elif record.state == TaskState.DOING:
        record.state = TaskState.IN_REVIEW
    elif record.state == TaskState.IN_REVIEW:
        record.state = TaskState.DONE
        record.completed_at = now


def reset(record: TaskRecord) -> None:
    # Timestamps stay as a record of what already happened.
    record.state = TaskState.NOT_STARTED


def mark_priority(record: TaskRecord, now: int) -> None:
    if record.state == TaskState.DONE:
        return
    record.state = TaskState.PRIORITY
    record.started_at = now


def append(task_list: TaskList, text: str, now: int) -> TaskRecord:
    text = text.strip()
    if not text:
        raise ValueError("task text is required")
    if "\n" in text or "\r" in text:
        raise ValueError("task text cannot contain a line break")
    record = TaskRecord.new(text, now)
    task_list.prepend(record)
    return record


class TaskService:
    """Applies one user intent at a time to the list and the cursor over it."""

    def __init__(self, task_list: TaskList, view: ViewState | None = None, clock: Clock = time.time) -> None:
        self._list = task_list
        self._view = view or ViewState()
        self._clock = clock

    @property
    def task_list(self) -> TaskList:
        return self._list

    @property
    def view(self) -> ViewState:
        return self._view

    def apply(self, intent: Intent, visible_rows: int = 1, text: str | None = None) -> bool:
        """Apply ``intent``; returns False when the intent asks to quit."""
        if intent == Intent.QUIT:
            return False

        count = self._list.count()
        if intent == Intent.MOVE_UP:
            self._view.move_up(count)
        elif intent == Intent.MOVE_DOWN:
            self._view.move_down(count, visible_rows)
        elif intent == Intent.APPEND:
            if text is None:
                raise ValueError("append needs the task text")
            record = append(self._list, text, self._now())
            logger.debug("Appended task added_at=%s text=%r", record.added_at, record.text)
        elif count:
            record = self._view.selected(self._list)
            before = record.state
            if intent == Intent.ADVANCE:
                advance(record, self._now())
            elif intent == Intent.RESET:
                reset(record)
            elif intent == Intent.MARK_PRIORITY:
                mark_priority(record, self._now())
            logger.debug("%s: %s -> %s text=%r", intent.value, before.name, record.state.name, record.text)

        self._list.sort()
        self._view.clamp(self._list.count(), visible_rows)
        return True

    def append_all(self, texts: list[str]) -> None:
        now = self._now()
        for text in texts:
            append(self._list, text, now)
        self._list.sort()

    def _now(self) -> int:
        return int(self._clock())
