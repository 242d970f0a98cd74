from __future__ import annotations

from collections.abc import Iterable

from .entities import TaskRecord
from .enums import TaskState

# Lower rank sorts first.
STATE_PRECEDENCE: dict[TaskState, int] = {
    TaskState.IN_REVIEW: 0,
    TaskState.PRIORITY: 1,
    TaskState.DOING: 2,
    TaskState.NOT_STARTED: 3,
    TaskState.DONE: 4,
}


def relevant_timestamp(record: TaskRecord) -> int:
    """Time field that orders records sharing a state."""
    if record.state == TaskState.NOT_STARTED:
        return record.added_at
    if record.state == TaskState.DONE:
        return record.completed_at
    return record.started_at


def sort_key(record: TaskRecord) -> tuple[int, int]:
    return STATE_PRECEDENCE[record.state], -relevant_timestamp(record)


def sort_tasks(records: Iterable[TaskRecord]) -> list[TaskRecord]:
    # sorted() is stable, so equal keys keep their previous relative order.
    return sorted(records, key=sort_key)
