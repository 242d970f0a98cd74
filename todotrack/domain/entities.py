from __future__ import annotations

from dataclasses import dataclass

from .enums import TaskState


@dataclass
class TaskRecord:
    added_at: int
    started_at: int
    completed_at: int
    state: TaskState
    text: str

    @classmethod
    def new(cls, text: str, now: int) -> TaskRecord:
        return cls(
            added_at=now,
            started_at=0,
            completed_at=0,
            state=TaskState.NOT_STARTED,
            text=text,
        )
