from __future__ import annotations

from enum import IntEnum, StrEnum


class TaskState(IntEnum):
    # Values are the ordinals written to the list file.
    NOT_STARTED = 0
    PRIORITY = 1
    DOING = 2
    DONE = 3
    IN_REVIEW = 4


class Intent(StrEnum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    ADVANCE = "advance"
    RESET = "reset"
    MARK_PRIORITY = "mark_priority"
    APPEND = "append"
    QUIT = "quit"


class DecodeReason(StrEnum):
    MALFORMED = "malformed"
    INVALID_STATE = "invalid_state"


class LoadReason(StrEnum):
    NOT_FOUND = "not_found"
