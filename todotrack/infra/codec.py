from __future__ import annotations

from todotrack.domain.entities import TaskRecord
from todotrack.domain.enums import DecodeReason, TaskState
from todotrack.domain.errors import DecodeError

FIELD_COUNT = 4


def is_blank(line: str) -> bool:
    return not line.strip()


def decode_line(line: str) -> TaskRecord:
    line = line.rstrip("\r\n")
    parts = line.split(None, FIELD_COUNT)
    if len(parts) < FIELD_COUNT:
        raise DecodeError(DecodeReason.MALFORMED, f"expected {FIELD_COUNT} numeric fields, got {len(parts)}")

    try:
        added_at = int(parts[0], 16)
        started_at = int(parts[1], 16)
        completed_at = int(parts[2], 16)
        ordinal = int(parts[3], 10)
    except ValueError as exc:
        raise DecodeError(DecodeReason.MALFORMED, str(exc)) from exc

    try:
        state = TaskState(ordinal)
    except ValueError as exc:
        raise DecodeError(DecodeReason.INVALID_STATE, f"unknown state ordinal {ordinal}") from exc

    text = parts[FIELD_COUNT] if len(parts) > FIELD_COUNT else ""
    if "\r" in text or "\n" in text:
        raise DecodeError(DecodeReason.MALFORMED, "task text contains a line break")
    return TaskRecord(
        added_at=added_at,
        started_at=started_at,
        completed_at=completed_at,
        state=state,
        text=text,
    )


def encode_record(record: TaskRecord) -> str:
    if "\n" in record.text or "\r" in record.text:
        raise ValueError("task text cannot contain a line break")
    return (
        f"{record.added_at:X} {record.started_at:X} {record.completed_at:X} "
        f"{int(record.state)} {record.text}\n"
    )
