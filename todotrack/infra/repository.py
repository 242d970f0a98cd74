from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from todotrack.domain.entities import TaskRecord
from todotrack.domain.enums import DecodeReason, LoadReason
from todotrack.domain.errors import DecodeError, LoadError
from todotrack.domain.ordering import sort_tasks

from .codec import decode_line, encode_record, is_blank

ENCODING = "utf-8"

logger = logging.getLogger(__name__)


class TaskList:
    def __init__(self, records: list[TaskRecord] | None = None) -> None:
        self._records: list[TaskRecord] = list(records or [])

    @classmethod
    def load(cls, source: BinaryIO) -> TaskList:
        """Decode every non-blank line of ``source``; any bad line fails the whole load."""
        records: list[TaskRecord] = []
        for line_number, raw in enumerate(source.read().split(b"\n"), start=1):
            try:
                line = raw.decode(ENCODING)
            except UnicodeDecodeError as exc:
                raise DecodeError(DecodeReason.MALFORMED, str(exc), line_number) from exc
            if is_blank(line):
                continue
            try:
                records.append(decode_line(line))
            except DecodeError as exc:
                raise exc.at_line(line_number) from exc
        return cls(records)

    def save(self, sink: BinaryIO) -> None:
        for record in self._records:
            sink.write(encode_record(record).encode(ENCODING))

    def prepend(self, record: TaskRecord) -> None:
        self._records.insert(0, record)

    def get(self, index: int) -> TaskRecord:
        if index < 0 or index >= len(self._records):
            raise IndexError(f"no task at position {index} (list has {len(self._records)})")
        return self._records[index]

    def count(self) -> int:
        return len(self._records)

    def sort(self) -> None:
        self._records = sort_tasks(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TaskRecord]:
        return iter(self._records)


class TaskListRepository:
    """Whole-file load and save of a task list at ``path``."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TaskList:
        try:
            with self._path.open("rb") as source:
                task_list = TaskList.load(source)
        except OSError as exc:
            raise LoadError(LoadReason.NOT_FOUND, self._path, exc.strerror or str(exc)) from exc
        logger.info("Loaded %s tasks from %s", task_list.count(), self._path)
        return task_list

    def save(self, task_list: TaskList) -> None:
        task_list.sort()
        # Write through a symlinked list file instead of replacing the link.
        target = self._path.resolve()
        tmp_path = target.with_name(target.name + ".tmp")
        try:
            with tmp_path.open("wb") as sink:
                task_list.save(sink)
                sink.flush()
                os.fsync(sink.fileno())
            os.replace(tmp_path, target)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.info("Saved %s tasks to %s", task_list.count(), self._path)

    def create(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("xb"):
            pass
        logger.info("Created empty task list %s", self._path)
