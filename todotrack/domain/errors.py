from __future__ import annotations

from pathlib import Path

from .enums import DecodeReason, LoadReason


class TodoTrackError(Exception):
    """Base class for the failures the command line reports to the user."""


class DecodeError(TodoTrackError):
    """A list file line could not be turned into a task record."""

    def __init__(self, reason: DecodeReason, detail: str, line_number: int | None = None):
        self.reason = reason
        self.detail = detail
        self.line_number = line_number
        super().__init__(str(self))

    def at_line(self, line_number: int) -> DecodeError:
        return DecodeError(self.reason, self.detail, line_number)

    def __str__(self) -> str:
        where = f"line {self.line_number}: " if self.line_number is not None else ""
        return f"{where}{self.reason.value}: {self.detail}"


class LoadError(TodoTrackError):
    def __init__(self, reason: LoadReason, path: Path, detail: str = ""):
        self.reason = reason
        self.path = path
        message = f"cannot read task list {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ConfigError(TodoTrackError):
    pass
