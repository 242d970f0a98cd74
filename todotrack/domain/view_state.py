from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .entities import TaskRecord

if TYPE_CHECKING:
    from todotrack.infra.repository import TaskList


@dataclass
class ViewState:
    """Cursor and scroll position over the sorted task list.

    Holds positions only; the list itself is owned elsewhere and passed in.
    """

    selection_index: int = 0
    scroll_offset: int = 0

    def move_up(self, count: int) -> None:
        if count == 0:
            return
        self.selection_index -= 1
        if self.selection_index < self.scroll_offset:
            if self.scroll_offset == 0:
                self.selection_index = 0
            else:
                self.scroll_offset -= 1

    def move_down(self, count: int, visible_rows: int) -> None:
        if count == 0:
            return
        self.selection_index = min(self.selection_index + 1, count - 1)
        if self.selection_index - self.scroll_offset >= max(visible_rows, 1):
            self.scroll_offset += 1

    def clamp(self, count: int, visible_rows: int) -> None:
        """Bring both positions back in bounds after the list or window changed size."""
        visible_rows = max(visible_rows, 1)
        if count == 0:
            self.selection_index = 0
            self.scroll_offset = 0
            return
        self.selection_index = max(0, min(self.selection_index, count - 1))
        self.scroll_offset = max(0, min(self.scroll_offset, self.selection_index))
        if self.selection_index - self.scroll_offset >= visible_rows:
            self.scroll_offset = self.selection_index - visible_rows + 1

    def selected(self, task_list: TaskList) -> TaskRecord:
        return task_list.get(self.selection_index)
