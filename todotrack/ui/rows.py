from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from todotrack.domain.entities import TaskRecord
from todotrack.domain.enums import TaskState
from todotrack.domain.ordering import relevant_timestamp
from todotrack.domain.view_state import ViewState

ASCII_GLYPHS = {
    TaskState.NOT_STARTED: " . ",
    TaskState.PRIORITY: " ! ",
    TaskState.DOING: " O ",
    TaskState.IN_REVIEW: " R ",
    TaskState.DONE: " X ",
}

UNICODE_GLYPHS = {
    TaskState.NOT_STARTED: " ○ ",
    TaskState.PRIORITY: " ‼ ",
    TaskState.DOING: " ◐ ",
    TaskState.IN_REVIEW: " ◑ ",
    TaskState.DONE: " ✔ ",
}

ASCII_MARKER = " >  "
UNICODE_MARKER = " ▶  "
BLANK_MARKER = "    "


@dataclass(frozen=True)
class Row:
    """One screen line. Week headers have no state and no glyph."""

    prefix: str
    glyph: str = ""
    text: str = ""
    state: TaskState | None = None
    selected: bool = False

    @property
    def is_header(self) -> bool:
        return self.state is None

    def plain(self) -> str:
        return self.prefix + self.glyph + self.text


def _utc(timestamp: int) -> datetime | None:
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def format_date(timestamp: int) -> str:
    moment = _utc(timestamp)
    if moment is None:
        return "??-?? ??? "
    return moment.strftime("%y-%m %a ")


def week_of(timestamp: int) -> tuple[int, int]:
    moment = _utc(timestamp)
    if moment is None:
        return 0, 0
    iso = moment.isocalendar()
    return iso.year, iso.week


def week_header(timestamp: int, unicode_glyphs: bool = False) -> str:
    year, week = week_of(timestamp)
    rule = "──" if unicode_glyphs else "--"
    return f"{rule} week {week:02d}, {year} {rule}"


def record_row(record: TaskRecord, selected: bool, unicode_glyphs: bool = False) -> Row:
    if selected:
        marker = UNICODE_MARKER if unicode_glyphs else ASCII_MARKER
    else:
        marker = BLANK_MARKER
    glyphs = UNICODE_GLYPHS if unicode_glyphs else ASCII_GLYPHS
    return Row(
        prefix=marker + format_date(record.added_at),
        glyph=glyphs[record.state],
        text=record.text,
        state=record.state,
        selected=selected,
    )


def layout_rows(
    records: Sequence[TaskRecord],
    view: ViewState,
    height: int,
    *,
    unicode_glyphs: bool = False,
    week_headers: bool = False,
) -> list[Row]:
    """Rows for a body ``height`` lines tall, starting at the view's scroll offset.

    Week headers take lines of their own, so when they push the selected record
    past the bottom the window slides down until it is the last line.
    """
    if height <= 0:
        return []

    rows: list[Row] = []
    selected_line: int | None = None
    previous_week: tuple[int, int] | None = None
    end = min(len(records), max(view.scroll_offset + height, view.selection_index + 1))
    for index in range(view.scroll_offset, end):
        record = records[index]
        if week_headers:
            stamp = relevant_timestamp(record)
            week = week_of(stamp)
            if previous_week is not None and week != previous_week:
                rows.append(Row(prefix=week_header(stamp, unicode_glyphs)))
            previous_week = week
        selected = index == view.selection_index
        if selected:
            selected_line = len(rows)
        rows.append(record_row(record, selected, unicode_glyphs))

    start = 0
    if selected_line is not None and selected_line >= height:
        start = selected_line - height + 1
    return rows[start:start + height]
