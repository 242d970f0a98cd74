from __future__ import annotations

import random

from fakes import make_record
from todotrack.domain.enums import TaskState
from todotrack.domain.ordering import relevant_timestamp, sort_tasks


def test_states_sort_by_urgency() -> None:
    records = [
        make_record("done", TaskState.DONE, completed_at=9),
        make_record("not started", TaskState.NOT_STARTED, added_at=9),
        make_record("doing", TaskState.DOING, started_at=9),
        make_record("review", TaskState.IN_REVIEW, started_at=9),
        make_record("priority", TaskState.PRIORITY, started_at=9),
    ]
    random.Random(7).shuffle(records)

    ordered = sort_tasks(records)

    assert [r.state for r in ordered] == [
        TaskState.IN_REVIEW,
        TaskState.PRIORITY,
        TaskState.DOING,
        TaskState.NOT_STARTED,
        TaskState.DONE,
    ]


def test_newest_first_within_a_state() -> None:
    older = make_record("older", TaskState.NOT_STARTED, added_at=1)
    newer = make_record("newer", TaskState.NOT_STARTED, added_at=2)

    assert sort_tasks([older, newer]) == [newer, older]


def test_tie_break_field_depends_on_state() -> None:
    doing_early = make_record("a", TaskState.DOING, added_at=100, started_at=5)
    doing_late = make_record("b", TaskState.DOING, added_at=1, started_at=50)
    done_early = make_record("c", TaskState.DONE, added_at=100, started_at=100, completed_at=110)
    done_late = make_record("d", TaskState.DONE, added_at=1, started_at=1, completed_at=200)

    ordered = sort_tasks([doing_early, done_early, doing_late, done_late])

    assert ordered == [doing_late, doing_early, done_late, done_early]


def test_equal_keys_keep_their_order() -> None:
    first = make_record("first", TaskState.PRIORITY, started_at=4)
    second = make_record("second", TaskState.PRIORITY, started_at=4)
    third = make_record("third", TaskState.PRIORITY, started_at=4)

    assert sort_tasks([first, second, third]) == [first, second, third]
    assert sort_tasks([third, first, second]) == [third, first, second]


def test_relevant_timestamp() -> None:
    record = make_record(added_at=1, started_at=2, completed_at=3)

    assert relevant_timestamp(record) == 1
    record.state = TaskState.IN_REVIEW
    assert relevant_timestamp(record) == 2
    record.state = TaskState.DONE
    assert relevant_timestamp(record) == 3
