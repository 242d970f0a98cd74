from __future__ import annotations

import random
from dataclasses import replace

import pytest

from fakes import FakeClock, make_record
from todotrack.domain.enums import Intent, TaskState
from todotrack.domain.view_state import ViewState
from todotrack.infra.repository import TaskList
from todotrack.services.task_service import TaskService, advance, append, mark_priority, reset


def test_advance_starts_a_fresh_task() -> None:
    record = make_record(completed_at=3)

    advance(record, 10)

    assert record.state == TaskState.DOING
    assert record.started_at == 10
    assert record.completed_at == 3


def test_advance_walks_the_whole_lifecycle() -> None:
    record = make_record()
    states = [record.state]

    for now in (10, 20, 30):
        advance(record, now)
        states.append(record.state)

    assert states == [TaskState.NOT_STARTED, TaskState.DOING, TaskState.IN_REVIEW, TaskState.DONE]
    assert record.started_at == 10
    assert record.completed_at == 30


def test_advance_from_priority_restamps_start() -> None:
    record = make_record(state=TaskState.PRIORITY, started_at=5)

    advance(record, 40)

    assert record.state == TaskState.DOING
    assert record.started_at == 40


def test_advance_on_done_changes_nothing() -> None:
    record = make_record(state=TaskState.DONE, added_at=1, started_at=2, completed_at=3)
    before = replace(record)

    advance(record, 99)

    assert record == before


def test_reset_keeps_timestamps() -> None:
    record = make_record(state=TaskState.DONE, added_at=1, started_at=2, completed_at=3)

    reset(record)

    assert record == make_record(state=TaskState.NOT_STARTED, added_at=1, started_at=2, completed_at=3)


def test_mark_priority_stamps_start() -> None:
    record = make_record(state=TaskState.IN_REVIEW, started_at=5)

    mark_priority(record, 50)

    assert record.state == TaskState.PRIORITY
    assert record.started_at == 50


def test_mark_priority_ignores_done_tasks() -> None:
    record = make_record(state=TaskState.DONE, started_at=2, completed_at=3)
    before = replace(record)

    mark_priority(record, 50)

    assert record == before


def test_append_to_empty_list() -> None:
    task_list = TaskList()

    append(task_list, "buy milk", 100)

    assert task_list.count() == 1
    assert task_list.get(0) == make_record("buy milk", TaskState.NOT_STARTED, added_at=100)


def test_append_inserts_at_front() -> None:
    task_list = TaskList([make_record("old", added_at=500)])

    append(task_list, "  new  ", 100)

    assert [r.text for r in task_list] == ["new", "old"]


@pytest.mark.parametrize("text", ["", "   ", "two\nlines"])
def test_append_rejects_unusable_text(text: str) -> None:
    task_list = TaskList()

    with pytest.raises(ValueError):
        append(task_list, text, 100)
    assert task_list.count() == 0


def test_service_advances_selected_task_and_resorts() -> None:
    x = make_record("x", added_at=5)
    y = make_record("y", added_at=3)
    service = TaskService(TaskList([x, y]), ViewState(), clock=FakeClock(100))

    service.apply(Intent.MOVE_DOWN, visible_rows=10)
    service.apply(Intent.ADVANCE, visible_rows=10)

    assert [r.text for r in service.task_list] == ["y", "x"]
    assert y.state == TaskState.DOING
    assert y.started_at == 100
    assert service.view.selection_index == 1


def test_service_append_uses_clock() -> None:
    clock = FakeClock(200)
    service = TaskService(TaskList([make_record("x", added_at=5)]), clock=clock)

    service.apply(Intent.APPEND, text="new")

    assert [r.text for r in service.task_list] == ["new", "x"]
    assert service.task_list.get(0).added_at == 200


def test_service_quit_stops_the_loop() -> None:
    service = TaskService(TaskList([make_record()]))

    assert service.apply(Intent.MOVE_DOWN) is True
    assert service.apply(Intent.QUIT) is False


@pytest.mark.parametrize("intent", [Intent.ADVANCE, Intent.RESET, Intent.MARK_PRIORITY, Intent.MOVE_UP, Intent.MOVE_DOWN])
def test_service_intents_on_empty_list_are_noops(intent: Intent) -> None:
    service = TaskService(TaskList(), clock=FakeClock(1))

    assert service.apply(intent, visible_rows=5) is True
    assert service.task_list.count() == 0
    assert service.view == ViewState()


def test_service_append_all_puts_later_arguments_first() -> None:
    ticks = iter([100.0, 200.0])
    service = TaskService(TaskList(), clock=lambda: next(ticks))

    service.append_all(["first", "second"])

    assert [r.text for r in service.task_list] == ["second", "first"]
    assert [r.added_at for r in service.task_list] == [100, 100]


RANDOM_INTENTS = [
    Intent.MOVE_UP,
    Intent.MOVE_DOWN,
    Intent.ADVANCE,
    Intent.RESET,
    Intent.MARK_PRIORITY,
    Intent.APPEND,
]


@pytest.mark.parametrize("seed", range(20))
def test_random_intents_keep_selection_in_bounds(seed: int) -> None:
    rng = random.Random(seed)
    clock = FakeClock(1000)
    records = [make_record(f"seed{i}", added_at=i + 1) for i in range(rng.randint(0, 4))]
    service = TaskService(TaskList(records), clock=clock)
    visible_rows = rng.randint(1, 6)

    for step in range(300):
        clock.now += rng.randint(0, 3)
        intent = rng.choice(RANDOM_INTENTS)
        text = f"t{step}" if intent == Intent.APPEND else None

        assert service.apply(intent, visible_rows, text) is True

        count = service.task_list.count()
        view = service.view
        if count == 0:
            assert view == ViewState()
            continue
        assert 0 <= view.selection_index < count
        assert 0 <= view.scroll_offset <= view.selection_index
        assert view.selection_index - view.scroll_offset < visible_rows
        assert view.selected(service.task_list) is service.task_list.get(view.selection_index)
