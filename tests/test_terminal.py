from __future__ import annotations

import curses

import pytest

from todotrack.domain.enums import Intent
from todotrack.ui.terminal import intent_for_key


@pytest.mark.parametrize(
    ("key", "intent"),
    [
        (curses.KEY_UP, Intent.MOVE_UP),
        ("k", Intent.MOVE_UP),
        (curses.KEY_DOWN, Intent.MOVE_DOWN),
        ("j", Intent.MOVE_DOWN),
        (curses.KEY_RIGHT, Intent.ADVANCE),
        ("\n", Intent.ADVANCE),
        (curses.KEY_LEFT, Intent.RESET),
        ("p", Intent.MARK_PRIORITY),
        ("!", Intent.MARK_PRIORITY),
        ("a", Intent.APPEND),
        ("q", Intent.QUIT),
        ("\x1b", Intent.QUIT),
    ],
)
def test_keys_map_to_intents(key: int | str, intent: Intent) -> None:
    assert intent_for_key(key) == intent


@pytest.mark.parametrize("key", ["z", "é", curses.KEY_F1])
def test_other_keys_are_ignored(key: int | str) -> None:
    assert intent_for_key(key) is None
