from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("TODOTRACK_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    level = root.level
    yield
    # Drop the handlers setup_logging attached; pytest manages its own.
    for handler in list(root.handlers):
        if isinstance(handler, RotatingFileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config"
    path.write_text(
        f"LIST_FILE={tmp_path / 'todolist'}\nLOG_DIR={tmp_path / 'logs'}\n",
        encoding="utf-8",
    )
    return path
