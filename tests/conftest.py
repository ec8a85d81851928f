# tests/conftest.py

from __future__ import annotations

import itertools
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.core.state import AppState
from taskboard.tasks.task_store import TodoStore


class FakeClock:
    """Deterministic monotonic clock: 1000, 2000, 3000, ..."""

    def __init__(self, start: int = 1000, step: int = 1000) -> None:
        self._ticks = itertools.count(start, step)

    def __call__(self) -> int:
        return next(self._ticks)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> TodoStore:
    return TodoStore(clock=clock)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        quiet_loggers=["taskboard.tasks.task_store"],
        console_enabled=True,
        data_dir=tmp_path / "data",
        log_file_path=tmp_path / "data" / "taskboard.log",
    )


@pytest.fixture()
def state(settings: SimpleNamespace, store: TodoStore) -> AppState:
    return AppState(settings=settings, store=store)
