# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import TodoListFilter, TodoToggleAction
from .ports import TodoRepo
from .rwlock import ReadWriteLock


@dataclass
class AppState:
    """
    Shared application state.

    `store` is guarded by `lock` (see tasks/task_api.py). `selected_filter` and
    `toggle_action` are UI-session state: they live here, not in the store.
    """

    # Settings object (config.Settings or any duck-typed equivalent, e.g. in tests).
    settings: Any
    store: TodoRepo

    lock: ReadWriteLock = field(default_factory=ReadWriteLock)
    selected_filter: TodoListFilter = TodoListFilter.ALL
    toggle_action: TodoToggleAction = TodoToggleAction.CHECK
