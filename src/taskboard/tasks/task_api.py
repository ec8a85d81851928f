# src/taskboard/tasks/task_api.py

"""
Transport-facing task helpers.

Every call takes the application state, holds the store lock for its whole
duration (read lock for lookups, write lock for mutations) and, for mutations,
returns a TodoView rendering snapshot built under the same lock.

TodoNotFoundError propagates unchanged; connectors map it to a "not found" reply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from ..core.state import AppState
from .task_models import Todo, TodoListFilter, TodoToggleAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TodoView:
    todos: list[Todo]
    count_all: int
    count_active: int
    count_completed: int
    toggle_action: TodoToggleAction
    selected_filter: TodoListFilter

    @property
    def disable_delete(self) -> bool:
        return self.count_completed == 0

    @property
    def disable_toggle(self) -> bool:
        return self.count_all == 0


def _view_unlocked(state: AppState, filter: TodoListFilter | None = None) -> TodoView:
    store = state.store
    filt = filter if filter is not None else state.selected_filter
    return TodoView(
        todos=store.list(filt),
        count_all=store.count_all,
        count_active=store.count_active,
        count_completed=store.count_completed,
        toggle_action=state.toggle_action,
        selected_filter=filt,
    )


def build_view(state: AppState, filter: TodoListFilter | None = None) -> TodoView:
    """Snapshot for `filter`, or for the currently selected filter if None."""
    with state.lock.read():
        return _view_unlocked(state, filter)


def get_todo(state: AppState, todo_id: UUID) -> Todo:
    with state.lock.read():
        return state.store.get(todo_id)


def list_todos(state: AppState, filter: TodoListFilter | None = None) -> list[Todo]:
    """List todos for `filter`, or for the currently selected filter if None."""
    with state.lock.read():
        return state.store.list(filter if filter is not None else state.selected_filter)


def select_filter(state: AppState, filter: TodoListFilter) -> TodoView:
    with state.lock.write():
        state.selected_filter = filter
        return _view_unlocked(state)


def create_todo(state: AppState, text: str) -> TodoView:
    with state.lock.write():
        todo = state.store.create(text)
        logger.info("Created todo id=%s", todo.id)
        return _view_unlocked(state)


def update_todo(
    state: AppState,
    todo_id: UUID,
    *,
    text: str | None = None,
    is_completed: bool | None = None,
) -> TodoView:
    with state.lock.write():
        state.store.update(todo_id, text=text, is_completed=is_completed)
        return _view_unlocked(state)


def delete_todo(state: AppState, todo_id: UUID) -> TodoView:
    with state.lock.write():
        state.store.delete(todo_id)
        logger.info("Deleted todo id=%s", todo_id)
        return _view_unlocked(state)


def delete_completed_todos(state: AppState) -> TodoView:
    with state.lock.write():
        removed = state.store.delete_completed()
        logger.info("Deleted %d completed todos", removed)
        return _view_unlocked(state)


def toggle_all_todos(state: AppState) -> TodoView:
    """Apply the current bulk-toggle action to every todo, then flip the button."""
    with state.lock.write():
        action = state.toggle_action
        state.store.toggle_completed(action)
        state.toggle_action = action.flipped()
        logger.info("Toggled all todos action=%s next=%s", action.value, state.toggle_action.value)
        return _view_unlocked(state)
