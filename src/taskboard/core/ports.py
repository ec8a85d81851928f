# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task API depends on a Protocol instead of the concrete TodoStore, so the
store can be swapped (or faked) without touching connectors.
"""

from typing import Protocol
from uuid import UUID

from ..tasks.task_models import Todo, TodoListFilter, TodoStats, TodoToggleAction


class TodoRepo(Protocol):
    # Counters
    @property
    def count_all(self) -> int: ...
    @property
    def count_active(self) -> int: ...
    @property
    def count_completed(self) -> int: ...
    def stats(self) -> TodoStats: ...

    # Reads (read lock)
    def get(self, todo_id: UUID) -> Todo: ...
    def list(self, filter: TodoListFilter = TodoListFilter.ALL) -> list[Todo]: ...

    # Mutations (write lock)
    def create(self, text: str) -> Todo: ...
    def update(
            self,
            todo_id: UUID,
            text: str | None = None,
            is_completed: bool | None = None,
    ) -> Todo: ...
    def delete(self, todo_id: UUID) -> None: ...
    def delete_completed(self) -> int: ...
    def toggle_completed(self, action: TodoToggleAction) -> None: ...
