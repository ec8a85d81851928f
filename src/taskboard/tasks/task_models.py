# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class TodoListFilter(StrEnum):
    """View selector for listing todos."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def from_raw(cls, raw: str | None) -> TodoListFilter:
        if not raw or not raw.strip():
            return cls.ALL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown filter: {raw!r}") from None

    def matches(self, todo: Todo) -> bool:
        if self is TodoListFilter.ACTIVE:
            return not todo.is_completed
        if self is TodoListFilter.COMPLETED:
            return todo.is_completed
        return True


class TodoToggleAction(StrEnum):
    """
    Bulk toggle action.

    The action is applied to every todo unconditionally:
    - check   -> all completed
    - uncheck -> all active
    """

    CHECK = "check"
    UNCHECK = "uncheck"

    @classmethod
    def from_raw(cls, raw: str | None) -> TodoToggleAction:
        if not raw or not raw.strip():
            return cls.CHECK
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown toggle action: {raw!r}") from None

    @property
    def is_completed(self) -> bool:
        return self is TodoToggleAction.CHECK

    def flipped(self) -> TodoToggleAction:
        if self is TodoToggleAction.CHECK:
            return TodoToggleAction.UNCHECK
        return TodoToggleAction.CHECK


class TodoNotFoundError(KeyError):
    """Raised when an id does not resolve to an existing todo."""

    def __init__(self, todo_id: UUID | str) -> None:
        super().__init__(todo_id)
        self.todo_id = todo_id

    def __str__(self) -> str:
        return f"Todo not found: {self.todo_id}"


@dataclass(slots=True)
class Todo:
    id: UUID
    text: str
    is_completed: bool
    created_at: int  # monotonic clock, nanoseconds


@dataclass(frozen=True, slots=True)
class TodoStats:
    all: int
    active: int
    completed: int
