# src/taskboard/tasks/task_store.py

from __future__ import annotations

import dataclasses
import logging
import time
import uuid
from collections.abc import Callable
from uuid import UUID

from .task_models import Todo, TodoListFilter, TodoNotFoundError, TodoStats, TodoToggleAction

logger = logging.getLogger(__name__)


class TodoStore:
    """
    In-memory todo store with running counters.

    Counters (all / active / completed) are a cache over the items and must
    always agree with the completion flags. Every counter change happens in the
    same private helper that mutates the collection:
    - _insert / _remove
    - _set_completed (single todo, only on an actual flip)
    - _set_all_completed (bulk overwrite, closed-form recount)

    Thread-safety:
    - none internally; callers hold a read lock for get/list and a write lock
      for everything else (see tasks/task_api.py)

    Values handed out are copies: callers can't corrupt store state through them.
    """

    def __init__(self, *, clock: Callable[[], int] = time.monotonic_ns) -> None:
        self._clock = clock
        self._items: dict[UUID, Todo] = {}
        self._num_all = 0
        self._num_active = 0
        self._num_completed = 0
        logger.debug("TodoStore ready")

    # ---- counters ----

    @property
    def count_all(self) -> int:
        return self._num_all

    @property
    def count_active(self) -> int:
        return self._num_active

    @property
    def count_completed(self) -> int:
        return self._num_completed

    def stats(self) -> TodoStats:
        return TodoStats(
            all=self._num_all,
            active=self._num_active,
            completed=self._num_completed,
        )

    def __len__(self) -> int:
        return self._num_all

    def __contains__(self, todo_id: object) -> bool:
        return todo_id in self._items

    def verify_counters(self) -> None:
        """Recount from the items; raise RuntimeError if the cached counters drifted."""
        completed = sum(1 for t in self._items.values() if t.is_completed)
        expected = TodoStats(
            all=len(self._items),
            active=len(self._items) - completed,
            completed=completed,
        )
        actual = self.stats()
        if actual != expected:
            raise RuntimeError(f"TodoStore counters drifted: cached={actual} actual={expected}")

    # ---- low-level helpers ----

    @staticmethod
    def _copy(todo: Todo) -> Todo:
        return dataclasses.replace(todo)

    def _lookup(self, todo_id: UUID) -> Todo:
        todo = self._items.get(todo_id)
        if todo is None:
            logger.debug("Todo not found id=%s", todo_id)
            raise TodoNotFoundError(todo_id)
        return todo

    def _insert(self, todo: Todo) -> None:
        self._items[todo.id] = todo
        self._num_all += 1
        if todo.is_completed:
            self._num_completed += 1
        else:
            self._num_active += 1

    def _remove(self, todo_id: UUID) -> Todo:
        todo = self._items.pop(todo_id, None)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        self._num_all -= 1
        if todo.is_completed:
            self._num_completed -= 1
        else:
            self._num_active -= 1
        return todo

    def _set_completed(self, todo: Todo, is_completed: bool) -> None:
        if todo.is_completed == is_completed:
            return
        todo.is_completed = is_completed
        if is_completed:
            self._num_completed += 1
            self._num_active -= 1
        else:
            self._num_completed -= 1
            self._num_active += 1

    def _set_all_completed(self, is_completed: bool) -> None:
        for todo in self._items.values():
            todo.is_completed = is_completed
        if is_completed:
            self._num_completed = self._num_all
            self._num_active = 0
        else:
            self._num_completed = 0
            self._num_active = self._num_all

    # ---- public API ----

    def get(self, todo_id: UUID) -> Todo:
        return self._copy(self._lookup(todo_id))

    def list(self, filter: TodoListFilter = TodoListFilter.ALL) -> list[Todo]:
        """
        Todos matching `filter`, most recently created first.

        Equal timestamps keep newest-insertion-first order (the sort is stable
        and runs over the items in reverse insertion order).
        """
        matching = [t for t in reversed(self._items.values()) if filter.matches(t)]
        matching.sort(key=lambda t: t.created_at, reverse=True)
        return [self._copy(t) for t in matching]

    def create(self, text: str) -> Todo:
        todo = Todo(
            id=uuid.uuid4(),
            text=text,
            is_completed=False,
            created_at=self._clock(),
        )
        self._insert(todo)
        logger.debug("Todo created id=%s all=%s", todo.id, self._num_all)
        return self._copy(todo)

    def update(
        self,
        todo_id: UUID,
        text: str | None = None,
        is_completed: bool | None = None,
    ) -> Todo:
        """
        Update any subset of (text, is_completed).

        A same-value `is_completed` leaves the counters alone. Nothing is applied
        if the id is unknown.
        """
        todo = self._lookup(todo_id)

        if is_completed is not None:
            self._set_completed(todo, bool(is_completed))

        if text is not None:
            todo.text = text

        logger.debug(
            "Todo updated id=%s completed=%s active=%s",
            todo_id,
            self._num_completed,
            self._num_active,
        )
        return self._copy(todo)

    def delete(self, todo_id: UUID) -> None:
        try:
            self._remove(todo_id)
        except TodoNotFoundError:
            logger.debug("Todo not found id=%s", todo_id)
            raise
        logger.debug("Todo deleted id=%s all=%s", todo_id, self._num_all)

    def delete_completed(self) -> int:
        """Remove every completed todo. Returns how many were removed."""
        done_ids = [t.id for t in self._items.values() if t.is_completed]
        for todo_id in done_ids:
            self._remove(todo_id)
        if done_ids:
            logger.debug("Deleted %d completed todos, all=%s", len(done_ids), self._num_all)
        return len(done_ids)

    def toggle_completed(self, action: TodoToggleAction) -> None:
        self._set_all_completed(action.is_completed)
        logger.debug("Toggled all todos action=%s n=%s", action.value, self._num_all)
