# tests/test_task_models.py

from __future__ import annotations

import uuid

import pytest

from taskboard.tasks.task_models import TodoListFilter, TodoNotFoundError, TodoToggleAction


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, TodoListFilter.ALL),
        ("", TodoListFilter.ALL),
        ("active", TodoListFilter.ACTIVE),
        (" Completed ", TodoListFilter.COMPLETED),
        ("ALL", TodoListFilter.ALL),
    ],
)
def test_filter_from_raw(raw, expected) -> None:
    assert TodoListFilter.from_raw(raw) is expected


def test_filter_from_raw_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown filter"):
        TodoListFilter.from_raw("done")


def test_toggle_action_flips_and_parses() -> None:
    assert TodoToggleAction.from_raw(None) is TodoToggleAction.CHECK
    assert TodoToggleAction.from_raw("Uncheck") is TodoToggleAction.UNCHECK
    assert TodoToggleAction.CHECK.flipped() is TodoToggleAction.UNCHECK
    assert TodoToggleAction.UNCHECK.flipped() is TodoToggleAction.CHECK
    with pytest.raises(ValueError):
        TodoToggleAction.from_raw("flip")


def test_not_found_error_is_a_key_error() -> None:
    todo_id = uuid.uuid4()
    err = TodoNotFoundError(todo_id)

    assert isinstance(err, KeyError)
    assert err.todo_id == todo_id
    assert str(err) == f"Todo not found: {todo_id}"
