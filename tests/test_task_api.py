# tests/test_task_api.py

from __future__ import annotations

import random
import threading
import uuid

import pytest

from taskboard.core.state import AppState
from taskboard.tasks import task_api
from taskboard.tasks.task_models import TodoListFilter, TodoNotFoundError, TodoToggleAction


def test_view_flags_follow_counters(state: AppState) -> None:
    view = task_api.build_view(state)
    assert view.disable_toggle
    assert view.disable_delete
    assert view.todos == []

    view = task_api.create_todo(state, "Task A")
    todo_id = view.todos[0].id
    assert not view.disable_toggle
    assert view.disable_delete
    assert (view.count_all, view.count_active, view.count_completed) == (1, 1, 0)

    view = task_api.update_todo(state, todo_id, is_completed=True)
    assert not view.disable_delete
    assert (view.count_all, view.count_active, view.count_completed) == (1, 0, 1)

    view = task_api.delete_completed_todos(state)
    assert view.disable_toggle
    assert view.disable_delete


def test_toggle_button_flips_on_every_toggle(state: AppState) -> None:
    task_api.create_todo(state, "Task A")
    task_api.create_todo(state, "Task B")
    assert state.toggle_action is TodoToggleAction.CHECK

    view = task_api.toggle_all_todos(state)
    assert view.toggle_action is TodoToggleAction.UNCHECK
    assert (view.count_active, view.count_completed) == (0, 2)

    view = task_api.toggle_all_todos(state)
    assert view.toggle_action is TodoToggleAction.CHECK
    assert (view.count_active, view.count_completed) == (2, 0)


def test_toggle_on_empty_store_still_flips_button(state: AppState) -> None:
    view = task_api.toggle_all_todos(state)
    assert view.toggle_action is TodoToggleAction.UNCHECK
    assert view.count_all == 0


def test_selected_filter_drives_views(state: AppState) -> None:
    a = task_api.create_todo(state, "Task A").todos[0]
    task_api.create_todo(state, "Task B")
    task_api.update_todo(state, a.id, is_completed=True)

    view = task_api.select_filter(state, TodoListFilter.COMPLETED)
    assert view.selected_filter is TodoListFilter.COMPLETED
    assert [t.text for t in view.todos] == ["Task A"]
    assert [t.text for t in task_api.list_todos(state)] == ["Task A"]

    # Explicit filter does not change the selection.
    assert [t.text for t in task_api.list_todos(state, TodoListFilter.ACTIVE)] == ["Task B"]
    assert task_api.build_view(state, TodoListFilter.ALL).count_all == 2
    assert state.selected_filter is TodoListFilter.COMPLETED


def test_not_found_propagates_and_releases_lock(state: AppState) -> None:
    missing = uuid.uuid4()

    with pytest.raises(TodoNotFoundError):
        task_api.get_todo(state, missing)
    with pytest.raises(TodoNotFoundError):
        task_api.update_todo(state, missing, text="x")
    with pytest.raises(TodoNotFoundError):
        task_api.delete_todo(state, missing)

    assert state.lock.readers == 0
    assert not state.lock.write_locked
    assert task_api.build_view(state).count_all == 0


def test_mutations_hold_the_write_lock(state: AppState) -> None:
    seen: list[bool] = []
    real_create = state.store.create

    def spying_create(text: str):
        seen.append(state.lock.write_locked)
        return real_create(text)

    state.store.create = spying_create  # type: ignore[method-assign]
    task_api.create_todo(state, "Task A")

    assert seen == [True]
    assert not state.lock.write_locked


def test_get_todo_returns_copy(state: AppState) -> None:
    todo = task_api.create_todo(state, "Task A").todos[0]
    fetched = task_api.get_todo(state, todo.id)
    fetched.text = "mutated"

    assert task_api.get_todo(state, todo.id).text == "Task A"


def test_concurrent_calls_keep_counters_consistent(state: AppState) -> None:
    errors: list[BaseException] = []

    def worker(seed: int) -> None:
        rng = random.Random(seed)
        try:
            for i in range(150):
                op = rng.random()
                if op < 0.35:
                    task_api.create_todo(state, f"w{seed}-{i}")
                    continue
                todos = task_api.list_todos(state, TodoListFilter.ALL)
                if not todos:
                    continue
                target = rng.choice(todos).id
                try:
                    if op < 0.65:
                        task_api.update_todo(state, target, is_completed=rng.random() < 0.5)
                    elif op < 0.8:
                        task_api.delete_todo(state, target)
                    elif op < 0.9:
                        task_api.toggle_all_todos(state)
                    else:
                        task_api.delete_completed_todos(state)
                except TodoNotFoundError:
                    # Another worker removed it first.
                    pass
                view = task_api.build_view(state, TodoListFilter.ALL)
                assert view.count_active + view.count_completed == view.count_all
                assert len(view.todos) == view.count_all
        except BaseException as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(seed,)) for seed in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30.0)

    assert errors == []
    state.store.verify_counters()
    assert state.lock.readers == 0
    assert not state.lock.write_locked
