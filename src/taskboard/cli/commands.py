# src/taskboard/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from uuid import UUID

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_api import TodoView
from ..tasks.task_models import TodoListFilter, TodoNotFoundError

CommandHandler = Callable[[AppState, list[str], str], str]

logger = logging.getLogger(__name__)

SHORT_ID_LEN = 8
MIN_ID_PREFIX_LEN = 4


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Handlers get the whitespace-split args and the raw remainder of the line
        (todo text is kept verbatim).
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, rest.split(), rest)
        except TodoNotFoundError as e:
            logger.debug("Command /%s: %s", name, e)
            return f"Not found: {e.todo_id}"
        except ValueError as e:
            return f"{e}. Use /help for usage."

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- decoding / rendering helpers ----


def short_id(todo_id: UUID, length: int = SHORT_ID_LEN) -> str:
    return todo_id.hex[:length]


def short_ids(todo_ids: list[UUID]) -> dict[UUID, str]:
    """Shortest common display length (>= SHORT_ID_LEN) that keeps every listed id distinct."""
    length = SHORT_ID_LEN
    while length < 32 and len({short_id(i, length) for i in todo_ids}) < len(set(todo_ids)):
        length += 1
    return {i: short_id(i, length) for i in todo_ids}


def resolve_todo_id(state: AppState, raw: str) -> UUID:
    """
    Decode a todo id from a full UUID or a unique hex prefix of an existing id.

    Raises:
    - ValueError if the prefix is too short or ambiguous
    - TodoNotFoundError if no id has the prefix (unknown full UUIDs are
      reported later, by the store)
    """
    raw = raw.strip().lower()
    try:
        return UUID(raw)
    except ValueError:
        pass

    prefix = raw.replace("-", "")
    if len(prefix) < MIN_ID_PREFIX_LEN:
        raise ValueError(f"Todo id prefix must have at least {MIN_ID_PREFIX_LEN} characters")

    ids = [t.id for t in task_api.list_todos(state, TodoListFilter.ALL)]
    found = [i for i in ids if i.hex.startswith(prefix)]
    if len(found) > 1:
        raise ValueError(f"Ambiguous todo id {raw!r} ({len(found)} matches)")
    if not found:
        raise TodoNotFoundError(raw)
    return found[0]


def format_view(view: TodoView) -> str:
    lines = [
        f"Todos ({view.selected_filter.value}): "
        f"{view.count_all} total, {view.count_active} active, {view.count_completed} completed"
    ]
    if not view.todos:
        lines.append("  (empty)")
    ids = short_ids([t.id for t in view.todos])
    for t in view.todos:
        mark = "x" if t.is_completed else " "
        lines.append(f"  [{mark}] {ids[t.id]}  {t.text}")

    toggle = "disabled" if view.disable_toggle else f"/toggle -> {view.toggle_action.value} all"
    clear = "disabled" if view.disable_delete else "/clear"
    lines.append(f"Toggle: {toggle} | Clear completed: {clear}")
    return "\n".join(lines)


def _require_id(args: list[str], usage: str) -> str:
    if not args:
        raise ValueError(f"Usage: {usage}")
    return args[0]


# ---- handlers ----


def cmd_help(state: AppState, args: list[str], rest: str) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str], rest: str) -> str:
    if not rest:
        raise ValueError("Usage: /add <text>")
    return format_view(task_api.create_todo(state, rest))


def cmd_list(state: AppState, args: list[str], rest: str) -> str:
    """
    /list            -> show the currently selected filter
    /list <filter>   -> show all | active | completed (selection unchanged)
    """
    filt = TodoListFilter.from_raw(args[0]) if args else None
    return format_view(task_api.build_view(state, filt))


def cmd_filter(state: AppState, args: list[str], rest: str) -> str:
    if not args:
        return f"Current filter: {task_api.build_view(state).selected_filter.value}"
    return format_view(task_api.select_filter(state, TodoListFilter.from_raw(args[0])))


def cmd_done(state: AppState, args: list[str], rest: str) -> str:
    todo_id = resolve_todo_id(state, _require_id(args, "/done <id>"))
    return format_view(task_api.update_todo(state, todo_id, is_completed=True))


def cmd_undo(state: AppState, args: list[str], rest: str) -> str:
    todo_id = resolve_todo_id(state, _require_id(args, "/undo <id>"))
    return format_view(task_api.update_todo(state, todo_id, is_completed=False))


def cmd_edit(state: AppState, args: list[str], rest: str) -> str:
    raw_id = _require_id(args, "/edit <id> <text>")
    # Everything after the single separator is the new text, verbatim
    # (may be empty: "/edit <id>" clears it).
    text = rest[len(raw_id):]
    if text[:1].isspace():
        text = text[1:]
    todo_id = resolve_todo_id(state, raw_id)
    return format_view(task_api.update_todo(state, todo_id, text=text))


def cmd_rm(state: AppState, args: list[str], rest: str) -> str:
    todo_id = resolve_todo_id(state, _require_id(args, "/rm <id>"))
    return format_view(task_api.delete_todo(state, todo_id))


def cmd_clear(state: AppState, args: list[str], rest: str) -> str:
    return format_view(task_api.delete_completed_todos(state))


def cmd_toggle(state: AppState, args: list[str], rest: str) -> str:
    return format_view(task_api.toggle_all_todos(state))


def cmd_stats(state: AppState, args: list[str], rest: str) -> str:
    view = task_api.build_view(state)
    return (
        "Stats:\n"
        f"  All: {view.count_all}\n"
        f"  Active: {view.count_active}\n"
        f"  Completed: {view.count_completed}\n"
        f"  Filter: {view.selected_filter.value}\n"
        f"  Next toggle: {view.toggle_action.value}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Create a todo: /add <text>.", aliases=["a"])
registry.register(
    "list", cmd_list, help_text="List todos: /list [all|active|completed].", aliases=["ls"]
)
registry.register(
    "filter", cmd_filter, help_text="Select the default view: /filter all|active|completed."
)
registry.register("done", cmd_done, help_text="Mark a todo completed: /done <id>.")
registry.register("undo", cmd_undo, help_text="Mark a todo active again: /undo <id>.")
registry.register("edit", cmd_edit, help_text="Replace a todo's text: /edit <id> <text>.")
registry.register("rm", cmd_rm, help_text="Delete a todo: /rm <id>.", aliases=["del"])
registry.register("clear", cmd_clear, help_text="Delete all completed todos.")
registry.register("toggle", cmd_toggle, help_text="Check/uncheck all todos (alternates).")
registry.register("stats", cmd_stats, help_text="Show counters and view state.")
