# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete TodoStore into AppState.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TodoStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.log_file_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, clock: Callable[[], int] | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TodoStore() if clock is None else TodoStore(clock=clock)
    state = AppState(settings=settings, store=store)
    logger.info("AppState ready (filter=%s toggle=%s)", state.selected_filter, state.toggle_action)
    return state
