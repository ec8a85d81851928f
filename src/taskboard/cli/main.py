# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import DEFAULT_QUIET_LOGGERS, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(
        log_file=settings.log_file_path,
        console_level=console_level,
        quiet_loggers=getattr(settings, "quiet_loggers", DEFAULT_QUIET_LOGGERS),
    )

    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.warning("Console disabled (TASKBOARD_CONSOLE_ENABLED=false); nothing to run.")
    finally:
        stats = state.store.stats()
        logger.info(
            "Bye. all=%s active=%s completed=%s", stats.all, stats.active, stats.completed
        )


if __name__ == "__main__":
    main()
