# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ a local .env, if present).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
- Components take settings by injection (tests pass a SimpleNamespace).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASKBOARD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    quiet_loggers: list[str]

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    log_file_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard").strip() or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        quiet_loggers = _env_list(_k("QUIET_LOGGERS"), ["taskboard.tasks.task_store"])

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))
        log_file_path = _env_path(_k("LOG_FILE"), data_dir / "taskboard.log")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            quiet_loggers=quiet_loggers,
            console_enabled=console_enabled,
            data_dir=data_dir,
            log_file_path=log_file_path,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once (after loading .env from the working directory)."""
    load_dotenv(find_dotenv(usecwd=True), override=False)
    return Settings.from_env()
