# src/task_cli/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

One Settings object for the whole app. Values that fail to parse fall back
to their defaults instead of breaking the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASK_CLI"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    return default


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
    log_to_file: bool

    # ---- Local data paths ----
    data_dir: Path
    tasks_file: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-cli").strip() or "task-cli"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task-cli"))
        # Same name and location as older releases: task.json in the working directory.
        tasks_file = _env_path(_k("TASKS_FILE"), Path("task.json"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            data_dir=data_dir,
            tasks_file=tasks_file,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings; .env is read on first use, real env vars win."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
