# src/task_cli/cli/main.py

"""
CLI entrypoint.

Initializes logging, wires TaskStore + TaskService, then either runs one
command (batch mode) or starts the interactive console (`task-cli shell`).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_service import TaskService
from ..tasks.task_store import TaskStore
from .commands import execute

logger = logging.getLogger(__name__)


def _split_file_option(argv: list[str]) -> tuple[Path | None, list[str]]:
    """Pull a leading `--file PATH` / `--file=PATH` off argv."""
    if argv and argv[0].startswith("--file="):
        return Path(argv[0].split("=", 1)[1]).expanduser(), argv[1:]
    if len(argv) >= 2 and argv[0] == "--file":
        return Path(argv[1]).expanduser(), argv[2:]
    return None, argv


def create_service(*, settings=None, tasks_file: Path | None = None) -> TaskService:
    """
    Build the service from settings.

    Settings stay injectable so tests can point everything at a tmp dir.
    """
    if settings is None:
        settings = get_settings()
    path = tasks_file if tasks_file is not None else Path(settings.tasks_file)
    return TaskService(TaskStore(path))


def main(argv: Sequence[str] | None = None, *, settings=None) -> int:
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = logging.getLevelName(level_name)
    if not isinstance(console_level, int):
        console_level = logging.WARNING
    setup_logging(
        log_dir=getattr(settings, "data_dir", ".local/task-cli"),
        console_level=console_level,
        log_to_file=bool(getattr(settings, "log_to_file", True)),
    )

    args = list(sys.argv[1:] if argv is None else argv)
    tasks_file, args = _split_file_option(args)
    service = create_service(settings=settings, tasks_file=tasks_file)
    logger.debug("Starting %s file=%s args=%s", getattr(settings, "app_name", "task-cli"), service.store.path, args)

    if args and args[0].lower() == "shell":
        run_console_loop(service)
        return 0

    return execute(service, args)


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
