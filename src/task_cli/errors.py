# src/task_cli/errors.py

"""Error taxonomy shared by the store, the service and the CLI."""

from __future__ import annotations

from pathlib import Path


class TaskCliError(Exception):
    """Base class for errors reported to the user as `Error: <message>`."""


class ValidationError(TaskCliError):
    """Bad or missing arguments: empty description, non-numeric id, unknown status."""


class NotFoundError(TaskCliError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task with ID {task_id} not found")
        self.task_id = task_id


class PersistenceError(TaskCliError):
    """Task file is unreadable, unwritable or malformed."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
