# src/task_cli/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values are what gets written to the task file. `parse` also accepts the
    spellings produced by older versions of the tool ("To-Do", "todo", ...).
    """

    TODO = "to-do"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus:
        if raw is None:
            raise ValueError("status is required")
        key = str(raw).strip().lower().replace("_", "-")
        status = _STATUS_ALIASES.get(key)
        if status is None:
            raise ValueError(f"unknown status: {raw!r}")
        return status


_EXTRA_FRACTION_RE = re.compile(r"(\.\d{6})\d+")

_STATUS_ALIASES: dict[str, TaskStatus] = {
    "to-do": TaskStatus.TODO,
    "todo": TaskStatus.TODO,
    "in-progress": TaskStatus.IN_PROGRESS,
    "inprogress": TaskStatus.IN_PROGRESS,
    "done": TaskStatus.DONE,
}


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from one element of the persisted JSON array.

        Raises ValueError for anything that is not a well-formed task object.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"task entry must be an object, got {type(raw).__name__}")

        missing = [k for k in ("id", "description", "status", "created_at", "updated_at") if k not in raw]
        if missing:
            raise ValueError(f"task entry is missing fields: {', '.join(missing)}")

        task_id = raw["id"]
        # bool is an int subclass; reject it explicitly.
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
            raise ValueError(f"task id must be a positive integer, got {task_id!r}")

        description = raw["description"]
        if not isinstance(description, str):
            raise ValueError(f"task {task_id}: description must be a string")

        return cls(
            id=task_id,
            description=description,
            status=TaskStatus.parse(raw["status"]),
            created_at=_parse_ts(raw["created_at"], task_id, "created_at"),
            updated_at=_parse_ts(raw["updated_at"], task_id, "updated_at"),
        )


def _parse_ts(raw: Any, task_id: int, field: str) -> datetime:
    if not isinstance(raw, str):
        raise ValueError(f"task {task_id}: {field} must be an ISO-8601 string")
    # Older versions wrote nanosecond precision; datetime keeps microseconds.
    text = _EXTRA_FRACTION_RE.sub(r"\1", raw)
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"task {task_id}: bad {field} timestamp {raw!r}") from exc
