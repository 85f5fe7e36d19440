# src/task_cli/tasks/task_service.py

"""
Task operations on top of TaskStore.

Every mutating operation follows the same cycle:
    load -> locate/validate -> mutate in memory -> save (once)

Nothing is saved when an operation fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..errors import NotFoundError, ValidationError
from .task_models import Task, TaskStatus
from .task_store import TaskStore

Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


def _now_local() -> datetime:
    return datetime.now().astimezone()


class TaskService:
    def __init__(self, store: TaskStore, *, clock: Clock = _now_local) -> None:
        self._store = store
        self._clock = clock

    @property
    def store(self) -> TaskStore:
        return self._store

    def add(self, description: str) -> Task:
        text = _clean_description(description)
        tasks = self._store.load()

        now = self._clock()
        task = Task(
            id=self._store.next_id(tasks),
            description=text,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        tasks.append(task)
        self._store.save(tasks)

        logger.info("Task added id=%s", task.id)
        return task

    def update(self, task_id: int, description: str) -> Task:
        text = _clean_description(description)
        tasks, task = self._load_with(task_id)

        task.description = text
        task.updated_at = self._clock()
        self._store.save(tasks)

        logger.info("Task updated id=%s", task_id)
        return task

    def delete(self, task_id: int) -> Task:
        tasks, task = self._load_with(task_id)

        remaining = [t for t in tasks if t.id != task_id]
        self._store.save(remaining)

        logger.info("Task deleted id=%s", task_id)
        return task

    def set_status(self, task_id: int, status: TaskStatus) -> Task:
        tasks, task = self._load_with(task_id)

        task.status = status
        task.updated_at = self._clock()
        self._store.save(tasks)

        logger.info("Task status changed id=%s status=%s", task_id, status.value)
        return task

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        tasks = self._store.load()
        if status is None:
            return tasks
        return [t for t in tasks if t.status is status]

    # ---- helpers ----

    def _load_with(self, task_id: int) -> tuple[list[Task], Task]:
        tasks = self._store.load()
        task = self._store.find_by_id(tasks, task_id)
        if task is None:
            raise NotFoundError(task_id)
        return tasks, task


def _clean_description(description: str | None) -> str:
    text = (description or "").strip()
    if not text:
        raise ValidationError("description cannot be empty")
    return text
