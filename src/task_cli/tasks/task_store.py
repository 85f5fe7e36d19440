# src/task_cli/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ..errors import PersistenceError
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    JSON file task store.

    The file holds one JSON array with every task. There is no cache:
    - load() reads the whole file on every call
    - save() rewrites the whole file through a temp file + os.replace,
      so a crash mid-write leaves the previous file intact

    No locking: two processes writing at once means the last writer wins.
    """

    def __init__(self, path: str | Path = "task.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- public API ----

    def load(self) -> list[Task]:
        if not self._path.exists():
            logger.debug("Task file %s does not exist yet; starting empty.", self._path)
            return []

        try:
            raw = self._path.read_text("utf-8")
        except UnicodeDecodeError as exc:
            raise PersistenceError(f"{self._path} is not valid UTF-8: {exc.reason} at byte {exc.start}", self._path) from exc
        except OSError as exc:
            raise PersistenceError(f"cannot read {self._path}: {exc.strerror or exc}", self._path) from exc

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"{self._path} is not valid JSON: {exc.msg} (line {exc.lineno})", self._path) from exc
        except RecursionError as exc:
            raise PersistenceError(f"{self._path} is nested too deeply to parse", self._path) from exc

        if not isinstance(data, list):
            raise PersistenceError(f"{self._path} must contain a JSON array of tasks", self._path)

        tasks: list[Task] = []
        seen: set[int] = set()
        for i, item in enumerate(data):
            try:
                task = Task.from_dict(item)
            except ValueError as exc:
                raise PersistenceError(f"{self._path}: entry #{i}: {exc}", self._path) from exc
            if task.id in seen:
                raise PersistenceError(f"{self._path}: duplicate task id {task.id}", self._path)
            seen.add(task.id)
            tasks.append(task)

        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        payload = [t.to_dict() for t in tasks]
        text = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"

        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                # Data must be on disk before the rename makes it visible.
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise PersistenceError(f"cannot write {self._path}: {exc.strerror or exc}", self._path) from exc

        logger.debug("Saved %d tasks to %s", len(payload), self._path)

    def count_tasks(self) -> int:
        return len(self.load())

    @staticmethod
    def next_id(tasks: Iterable[Task]) -> int:
        return max((t.id for t in tasks), default=0) + 1

    @staticmethod
    def find_by_id(tasks: Iterable[Task], task_id: int) -> Task | None:
        for task in tasks:
            if task.id == task_id:
                return task
        return None
