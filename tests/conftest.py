# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_cli.tasks.task_service import TaskService
from task_cli.tasks.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with cli.main.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any .env file.
    """
    return SimpleNamespace(
        app_name="task-cli",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path / "data",
        tasks_file=tmp_path / "task.json",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_file)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def service(store: TaskStore, clock: FakeClock) -> TaskService:
    return TaskService(store, clock=clock)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """cli.main reconfigures the root logger; put pytest's handlers back afterwards."""
    import logging

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
