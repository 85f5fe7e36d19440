# src/task_cli/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep stderr readable next to command output:
    - task_cli logs pass (the handler level decides)
    - captured Python warnings and any third-party logger only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "task_cli" or record.name.startswith("task_cli."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/task-cli",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    log_to_file: bool = True,
) -> None:
    """
    Configure logging with:
    - Console handler on stderr, filtered
    - File handler with full logs for debugging (optional)

    Call this ONCE, before the first command runs.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_to_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "task-cli.log"), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
