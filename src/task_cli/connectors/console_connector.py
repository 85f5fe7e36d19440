# src/task_cli/connectors/console_connector.py

from __future__ import annotations

import logging
import shlex

from ..cli.commands import CommandRegistry, Output, execute
from ..cli.commands import registry as command_registry
from ..errors import PersistenceError
from ..tasks.task_service import TaskService

logger = logging.getLogger(__name__)

PROMPT = "task-cli> "


def run_console_loop(
    service: TaskService,
    *,
    out: Output = print,
    reg: CommandRegistry | None = None,
) -> None:
    """
    Interactive mode: read a command per line until exit/quit, EOF or Ctrl+C.

    Lines are split shell-style so quoted descriptions work. Errors are
    printed by `execute` and the loop keeps going.
    """
    reg = command_registry if reg is None else reg
    try:
        total = service.store.count_tasks()
    except PersistenceError:
        total = -1
    logger.info("Console started file=%s total=%s", service.store.path, total)
    out("Type a command (help for usage, exit to quit).")

    while True:
        try:
            line = input(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            out("")
            break

        if not line:
            continue

        if line.lower() in ("exit", "quit"):
            logger.info("Console exit command received.")
            break

        try:
            tokens = shlex.split(line)
        except ValueError as e:
            out(f"Error: {e}")
            continue

        if tokens and tokens[0].lower() not in reg:
            out(f"Unknown command: {tokens[0]}. Type help for usage.")
            continue

        execute(service, tokens, out=out, reg=reg)

    logger.info("Console finished.")
