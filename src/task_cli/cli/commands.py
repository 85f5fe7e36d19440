# src/task_cli/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from ..errors import TaskCliError, ValidationError
from ..tasks.task_models import Task, TaskStatus
from ..tasks.task_service import TaskService

CommandHandler = Callable[[TaskService, list[str]], str]
Output = Callable[[str], None]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Verb -> handler table shared by batch mode and the interactive shell."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._usage: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        usage: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._usage[key] = usage
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._handlers

    def handle(self, service: TaskService, tokens: Sequence[str]) -> str | None:
        """
        Run one command given as tokens, e.g. ["update", "2", "new text"].
        Returns the confirmation text, or None if the verb is unknown.
        TaskCliError subclasses propagate to the caller.
        """
        if not tokens:
            return None

        handler = self._handlers.get(tokens[0].lower())
        if handler is None:
            return None

        return handler(service, list(tokens[1:]))

    def build_usage(self, prog: str = "task-cli") -> str:
        lines = ["Usage:"]
        for usage in self._usage.values():
            lines.append(f"  {prog} {usage}")
        lines.append(f"  {prog} shell")
        return "\n".join(lines)


registry = CommandRegistry()


def execute(
    service: TaskService,
    tokens: Sequence[str],
    out: Output = print,
    reg: CommandRegistry | None = None,
) -> int:
    """
    Dispatch one command and print its result.

    This is where TaskCliError is turned into `Error: <message>`.
    Returns a process exit code: 0 on success or usage, 1 on error.
    """
    reg = registry if reg is None else reg

    try:
        reply = reg.handle(service, tokens)
    except TaskCliError as e:
        logger.info("Command %r failed: %s", tokens[0] if tokens else "", e)
        out(f"Error: {e}")
        return 1
    except Exception:
        logger.exception("Command handler crashed.")
        out("Error: internal error (see log)")
        return 1

    if reply is None:
        if tokens:
            logger.debug("Unknown command: %s", tokens[0])
        out(reg.build_usage())
        return 0

    out(reply)
    return 0


# ---- argument helpers ----


def _parse_id(raw: str) -> int:
    text = raw.strip()
    if not (text.isascii() and text.isdigit()) or int(text) < 1:
        raise ValidationError(f"invalid task id: {raw!r}")
    return int(text)


def _require(args: list[str], count: int, usage: str) -> None:
    if len(args) < count:
        raise ValidationError(f"usage: task-cli {usage}")


def _ts(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_task(task: Task) -> str:
    return (
        f"{task.id}. [{task.status.value}] {task.description} "
        f"(created {_ts(task.created_at)}, updated {_ts(task.updated_at)})"
    )


# ---- handlers ----

USAGE_ADD = 'add "<description>"'
USAGE_UPDATE = 'update <id> "<new description>"'
USAGE_DELETE = "delete <id>"
USAGE_LIST = "list [todo|in-progress|done]"


def cmd_add(service: TaskService, args: list[str]) -> str:
    task = service.add(" ".join(args))
    return f"Task added successfully (ID: {task.id})"


def cmd_update(service: TaskService, args: list[str]) -> str:
    _require(args, 2, USAGE_UPDATE)
    task = service.update(_parse_id(args[0]), " ".join(args[1:]))
    return f"Task {task.id} updated: {task.description}"


def cmd_delete(service: TaskService, args: list[str]) -> str:
    _require(args, 1, USAGE_DELETE)
    task = service.delete(_parse_id(args[0]))
    return f"Task {task.id} deleted"


def _make_mark(status: TaskStatus) -> CommandHandler:
    def cmd_mark(service: TaskService, args: list[str]) -> str:
        _require(args, 1, f"{_mark_verb(status)} <id>")
        task = service.set_status(_parse_id(args[0]), status)
        return f"Task {task.id} marked as {task.status.value}"

    return cmd_mark


def _mark_verb(status: TaskStatus) -> str:
    return "mark-todo" if status is TaskStatus.TODO else f"mark-{status.value}"


def cmd_list(service: TaskService, args: list[str]) -> str:
    status: TaskStatus | None = None
    if args:
        try:
            status = TaskStatus.parse(args[0])
        except ValueError as e:
            raise ValidationError(f"{e}; expected one of: todo, in-progress, done") from e

    tasks = service.list_tasks(status)
    if not tasks:
        return "No tasks found." if status is None else f"No tasks with status '{status.value}'."
    return "\n".join(format_task(t) for t in tasks)


def cmd_help(service: TaskService, args: list[str]) -> str:
    return registry.build_usage()


registry.register("add", cmd_add, usage=USAGE_ADD)
registry.register("update", cmd_update, usage=USAGE_UPDATE)
registry.register("delete", cmd_delete, usage=USAGE_DELETE)
registry.register("mark-todo", _make_mark(TaskStatus.TODO), usage="mark-todo <id>", aliases=["mark-to-do"])
registry.register("mark-in-progress", _make_mark(TaskStatus.IN_PROGRESS), usage="mark-in-progress <id>")
registry.register("mark-done", _make_mark(TaskStatus.DONE), usage="mark-done <id>")
registry.register("list", cmd_list, usage=USAGE_LIST)
registry.register("help", cmd_help, usage="help", aliases=["-h", "--help"])
