# tests/test_commands.py

from __future__ import annotations

from task_cli.cli.commands import CommandRegistry, execute, registry
from task_cli.tasks.task_models import TaskStatus
from task_cli.tasks.task_service import TaskService

from .fakes import RecordingOutput


def test_command_registry_routes_verbs_and_aliases(service: TaskService) -> None:
    reg = CommandRegistry()
    calls: list[list[str]] = []

    def handler(service, args):
        calls.append(args)
        return "ok"

    reg.register("ping", handler, usage="ping <x>", aliases=["p"])

    assert reg.handle(service, ["ping", "1", "2"]) == "ok"
    assert reg.handle(service, ["P"]) == "ok"
    assert calls == [["1", "2"], []]
    assert "p" in reg and "ping" in reg
    assert "task-cli ping <x>" in reg.build_usage()


def test_command_registry_unknown_and_empty(service: TaskService) -> None:
    reg = CommandRegistry()
    assert reg.handle(service, []) is None
    assert reg.handle(service, ["nope"]) is None


def test_add_joins_words_into_description(service: TaskService) -> None:
    out = RecordingOutput()
    assert execute(service, ["add", "buy", "milk"], out=out) == 0
    assert out.lines == ["Task added successfully (ID: 1)"]
    assert service.list_tasks()[0].description == "buy milk"


def test_update_delete_and_mark_confirmations(service: TaskService) -> None:
    service.add("draft")
    out = RecordingOutput()

    assert execute(service, ["update", "1", "final report"], out=out) == 0
    assert execute(service, ["mark-in-progress", "1"], out=out) == 0
    assert execute(service, ["mark-done", "1"], out=out) == 0
    assert execute(service, ["mark-to-do", "1"], out=out) == 0
    assert execute(service, ["delete", "1"], out=out) == 0

    assert out.lines == [
        "Task 1 updated: final report",
        "Task 1 marked as in-progress",
        "Task 1 marked as done",
        "Task 1 marked as to-do",
        "Task 1 deleted",
    ]
    assert service.list_tasks() == []


def test_list_output_and_filter(service: TaskService) -> None:
    service.add("one")
    service.add("two")
    service.set_status(2, TaskStatus.DONE)

    out = RecordingOutput()
    execute(service, ["list"], out=out)
    lines = out.text.splitlines()
    assert lines[0].startswith("1. [to-do] one (created 2024-01-01 09:00:00")
    assert lines[1].startswith("2. [done] two")

    out = RecordingOutput()
    execute(service, ["list", "todo"], out=out)
    assert out.text.splitlines() == [lines[0]]

    out = RecordingOutput()
    execute(service, ["list", "in-progress"], out=out)
    assert out.lines == ["No tasks with status 'in-progress'."]


def test_list_empty_store(service: TaskService) -> None:
    out = RecordingOutput()
    assert execute(service, ["list"], out=out) == 0
    assert out.lines == ["No tasks found."]


def test_errors_are_printed_with_prefix(service: TaskService) -> None:
    out = RecordingOutput()

    assert execute(service, ["update", "99", "x"], out=out) == 1
    assert execute(service, ["add"], out=out) == 1
    assert execute(service, ["delete", "abc"], out=out) == 1
    assert execute(service, ["mark-done", "0"], out=out) == 1
    assert execute(service, ["delete"], out=out) == 1
    assert execute(service, ["list", "someday"], out=out) == 1

    assert out.lines[0] == "Error: task with ID 99 not found"
    assert out.lines[1] == "Error: description cannot be empty"
    assert out.lines[2] == "Error: invalid task id: 'abc'"
    assert out.lines[3] == "Error: invalid task id: '0'"
    assert out.lines[4] == "Error: usage: task-cli delete <id>"
    assert out.lines[5].startswith("Error: unknown status: 'someday'")
    assert service.list_tasks() == []


def test_persistence_error_is_reported(service: TaskService) -> None:
    service.store.path.write_text("{broken", "utf-8")
    out = RecordingOutput()

    assert execute(service, ["list"], out=out) == 1
    assert out.lines[0].startswith("Error: ")
    assert "not valid JSON" in out.lines[0]


def test_unexpected_exception_does_not_escape(service: TaskService) -> None:
    reg = CommandRegistry()

    def broken(service, args):
        raise RuntimeError("boom")

    reg.register("broken", broken, usage="broken")
    out = RecordingOutput()

    assert execute(service, ["broken"], out=out, reg=reg) == 1
    assert out.lines == ["Error: internal error (see log)"]


def test_unknown_or_missing_verb_prints_usage(service: TaskService) -> None:
    out = RecordingOutput()
    assert execute(service, [], out=out) == 0
    assert execute(service, ["frobnicate"], out=out) == 0
    assert out.lines[0] == out.lines[1] == registry.build_usage()
    for verb in ("add", "update", "delete", "mark-todo", "mark-in-progress", "mark-done", "list", "shell"):
        assert f"task-cli {verb}" in out.lines[0]


def test_undecodable_task_file_is_reported_as_error(service: TaskService) -> None:
    service.store.path.write_bytes(b'[{"description": "\xff\xfe"}]')
    out = RecordingOutput()

    assert execute(service, ["list"], out=out) == 1
    assert out.lines[0].startswith("Error: ")
    assert "not valid UTF-8" in out.lines[0]
