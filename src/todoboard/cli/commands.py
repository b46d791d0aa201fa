# src/todoboard/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..client.http_client import TaskClient
from ..tasks.task_models import Subtask, Task, find_task

logger = logging.getLogger(__name__)


@dataclass
class ConsoleSession:
    """Client-side view: the REST client plus the last known task list."""

    client: TaskClient
    tasks: list[Task] = field(default_factory=list)

    def refresh(self) -> None:
        self.tasks = self.client.get_tasks()

    def replace_task(self, task: Task) -> None:
        self.tasks = [task if t.id == task.id else t for t in self.tasks]

    def replace_subtask(self, task_id: int, sub: Subtask) -> None:
        task = find_task(self.tasks, task_id)
        if task is not None:
            task.subtasks = [sub if s.id == sub.id else s for s in task.subtasks]


CommandHandler = Callable[[ConsoleSession, list[str]], str]


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, session: ConsoleSession, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(session, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


class _Usage(ValueError):
    pass


def _int_arg(args: list[str], index: int, usage: str) -> int:
    try:
        return int(args[index])
    except (IndexError, ValueError):
        raise _Usage(usage) from None


def _title_arg(args: list[str], start: int) -> str:
    return " ".join(args[start:]).strip()


def _mark(completed: bool) -> str:
    return "[x]" if completed else "[ ]"


def render_tasks(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks yet. Use /add <title>."
    lines: list[str] = []
    for t in tasks:
        lines.append(f"{_mark(t.completed)} {t.id}. {t.title}")
        for s in t.subtasks:
            lines.append(f"      {_mark(s.completed)} {t.id}.{s.id} {s.title}")
    return "\n".join(lines)


def _known_task(session: ConsoleSession, task_id: int) -> Task:
    task = find_task(session.tasks, task_id)
    if task is None:
        task = session.client.get_task(task_id)
    return task


def cmd_help(session: ConsoleSession, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(session: ConsoleSession, args: list[str]) -> str:
    return render_tasks(session.tasks)


def cmd_refresh(session: ConsoleSession, args: list[str]) -> str:
    session.refresh()
    return render_tasks(session.tasks)


def cmd_add(session: ConsoleSession, args: list[str]) -> str:
    title = _title_arg(args, 0)
    if not title:
        return "Usage: /add <title>"
    task = session.client.add_task(title)
    session.tasks.append(task)
    return f"Added task {task.id}: {task.title}"


def cmd_rename(session: ConsoleSession, args: list[str]) -> str:
    usage = "Usage: /rename <id> <title>"
    task_id = _int_arg(args, 0, usage)
    title = _title_arg(args, 1)
    if not title:
        return usage
    task = session.client.update_task(task_id, title)
    session.replace_task(task)
    return f"Renamed task {task.id}: {task.title}"


def _set_task(session: ConsoleSession, args: list[str], completed: bool, usage: str) -> str:
    task_id = _int_arg(args, 0, usage)
    task = session.client.set_task_completed(task_id, completed)
    session.replace_task(task)
    return f"{_mark(task.completed)} {task.id}. {task.title}"


def cmd_done(session: ConsoleSession, args: list[str]) -> str:
    return _set_task(session, args, True, "Usage: /done <id>")


def cmd_undo(session: ConsoleSession, args: list[str]) -> str:
    return _set_task(session, args, False, "Usage: /undo <id>")


def cmd_toggle(session: ConsoleSession, args: list[str]) -> str:
    usage = "Usage: /toggle <id>"
    task = _known_task(session, _int_arg(args, 0, usage))
    return _set_task(session, [str(task.id)], not task.completed, usage)


def cmd_rm(session: ConsoleSession, args: list[str]) -> str:
    task_id = _int_arg(args, 0, "Usage: /rm <id>")
    session.client.delete_task(task_id)
    session.tasks = [t for t in session.tasks if t.id != task_id]
    return f"Deleted task {task_id}."


def cmd_sub(session: ConsoleSession, args: list[str]) -> str:
    usage = "Usage: /sub <id> <title>"
    task_id = _int_arg(args, 0, usage)
    title = _title_arg(args, 1)
    if not title:
        return usage
    sub = session.client.add_subtask(task_id, title)
    task = find_task(session.tasks, task_id)
    if task is not None:
        task.subtasks.append(sub)
    return f"Added subtask {task_id}.{sub.id}: {sub.title}"


def cmd_subrename(session: ConsoleSession, args: list[str]) -> str:
    usage = "Usage: /subrename <id> <subId> <title>"
    task_id = _int_arg(args, 0, usage)
    sub_id = _int_arg(args, 1, usage)
    title = _title_arg(args, 2)
    if not title:
        return usage
    sub = session.client.update_subtask(task_id, sub_id, title)
    session.replace_subtask(task_id, sub)
    return f"Renamed subtask {task_id}.{sub.id}: {sub.title}"


def _set_subtask(session: ConsoleSession, args: list[str], completed: bool, usage: str) -> str:
    task_id = _int_arg(args, 0, usage)
    sub_id = _int_arg(args, 1, usage)
    sub = session.client.set_subtask_completed(task_id, sub_id, completed)
    session.replace_subtask(task_id, sub)
    return f"{_mark(sub.completed)} {task_id}.{sub.id} {sub.title}"


def cmd_subdone(session: ConsoleSession, args: list[str]) -> str:
    return _set_subtask(session, args, True, "Usage: /subdone <id> <subId>")


def cmd_subundo(session: ConsoleSession, args: list[str]) -> str:
    return _set_subtask(session, args, False, "Usage: /subundo <id> <subId>")


def cmd_subrm(session: ConsoleSession, args: list[str]) -> str:
    usage = "Usage: /subrm <id> <subId>"
    task_id = _int_arg(args, 0, usage)
    sub_id = _int_arg(args, 1, usage)
    session.client.delete_subtask(task_id, sub_id)
    task = find_task(session.tasks, task_id)
    if task is not None:
        task.subtasks = [s for s in task.subtasks if s.id != sub_id]
    return f"Deleted subtask {task_id}.{sub_id}."


def _guard(handler: CommandHandler) -> CommandHandler:
    """Turn a usage error into its message instead of an exception."""

    def wrapped(session: ConsoleSession, args: list[str]) -> str:
        try:
            return handler(session, args)
        except _Usage as e:
            return str(e)

    wrapped.__name__ = handler.__name__
    return wrapped


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the local task list.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the server.")
registry.register("add", cmd_add, help_text="Add a task: /add <title>.")
registry.register("rename", _guard(cmd_rename), help_text="Rename a task: /rename <id> <title>.")
registry.register("done", _guard(cmd_done), help_text="Mark a task completed: /done <id>.")
registry.register("undo", _guard(cmd_undo), help_text="Mark a task not completed: /undo <id>.")
registry.register("toggle", _guard(cmd_toggle), help_text="Flip a task's completion: /toggle <id>.")
registry.register("rm", _guard(cmd_rm), help_text="Delete a task and its subtasks: /rm <id>.")
registry.register("sub", _guard(cmd_sub), help_text="Add a subtask: /sub <id> <title>.")
registry.register(
    "subrename",
    _guard(cmd_subrename),
    help_text="Rename a subtask: /subrename <id> <subId> <title>.",
)
registry.register(
    "subdone", _guard(cmd_subdone), help_text="Mark a subtask completed: /subdone <id> <subId>."
)
registry.register(
    "subundo",
    _guard(cmd_subundo),
    help_text="Mark a subtask not completed: /subundo <id> <subId>.",
)
registry.register("subrm", _guard(cmd_subrm), help_text="Delete a subtask: /subrm <id> <subId>.")
