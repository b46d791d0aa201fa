# src/todoboard/tasks/task_api.py

"""
Task and subtask operations.

Every operation reads the full collection from the store, finds its target by id,
mutates or filters the list, and (for writes) saves the full collection back.
"""

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from .task_models import Subtask, Task, find_task, next_id

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    message = "Not found"

    def __str__(self) -> str:
        return self.message


class TaskNotFoundError(NotFoundError):
    message = "Task not found"

    def __init__(self, task_id: int | str) -> None:
        super().__init__(task_id)
        self.task_id = task_id


class SubtaskNotFoundError(NotFoundError):
    message = "Subtask not found"

    def __init__(self, task_id: int, subtask_id: int | str) -> None:
        super().__init__(task_id, subtask_id)
        self.task_id = task_id
        self.subtask_id = subtask_id


def _require_task(tasks: list[Task], task_id: int) -> Task:
    task = find_task(tasks, task_id)
    if task is None:
        logger.warning("Task not found id=%s", task_id)
        raise TaskNotFoundError(task_id)
    return task


def _require_subtask(task: Task, subtask_id: int) -> Subtask:
    sub = task.find_subtask(subtask_id)
    if sub is None:
        logger.warning("Subtask not found task_id=%s subtask_id=%s", task.id, subtask_id)
        raise SubtaskNotFoundError(task.id, subtask_id)
    return sub


# ---- tasks ----


def list_tasks(store: TaskRepo) -> list[Task]:
    return store.load()


def get_task(store: TaskRepo, task_id: int) -> Task:
    return _require_task(store.load(), task_id)


def create_task(store: TaskRepo, title: str) -> Task:
    """Append a new task. The title is stored as given (blank titles included)."""
    with store.editing() as tasks:
        task = Task(id=next_id(tasks), title=title)
        tasks.append(task)
    logger.debug("Task created id=%s", task.id)
    return task


def rename_task(store: TaskRepo, task_id: int, title: str) -> Task:
    with store.editing() as tasks:
        task = _require_task(tasks, task_id)
        task.title = title
    logger.debug("Task renamed id=%s", task_id)
    return task


def complete_task(store: TaskRepo, task_id: int) -> Task:
    """One-way: marks the task completed, whatever its current state."""
    return set_task_completed(store, task_id, True)


def set_task_completed(store: TaskRepo, task_id: int, completed: bool) -> Task:
    with store.editing() as tasks:
        task = _require_task(tasks, task_id)
        task.completed = completed
    logger.debug("Task id=%s completed=%s", task_id, completed)
    return task


def delete_task(store: TaskRepo, task_id: int) -> None:
    """Remove the task and its subtasks. Unknown ids are a no-op."""
    with store.editing() as tasks:
        before = len(tasks)
        tasks[:] = [t for t in tasks if t.id != task_id]
        removed = before - len(tasks)
    logger.debug("Task delete id=%s removed=%s", task_id, removed)


# ---- subtasks ----


def list_subtasks(store: TaskRepo, task_id: int) -> list[Subtask]:
    return _require_task(store.load(), task_id).subtasks


def add_subtask(store: TaskRepo, task_id: int, title: str) -> Subtask:
    """Append a subtask; its id is scoped to the parent task."""
    with store.editing() as tasks:
        task = _require_task(tasks, task_id)
        sub = Subtask(id=next_id(task.subtasks), title=title)
        task.subtasks.append(sub)
    logger.debug("Subtask created task_id=%s id=%s", task_id, sub.id)
    return sub


def rename_subtask(store: TaskRepo, task_id: int, subtask_id: int, title: str) -> Subtask:
    with store.editing() as tasks:
        sub = _require_subtask(_require_task(tasks, task_id), subtask_id)
        sub.title = title
    logger.debug("Subtask renamed task_id=%s id=%s", task_id, subtask_id)
    return sub


def complete_subtask(store: TaskRepo, task_id: int, subtask_id: int) -> Subtask:
    return set_subtask_completed(store, task_id, subtask_id, True)


def set_subtask_completed(
    store: TaskRepo, task_id: int, subtask_id: int, completed: bool
) -> Subtask:
    with store.editing() as tasks:
        sub = _require_subtask(_require_task(tasks, task_id), subtask_id)
        sub.completed = completed
    logger.debug("Subtask task_id=%s id=%s completed=%s", task_id, subtask_id, completed)
    return sub


def delete_subtask(store: TaskRepo, task_id: int, subtask_id: int) -> None:
    """Unknown task -> TaskNotFoundError; unknown subtask -> no-op."""
    with store.editing() as tasks:
        task = _require_task(tasks, task_id)
        task.subtasks = [s for s in task.subtasks if s.id != subtask_id]
    logger.debug("Subtask delete task_id=%s id=%s", task_id, subtask_id)
