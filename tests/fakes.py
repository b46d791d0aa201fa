# tests/fakes.py

from __future__ import annotations

import copy
from collections.abc import Iterator
from contextlib import contextmanager

from todoboard.tasks.task_models import Task


class InMemoryTaskRepo:
    """
    In-memory TaskRepo used for operation unit tests.

    load() hands out deep copies, like re-reading a file would, so a test
    can only observe what was actually saved.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.saved: list[Task] = copy.deepcopy(tasks or [])
        self.save_calls = 0

    def load(self) -> list[Task]:
        return copy.deepcopy(self.saved)

    def save(self, tasks: list[Task]) -> None:
        self.saved = copy.deepcopy(tasks)
        self.save_calls += 1

    @contextmanager
    def editing(self) -> Iterator[list[Task]]:
        tasks = self.load()
        yield tasks
        self.save(tasks)

    def count_tasks(self) -> int:
        return len(self.saved)
