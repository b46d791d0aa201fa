# src/todoboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task operations and the HTTP layer.

Operations depend on this Protocol instead of the concrete JSON store,
so tests can pass an in-memory repo.
"""

from contextlib import AbstractContextManager
from typing import Any, Protocol


class TaskRepo(Protocol):
    def load(self) -> list[Any]: ...
    def save(self, tasks: list[Any]) -> None: ...

    # Load under the store's write lock, save on clean exit.
    def editing(self) -> AbstractContextManager[list[Any]]: ...

    def count_tasks(self) -> int: ...
