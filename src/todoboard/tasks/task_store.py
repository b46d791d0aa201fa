# src/todoboard/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import threading
from collections.abc import Iterator
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStoreParseError(ValueError):
    """The backing file exists but does not hold a JSON list of tasks."""


class TaskStore:
    """
    JSON file task store.

    The whole collection lives in one human-readable file:
    - load() reads and parses all of it
    - save() serializes all of it and overwrites the file

    Nothing is cached between calls; every call sees the file as it is on disk.

    Thread-safety:
    - editing() holds a per-store lock for the whole load -> mutate -> save cycle
    - two TaskStore objects on the same file do NOT share that lock
    """

    def __init__(self, path: str | Path = "tasks.json", *, atomic_writes: bool = True) -> None:
        self._path = Path(path)
        self._atomic_writes = atomic_writes
        self._lock = threading.Lock()
        try:
            total = self.count_tasks()
        except TaskStoreParseError:
            total = -1
        logger.info(
            "TaskStore ready file=%s total=%s atomic=%s", self._path, total, self._atomic_writes
        )

    @property
    def path(self) -> Path:
        return self._path

    # ---- persistence ----

    def load(self) -> list[Task]:
        if not self._path.exists():
            return []

        try:
            raw = self._path.read_text("utf-8")
        except UnicodeDecodeError as e:
            raise TaskStoreParseError(f"{self._path}: not valid UTF-8 ({e})") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise TaskStoreParseError(f"{self._path}: invalid JSON ({e})") from e

        if not isinstance(data, list):
            raise TaskStoreParseError(f"{self._path}: expected a JSON list of tasks")

        try:
            return [Task.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TaskStoreParseError(f"{self._path}: malformed task record ({e})") from e

    def save(self, tasks: list[Task]) -> None:
        payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2)
        self._path.parent.mkdir(parents=True, exist_ok=True)

        if self._atomic_writes:
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            try:
                tmp.write_text(payload, "utf-8")
                os.replace(tmp, self._path)
            except OSError:
                with contextlib.suppress(OSError):
                    tmp.unlink()
                raise
        else:
            self._path.write_text(payload, "utf-8")

        logger.debug("TaskStore saved %d tasks to %s", len(tasks), self._path)

    @contextlib.contextmanager
    def editing(self) -> Iterator[list[Task]]:
        """
        Load the collection under the store lock and save it back on clean exit.

        If the block raises, nothing is written.
        """
        with self._lock:
            tasks = self.load()
            yield tasks
            self.save(tasks)

    # ---- queries ----

    def count_tasks(self) -> int:
        return len(self.load())
