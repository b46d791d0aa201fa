# src/todoboard/tasks/task_models.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol


class _HasId(Protocol):
    id: int


def _record_id(raw: dict[str, Any]) -> int:
    """Stored ids must be JSON integers; floats and booleans are not renumbered."""
    value = raw["id"]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"id must be an integer, got {value!r}")
    return value


@dataclass(slots=True)
class Subtask:
    id: int
    title: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Subtask:
        return cls(
            id=_record_id(raw),
            title=str(raw.get("title") or ""),
            completed=bool(raw.get("completed", False)),
        )


@dataclass(slots=True)
class Task:
    id: int
    title: str
    completed: bool = False
    subtasks: list[Subtask] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "subtasks": [s.to_dict() for s in self.subtasks],
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        subs = raw.get("subtasks") or []
        return cls(
            id=_record_id(raw),
            title=str(raw.get("title") or ""),
            completed=bool(raw.get("completed", False)),
            subtasks=[Subtask.from_dict(s) for s in subs],
        )

    def find_subtask(self, subtask_id: int) -> Subtask | None:
        for sub in self.subtasks:
            if sub.id == subtask_id:
                return sub
        return None


def next_id(items: Sequence[_HasId]) -> int:
    """
    Id for a record appended to `items`: the last element's id + 1, or 1 if empty.

    Not max-based: after deleting the last record its id is handed out again.
    """
    if not items:
        return 1
    return items[-1].id + 1


def find_task(tasks: Sequence[Task], task_id: int) -> Task | None:
    for task in tasks:
        if task.id == task_id:
            return task
    return None
