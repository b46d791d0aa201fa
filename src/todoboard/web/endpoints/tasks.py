"""FastAPI endpoints for tasks and their subtasks."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from ...core.ports import TaskRepo
from ...tasks import task_api
from ...tasks.task_api import SubtaskNotFoundError, TaskNotFoundError

logger = logging.getLogger(__name__)


class TitleRequest(BaseModel):
    """Body for create/rename calls."""

    title: str


class CompletedRequest(BaseModel):
    """Body for the two-way completion calls."""

    completed: bool


class SubtaskOut(BaseModel):
    id: int
    title: str
    completed: bool


class TaskOut(BaseModel):
    id: int
    title: str
    completed: bool
    subtasks: list[SubtaskOut]


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def create_tasks_router(store: TaskRepo) -> APIRouter:
    """Create the /api/tasks router bound to `store`."""
    router = APIRouter(prefix="/api/tasks", tags=["Tasks"])

    # Ids arrive as strings: an id that is not a number matches no record,
    # so it answers like any unknown id (404, or 204 for DELETE /{task_id}).

    def task_id_or_404(raw: str) -> int:
        task_id = _parse_id(raw)
        if task_id is None:
            logger.warning("Task not found id=%r", raw)
            raise TaskNotFoundError(raw)
        return task_id

    def subtask_id_or_404(task_id: int, raw: str) -> int:
        subtask_id = _parse_id(raw)
        if subtask_id is None:
            # An unknown parent task still wins over the bad subtask id.
            task_api.get_task(store, task_id)
            logger.warning("Subtask not found task_id=%s subtask_id=%r", task_id, raw)
            raise SubtaskNotFoundError(task_id, raw)
        return subtask_id

    # Plain `def` endpoints run in the threadpool; writes are serialized by the store lock.

    @router.get("", response_model=list[TaskOut])
    @router.get("/", response_model=list[TaskOut], include_in_schema=False)
    def list_tasks():
        return [t.to_dict() for t in task_api.list_tasks(store)]

    @router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
    @router.post(
        "/", response_model=TaskOut, status_code=status.HTTP_201_CREATED, include_in_schema=False
    )
    def create_task(request: TitleRequest):
        return task_api.create_task(store, request.title).to_dict()

    @router.get("/{task_id}", response_model=TaskOut)
    def get_task(task_id: str):
        return task_api.get_task(store, task_id_or_404(task_id)).to_dict()

    @router.put("/{task_id}", response_model=TaskOut)
    def rename_task(task_id: str, request: TitleRequest):
        return task_api.rename_task(store, task_id_or_404(task_id), request.title).to_dict()

    @router.put("/{task_id}/complete", response_model=TaskOut)
    def complete_task(task_id: str):
        return task_api.complete_task(store, task_id_or_404(task_id)).to_dict()

    @router.put("/{task_id}/completed", response_model=TaskOut)
    def set_task_completed(task_id: str, request: CompletedRequest):
        task = task_api.set_task_completed(store, task_id_or_404(task_id), request.completed)
        return task.to_dict()

    @router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_task(task_id: str):
        parsed = _parse_id(task_id)
        if parsed is not None:
            task_api.delete_task(store, parsed)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get("/{task_id}/subtasks", response_model=list[SubtaskOut])
    def list_subtasks(task_id: str):
        return [s.to_dict() for s in task_api.list_subtasks(store, task_id_or_404(task_id))]

    @router.post(
        "/{task_id}/subtasks", response_model=SubtaskOut, status_code=status.HTTP_201_CREATED
    )
    def add_subtask(task_id: str, request: TitleRequest):
        return task_api.add_subtask(store, task_id_or_404(task_id), request.title).to_dict()

    @router.put("/{task_id}/subtasks/{subtask_id}", response_model=SubtaskOut)
    def rename_subtask(task_id: str, subtask_id: str, request: TitleRequest):
        tid = task_id_or_404(task_id)
        sid = subtask_id_or_404(tid, subtask_id)
        return task_api.rename_subtask(store, tid, sid, request.title).to_dict()

    @router.put("/{task_id}/subtasks/{subtask_id}/complete", response_model=SubtaskOut)
    def complete_subtask(task_id: str, subtask_id: str):
        tid = task_id_or_404(task_id)
        sid = subtask_id_or_404(tid, subtask_id)
        return task_api.complete_subtask(store, tid, sid).to_dict()

    @router.put("/{task_id}/subtasks/{subtask_id}/completed", response_model=SubtaskOut)
    def set_subtask_completed(task_id: str, subtask_id: str, request: CompletedRequest):
        tid = task_id_or_404(task_id)
        sid = subtask_id_or_404(tid, subtask_id)
        return task_api.set_subtask_completed(store, tid, sid, request.completed).to_dict()

    @router.delete("/{task_id}/subtasks/{subtask_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_subtask(task_id: str, subtask_id: str):
        tid = task_id_or_404(task_id)
        sid = _parse_id(subtask_id)
        if sid is None:
            # Unknown subtask: no-op, but the task must exist.
            task_api.get_task(store, tid)
        else:
            task_api.delete_subtask(store, tid, sid)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
