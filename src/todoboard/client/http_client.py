# src/todoboard/client/http_client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..tasks.task_models import Subtask, Task

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001/api/tasks"


class TaskClientNotFound(LookupError):
    """The server answered 404 (unknown task or subtask)."""


class TaskClient:
    """
    Thin synchronous client for the /api/tasks REST surface.

    Pass `http` to reuse an existing httpx.Client (e.g. a FastAPI TestClient);
    `api_url` is then resolved against that client's base_url.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base = api_url.rstrip("/")
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> TaskClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- low-level helpers ----

    def _url(self, *parts: int | str) -> str:
        if not parts:
            return self._base
        return self._base + "/" + "/".join(str(p) for p in parts)

    def _request(self, method: str, *parts: int | str, json: Any = None) -> httpx.Response:
        url = self._url(*parts)
        resp = self._http.request(method, url, json=json)
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        if resp.status_code == 404:
            raise TaskClientNotFound(resp.text or "Not found")
        resp.raise_for_status()
        return resp

    # ---- tasks ----

    def get_tasks(self) -> list[Task]:
        data = self._request("GET").json()
        return [Task.from_dict(t) for t in data]

    def get_task(self, task_id: int) -> Task:
        return Task.from_dict(self._request("GET", task_id).json())

    def add_task(self, title: str) -> Task:
        return Task.from_dict(self._request("POST", json={"title": title}).json())

    def update_task(self, task_id: int, title: str) -> Task:
        return Task.from_dict(self._request("PUT", task_id, json={"title": title}).json())

    def complete_task(self, task_id: int) -> Task:
        return Task.from_dict(self._request("PUT", task_id, "complete").json())

    def set_task_completed(self, task_id: int, completed: bool) -> Task:
        resp = self._request("PUT", task_id, "completed", json={"completed": completed})
        return Task.from_dict(resp.json())

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", task_id)

    # ---- subtasks ----

    def get_subtasks(self, task_id: int) -> list[Subtask]:
        data = self._request("GET", task_id, "subtasks").json()
        return [Subtask.from_dict(s) for s in data]

    def add_subtask(self, task_id: int, title: str) -> Subtask:
        resp = self._request("POST", task_id, "subtasks", json={"title": title})
        return Subtask.from_dict(resp.json())

    def update_subtask(self, task_id: int, subtask_id: int, title: str) -> Subtask:
        resp = self._request("PUT", task_id, "subtasks", subtask_id, json={"title": title})
        return Subtask.from_dict(resp.json())

    def complete_subtask(self, task_id: int, subtask_id: int) -> Subtask:
        resp = self._request("PUT", task_id, "subtasks", subtask_id, "complete")
        return Subtask.from_dict(resp.json())

    def set_subtask_completed(self, task_id: int, subtask_id: int, completed: bool) -> Subtask:
        resp = self._request(
            "PUT", task_id, "subtasks", subtask_id, "completed", json={"completed": completed}
        )
        return Subtask.from_dict(resp.json())

    def delete_subtask(self, task_id: int, subtask_id: int) -> None:
        self._request("DELETE", task_id, "subtasks", subtask_id)
