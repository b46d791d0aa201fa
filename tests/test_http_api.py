# tests/test_http_api.py

from __future__ import annotations

import asyncio

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from todoboard.tasks.task_store import TaskStore


def test_list_is_empty_on_fresh_store(client: TestClient) -> None:
    resp = client.get("/api/tasks")

    assert resp.status_code == 200
    assert resp.json() == []


def test_create_task(client: TestClient) -> None:
    resp = client.post("/api/tasks", json={"title": "Buy milk"})

    assert resp.status_code == 201
    assert resp.json() == {"id": 1, "title": "Buy milk", "completed": False, "subtasks": []}
    assert client.get("/api/tasks/").json() == [resp.json()]


def test_rename_get_and_complete_task(client: TestClient) -> None:
    client.post("/api/tasks", json={"title": "draft"})

    renamed = client.put("/api/tasks/1", json={"title": "final"})
    done = client.put("/api/tasks/1/complete")
    fetched = client.get("/api/tasks/1")

    assert renamed.status_code == 200
    assert renamed.json()["title"] == "final"
    assert done.status_code == 200
    assert done.json()["completed"] is True
    assert fetched.json() == {"id": 1, "title": "final", "completed": True, "subtasks": []}


def test_completed_endpoint_reopens_task(client: TestClient) -> None:
    client.post("/api/tasks", json={"title": "t"})
    client.put("/api/tasks/1/complete")

    resp = client.put("/api/tasks/1/completed", json={"completed": False})

    assert resp.status_code == 200
    assert resp.json()["completed"] is False


def test_unknown_task_is_404_plain_text_and_store_unchanged(
    client: TestClient, store: TaskStore
) -> None:
    client.post("/api/tasks", json={"title": "only"})
    before = store.path.read_bytes()

    for method, url, body in [
        ("PUT", "/api/tasks/9/complete", None),
        ("PUT", "/api/tasks/9", {"title": "x"}),
        ("PUT", "/api/tasks/9/completed", {"completed": True}),
        ("GET", "/api/tasks/9", None),
        ("POST", "/api/tasks/9/subtasks", {"title": "x"}),
        ("DELETE", "/api/tasks/9/subtasks/1", None),
    ]:
        resp = client.request(method, url, json=body)
        assert resp.status_code == 404, url
        assert resp.text == "Task not found"
        assert resp.headers["content-type"].startswith("text/plain")

    assert store.path.read_bytes() == before


def test_delete_unknown_task_is_204_and_store_unchanged(
    client: TestClient, store: TaskStore
) -> None:
    client.post("/api/tasks", json={"title": "only"})
    before = store.path.read_bytes()

    resp = client.delete("/api/tasks/9")

    assert resp.status_code == 204
    assert resp.content == b""
    assert store.path.read_bytes() == before


def test_subtask_lifecycle(client: TestClient) -> None:
    client.post("/api/tasks", json={"title": "parent"})

    created = client.post("/api/tasks/1/subtasks", json={"title": "child"})
    assert created.status_code == 201
    assert created.json() == {"id": 1, "title": "child", "completed": False}

    renamed = client.put("/api/tasks/1/subtasks/1", json={"title": "kid"})
    assert renamed.json()["title"] == "kid"

    done = client.put("/api/tasks/1/subtasks/1/complete")
    assert done.json()["completed"] is True

    reopened = client.put("/api/tasks/1/subtasks/1/completed", json={"completed": False})
    assert reopened.json()["completed"] is False

    assert client.get("/api/tasks/1/subtasks").json() == [
        {"id": 1, "title": "kid", "completed": False}
    ]

    assert client.delete("/api/tasks/1/subtasks/1").status_code == 204
    assert client.delete("/api/tasks/1/subtasks/1").status_code == 204
    assert client.get("/api/tasks/1").json()["subtasks"] == []


def test_unknown_subtask_is_404(client: TestClient) -> None:
    client.post("/api/tasks", json={"title": "parent"})

    for method, url, body in [
        ("PUT", "/api/tasks/1/subtasks/5", {"title": "x"}),
        ("PUT", "/api/tasks/1/subtasks/5/complete", None),
        ("PUT", "/api/tasks/1/subtasks/5/completed", {"completed": True}),
    ]:
        resp = client.request(method, url, json=body)
        assert resp.status_code == 404, url
        assert resp.text == "Subtask not found"


def test_deleting_task_makes_subtasks_unreachable(client: TestClient) -> None:
    client.post("/api/tasks", json={"title": "parent"})
    client.post("/api/tasks/1/subtasks", json={"title": "a"})
    client.post("/api/tasks/1/subtasks", json={"title": "b"})

    assert client.delete("/api/tasks/1").status_code == 204

    assert client.get("/api/tasks/1/subtasks").status_code == 404
    assert client.put("/api/tasks/1/subtasks/1/complete").status_code == 404
    assert client.get("/api/tasks").json() == []


def test_missing_title_is_rejected(client: TestClient) -> None:
    resp = client.post("/api/tasks", json={})

    assert resp.status_code == 422


def test_corrupt_data_file_is_500(app: FastAPI, store: TaskStore) -> None:
    store.path.write_text("[{broken", "utf-8")

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/api/tasks")

    assert resp.status_code == 500


def test_health_and_cors(client: TestClient) -> None:
    client.post("/api/tasks", json={"title": "a"})

    resp = client.get("/health", headers={"Origin": "http://localhost:5173"})

    assert resp.json() == {"status": "ok", "tasks": 1}
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_concurrent_creates_through_one_app_lose_nothing(app: FastAPI) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        responses = await asyncio.gather(
            *(ac.post("/api/tasks", json={"title": f"t{i}"}) for i in range(20))
        )
        listed = (await ac.get("/api/tasks")).json()

    assert all(r.status_code == 201 for r in responses)
    assert sorted(r.json()["id"] for r in responses) == list(range(1, 21))
    assert len(listed) == 20


def test_non_numeric_ids_answer_like_unknown_ids(client: TestClient, store: TaskStore) -> None:
    client.post("/api/tasks", json={"title": "parent"})
    client.post("/api/tasks/1/subtasks", json={"title": "child"})
    before = store.path.read_bytes()

    for method, url, body, text in [
        ("PUT", "/api/tasks/abc/complete", None, "Task not found"),
        ("PUT", "/api/tasks/abc", {"title": "x"}, "Task not found"),
        ("GET", "/api/tasks/abc/subtasks", None, "Task not found"),
        ("POST", "/api/tasks/abc/subtasks", {"title": "x"}, "Task not found"),
        ("PUT", "/api/tasks/1/subtasks/abc/complete", None, "Subtask not found"),
        ("PUT", "/api/tasks/9/subtasks/abc", {"title": "x"}, "Task not found"),
        ("DELETE", "/api/tasks/abc/subtasks/1", None, "Task not found"),
    ]:
        resp = client.request(method, url, json=body)
        assert resp.status_code == 404, url
        assert resp.text == text, url
        assert resp.headers["content-type"].startswith("text/plain")

    assert client.delete("/api/tasks/abc").status_code == 204
    assert client.delete("/api/tasks/1/subtasks/abc").status_code == 204
    assert store.path.read_bytes() == before
