# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from todoboard.cli.commands import ConsoleSession
from todoboard.client.http_client import TaskClient
from todoboard.core.state import AppState
from todoboard.tasks.task_store import TaskStore
from todoboard.web.app import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState, bootstrap and the web app.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment/.env.
    """
    return SimpleNamespace(
        app_name="todoboard-test",
        data_dir=tmp_path,
        tasks_file_path=tmp_path / "tasks.json",
        atomic_writes=True,
        cors_origins=["*"],
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_file_path, atomic_writes=settings.atomic_writes)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store)


@pytest.fixture()
def app(state: AppState) -> FastAPI:
    return create_app(state)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def task_client(client: TestClient) -> TaskClient:
    """REST client that goes through the in-process app instead of the network."""
    return TaskClient("/api/tasks", http=client)


@pytest.fixture()
def session(task_client: TaskClient) -> ConsoleSession:
    return ConsoleSession(client=task_client)
