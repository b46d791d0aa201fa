# tests/test_bootstrap.py

from __future__ import annotations

from types import SimpleNamespace

from fastapi.testclient import TestClient

from todoboard.cli.bootstrap import create_initial_state
from todoboard.cli.main import build_parser
from todoboard.tasks.task_store import TaskStore
from todoboard.web.app import create_app


def test_create_initial_state_wires_store(tmp_path) -> None:
    settings = SimpleNamespace(
        data_dir=tmp_path / "data",
        tasks_file_path=tmp_path / "data" / "nested" / "tasks.json",
        atomic_writes=False,
    )

    state = create_initial_state(settings=settings)

    assert isinstance(state.task_store, TaskStore)
    assert state.task_store.path == settings.tasks_file_path
    assert settings.tasks_file_path.parent.is_dir()

    with TestClient(create_app(state)) as c:
        assert c.post("/api/tasks", json={"title": "x"}).status_code == 201
    assert settings.tasks_file_path.exists()


def test_parser_defaults_come_from_settings() -> None:
    settings = SimpleNamespace(host="0.0.0.0", port=8123, api_url="http://h/api/tasks")
    parser = build_parser(settings)

    serve = parser.parse_args(["serve"])
    console = parser.parse_args(["console", "--api-url", "http://other/api/tasks"])
    default = parser.parse_args([])

    assert (serve.host, serve.port) == ("0.0.0.0", 8123)
    assert console.api_url == "http://other/api/tasks"
    assert default.command is None
