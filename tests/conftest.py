# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskpad.client.controller import TaskController
from taskpad.server.app import create_app
from taskpad.tasks.task_service import TaskService
from taskpad.tasks.task_store import TaskStore

from .fakes import FakeGateway, StepClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the entry points.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    db_path = tmp_path / "tasks.sqlite3"
    return SimpleNamespace(
        app_name="taskpad-test",
        log_level="DEBUG",
        host="127.0.0.1",
        port=5055,
        cors_origins=["*"],
        data_dir=tmp_path,
        store_url=f"sqlite:///{db_path.as_posix()}",
        tasks_db_path=db_path,
        api_base_url="http://testserver/api/tasks",
        theme="dark",
    )


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def store(settings: SimpleNamespace, clock: StepClock) -> TaskStore:
    """
    NOTE: We keep a real SQLite store here because its ordering and
    atomicity are part of what we want to test.
    """
    return TaskStore(settings.tasks_db_path, clock=clock)


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def app(store: TaskStore) -> FastAPI:
    return create_app(store=store)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def controller(gateway: FakeGateway) -> TaskController:
    return TaskController(gateway)
