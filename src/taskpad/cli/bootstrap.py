# src/taskpad/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the store into the FastAPI app (server side),
- wires the HTTP client into the controller (console side).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from ..client.api import TaskApiClient
from ..client.controller import TaskController
from ..client.state import ClientState, Theme
from ..config import get_settings
from ..server.app import create_app
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_store(*, settings=None) -> TaskStore:
    """
    Build the task store from settings.store_url.

    Raises ValueError for connection strings that are not SQLite.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    return TaskStore(settings.tasks_db_path)


def create_server_app(*, settings=None, store: TaskStore | None = None) -> FastAPI:
    """
    Create the API app from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if store is None:
        store = create_store(settings=settings)

    origins = list(getattr(settings, "cors_origins", None) or ["*"])
    return create_app(store=store, cors_origins=origins)


def create_controller(*, settings=None, api: TaskApiClient | None = None) -> TaskController:
    """Build the console controller; the caller owns (and closes) the API client."""
    if settings is None:
        settings = get_settings()
    if api is None:
        api = TaskApiClient(settings.api_base_url)

    state = ClientState(theme=Theme.from_setting(getattr(settings, "theme", None)))
    return TaskController(api, state)
