# src/taskpad/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the service and the client controller.

The core depends on Protocols instead of concrete implementations.
This keeps the store and the HTTP transport swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Server-side store contract (SQLite TaskStore in production)."""

    def create(self, text: str) -> Task: ...
    def find_all(self) -> list[Task]: ...
    def find_by_id(self, task_id: str) -> Task | None: ...
    def save(self, task: Task) -> Task: ...
    def delete_by_id(self, task_id: str) -> bool: ...


class TaskGateway(Protocol):
    """
    Client-side port: the four remote calls the controller needs.

    Implementations raise TaskApiError on any transport or HTTP failure.
    """

    async def list_tasks(self) -> list[Task]: ...
    async def create_task(self, text: str) -> Task: ...
    async def toggle_task(self, task_id: str) -> Task: ...
    async def delete_task(self, task_id: str) -> str: ...
