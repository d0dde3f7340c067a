# src/taskpad/tasks/task_service.py

from __future__ import annotations

import logging
from dataclasses import replace

from ..core.ports import TaskRepo
from .task_models import Task, TaskNotFoundError

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Task deleted"


class TaskService:
    """
    The four task operations, each a single read/write against the store.

    Text policy: text is stored exactly as given, including empty or
    whitespace-only strings. This is the only place that decides it.
    """

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def create(self, text: str) -> Task:
        task = self._repo.create(text)
        logger.info("Created task id=%s", task.id)
        return task

    def list_tasks(self) -> list[Task]:
        return self._repo.find_all()

    def toggle(self, task_id: str) -> Task:
        """Invert `completed` and persist. Raises TaskNotFoundError for unknown ids."""
        task = self._repo.find_by_id(task_id)
        if task is None:
            logger.info("Toggle on missing task id=%s", task_id)
            raise TaskNotFoundError(task_id)

        saved = self._repo.save(replace(task, completed=not task.completed))
        logger.info("Toggled task id=%s completed=%s", saved.id, saved.completed)
        return saved

    def delete(self, task_id: str) -> str:
        """Remove the task if present. Unknown ids are not an error."""
        deleted = self._repo.delete_by_id(task_id)
        logger.info("Delete task id=%s existed=%s", task_id, deleted)
        return DELETED_MESSAGE
