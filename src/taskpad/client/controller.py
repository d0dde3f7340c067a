# src/taskpad/client/controller.py

"""
Task client controller.

Every remote action runs in two phases:
- request: call the gateway (Remove also updates the list locally first),
- reconcile: apply the server's answer to ClientState.

On failure the error is logged and a short notice is left on the state for
the UI to show. Load, Add and Toggle change nothing locally before the
server answers, so a failure leaves the list as other actions left it; a
failed Remove puts back only the task it took out. No action is retried,
de-duplicated or cancelled.
"""

from __future__ import annotations

import logging

from ..core.ports import TaskGateway
from ..tasks.task_models import Task
from .api import TaskApiError
from .state import ClientState, TaskFilter, Theme

logger = logging.getLogger(__name__)


class TaskController:
    def __init__(self, api: TaskGateway, state: ClientState | None = None) -> None:
        self.api = api
        self.state = state if state is not None else ClientState()
        # Set by the console so every board render uses the same choice.
        self.color: bool | None = None

    # ---- local-only changes ----

    def set_draft(self, text: str) -> None:
        self.state.draft_text = text

    def set_filter(self, value: TaskFilter | str) -> TaskFilter:
        self.state.filter = value if isinstance(value, TaskFilter) else TaskFilter.parse(value)
        return self.state.filter

    def toggle_theme(self) -> Theme:
        self.state.theme = self.state.theme.flipped()
        return self.state.theme

    # ---- derived views ----

    @property
    def completed_count(self) -> int:
        return self.state.completed_count

    @property
    def filtered_tasks(self) -> list[Task]:
        return self.state.filtered_tasks

    # ---- remote actions ----

    def _fail(self, action: str, err: TaskApiError) -> None:
        self.state.notice = f"Could not {action}: {err}"
        logger.warning("Failed to %s: %s", action, err)

    async def load(self) -> bool:
        """Replace the task list with the server's. Returns False on failure."""
        self.state.notice = None
        try:
            tasks = await self.api.list_tasks()
        except TaskApiError as e:
            self._fail("load tasks", e)
            return False

        self.state.tasks = list(tasks)
        logger.info("Loaded %d tasks", len(tasks))
        return True

    async def add(self) -> Task | None:
        """
        Create a task from the draft text.

        Blank drafts are ignored (None, no request). The task is prepended
        only after the server confirms it; the draft is cleared then too.
        """
        text = self.state.draft_text
        if not text.strip():
            return None

        self.state.notice = None
        try:
            task = await self.api.create_task(text)
        except TaskApiError as e:
            self._fail("add task", e)
            return None

        self.state.tasks = [task, *self.state.tasks]
        self.state.draft_text = ""
        return task

    async def toggle(self, task_id: str) -> Task | None:
        self.state.notice = None
        try:
            updated = await self.api.toggle_task(task_id)
        except TaskApiError as e:
            self._fail("update task", e)
            return None

        self.state.tasks = [updated if t.id == task_id else t for t in self.state.tasks]
        return updated

    async def remove(self, task_id: str) -> bool:
        """Drop the task locally, then delete it remotely; put it back if that fails."""
        self.state.notice = None
        tasks = self.state.tasks
        idx = next((i for i, t in enumerate(tasks) if t.id == task_id), None)
        if idx is None:
            removed, successor = None, None
        else:
            removed = tasks[idx]
            successor = tasks[idx + 1].id if idx + 1 < len(tasks) else None
            self.state.tasks = tasks[:idx] + tasks[idx + 1 :]

        try:
            await self.api.delete_task(task_id)
        except TaskApiError as e:
            if removed is not None:
                self._restore(removed, successor)
            self._fail("delete task", e)
            return False
        return True

    def _restore(self, task: Task, successor: str | None) -> None:
        """
        Put a task back into the current list.

        It goes in front of the task that followed it when that one is still
        listed, otherwise at the end. Other actions' changes are kept.
        """
        current = self.state.tasks
        if any(t.id == task.id for t in current):
            return
        pos = next((i for i, t in enumerate(current) if t.id == successor), len(current))
        self.state.tasks = [*current[:pos], task, *current[pos:]]
