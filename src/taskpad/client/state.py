# src/taskpad/client/state.py

"""
Client-side UI state.

ClientState is a plain, serializable object: the controller owns and mutates
it, renderers only read it. Nothing here talks to the network.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ..tasks.task_models import Task


class TaskFilter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown filter {raw!r} (expected one of: {', '.join(f.value for f in cls)})"
            ) from None

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.ACTIVE:
            return not task.completed
        if self is TaskFilter.COMPLETED:
            return task.completed
        return True


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_setting(cls, raw: str | None) -> Theme:
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return cls.LIGHT

    def flipped(self) -> Theme:
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


@dataclass(slots=True)
class ClientState:
    # Server order is preserved (newest first after a load).
    tasks: list[Task] = field(default_factory=list)
    draft_text: str = ""
    filter: TaskFilter = TaskFilter.ALL
    theme: Theme = Theme.LIGHT
    # Last user-visible failure; cleared when the next action starts.
    notice: str | None = None

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.completed)

    @property
    def filtered_tasks(self) -> list[Task]:
        return [t for t in self.tasks if self.filter.matches(t)]

    @property
    def progress(self) -> float:
        """Completed share in [0, 1]; 0 for an empty list."""
        if not self.tasks:
            return 0.0
        return self.completed_count / len(self.tasks)

    def find(self, task_id: str) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": [t.to_json() for t in self.tasks],
            "draftText": self.draft_text,
            "filter": self.filter.value,
            "theme": self.theme.value,
            "notice": self.notice,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientState:
        raw_tasks = data.get("tasks") or []
        return cls(
            tasks=[Task.from_json(t) for t in raw_tasks],
            draft_text=str(data.get("draftText", "")),
            filter=TaskFilter.parse(data.get("filter") or TaskFilter.ALL.value),
            theme=Theme.from_setting(data.get("theme")),
            notice=data.get("notice"),
        )
