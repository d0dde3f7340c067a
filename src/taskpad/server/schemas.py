# src/taskpad/server/schemas.py

"""Request/response models for the task API (camelCase on the wire)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictStr

from ..tasks.task_models import Task, format_ts


def _to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class CamelModel(BaseModel):
    """Base model with camelCase JSON serialization."""

    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class TaskCreateRequest(BaseModel):
    # Any JSON string is accepted, "" included; see TaskService.
    text: StrictStr


class TaskOut(CamelModel):
    id: str
    text: str
    completed: bool
    created_at: str
    updated_at: str | None = None
    version: int = 0

    @classmethod
    def from_task(cls, task: Task) -> TaskOut:
        return cls(
            id=task.id,
            text=task.text,
            completed=task.completed,
            created_at=format_ts(task.created_at),
            updated_at=format_ts(task.updated_at) if task.updated_at else None,
            version=task.version,
        )


class MessageOut(BaseModel):
    message: str
