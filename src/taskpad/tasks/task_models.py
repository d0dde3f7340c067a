# src/taskpad/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


class TaskNotFoundError(LookupError):
    """Raised when an operation needs a task id that is not in the store."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class TaskStoreError(RuntimeError):
    """The underlying store failed (I/O, locking, corrupt file, ...)."""


def ts_to_datetime(ts: float) -> datetime:
    return datetime.fromtimestamp(float(ts), tz=UTC)


def format_ts(dt: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing 'Z'."""
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_ts(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw if raw.tzinfo else raw.replace(tzinfo=UTC)
    if isinstance(raw, int | float):
        return ts_to_datetime(raw)
    s = str(raw or "").strip()
    if not s:
        raise ValueError("timestamp is required")
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    return dt if dt.tzinfo else dt.replace(tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    completed: bool
    created_at: datetime

    # Store metadata; clients ignore it.
    updated_at: datetime | None = None
    version: int = 0

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": format_ts(self.created_at),
            "updatedAt": format_ts(self.updated_at) if self.updated_at else None,
            "version": self.version,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Task:
        """
        Build a Task from its JSON shape.

        Accepts "_id" as an alias of "id"; unknown keys are ignored.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Task JSON must be an object, got {type(data).__name__}")

        task_id = data.get("id", data.get("_id"))
        if task_id is None or str(task_id) == "":
            raise ValueError("Task JSON has no id")

        updated_raw = data.get("updatedAt")
        try:
            version = int(data.get("version", data.get("__v", 0)) or 0)
        except (TypeError, ValueError):
            version = 0

        return cls(
            id=str(task_id),
            text=str(data.get("text", "")),
            completed=data.get("completed") is True,
            created_at=parse_ts(data.get("createdAt")),
            updated_at=parse_ts(updated_raw) if updated_raw else None,
            version=version,
        )
