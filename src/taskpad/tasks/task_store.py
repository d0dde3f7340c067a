# src/taskpad/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
import uuid
from collections.abc import Callable, Iterator
from pathlib import Path

from .task_models import Task, TaskNotFoundError, TaskStoreError, ts_to_datetime

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    Each task is one row keyed by a store-assigned hex id. The table is
    created on first use.

    Thread-safety:
    - each method opens its own SQLite connection
    - every public method is a single statement (or a read after a write),
      so each operation is atomic on its own
    """

    def __init__(
        self,
        db_path: str | Path = "tasks.sqlite3",
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._db_path = Path(db_path)
        self._clock = clock
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except TaskStoreError:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success, always close; wrap sqlite errors."""
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise TaskStoreError(str(e)) from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            raise TaskStoreError(str(e)) from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._session() as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    text TEXT NOT NULL DEFAULT '',
                    completed INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL,
                    version INTEGER NOT NULL DEFAULT 0
                )
                """
            )

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)")

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            text=str(row["text"] or ""),
            completed=bool(row["completed"]),
            created_at=ts_to_datetime(row["created_at"] or 0.0),
            updated_at=ts_to_datetime(row["updated_at"] or 0.0),
            version=int(row["version"] or 0),
        )

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._session() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def create(self, text: str) -> Task:
        """Insert a new task (completed=False, created_at=now) and return it."""
        now = self._clock()
        task_id = self._new_id()

        with self._session() as conn:
            conn.execute(
                """
                INSERT INTO tasks(id, text, completed, created_at, updated_at, version)
                VALUES (?, ?, 0, ?, ?, 0)
                """,
                (task_id, text, now, now),
            )

        logger.debug("Task created id=%s len=%d", task_id, len(text))
        return Task(
            id=task_id,
            text=text,
            completed=False,
            created_at=ts_to_datetime(now),
            updated_at=ts_to_datetime(now),
            version=0,
        )

    def find_all(self) -> list[Task]:
        """
        All tasks, newest first.

        Equal timestamps keep insertion order reversed (rowid DESC), so the
        most recent insert is always first.
        """
        with self._session() as conn:
            rows = conn.execute(
                "SELECT * FROM tasks ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
            return [self._row_to_task(r) for r in rows]

    def find_by_id(self, task_id: str) -> Task | None:
        with self._session() as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (str(task_id),)).fetchone()
            return self._row_to_task(row) if row else None

    def save(self, task: Task) -> Task:
        """
        Persist the mutable fields of an existing task and bump its version.

        Raises TaskNotFoundError if the row is gone (deleted concurrently).
        """
        now = self._clock()
        with self._session() as conn:
            cur = conn.execute(
                """
                UPDATE tasks
                SET completed = ?, updated_at = ?, version = version + 1
                WHERE id = ?
                """,
                (1 if task.completed else 0, now, task.id),
            )
            if cur.rowcount != 1:
                raise TaskNotFoundError(task.id)
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task.id,)).fetchone()

        saved = self._row_to_task(row)
        logger.debug(
            "Task saved id=%s completed=%s version=%s", saved.id, saved.completed, saved.version
        )
        return saved

    def delete_by_id(self, task_id: str) -> bool:
        """Delete a task. Returns True if a row was removed."""
        with self._session() as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (str(task_id),))
            deleted = cur.rowcount == 1
        logger.debug("Task delete id=%s deleted=%s", task_id, deleted)
        return deleted
