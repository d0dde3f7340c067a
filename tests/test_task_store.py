# tests/test_task_store.py

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from taskpad.tasks.task_models import TaskNotFoundError, TaskStoreError
from taskpad.tasks.task_store import TaskStore

from .fakes import StepClock


def test_create_find_save_delete(store: TaskStore) -> None:
    task = store.create("Buy milk")
    assert len(task.id) == 32
    assert task.text == "Buy milk"
    assert task.completed is False
    assert task.version == 0

    found = store.find_by_id(task.id)
    assert found is not None
    assert found.text == "Buy milk"
    assert found.created_at == task.created_at

    saved = store.save(replace(found, completed=True))
    assert saved.completed is True
    assert saved.version == 1
    assert saved.created_at == task.created_at
    assert saved.updated_at is not None and saved.updated_at > task.created_at

    assert store.delete_by_id(task.id) is True
    assert store.find_by_id(task.id) is None
    assert store.delete_by_id(task.id) is False
    assert store.count_tasks() == 0


def test_find_all_orders_by_created_at_desc(tmp_path: Path) -> None:
    stamps = iter([300.0, 100.0, 200.0])
    store = TaskStore(tmp_path / "t.sqlite3", clock=lambda: next(stamps))

    store.create("middle-old")  # 300
    store.create("oldest")  # 100
    store.create("middle")  # 200

    assert [t.text for t in store.find_all()] == ["middle-old", "middle", "oldest"]


def test_equal_timestamps_list_latest_insert_first(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "t.sqlite3", clock=lambda: 42.0)
    for name in ("a", "b", "c"):
        store.create(name)

    assert [t.text for t in store.find_all()] == ["c", "b", "a"]


def test_text_is_stored_verbatim(store: TaskStore) -> None:
    for text in ("", "   ", "  padded  ", "emoji ✨", "line\nbreak"):
        task = store.create(text)
        found = store.find_by_id(task.id)
        assert found is not None
        assert found.text == text


def test_save_missing_row_raises_not_found(store: TaskStore) -> None:
    task = store.create("x")
    store.delete_by_id(task.id)
    with pytest.raises(TaskNotFoundError):
        store.save(replace(task, completed=True))


def test_data_survives_a_new_store_instance(tmp_path: Path) -> None:
    db = tmp_path / "t.sqlite3"
    first = TaskStore(db, clock=StepClock())
    task = first.create("persist me")

    second = TaskStore(db)
    found = second.find_by_id(task.id)
    assert found is not None
    assert found.text == "persist me"


def test_unopenable_database_raises_store_error(tmp_path: Path) -> None:
    # A directory is not a database file.
    with pytest.raises(TaskStoreError):
        TaskStore(tmp_path)
