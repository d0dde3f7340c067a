# tests/test_controller.py

from __future__ import annotations

import asyncio
import itertools

import pytest

from taskpad.client.api import TaskApiError
from taskpad.client.controller import TaskController
from taskpad.client.state import ClientState, TaskFilter, Theme

from .fakes import FakeGateway, make_task


@pytest.mark.asyncio
async def test_load_replaces_tasks_in_server_order() -> None:
    gateway = FakeGateway([make_task("b"), make_task("a", age_s=5)])
    controller = TaskController(gateway, ClientState(tasks=[make_task("stale")]))

    assert await controller.load() is True
    assert [t.id for t in controller.state.tasks] == ["b", "a"]
    assert controller.state.notice is None


@pytest.mark.asyncio
async def test_load_failure_keeps_stale_list_and_sets_notice() -> None:
    gateway = FakeGateway()
    gateway.fail.add("list")
    controller = TaskController(gateway, ClientState(tasks=[make_task("stale")]))

    assert await controller.load() is False
    assert [t.id for t in controller.state.tasks] == ["stale"]
    assert controller.state.notice and "load tasks" in controller.state.notice


@pytest.mark.asyncio
@pytest.mark.parametrize("draft", ["", "   ", "\t\n"])
async def test_add_blank_draft_is_a_no_op(controller: TaskController, gateway: FakeGateway, draft: str) -> None:
    controller.set_draft(draft)
    assert await controller.add() is None
    assert gateway.calls == []
    assert controller.state.draft_text == draft


@pytest.mark.asyncio
async def test_add_prepends_server_task_and_clears_draft(controller: TaskController) -> None:
    controller.state.tasks = [make_task("old")]
    controller.set_draft("  Buy milk ")

    task = await controller.add()

    assert task is not None
    # Text goes to the server untouched; the trim is only a guard.
    assert task.text == "  Buy milk "
    assert [t.id for t in controller.state.tasks] == [task.id, "old"]
    assert controller.state.draft_text == ""


@pytest.mark.asyncio
async def test_add_failure_keeps_state_and_draft(controller: TaskController, gateway: FakeGateway) -> None:
    gateway.fail.add("create")
    controller.state.tasks = [make_task("old")]
    controller.set_draft("Buy milk")

    assert await controller.add() is None
    assert [t.id for t in controller.state.tasks] == ["old"]
    assert controller.state.draft_text == "Buy milk"
    assert controller.state.notice and "add task" in controller.state.notice


@pytest.mark.asyncio
async def test_repeated_add_is_not_deduplicated(controller: TaskController, gateway: FakeGateway) -> None:
    for _ in range(2):
        controller.set_draft("same")
        await controller.add()

    assert [c for c in gateway.calls if c[0] == "create"] == [("create", "same"), ("create", "same")]
    assert len(controller.state.tasks) == 2


@pytest.mark.asyncio
async def test_toggle_replaces_matching_task_only() -> None:
    gateway = FakeGateway([make_task("a"), make_task("b")])
    controller = TaskController(gateway)
    await controller.load()

    updated = await controller.toggle("b")

    assert updated is not None and updated.completed is True
    assert [(t.id, t.completed) for t in controller.state.tasks] == [("a", False), ("b", True)]


@pytest.mark.asyncio
async def test_toggle_failure_leaves_list_unchanged() -> None:
    gateway = FakeGateway([make_task("a")])
    controller = TaskController(gateway)
    await controller.load()
    gateway.fail.add("toggle")

    assert await controller.toggle("a") is None
    assert controller.state.tasks[0].completed is False
    assert controller.state.notice


@pytest.mark.asyncio
async def test_remove_success() -> None:
    gateway = FakeGateway([make_task("a"), make_task("b")])
    controller = TaskController(gateway)
    await controller.load()

    assert await controller.remove("a") is True
    assert [t.id for t in controller.state.tasks] == ["b"]
    assert [t.id for t in gateway.tasks] == ["b"]


@pytest.mark.asyncio
async def test_remove_failure_rolls_back_to_original_position() -> None:
    gateway = FakeGateway([make_task("a"), make_task("b"), make_task("c")])
    controller = TaskController(gateway)
    await controller.load()
    gateway.fail.add("delete")

    assert await controller.remove("b") is False
    assert [t.id for t in controller.state.tasks] == ["a", "b", "c"]
    assert controller.state.notice and "delete task" in controller.state.notice


@pytest.mark.asyncio
async def test_failed_remove_keeps_task_created_meanwhile() -> None:
    gateway = FakeGateway([make_task("a")])
    controller = TaskController(gateway)
    await controller.load()
    gateway.fail.add("delete")
    gateway.delay.update(delete=0.05, create=0.01)
    controller.set_draft("Buy milk")

    removed, added = await asyncio.gather(controller.remove("a"), controller.add())

    assert removed is False
    assert added is not None
    assert [t.id for t in gateway.tasks] == ["n1", "a"]
    assert [t.id for t in controller.state.tasks] == ["n1", "a"]


@pytest.mark.asyncio
async def test_failed_toggle_keeps_task_created_meanwhile() -> None:
    gateway = FakeGateway([make_task("a")])
    controller = TaskController(gateway)
    await controller.load()
    gateway.fail.add("toggle")
    gateway.delay.update(toggle=0.05, create=0.01)
    controller.set_draft("Buy milk")

    await asyncio.gather(controller.toggle("a"), controller.add())

    assert [(t.id, t.completed) for t in controller.state.tasks] == [("n1", False), ("a", False)]
    assert controller.state.notice and "update task" in controller.state.notice


@pytest.mark.asyncio
async def test_failed_remove_goes_to_end_when_successor_is_gone() -> None:
    gateway = FakeGateway([make_task("a"), make_task("b"), make_task("c")])
    controller = TaskController(gateway)
    await controller.load()

    async def delete_task(task_id: str) -> str:
        if task_id == "b":
            await asyncio.sleep(0.05)
            raise TaskApiError("delete unavailable", status_code=503)
        gateway.tasks = [t for t in gateway.tasks if t.id != task_id]
        return "Task deleted"

    gateway.delete_task = delete_task  # type: ignore[method-assign]

    results = await asyncio.gather(controller.remove("b"), controller.remove("c"))

    assert results == [False, True]
    assert [t.id for t in controller.state.tasks] == ["a", "b"]


@pytest.mark.asyncio
async def test_next_action_clears_notice() -> None:
    gateway = FakeGateway([make_task("a")])
    controller = TaskController(gateway)
    gateway.fail.add("list")
    await controller.load()
    assert controller.state.notice

    gateway.fail.clear()
    await controller.toggle("a")
    assert controller.state.notice is None


def test_filters_partition_any_collection() -> None:
    for flags in itertools.product([False, True], repeat=4):
        tasks = [make_task(str(i), completed=f) for i, f in enumerate(flags)]
        state = ClientState(tasks=tasks)

        state.filter = TaskFilter.ALL
        assert state.filtered_tasks == tasks

        state.filter = TaskFilter.ACTIVE
        assert state.filtered_tasks == [t for t in tasks if not t.completed]

        state.filter = TaskFilter.COMPLETED
        assert state.filtered_tasks == [t for t in tasks if t.completed]

        assert state.completed_count == sum(flags)


def test_local_filter_and_theme_changes(controller: TaskController) -> None:
    assert controller.set_filter("Active") is TaskFilter.ACTIVE
    with pytest.raises(ValueError):
        controller.set_filter("done")
    assert controller.state.filter is TaskFilter.ACTIVE

    assert controller.state.theme is Theme.LIGHT
    assert controller.toggle_theme() is Theme.DARK
    assert controller.toggle_theme() is Theme.LIGHT
