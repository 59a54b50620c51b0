"""
TaskService contract tests, run against both the in-memory and SQLite stores.
"""

import asyncio
from datetime import datetime, timezone

import pytest

from backend.src.common.errors import NotFoundError, StoreError, ValidationError
from backend.src.services.tasks import DeleteResult, TaskService

from fakes import FailingStore


def run(open_store, scenario):
    async def _main():
        async with open_store() as store:
            return await scenario(TaskService(store))

    return asyncio.run(_main())


def test_create_task_returns_new_incomplete_task(open_store):
    async def scenario(service):
        before = datetime.now(timezone.utc)
        task = await service.create_task("Test Todo Item")
        after = datetime.now(timezone.utc)
        return before, task, after

    before, task, after = run(open_store, scenario)

    assert task.description == "Test Todo Item"
    assert task.completed is False
    assert isinstance(task.id, int)
    assert task.id > 0
    assert before <= task.created_at <= after


@pytest.mark.parametrize("description", ["", "   ", "\t\n"])
def test_create_task_rejects_blank_description(open_store, description):
    async def scenario(service):
        with pytest.raises(ValidationError):
            await service.create_task(description)
        return await service.list_tasks()

    assert run(open_store, scenario) == []


def test_long_and_duplicate_descriptions_are_kept_verbatim(open_store):
    long_description = (
        "This is a very long todo description that should be handled properly "
        "by the database and our handler function without any issues"
    )

    async def scenario(service):
        first = await service.create_task(long_description)
        second = await service.create_task(long_description)
        return first, second, await service.list_tasks()

    first, second, tasks = run(open_store, scenario)

    assert first.description == long_description
    assert first.id != second.id
    assert [t.description for t in tasks] == [long_description, long_description]


def test_list_tasks_returns_creation_order(open_store):
    async def scenario(service):
        created = [await service.create_task(d) for d in ("First", "Second", "Third")]
        return created, await service.list_tasks()

    created, tasks = run(open_store, scenario)

    assert len({t.id for t in created}) == 3
    assert [t.id for t in tasks] == [t.id for t in created]
    assert [t.description for t in tasks] == ["First", "Second", "Third"]


def test_list_tasks_empty_store(open_store):
    async def scenario(service):
        return await service.list_tasks()

    assert run(open_store, scenario) == []


def test_update_completion_round_trip_preserves_other_fields(open_store):
    async def scenario(service):
        created = await service.create_task("Toggle test todo")
        done = await service.update_completion(created.id, True)
        undone = await service.update_completion(created.id, False)
        return created, done, undone

    created, done, undone = run(open_store, scenario)

    assert done.completed is True
    assert done.description == "Toggle test todo"
    assert undone.completed is False
    assert undone.id == created.id
    assert undone.description == created.description
    assert undone.created_at == created.created_at


def test_update_completion_is_persisted(open_store):
    async def scenario(service):
        a = await service.create_task("Completed todo")
        b = await service.create_task("Incomplete todo")
        await service.update_completion(a.id, True)
        return b, await service.list_tasks()

    b, tasks = run(open_store, scenario)

    assert [t.completed for t in tasks] == [True, False]
    assert tasks[1] == b


def test_update_completion_unknown_id_raises_not_found(open_store):
    async def scenario(service):
        with pytest.raises(NotFoundError) as excinfo:
            await service.update_completion(999, True)
        return excinfo.value

    error = run(open_store, scenario)

    assert error.task_id == 999
    assert str(error) == "todo with id 999 not found"


def test_update_completion_after_delete_raises_not_found(open_store):
    async def scenario(service):
        task = await service.create_task("Short lived")
        await service.delete_task(task.id)
        with pytest.raises(NotFoundError):
            await service.update_completion(task.id, False)

    run(open_store, scenario)


def test_delete_task_removes_only_target(open_store):
    async def scenario(service):
        first = await service.create_task("First todo")
        second = await service.create_task("Second todo")
        third = await service.create_task("Third todo")
        result = await service.delete_task(second.id)
        return first, third, result, await service.list_tasks()

    first, third, result, remaining = run(open_store, scenario)

    assert result == DeleteResult(success=True)
    assert remaining == [first, third]


def test_delete_task_twice_reports_failure_without_error(open_store):
    async def scenario(service):
        task = await service.create_task("Test todo")
        return (
            await service.delete_task(task.id),
            await service.delete_task(task.id),
            await service.delete_task(999),
        )

    first, second, missing = run(open_store, scenario)

    assert first.success is True
    assert second.success is False
    assert missing.success is False


@pytest.mark.parametrize("task_id", [2**63, -(2**63) - 1, 10**30])
def test_out_of_range_ids_behave_like_unknown_ids(open_store, task_id):
    async def scenario(service):
        kept = await service.create_task("Kept")
        deleted = await service.delete_task(task_id)
        with pytest.raises(NotFoundError) as excinfo:
            await service.update_completion(task_id, True)
        return kept, deleted, excinfo.value, await service.list_tasks()

    kept, deleted, error, tasks = run(open_store, scenario)

    assert deleted.success is False
    assert error.task_id == task_id
    assert tasks == [kept]


def test_ids_are_not_reused_after_delete(open_store):
    async def scenario(service):
        a = await service.create_task("A")
        b = await service.create_task("B")
        await service.delete_task(b.id)
        c = await service.create_task("C")
        return a, b, c

    a, b, c = run(open_store, scenario)

    assert c.id > b.id > a.id


def test_buy_milk_scenario(open_store):
    async def scenario(service):
        created = await service.create_task("Buy milk")
        listed = await service.list_tasks()
        await service.update_completion(created.id, True)
        toggled = await service.list_tasks()
        await service.delete_task(created.id)
        return listed, toggled, await service.list_tasks()

    listed, toggled, final = run(open_store, scenario)

    assert [(t.description, t.completed) for t in listed] == [("Buy milk", False)]
    assert [(t.description, t.completed) for t in toggled] == [("Buy milk", True)]
    assert final == []


def test_delete_middle_of_three_keeps_order(open_store):
    async def scenario(service):
        a = await service.create_task("A")
        b = await service.create_task("B")
        c = await service.create_task("C")
        await service.delete_task(b.id)
        return a, b, c, await service.list_tasks()

    a, b, c, tasks = run(open_store, scenario)

    assert len({a.id, b.id, c.id}) == 3
    assert [t.description for t in tasks] == ["A", "C"]
    assert [t.id for t in tasks] == [a.id, c.id]


def test_store_errors_propagate_unchanged():
    store = FailingStore()
    service = TaskService(store)

    async def scenario():
        for call in (
            service.list_tasks(),
            service.create_task("x"),
            service.update_completion(1, True),
            service.delete_task(1),
        ):
            with pytest.raises(StoreError) as excinfo:
                await call
            assert excinfo.value is store.error

    asyncio.run(scenario())


def test_validation_happens_before_store_is_touched():
    service = TaskService(FailingStore())

    async def scenario():
        with pytest.raises(ValidationError):
            await service.create_task("   ")

    asyncio.run(scenario())
