"""
Client view tests - TaskListView against the real app over httpx.ASGITransport.
"""

import asyncio

import httpx
import pytest

from backend.src.client import TaskListView, TodoApiClient, TodoApiConnectionError, TodoApiError
from backend.src.db import InMemoryTaskStore
from backend.src.services.tasks import TaskService
from backend.src.web.dependencies import get_task_service
from backend.src.web.main import create_app

from fakes import FailingStore


def make_client(app_config, service):
    app = create_app(app_config)
    app.dependency_overrides[get_task_service] = lambda: service
    return TodoApiClient("http://testserver", transport=httpx.ASGITransport(app=app))


@pytest.fixture
def service():
    return TaskService(InMemoryTaskStore())


def test_load_create_toggle_delete(app_config, service):
    async def scenario():
        async with make_client(app_config, service) as client:
            view = TaskListView(client)
            assert await view.load() is True
            assert view.todos == []

            milk = await view.create("  Buy milk  ")
            bread = await view.create("Buy bread")
            assert milk.description == "Buy milk"
            assert [t.id for t in view.todos] == [milk.id, bread.id]
            assert (view.total, view.completed_count, view.remaining) == (2, 0, 2)

            toggled = await view.toggle(milk)
            assert toggled.completed is True
            assert view.find(milk.id).completed is True
            assert view.find(milk.id).created_at == milk.created_at
            assert (view.total, view.completed_count, view.remaining) == (2, 1, 1)

            assert await view.delete(bread.id) is True
            assert [t.id for t in view.todos] == [milk.id]

            server_side = await service.list_tasks()
            assert view.todos == server_side

    asyncio.run(scenario())


def test_blank_create_is_ignored(app_config, service):
    async def scenario():
        async with make_client(app_config, service) as client:
            view = TaskListView(client)
            assert await view.create("   ") is None
            assert view.todos == []
            assert view.is_loading is False
            return await service.list_tasks()

    assert asyncio.run(scenario()) == []


def test_toggle_of_task_gone_on_server_leaves_state(app_config, service):
    async def scenario():
        async with make_client(app_config, service) as client:
            view = TaskListView(client)
            todo = await view.create("Stale")
            await service.delete_task(todo.id)

            before = list(view.todos)
            assert await view.toggle(todo) is None
            assert view.todos == before
            assert "not found" in view.last_error

    asyncio.run(scenario())


def test_delete_of_task_gone_on_server_drops_local_copy(app_config, service):
    async def scenario():
        async with make_client(app_config, service) as client:
            view = TaskListView(client)
            todo = await view.create("Removed elsewhere")
            await service.delete_task(todo.id)

            assert await view.delete(todo.id) is False
            assert view.todos == []

    asyncio.run(scenario())


def test_store_failure_leaves_state_unchanged(app_config, service):
    async def scenario():
        async with make_client(app_config, service) as client:
            view = TaskListView(client)
            todo = await view.create("Survivor")

        async with make_client(app_config, TaskService(FailingStore())) as client:
            view.client = client
            snapshot = list(view.todos)

            assert await view.load() is False
            assert await view.create("New") is None
            assert await view.toggle(todo) is None
            assert await view.delete(todo.id) is False

            assert view.todos == snapshot
            assert view.is_loading is False
            assert view.last_error is not None

    asyncio.run(scenario())


def test_connection_error_leaves_state_unchanged():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        client = TodoApiClient("http://testserver", transport=httpx.MockTransport(refuse))
        async with client:
            with pytest.raises(TodoApiConnectionError):
                await client.get_todos()

            view = TaskListView(client)
            assert await view.load() is False
            assert view.todos == []
            assert "Failed to load todos" in view.last_error

    asyncio.run(scenario())


def test_api_error_carries_status(app_config, service):
    async def scenario():
        async with make_client(app_config, service) as client:
            with pytest.raises(TodoApiError) as not_found:
                await client.update_todo_completion(42, True)
            with pytest.raises(TodoApiError) as invalid:
                await client.create_todo("   ")
        return not_found.value, invalid.value

    not_found, invalid = asyncio.run(scenario())

    assert not_found.is_not_found
    assert not_found.detail == "todo with id 42 not found"
    assert invalid.status_code == 400
    assert invalid.is_validation_error
