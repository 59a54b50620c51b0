"""
Shared fixtures for the task tracker tests.

Async code is driven with asyncio.run() inside plain test functions.
"""

import sys
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.src.db import DatabaseManager, InMemoryTaskStore, TaskRepository
from backend.src.web.config import AppConfig
from backend.src.web.main import create_app


@pytest.fixture(params=["memory", "sqlite"])
def open_store(request, tmp_path):
    """Factory for an async context manager yielding a fresh TaskStore."""

    @asynccontextmanager
    async def _open():
        if request.param == "memory":
            yield InMemoryTaskStore()
            return
        db = DatabaseManager(tmp_path / "todos.db")
        await db.init()
        try:
            yield TaskRepository(db)
        finally:
            await db.close()

    return _open


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        database_url=f"sqlite:///{tmp_path / 'todos.db'}",
        rate_limit_enabled=False,
    )


@pytest.fixture
def api_client(app_config):
    """TestClient with lifespan running against a temporary SQLite file."""
    with TestClient(create_app(app_config)) as client:
        yield client
