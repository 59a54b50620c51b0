"""
Database module for task persistence.

Provides storage for todo items:
- SQLite-backed TaskRepository (durable)
- InMemoryTaskStore (tests, demos)

Usage:
    from backend.src.db import DatabaseManager, TaskRepository

    db = DatabaseManager(Path("data/todos.db"))
    await db.init()

    repo = TaskRepository(db)
    task = await repo.insert("Buy milk")
    tasks = await repo.list_all()
"""

from .base import DatabaseSettings, TaskStore, parse_database_url
from .connection import DatabaseManager
from .crud import TaskRepository
from .memory import InMemoryTaskStore
from .schema import TaskRecord

__all__ = [
    # Settings
    "DatabaseSettings",
    "parse_database_url",
    # Connection
    "DatabaseManager",
    # Stores
    "TaskStore",
    "TaskRepository",
    "InMemoryTaskStore",
    # Models
    "TaskRecord",
]
