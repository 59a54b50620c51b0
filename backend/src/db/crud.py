"""
CRUD operations for task persistence.

Provides TaskRepository, the SQLite implementation of the TaskStore protocol:
- Inserting tasks (store assigns id and created_at)
- Listing all tasks in insertion order
- Updating the completion flag
- Physically deleting tasks
"""

import logging
import sqlite3
from typing import List, Optional

import aiosqlite

from ..common.errors import StoreError
from .connection import DatabaseManager
from .schema import TaskRecord, format_iso8601, parse_iso8601, utc_now

logger = logging.getLogger(__name__)

_STORE_ERRORS = (aiosqlite.Error, sqlite3.Error, RuntimeError)

# SQLite INTEGER is a signed 64-bit value
_SQLITE_INT_MIN = -(2**63)
_SQLITE_INT_MAX = 2**63 - 1


def _storable_id(task_id: int) -> bool:
    return _SQLITE_INT_MIN <= task_id <= _SQLITE_INT_MAX


def _row_to_record(row: aiosqlite.Row) -> TaskRecord:
    return TaskRecord(
        id=int(row["id"]),
        description=str(row["description"]),
        completed=bool(row["completed"]),
        created_at=parse_iso8601(row["created_at"]),
    )


class TaskRepository:
    """
    Repository for task persistence operations.

    Encapsulates all database interactions for the todos table.
    Every public method runs as a single transaction.
    """

    def __init__(self, db: DatabaseManager):
        """
        Initialize repository.

        Args:
            db: DatabaseManager instance
        """
        self.db = db

    async def insert(self, description: str) -> TaskRecord:
        """
        Create a new task.

        Args:
            description: Task text, stored verbatim

        Returns:
            The stored record with its assigned id and created_at
        """
        created_at = format_iso8601(utc_now())

        try:
            async with self.db.transaction():
                cursor = await self.db.execute(
                    """
                    INSERT INTO todos (description, completed, created_at)
                    VALUES (?, 0, ?)
                    """,
                    (description, created_at),
                )
                task_id = cursor.lastrowid
                await cursor.close()
                if task_id is None:
                    raise StoreError("SQLite did not return lastrowid for todos insert")

                row = await self.db.fetch_one(
                    "SELECT * FROM todos WHERE id = ?",
                    (task_id,),
                )
        except _STORE_ERRORS as e:
            logger.exception("Failed to insert todo")
            raise StoreError(f"insert failed: {e}") from e

        if row is None:
            raise StoreError(f"todo {task_id} vanished after insert")

        record = _row_to_record(row)
        logger.debug("Todo inserted id=%s", record.id)
        return record

    async def list_all(self) -> List[TaskRecord]:
        """
        List every present task.

        Returns:
            Snapshot list ordered by id (insertion order)
        """
        try:
            async with self.db.transaction():
                rows = await self.db.fetch_all("SELECT * FROM todos ORDER BY id")
        except _STORE_ERRORS as e:
            logger.exception("Failed to fetch todos")
            raise StoreError(f"list failed: {e}") from e

        return [_row_to_record(row) for row in rows]

    async def set_completed(self, task_id: int, completed: bool) -> Optional[TaskRecord]:
        """
        Update the completion flag of one task.

        Only the completed column is written; description and created_at
        are read back from the row.

        Args:
            task_id: Task identifier
            completed: New completion state

        Returns:
            Updated record, or None if no row has this id
        """
        if not _storable_id(task_id):
            return None

        try:
            async with self.db.transaction():
                cursor = await self.db.execute(
                    "UPDATE todos SET completed = ? WHERE id = ?",
                    (1 if completed else 0, task_id),
                )
                updated = cursor.rowcount
                await cursor.close()
                if updated == 0:
                    return None

                row = await self.db.fetch_one(
                    "SELECT * FROM todos WHERE id = ?",
                    (task_id,),
                )
        except _STORE_ERRORS as e:
            logger.exception("Failed to update todo id=%s", task_id)
            raise StoreError(f"update failed: {e}") from e

        return _row_to_record(row) if row is not None else None

    async def delete(self, task_id: int) -> bool:
        """
        Hard delete a task.

        Args:
            task_id: Task identifier

        Returns:
            True if a row was removed, False if the id did not exist
        """
        if not _storable_id(task_id):
            return False

        try:
            async with self.db.transaction():
                cursor = await self.db.execute(
                    "DELETE FROM todos WHERE id = ?",
                    (task_id,),
                )
                deleted = cursor.rowcount
                await cursor.close()
        except _STORE_ERRORS as e:
            logger.exception("Failed to delete todo id=%s", task_id)
            raise StoreError(f"delete failed: {e}") from e

        return deleted > 0
