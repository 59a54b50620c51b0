"""
SQLite connection manager for the todos database.

One aiosqlite connection is shared by the process. Repository calls take
turns on it through transaction(), which holds an asyncio.Lock for the
whole BEGIN ... COMMIT/ROLLBACK span.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import aiosqlite

from .schema import SCHEMA_SQL

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Owns the shared connection and serializes transactions on it.

    Statements are only accepted inside transaction() from the task that
    opened it; transactions do not nest.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._connection: Optional[aiosqlite.Connection] = None
        self._lock = asyncio.Lock()
        self._init_lock = asyncio.Lock()
        self._transaction_owner: Optional[asyncio.Task] = None

    @property
    def is_initialized(self) -> bool:
        return self._connection is not None

    async def init(self):
        """
        Open the database file and apply the schema.

        Creates missing parent directories. Safe to call more than once.
        """
        async with self._init_lock:
            if self._connection is not None:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            connection = await aiosqlite.connect(str(self.db_path), timeout=5.0)
            try:
                connection.row_factory = aiosqlite.Row
                await connection.executescript(SCHEMA_SQL)
                await connection.commit()
            except Exception:
                await connection.close()
                raise

            self._connection = connection
            logger.info("Database ready: %s", self.db_path)

    async def close(self):
        """Close the connection once no transaction is running."""
        async with self._lock:
            if self._connection is not None:
                await self._connection.close()
                self._connection = None

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._connection

    async def ping(self) -> bool:
        """Run a trivial query; False if the database cannot answer."""
        try:
            async with self.transaction():
                row = await self.fetch_one("SELECT 1")
            return row is not None
        except Exception:
            logger.exception("Database ping failed")
            return False

    def _require_transaction(self, operation: str) -> None:
        if self._transaction_owner is None:
            raise RuntimeError(f"{operation} requires an active transaction()")
        if self._transaction_owner is not asyncio.current_task():
            raise RuntimeError(f"{operation} called from a task that does not own the transaction")

    async def execute(self, sql: str, parameters=None) -> aiosqlite.Cursor:
        """Execute one statement inside the current transaction."""
        self._require_transaction("execute")
        return await self.connection.execute(sql, parameters or ())

    async def fetch_one(self, sql: str, parameters=None) -> Optional[aiosqlite.Row]:
        cursor = await self.execute(sql, parameters)
        try:
            return await cursor.fetchone()
        finally:
            await cursor.close()

    async def fetch_all(self, sql: str, parameters=None) -> list[aiosqlite.Row]:
        cursor = await self.execute(sql, parameters)
        try:
            return list(await cursor.fetchall())
        finally:
            await cursor.close()

    @asynccontextmanager
    async def transaction(self):
        """
        Run the enclosed statements as one transaction.

        Usage:
            async with db.transaction():
                await db.execute("UPDATE todos SET ...")

        Commits on normal exit and rolls back on any exception.
        """
        current_task = asyncio.current_task()
        if self._transaction_owner is current_task:
            raise RuntimeError("Nested transaction() is not allowed.")

        async with self._lock:
            connection = self.connection
            self._transaction_owner = current_task
            try:
                await connection.execute("BEGIN")
                try:
                    yield self
                except BaseException:
                    await connection.rollback()
                    raise
                else:
                    await connection.commit()
            finally:
                self._transaction_owner = None
