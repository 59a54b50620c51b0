"""
Task list view - display-only mirror of the server's todo list.

The server is the source of truth. Every handler waits for the procedure
to resolve and patches the local list from the returned payload; on
failure the error is logged and the list is left as it was.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..db.schema import TaskRecord
from .rpc import TodoApiClient, TodoApiConnectionError, TodoApiError

logger = logging.getLogger(__name__)

_CALL_ERRORS = (TodoApiError, TodoApiConnectionError)


class TaskListView:
    """Local copy of the todo list plus the handlers that keep it in sync."""

    def __init__(self, client: TodoApiClient):
        self.client = client
        self.todos: List[TaskRecord] = []
        self.is_loading = False
        self.last_error: Optional[str] = None

    # ---- stats ----

    @property
    def total(self) -> int:
        return len(self.todos)

    @property
    def completed_count(self) -> int:
        return sum(1 for todo in self.todos if todo.completed)

    @property
    def remaining(self) -> int:
        return self.total - self.completed_count

    def find(self, task_id: int) -> Optional[TaskRecord]:
        for todo in self.todos:
            if todo.id == task_id:
                return todo
        return None

    # ---- handlers ----

    async def load(self) -> bool:
        """Replace the local list with the server's list."""
        try:
            result = await self.client.get_todos()
        except _CALL_ERRORS as e:
            self._fail("Failed to load todos", e)
            return False
        self.todos = list(result)
        self.last_error = None
        return True

    async def create(self, description: str) -> Optional[TaskRecord]:
        """Create a todo from user input; blank input is ignored."""
        text = description.strip()
        if not text:
            return None

        self.is_loading = True
        try:
            new_todo = await self.client.create_todo(text)
        except _CALL_ERRORS as e:
            self._fail("Failed to create todo", e)
            return None
        finally:
            self.is_loading = False

        self.todos = [*self.todos, new_todo]
        self.last_error = None
        return new_todo

    async def toggle(self, todo: TaskRecord) -> Optional[TaskRecord]:
        """Flip completion and replace the matching local record with the server's."""
        try:
            updated = await self.client.update_todo_completion(todo.id, not todo.completed)
        except _CALL_ERRORS as e:
            self._fail(f"Failed to update todo {todo.id}", e)
            return None

        self.todos = [updated if t.id == todo.id else t for t in self.todos]
        self.last_error = None
        return updated

    async def delete(self, task_id: int) -> bool:
        """
        Delete a todo and drop it locally.

        success=False means the server has no such row, so the local copy
        is dropped as well; the return value reports what the server said.
        """
        try:
            result = await self.client.delete_todo(task_id)
        except _CALL_ERRORS as e:
            self._fail(f"Failed to delete todo {task_id}", e)
            return False

        if not result.success:
            logger.info("Todo %s was already gone on the server", task_id)
        self.todos = [t for t in self.todos if t.id != task_id]
        self.last_error = None
        return result.success

    def _fail(self, message: str, error: Exception) -> None:
        logger.error("%s: %s", message, error)
        self.last_error = f"{message}: {error}"
