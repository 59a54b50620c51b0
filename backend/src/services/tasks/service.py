"""
Task Service - task lifecycle rules on top of an injected TaskStore.

Operations:
- create_task: validate description, insert
- list_tasks: full snapshot in creation order
- update_completion: set completed flag, NotFoundError when id is absent
- delete_task: physical delete, absence reported as success=False
"""

from __future__ import annotations

import logging
from typing import List

from pydantic import BaseModel

from ...common.errors import NotFoundError, ValidationError
from ...db.base import TaskStore
from ...db.schema import TaskRecord

logger = logging.getLogger(__name__)


class DeleteResult(BaseModel):
    """Outcome of a delete: False when the id never existed or was already removed."""

    success: bool


class TaskService:
    """
    Thin orchestration over a TaskStore.

    Holds no cached copies between calls; every call goes to the store.
    StoreError raised by the store propagates unchanged.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    async def create_task(self, description: str) -> TaskRecord:
        """
        Create a task.

        Raises:
            ValidationError: description is empty or whitespace-only
        """
        if not isinstance(description, str) or not description.strip():
            raise ValidationError("description must not be empty")

        task = await self.store.insert(description)
        logger.info("Created todo id=%s", task.id)
        return task

    async def list_tasks(self) -> List[TaskRecord]:
        return list(await self.store.list_all())

    async def update_completion(self, task_id: int, completed: bool) -> TaskRecord:
        """
        Set the completed flag of an existing task.

        Raises:
            NotFoundError: no task with this id
        """
        task = await self.store.set_completed(task_id, completed)
        if task is None:
            logger.info("Todo id=%s not found for completion update", task_id)
            raise NotFoundError(task_id)

        logger.info("Todo id=%s completed=%s", task_id, task.completed)
        return task

    async def delete_task(self, task_id: int) -> DeleteResult:
        removed = await self.store.delete(task_id)
        if removed:
            logger.info("Deleted todo id=%s", task_id)
        else:
            logger.debug("Delete of todo id=%s removed nothing", task_id)
        return DeleteResult(success=removed)
