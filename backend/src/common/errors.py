"""
Task error taxonomy shared by the store, service and web layers.
"""

from __future__ import annotations


class TaskError(Exception):
    """Base class for task tracker errors."""

    pass


class ValidationError(TaskError):
    """Malformed or empty input, detected before the store is touched."""

    pass


class NotFoundError(TaskError):
    """Referenced task id is absent."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"todo with id {task_id} not found")


class StoreError(TaskError):
    """Underlying persistence failure (I/O, locking, connectivity)."""

    pass
