"""
Services module - Business logic layer.

This module provides:
- tasks: Task lifecycle operations (create, list, complete, delete)
"""

from .tasks import DeleteResult, TaskService

__all__ = [
    "DeleteResult",
    "TaskService",
]
