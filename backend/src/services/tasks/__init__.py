"""
Tasks module - Task lifecycle management.
"""

from .service import DeleteResult, TaskService

__all__ = ["DeleteResult", "TaskService"]
