"""
Client module - remote procedure client and task list view.
"""

from .rpc import TodoApiClient, TodoApiConnectionError, TodoApiError
from .view import TaskListView

__all__ = [
    "TodoApiClient",
    "TodoApiConnectionError",
    "TodoApiError",
    "TaskListView",
]
