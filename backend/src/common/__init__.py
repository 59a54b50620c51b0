"""
common module - shared definitions used across layers

- errors: task error taxonomy (ValidationError, NotFoundError, StoreError)

Usage:
    from backend.src.common import NotFoundError
"""

from .errors import NotFoundError, StoreError, TaskError, ValidationError

__all__ = [
    "TaskError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
]
