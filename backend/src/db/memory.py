"""
In-memory TaskStore - non-durable store for tests and local demos.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .schema import TaskRecord, utc_now


class InMemoryTaskStore:
    """
    Dict-backed TaskStore.

    Ids come from a counter that only moves forward, so deleted ids are
    never handed out again. Records are copied on the way in and out.
    """

    def __init__(self) -> None:
        self._rows: Dict[int, TaskRecord] = {}
        self._last_id = 0

    async def insert(self, description: str) -> TaskRecord:
        self._last_id += 1
        record = TaskRecord(
            id=self._last_id,
            description=description,
            completed=False,
            created_at=utc_now(),
        )
        self._rows[record.id] = record
        return record.model_copy()

    async def list_all(self) -> List[TaskRecord]:
        return [self._rows[task_id].model_copy() for task_id in sorted(self._rows)]

    async def set_completed(self, task_id: int, completed: bool) -> Optional[TaskRecord]:
        existing = self._rows.get(task_id)
        if existing is None:
            return None
        updated = existing.model_copy(update={"completed": completed})
        self._rows[task_id] = updated
        return updated.model_copy()

    async def delete(self, task_id: int) -> bool:
        return self._rows.pop(task_id, None) is not None
