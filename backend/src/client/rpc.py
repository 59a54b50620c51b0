"""
Todo API client - calls the remote procedures over HTTP

Each call opens a request on a shared httpx.AsyncClient; the caller owns
the client lifetime (use as an async context manager).
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from ..db.schema import TaskRecord
from ..services.tasks import DeleteResult

logger = logging.getLogger(__name__)


class TodoApiError(Exception):
    """Procedure rejected by the server (4xx/5xx)."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_validation_error(self) -> bool:
        return self.status_code in (400, 422)


class TodoApiConnectionError(Exception):
    """Server could not be reached."""

    pass


class TodoApiClient:
    """Async client for the /api/rpc procedures"""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Server root (e.g. http://127.0.0.1:8000)
            timeout: Request timeout in seconds
            transport: Optional transport override (tests use httpx.ASGITransport)
        """
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=f"{self.base_url}/api/rpc",
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TodoApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def _call(self, method: str, procedure: str, payload: Optional[dict] = None) -> Any:
        try:
            response = await self._http.request(method, f"/{procedure}", json=payload)
        except httpx.TransportError as e:
            raise TodoApiConnectionError(f"{procedure}: {e}") from e

        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise TodoApiError(response.status_code, str(detail))

        return response.json()

    async def get_todos(self) -> List[TaskRecord]:
        data = await self._call("GET", "getTodos")
        return [TaskRecord.model_validate(item) for item in data]

    async def create_todo(self, description: str) -> TaskRecord:
        data = await self._call("POST", "createTodo", {"description": description})
        return TaskRecord.model_validate(data)

    async def update_todo_completion(self, task_id: int, completed: bool) -> TaskRecord:
        data = await self._call(
            "POST",
            "updateTodoCompletion",
            {"id": task_id, "completed": completed},
        )
        return TaskRecord.model_validate(data)

    async def delete_todo(self, task_id: int) -> DeleteResult:
        data = await self._call("POST", "deleteTodo", {"id": task_id})
        return DeleteResult.model_validate(data)
