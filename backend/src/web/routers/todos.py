"""
Todos Router - remote procedures for the task list

Procedures:
- GET  /api/rpc/getTodos
- POST /api/rpc/createTodo
- POST /api/rpc/updateTodoCompletion
- POST /api/rpc/deleteTodo
"""
from typing import List

from fastapi import APIRouter, Depends, Request

from ...services.tasks import TaskService
from ..dependencies import get_task_service
from ..limiter import current_rate_limit, limiter
from ..schemas import (
    CreateTodoInput,
    DeleteTodoInput,
    DeleteTodoResult,
    Todo,
    UpdateTodoCompletionInput,
)

router = APIRouter(prefix="/api/rpc", tags=["todos"])


@router.get("/getTodos", response_model=List[Todo])
@limiter.limit(current_rate_limit)
async def get_todos(request: Request, service: TaskService = Depends(get_task_service)):
    """All present todos, oldest first."""
    return await service.list_tasks()


@router.post("/createTodo", response_model=Todo)
@limiter.limit(current_rate_limit)
async def create_todo(
    request: Request,
    payload: CreateTodoInput,
    service: TaskService = Depends(get_task_service),
):
    return await service.create_task(payload.description)


@router.post("/updateTodoCompletion", response_model=Todo)
@limiter.limit(current_rate_limit)
async def update_todo_completion(
    request: Request,
    payload: UpdateTodoCompletionInput,
    service: TaskService = Depends(get_task_service),
):
    """Set completed on an existing todo; 404 if the id is unknown."""
    return await service.update_completion(payload.id, payload.completed)


@router.post("/deleteTodo", response_model=DeleteTodoResult)
@limiter.limit(current_rate_limit)
async def delete_todo(
    request: Request,
    payload: DeleteTodoInput,
    service: TaskService = Depends(get_task_service),
):
    """Delete a todo; success is False when nothing was removed."""
    return await service.delete_task(payload.id)
