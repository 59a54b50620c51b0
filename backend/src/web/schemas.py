"""
Web API Schemas - Pydantic models for remote procedure request/response
"""
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from ..db.schema import TaskRecord
from ..services.tasks import DeleteResult


class _ProcedureInput(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CreateTodoInput(_ProcedureInput):
    """Input of createTodo."""
    description: StrictStr = Field(..., min_length=1, description="Task text")


class UpdateTodoCompletionInput(_ProcedureInput):
    """Input of updateTodoCompletion."""
    id: StrictInt
    completed: StrictBool


class DeleteTodoInput(_ProcedureInput):
    """Input of deleteTodo."""
    id: StrictInt


# Response shapes
Todo = TaskRecord
DeleteTodoResult = DeleteResult

__all__ = [
    "CreateTodoInput",
    "UpdateTodoCompletionInput",
    "DeleteTodoInput",
    "Todo",
    "DeleteTodoResult",
]
