"""
Request dependencies.
"""

from fastapi import HTTPException, Request, status

from ..services.tasks import TaskService


def get_task_service(request: Request) -> TaskService:
    """Return the TaskService built by the application lifespan."""
    service = getattr(request.app.state, "task_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return service
