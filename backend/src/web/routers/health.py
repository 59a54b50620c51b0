"""
Health Router - API endpoints for health checks
"""
from typing import Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/api/health", tags=["health"])


async def _get_store_status(request: Request) -> Dict[str, object]:
    """Report which store backs the service and whether it answers"""
    db = getattr(request.app.state, "db", None)
    if db is None:
        service = getattr(request.app.state, "task_service", None)
        if service is None:
            return {"backend": None, "available": False, "reason": "Service not initialized"}
        return {"backend": type(service.store).__name__, "available": True}

    available = await db.ping()
    status: Dict[str, object] = {
        "backend": "sqlite",
        "available": available,
        "path": str(db.db_path),
    }
    if not available:
        status["reason"] = "Database did not answer"
    return status


@router.get("/live")
async def health_live():
    """Liveness probe: server process is up"""
    return {"status": "live"}


@router.get("/config")
async def health_config(request: Request):
    """App name and version for clients"""
    app_config = request.app.state.config
    return {"app_name": app_config.app_name, "version": app_config.version}


@router.get("/ready")
async def health_ready(request: Request):
    """Readiness probe: store can accept work"""
    store_info = await _get_store_status(request)
    ready = bool(store_info.get("available"))
    status_code = 200 if ready else 503
    return JSONResponse(
        status_code=status_code,
        content={"status": "ready" if ready else "not_ready", "store": store_info},
    )
