"""
Main Application - FastAPI app factory and lifespan management
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from ..common.errors import NotFoundError, StoreError, ValidationError
from ..db.connection import DatabaseManager
from ..db.crud import TaskRepository
from ..db.memory import InMemoryTaskStore
from ..services.tasks import TaskService
from .config import AppConfig, config as default_config
from .limiter import configure_limiter
from .routers import health, todos


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    app_config: AppConfig = app.state.config
    logger.info("Starting %s...", app_config.app_name)

    db: Optional[DatabaseManager] = None
    db_settings = app_config.database
    if db_settings.is_memory:
        logger.warning("Using in-memory store; todos are lost on shutdown")
        store = InMemoryTaskStore()
    else:
        db_path = db_settings.sqlite_path
        logger.info("Database path: %s", db_path)
        db = DatabaseManager(db_path)
        try:
            await db.init()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.exception("Failed to initialize database")
            raise RuntimeError(f"Database initialization failed: {e}") from e
        store = TaskRepository(db)

    app.state.db = db
    app.state.task_service = TaskService(store)

    yield

    logger.info("Shutting down...")
    app.state.task_service = None
    if db is not None:
        try:
            await db.close()
            logger.info("Database connection closed")
        except Exception:
            logger.exception("Failed to close database cleanly")


def create_app(app_config: Optional[AppConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    app_config = app_config or default_config

    app = FastAPI(
        title=app_config.app_name,
        version=app_config.version,
        lifespan=lifespan,
    )
    app.state.config = app_config

    # Rate limiting
    app.state.limiter = configure_limiter(app_config)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Handle rate limit exceeded with JSON response."""
        logger.warning("Rate limit exceeded on %s: %s", request.url.path, exc.detail)
        return JSONResponse(
            status_code=429,
            content={"detail": "Rate limit exceeded", "retry_after": exc.detail},
        )

    # Global exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request shape errors (missing/mistyped fields) with clean response."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            errors.append({"field": loc, "message": error["msg"]})
        logger.warning("Validation error: %s", errors)
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation error", "errors": errors},
        )

    @app.exception_handler(ValidationError)
    async def task_validation_handler(request: Request, exc: ValidationError):
        logger.warning("Rejected input: %s", exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        # Already logged with traceback where it was raised
        logger.error("Store error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": "Store unavailable"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with logging."""
        logger.exception("Unexpected error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    app.include_router(health.router)
    app.include_router(todos.router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_config.host, port=default_config.port)
