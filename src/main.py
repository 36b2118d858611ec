"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from infrastructure.database.session import create_schema, engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the schema on startup and release the engine on shutdown."""
    await create_schema(engine)
    logger.info("startup_complete", environment=settings.app_env)
    yield
    await engine.dispose()


def create_app(with_lifespan: bool = True) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan if with_lifespan else None,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Organazr task backend\n\n"
            "Tasks with nested subtasks, lists, priorities, due dates and an "
            "Eisenhower matrix.\n\n"
            "### Features\n"
            "- **Task tree**: subtasks nest without limit; completion and deletion cascade\n"
            "- **Lists**: group root tasks; deleting a list deletes its tasks\n"
            "- **Screens**: `/views/*` return indented rows for home, calendar, "
            "matrix and not-done screens"
        ),
        version=settings.app_version,
        debug=settings.debug,
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "tasks",
                "description": "Task management operations",
            },
            {
                "name": "lists",
                "description": "Task list operations",
            },
            {
                "name": "views",
                "description": "Filtered, flattened rows per screen",
            },
        ],
    )

    # Tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
