"""Registration API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Every /api/users response and every handled error uses the {success, message, data}
      envelope; /api/health probes return plain status objects
    - Settings read once; database pool created on startup and disposed on shutdown
    - Swagger UI (/docs) and OpenAPI JSON only when settings.enable_docs is true
    - Served by uvicorn: `registration-api` script, `python -m registration_api.main`,
      or `uvicorn registration_api.main:app`
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from registration_api.api.error_handlers import register_error_handlers
from registration_api.api.routes import health, users
from registration_api.config import get_settings
from registration_api.infrastructure import database
from registration_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Registration API started")
    yield
    await manager.dispose()
    logger.info("Registration API shutting down")


def create_application() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        description="REST API for user registration",
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.enable_docs else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app


app = create_application()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "registration_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
