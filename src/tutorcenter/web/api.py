"""FastAPI application factory.

Main entry point for the tutoring center Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tutorcenter import __version__
from tutorcenter.config.app_config import AppConfig, load_app_config
from tutorcenter.db.database import init_db, list_table_names, reset_db
from tutorcenter.web.auth import AuthMiddleware, TokenVerifier
from tutorcenter.web.errors import register_error_handlers
from tutorcenter.web.routes import (
    auth_router,
    debug_router,
    health_router,
    pages_router,
    reports_router,
    sessions_router,
    settings_router,
    students_router,
    tutors_router,
    users_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    config: AppConfig = app.state.config

    # Startup
    init_db(config.database.url, echo=config.database.echo)
    logger.info(
        "api_startup",
        tables=list_table_names(),
        frontend_url=config.server.frontend_url,
        auth_enabled=config.auth.enabled,
        auth_required=config.auth.required,
    )
    yield
    # Shutdown
    reset_db()


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Explicit configuration; loaded from file/env when omitted

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()

    app = FastAPI(
        title="Tutoring Center API",
        description="Administrative API for students, tutors, sessions, reports and settings",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.config = config

    register_error_handlers(app)

    # Last added runs first: CORS wraps auth
    app.add_middleware(AuthMiddleware, verifier=TokenVerifier(config.auth))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.server.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(students_router)
    app.include_router(tutors_router)
    app.include_router(sessions_router)
    app.include_router(reports_router)
    app.include_router(settings_router)
    app.include_router(pages_router)
    app.include_router(debug_router)

    return app


# Default app instance for uvicorn
app = create_app()
