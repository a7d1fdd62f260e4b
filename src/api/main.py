"""FastAPI application entry point for the case-lifecycle engine."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from structlog import get_logger

from src import __version__
from src.api.errors import register_error_handlers
from src.api.middleware.logging_middleware import LoggingMiddleware
from src.api.routes import (
    decisions_router,
    health_router,
    notification_lists_router,
    protocols_router,
    sessions_router,
)
from src.bootstrap.database import close_database_engine
from src.bootstrap.logging import configure_logging

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("case_engine_started", version=__version__)
    yield
    await close_database_engine()
    logger.info("case_engine_stopped")


def create_app() -> FastAPI:
    """Build the application with middleware, error handlers and routers."""
    load_dotenv()
    configure_logging()

    app = FastAPI(
        title="Case Lifecycle Engine API",
        description="Appeal case lifecycle: resources, sessions, decisions and notifications",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(LoggingMiddleware)
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(protocols_router)
    app.include_router(sessions_router)
    app.include_router(decisions_router)
    app.include_router(notification_lists_router)
    return app


app = create_app()
