"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, discuss_board.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discuss_board.boundary.db.create_tables import create_all_tables
from discuss_board.configs import get_settings
from discuss_board.observability import configure_logging
from discuss_board.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    admin_router,
    appeals_router,
    attachments_router,
    auth_router,
    comments_router,
    forbidden_words_router,
    health_router,
    members_router,
    moderation_actions_router,
    moderators_router,
    notifications_router,
    polls_router,
    posts_router,
    reactions_router,
    reports_router,
    tags_router,
)

ROUTERS = (
    health_router,
    auth_router,
    members_router,
    moderators_router,
    posts_router,
    tags_router,
    comments_router,
    reactions_router,
    polls_router,
    attachments_router,
    reports_router,
    moderation_actions_router,
    appeals_router,
    notifications_router,
    forbidden_words_router,
    admin_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and, when enabled, creates missing tables.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    if settings.database.create_tables_on_startup:
        logger.info("Creating database tables...")
        await create_all_tables()
    logger.info("Discussion board API ready", extra={"environment": settings.environment})

    yield

    # Shutdown
    logger.info("Discussion board API stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="Discussion Board API",
        description="Moderated discussion forum with posts, comments, polls and appeals",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.board.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers under the versioned prefix
    for router in ROUTERS:
        app.include_router(router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "discuss_board.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
