"""Application factory and process entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from chat_admin import __version__
from chat_admin.config import get_settings
from chat_admin.db import create_engine
from chat_admin.errors import (
    NotFoundError,
    UpstreamError,
    not_found_handler,
    upstream_error_handler,
)
from chat_admin.infra.logging_config import get_logger, setup_logging
from chat_admin.routers import (
    activity_router,
    analytics_router,
    conversations_router,
    dashboard_router,
    messages_router,
    users_router,
)

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    engine = create_engine(get_settings())
    app.state.engine = engine
    try:
        yield
    finally:
        await engine.dispose()


def create_app(testing: bool = False) -> FastAPI:
    """Build the API. In testing mode no engine is created; override ``get_db``."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=None if testing else lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(UpstreamError, upstream_error_handler)

    for module in (
        dashboard_router,
        users_router,
        conversations_router,
        messages_router,
        activity_router,
        analytics_router,
    ):
        app.include_router(module.router, prefix=settings.api_prefix)

    return app


def run() -> None:
    settings = get_settings()
    app = create_app()
    logger.info("Admin API listening on %s:%s", settings.host, settings.port)
    for route in app.routes:
        if isinstance(route, APIRoute):
            logger.info("- %s %s", ",".join(sorted(route.methods)), route.path)
    uvicorn.run(app, host=settings.host, port=settings.port)


app = create_app()
