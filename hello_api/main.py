from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hello_api.api.routes.health import router as health_router
from hello_api.api.routes.root import router as root_router
from hello_api.core.config import Settings, settings
from hello_api.core.errors import install_exception_handlers
from hello_api.core.logging_utils import configure_logging, log_event
from hello_api.core.uptime import format_iso, process_clock
from hello_api.middleware.security import RequestIdMiddleware, SecurityHeadersMiddleware
from hello_api.middleware.trace import TraceMiddleware
from hello_api.schemas.api_contract import ErrorResponse

logger = logging.getLogger("hello_api.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    clock = process_clock()
    log_event(
        logger,
        "app_started",
        app=app.title,
        version=app.version,
        started_at=format_iso(clock.started_at),
    )
    yield
    log_event(logger, "app_stopped", app=app.title, uptime=round(clock.uptime(), 3))


def create_app(config: Settings | None = None) -> FastAPI:
    """
    Application factory.
    - Middleware order (outermost first): request id, security headers, trace, CORS.
    - Every error leaves through the unified ``{"error": {...}}`` envelope.
    """
    config = config or settings
    configure_logging(config.log_level)

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        lifespan=lifespan,
        responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
    )

    # ---- CORS ----
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TraceMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    install_exception_handlers(app)

    # ---- Routers ----
    app.include_router(root_router, tags=["app"])
    app.include_router(health_router, tags=["health"])

    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "hello_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
