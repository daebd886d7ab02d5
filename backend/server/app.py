"""
FastAPI app factory.

Responsibilities:
- Create and configure FastAPI app
- Set up middleware
- Initialize shared resources (service, notice client, fetch executor)
- Register routes
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import AppConfig
from observability import logger
from service.box_service import LocalBoxService
from service.notice_client import StaticNoticeClient

from server.routes import register_routes


def create_app(config: AppConfig | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    App factory pattern:
    - Testing with different configurations
    - Environment-specific setup
    - ASGI server compatibility
    """
    if config is None:
        config = AppConfig.load_from_env()

    logger.configure(enabled=config.enable_json_logs)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.service.shutdown()
        app.state.notice_executor.shutdown(wait=False)

    app = FastAPI(title="Connection Dashboard API", lifespan=lifespan)

    app.state.config = config

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # tighten later
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Shared ONCE per process; every dashboard observes the same service
    app.state.service = LocalBoxService(
        start_delay_ms=config.service_start_delay_ms,
        stop_delay_ms=config.service_stop_delay_ms,
    )
    app.state.notice_client = StaticNoticeClient(config.deprecated_notices)
    app.state.notice_executor = ThreadPoolExecutor(
        max_workers=config.notice_fetch_workers,
        thread_name_prefix="notice-fetch",
    )

    # Routes
    register_routes(app)

    return app
