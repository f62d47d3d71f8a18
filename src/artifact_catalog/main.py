"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from artifact_catalog.core.config import get_settings
from artifact_catalog.core.database import create_tables, dispose_engine, get_session_factory, init_engine
from artifact_catalog.core.logging import setup_logging
from artifact_catalog.lib.cache.base import CacheGateway
from artifact_catalog.lib.cache.database import DatabaseCache
from artifact_catalog.lib.cache.memory import InMemoryCache
from artifact_catalog.lib.catalog.errors import AlreadyInProgressError, UpstreamUnavailableError
from artifact_catalog.lib.stats.client import StatsClient, StatsUnavailableError
from artifact_catalog.services.catalog_service import catalog_refresh_loop, create_catalog_service


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: HTTP client, caches and services on startup, teardown on shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, log_json=settings.log_json)

    durable_cache: CacheGateway
    if settings.cache_database_url:
        init_engine(settings.cache_database_url, echo=False)
        await create_tables()
        durable_cache = DatabaseCache(get_session_factory())
    else:
        durable_cache = InMemoryCache()

    client = httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True)
    app.state.catalog_service = create_catalog_service(settings, client, durable_cache)
    app.state.stats_client = None
    if settings.stats_configured:
        app.state.stats_client = StatsClient(
            client,
            settings.stats_url,
            settings.oss_username,
            settings.oss_password,
            settings.oss_project,
        )

    # Start catalog warm-up background task
    refresh_task = None
    if settings.catalog_refresh_enabled:
        refresh_task = asyncio.create_task(
            catalog_refresh_loop(app.state.catalog_service, settings.catalog_refresh_interval)
        )

    yield

    if refresh_task is not None:
        refresh_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await refresh_task

    await client.aclose()
    await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Artifact Catalog",
        description="Catalog of published packages with version file counts and source metadata",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Register exception handlers
    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    @app.exception_handler(AlreadyInProgressError)
    async def already_in_progress_handler(request: Request, exc: AlreadyInProgressError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"detail": str(exc)},
            headers={"Retry-After": "30"},
        )

    @app.exception_handler(UpstreamUnavailableError)
    async def upstream_unavailable_handler(request: Request, exc: UpstreamUnavailableError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={"detail": "Package search service unavailable"},
        )

    @app.exception_handler(StatsUnavailableError)
    async def stats_unavailable_handler(request: Request, exc: StatsUnavailableError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={"detail": str(exc)},
        )

    # Register middleware and routers
    from artifact_catalog.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
