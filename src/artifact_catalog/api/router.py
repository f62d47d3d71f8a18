"""Root API router with /api/v1 prefix and middleware registration."""

from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from artifact_catalog.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from artifact_catalog.api.v1.catalog import catalog_router
    from artifact_catalog.api.v1.stats import stats_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(catalog_router)
    root_router.include_router(stats_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    if not settings.cors_origin_list:
        return
    kwargs: dict[str, Any] = {
        "allow_origins": settings.cors_origin_list,
        "allow_methods": ["GET"],
        "allow_headers": ["*"],
    }
    app.add_middleware(CORSMiddleware, **kwargs)
