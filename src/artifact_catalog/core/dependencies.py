"""FastAPI dependency injection for application-scoped services.

Services are created once in the application lifespan and stored on
``app.state``; tests override these dependencies directly.
"""

from fastapi import HTTPException, Request, status

from artifact_catalog.lib.stats.client import StatsClient
from artifact_catalog.services.catalog_service import CatalogService


def get_catalog_service(request: Request) -> CatalogService:
    """Return the application's catalog service."""
    return request.app.state.catalog_service


def get_stats_client(request: Request) -> StatsClient:
    """Return the statistics client.

    Raises:
        HTTPException: 503 when statistics credentials are not configured.
    """
    client: StatsClient | None = getattr(request.app.state, "stats_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Download statistics are not configured",
        )
    return client
