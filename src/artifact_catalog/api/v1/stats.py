"""Download statistics endpoints."""

from datetime import date, timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from artifact_catalog.core.dependencies import get_stats_client
from artifact_catalog.lib.catalog.types import PackageType
from artifact_catalog.lib.stats.client import StatsClient
from artifact_catalog.schemas.stats import DownloadCountResponse, MostDownloadedResponse

stats_router = APIRouter(prefix="/stats", tags=["stats"])


def previous_month(today: date) -> date:
    """First day of the month before ``today``."""
    return (today.replace(day=1) - timedelta(days=1)).replace(day=1)


@stats_router.get("/most-downloaded", response_model=MostDownloadedResponse)
async def get_most_downloaded(
    client: Annotated[StatsClient, Depends(get_stats_client)],
    package_type: Annotated[PackageType | None, Query(description="Limit to one package type")] = None,
    num: Annotated[int, Query(ge=1, le=1000, description="Entries per package type")] = 20,
    month: Annotated[str | None, Query(pattern=r"^\d{4}-\d{2}$", description="Month (YYYY-MM)")] = None,
) -> MostDownloadedResponse:
    """Most downloaded artifacts for a month (defaults to the previous month)."""
    period = date.fromisoformat(f"{month}-01") if month else previous_month(date.today())
    counts = await client.most_downloaded(period, num, package_type)
    return MostDownloadedResponse(
        month=period.strftime("%Y-%m"),
        items=[DownloadCountResponse(group_id=c.group_id, artifact_id=c.artifact_id, count=c.count) for c in counts],
    )
