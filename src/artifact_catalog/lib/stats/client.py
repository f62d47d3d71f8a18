"""Download statistics client.

Fetches monthly per-artifact download counts for a package type's group
from the repository's statistics service.
"""

import asyncio
from dataclasses import dataclass
from datetime import date
from itertools import groupby, islice

import httpx
from loguru import logger

from artifact_catalog.lib.catalog.types import PackageType


class StatsUnavailableError(Exception):
    """Raised when statistics cannot be fetched or are empty."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class DownloadCount:
    """Downloads of one artifact within the requested period."""

    group_id: str
    artifact_id: str
    count: int


class StatsClient:
    """Authenticated statistics service client.

    Args:
        client: Shared async HTTP client.
        url: Statistics endpoint URL.
        username: Basic auth username.
        password: Basic auth password.
        project: Project id the statistics are scoped to.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        username: str,
        password: str,
        project: str,
    ) -> None:
        self._client = client
        self._url = url
        self._auth = httpx.BasicAuth(username, password)
        self._project = project

    async def get_stats(self, package_type: PackageType, month: date) -> list[DownloadCount]:
        """Fetch download counts for one package type, most downloaded first.

        Args:
            package_type: Package type whose group is queried.
            month: Any date within the first month of the period.

        Returns:
            Download counts sorted by count, descending.

        Raises:
            StatsUnavailableError: On transport errors, non-200 responses or empty stats.
        """
        params = {
            "p": self._project,
            "g": package_type.group_id_query,
            "t": "raw",
            "from": month.strftime("%Y%m"),
            "nom": "1",
        }
        try:
            response = await self._client.get(
                self._url,
                params=params,
                auth=self._auth,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            msg = f"HTTP error fetching stats for {package_type}: {exc}"
            logger.error(msg)
            raise StatsUnavailableError(msg) from exc

        if response.status_code != httpx.codes.OK:
            raise StatsUnavailableError(response.text, status_code=response.status_code)

        try:
            data = response.json()["data"]
            group_id = data["groupId"]
            if data["total"] <= 0:
                msg = "Stats were empty"
                raise StatsUnavailableError(msg)
            counts = [DownloadCount(group_id, item["name"], int(item["count"])) for item in data["slices"]]
        except (ValueError, KeyError, TypeError) as exc:
            msg = f"Invalid stats response for {package_type}: {exc}"
            raise StatsUnavailableError(msg) from exc

        return sorted(counts, key=lambda c: c.count, reverse=True)

    async def get_all_stats(self, month: date) -> list[DownloadCount]:
        """Download counts of every package type, concatenated in type order."""
        per_type = await asyncio.gather(*(self.get_stats(package_type, month) for package_type in PackageType))
        return [count for counts in per_type for count in counts]

    async def most_downloaded(
        self,
        month: date,
        num: int,
        package_type: PackageType | None = None,
    ) -> list[DownloadCount]:
        """Top ``num`` artifacts of one type, or the top ``num`` of each type when no type is given."""
        if package_type is not None:
            return (await self.get_stats(package_type, month))[:num]
        all_counts = await self.get_all_stats(month)
        # get_all_stats keeps each group contiguous and sorted
        return [count for _, counts in groupby(all_counts, key=lambda c: c.group_id) for count in islice(counts, num)]
