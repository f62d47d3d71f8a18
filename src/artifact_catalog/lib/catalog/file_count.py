"""File count service client.

The service reports how many files a published artifact version contains.
"""

from typing import Protocol

import httpx
from loguru import logger

from artifact_catalog.lib.catalog.errors import FileCountError


class FileCountSource(Protocol):
    """Anything able to report the file count of one artifact version."""

    async def get_file_count(self, group_id: str, artifact_id: str, version: str) -> int: ...


class HttpFileCountClient:
    """File count client over ``GET {base_url}/numfiles/{group}/{artifact}/{version}``.

    Args:
        client: Shared async HTTP client.
        base_url: File count service base URL.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def get_file_count(self, group_id: str, artifact_id: str, version: str) -> int:
        """Fetch the number of files in one artifact version.

        Raises:
            FileCountError: On transport errors, non-200 responses or a non-integer body.
        """
        url = f"{self._base_url}/numfiles/{group_id}/{artifact_id}/{version}"
        try:
            logger.debug("Fetching file count from {}", url)
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            msg = f"HTTP error fetching file count from {url}: {exc}"
            raise FileCountError(msg) from exc

        if response.status_code != httpx.codes.OK:
            msg = f"HTTP {response.status_code} fetching file count from {url}"
            raise FileCountError(msg, status_code=response.status_code)

        try:
            return int(response.text.strip())
        except ValueError as exc:
            msg = f"Invalid file count from {url}: {response.text[:100]!r}"
            raise FileCountError(msg) from exc
