"""Package search service client.

Queries the search service for every published (group, artifact, version)
row of a package type. Any unusable response fails the whole build with
``UpstreamUnavailableError``.
"""

from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from artifact_catalog.lib.catalog.errors import UpstreamUnavailableError
from artifact_catalog.lib.catalog.types import PackageType, SearchHit


class _SearchDoc(BaseModel):
    g: str
    a: str
    v: str


class _SearchResponseBody(BaseModel):
    docs: list[_SearchDoc]


class _SearchResponse(BaseModel):
    response: _SearchResponseBody


def parse_search_response(raw_json: Any) -> list[SearchHit]:
    """Validate a decoded search response and extract its rows.

    Args:
        raw_json: Decoded JSON document with ``response.docs[]`` of ``{g, a, v}``.

    Returns:
        Search hits in response order.

    Raises:
        ValidationError: If the document does not have the expected structure.
    """
    parsed = _SearchResponse.model_validate(raw_json)
    return [SearchHit(doc.g, doc.a, doc.v) for doc in parsed.response.docs]


class SearchClient:
    """Search service client.

    Args:
        client: Shared async HTTP client.
        url_template: URL with a ``{query}`` placeholder for the group id query.
    """

    def __init__(self, client: httpx.AsyncClient, url_template: str) -> None:
        self._client = client
        self._url_template = url_template

    def search_url(self, package_type: PackageType) -> str:
        return self._url_template.format(query=package_type.group_id_query)

    async def search(self, package_type: PackageType) -> list[SearchHit]:
        """Fetch every published version of a package type.

        Raises:
            UpstreamUnavailableError: On transport errors or a body that is not
                a valid search response.
        """
        url = self.search_url(package_type)
        try:
            logger.debug("Searching {}", url)
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            msg = f"HTTP error querying search service {url}: {exc}"
            logger.error(msg)
            raise UpstreamUnavailableError(msg) from exc

        try:
            return parse_search_response(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Unusable search response (HTTP {}) from {}", response.status_code, url)
            raise UpstreamUnavailableError(response.text, status_code=response.status_code) from exc
