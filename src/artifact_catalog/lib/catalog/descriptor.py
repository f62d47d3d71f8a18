"""Build descriptor (POM) fetching and name/URL resolution.

Descriptors are immutable once published, so fetched documents are cached
forever. Name and source URL resolution degrades to the artifact id and a
guessed source URL whenever the descriptor is missing, unparsable, or only
carries unresolved ``${...}`` property placeholders.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass

import httpx
from loguru import logger

from artifact_catalog.lib.cache.base import FOREVER, CacheGateway
from artifact_catalog.lib.catalog.errors import (
    DescriptorError,
    DescriptorNotFoundError,
    DescriptorUnavailableError,
)

DESCRIPTOR_EXTENSION = "pom"
PLACEHOLDER_TOKEN = "${"


@dataclass(frozen=True)
class Descriptor:
    """Fields of a build descriptor used for catalog metadata."""

    artifact_id: str
    name: str
    scm_url: str
    parent_artifact_id: str


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child_text(element: ET.Element | None, *path: str) -> str:
    """Return the stripped text at a path of direct children, ignoring XML namespaces."""
    for name in path:
        if element is None:
            return ""
        element = next((child for child in element if _local_name(child.tag) == name), None)
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def parse_descriptor(text: str) -> Descriptor:
    """Parse a descriptor document.

    Args:
        text: Raw XML text.

    Returns:
        The parsed Descriptor.

    Raises:
        DescriptorUnavailableError: If the text is not well-formed XML.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        msg = f"Invalid descriptor XML: {exc}"
        raise DescriptorUnavailableError(msg) from exc

    return Descriptor(
        artifact_id=_child_text(root, "artifactId"),
        name=_child_text(root, "name"),
        scm_url=_child_text(root, "scm", "url"),
        parent_artifact_id=_child_text(root, "parent", "artifactId"),
    )


def descriptor_url(repo_base_url: str, group_id: str, artifact_id: str, version: str) -> str:
    """Build the well-known repository path of a descriptor."""
    group_path = group_id.replace(".", "/")
    return (
        f"{repo_base_url.rstrip('/')}/{group_path}/{artifact_id}/{version}/"
        f"{artifact_id}-{version}.{DESCRIPTOR_EXTENSION}"
    )


def descriptor_cache_key(group_id: str, artifact_id: str, version: str) -> str:
    return f"pom-{group_id}-{artifact_id}-{version}"


class DescriptorResolver:
    """Resolve display names and source URLs from cached build descriptors.

    Args:
        client: Shared async HTTP client.
        cache: Durable cache for raw descriptor documents.
        repo_base_url: Repository base URL serving descriptors.
        source_url_base: Prefix of guessed source URLs.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: CacheGateway,
        repo_base_url: str,
        source_url_base: str,
    ) -> None:
        self._client = client
        self._cache = cache
        self._repo_base_url = repo_base_url
        self._source_url_base = source_url_base.rstrip("/")

    def guess_url(self, artifact_id: str) -> str:
        return f"{self._source_url_base}/{artifact_id}"

    async def fetch_descriptor_text(self, group_id: str, artifact_id: str, version: str) -> str:
        """Fetch a raw descriptor document from the repository.

        Raises:
            DescriptorNotFoundError: On HTTP 404.
            DescriptorUnavailableError: On transport errors or any other non-200 status.
        """
        url = descriptor_url(self._repo_base_url, group_id, artifact_id, version)
        try:
            logger.debug("Fetching descriptor {}", url)
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            msg = f"HTTP error fetching descriptor {url}: {exc}"
            raise DescriptorUnavailableError(msg) from exc

        if response.status_code == httpx.codes.OK:
            return response.text
        if response.status_code == httpx.codes.NOT_FOUND:
            raise DescriptorNotFoundError(url)
        raise DescriptorUnavailableError(response.text, status_code=response.status_code)

    async def fetch_descriptor(self, group_id: str, artifact_id: str, version: str) -> Descriptor:
        """Fetch and parse a descriptor, bypassing the cache."""
        return parse_descriptor(await self.fetch_descriptor_text(group_id, artifact_id, version))

    async def get_descriptor(self, group_id: str, artifact_id: str, version: str) -> Descriptor:
        """Return a descriptor, read through the durable cache.

        Only documents that parse are cached. A failed cache write is logged
        and the fetched document is still returned.
        """
        cache_key = descriptor_cache_key(group_id, artifact_id, version)
        text = await self._cache.get(cache_key)
        if text is not None:
            return parse_descriptor(text)

        text = await self.fetch_descriptor_text(group_id, artifact_id, version)
        descriptor = parse_descriptor(text)
        try:
            await self._cache.set(cache_key, text, FOREVER)
        except Exception:
            logger.opt(exception=True).warning("Failed to cache descriptor {}", cache_key)
        return descriptor

    async def _resolve_url(self, group_id: str, version: str, descriptor: Descriptor, artifact_id: str) -> str:
        raw_url = descriptor.scm_url
        if PLACEHOLDER_TOKEN in raw_url:
            # Properties are not interpolated
            return self.guess_url(artifact_id)
        if raw_url:
            return raw_url

        # Single hop to the parent descriptor; templated URLs never reach here.
        if not descriptor.parent_artifact_id:
            msg = f"No source URL and no parent declared for {group_id}:{artifact_id}:{version}"
            raise DescriptorNotFoundError(msg)
        parent = await self.get_descriptor(group_id, descriptor.parent_artifact_id, version)
        if not parent.scm_url or PLACEHOLDER_TOKEN in parent.scm_url:
            return self.guess_url(artifact_id)
        return parent.scm_url

    async def resolve_name_and_url(self, group_id: str, artifact_id: str, version: str) -> tuple[str, str]:
        """Resolve the display name and source URL of one artifact version.

        Never raises for descriptor problems: any failure yields the artifact
        id and a guessed source URL.

        Args:
            group_id: Artifact group id.
            artifact_id: Artifact id.
            version: Version whose descriptor is consulted (normally the newest).

        Returns:
            ``(name, url)`` tuple.
        """
        try:
            descriptor = await self.get_descriptor(group_id, artifact_id, version)
            resolved_id = descriptor.artifact_id or artifact_id
            raw_name = descriptor.name
            name = resolved_id if not raw_name or PLACEHOLDER_TOKEN in raw_name else raw_name
            url = await self._resolve_url(group_id, version, descriptor, resolved_id)
        except DescriptorError as exc:
            logger.warning("Descriptor lookup failed for {}:{}:{}: {}", group_id, artifact_id, version, exc)
            return artifact_id, self.guess_url(artifact_id)
        except Exception:
            logger.exception("Unexpected error resolving descriptor for {}:{}:{}", group_id, artifact_id, version)
            return artifact_id, self.guess_url(artifact_id)
        return name, url
