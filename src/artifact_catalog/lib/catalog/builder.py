"""Catalog build pipeline for one package type.

search -> drop reserved artifacts -> group by artifact -> batched version
enrichment -> name/URL resolution from the newest version -> sort by name.
"""

import asyncio
from collections.abc import Iterable

from loguru import logger

from artifact_catalog.lib.catalog.descriptor import DescriptorResolver
from artifact_catalog.lib.catalog.scheduler import BatchScheduler
from artifact_catalog.lib.catalog.search import SearchClient
from artifact_catalog.lib.catalog.types import ArtifactKey, Catalog, Package, PackageType, SearchHit, VersionRecord


def group_versions(hits: Iterable[SearchHit], reserved_prefix: str) -> dict[ArtifactKey, list[str]]:
    """Group search hits by artifact, dropping reserved artifacts.

    Keys keep the order of first appearance.
    """
    grouped: dict[ArtifactKey, list[str]] = {}
    for hit in hits:
        if reserved_prefix and hit.artifact_id.startswith(reserved_prefix):
            continue
        grouped.setdefault(ArtifactKey(hit.group_id, hit.artifact_id), []).append(hit.version)
    return grouped


def sort_catalog(packages: Iterable[Package]) -> Catalog:
    """Sort packages case-insensitively by name."""
    return sorted(
        packages,
        key=lambda package: (package.name.lower(), package.name, package.group_id, package.artifact_id),
    )


class CatalogBuilder:
    """Builds the catalog of one package type from upstream services.

    Args:
        search: Search service client.
        scheduler: Batched version enrichment.
        resolver: Descriptor based name/URL resolution.
        reserved_prefix: Artifact id prefix of packages excluded from the catalog.
    """

    def __init__(
        self,
        search: SearchClient,
        scheduler: BatchScheduler,
        resolver: DescriptorResolver,
        reserved_prefix: str,
    ) -> None:
        self._search = search
        self._scheduler = scheduler
        self._resolver = resolver
        self._reserved_prefix = reserved_prefix

    async def _to_package(
        self,
        package_type: PackageType,
        key: ArtifactKey,
        versions: list[VersionRecord],
    ) -> Package:
        name, url = await self._resolver.resolve_name_and_url(key.group_id, key.artifact_id, versions[0].number)
        return Package(
            package_type=package_type,
            group_id=key.group_id,
            artifact_id=key.artifact_id,
            name=name,
            source_url=url,
            versions=tuple(versions),
        )

    async def build(self, package_type: PackageType) -> Catalog:
        """Build a fresh catalog for one package type.

        Raises:
            UpstreamUnavailableError: If the search service response is unusable.
        """
        logger.info("Getting {} packages", package_type.display_name)

        hits = await self._search.search(package_type)
        artifacts = group_versions(hits, self._reserved_prefix)
        enriched = await self._scheduler.process(artifacts)

        packages = await asyncio.gather(
            *(self._to_package(package_type, key, versions) for key, versions in enriched.items() if versions)
        )
        catalog = sort_catalog(packages)
        logger.info("Built {} catalog with {} packages", package_type.display_name, len(catalog))
        return catalog
