"""Catalog service — cached, single-flight access to package catalogs.

Wraps the catalog builder with the request coordinator and the ephemeral
catalog cache. A failed rebuild leaves the previously cached catalog (if
still within its TTL) untouched.
"""

import asyncio

import httpx
from loguru import logger

from artifact_catalog.core.config import Settings
from artifact_catalog.lib.cache.base import CacheGateway
from artifact_catalog.lib.cache.memory import InMemoryCache
from artifact_catalog.lib.catalog.builder import CatalogBuilder
from artifact_catalog.lib.catalog.coordinator import RequestCoordinator
from artifact_catalog.lib.catalog.descriptor import DescriptorResolver
from artifact_catalog.lib.catalog.enricher import VersionEnricher
from artifact_catalog.lib.catalog.errors import AlreadyInProgressError
from artifact_catalog.lib.catalog.file_count import HttpFileCountClient
from artifact_catalog.lib.catalog.scheduler import BatchScheduler
from artifact_catalog.lib.catalog.search import SearchClient
from artifact_catalog.lib.catalog.types import Catalog, PackageType


class CatalogService:
    """Serves catalogs from the ephemeral cache, rebuilding on a miss.

    Args:
        builder: Catalog build pipeline.
        catalog_cache: Ephemeral cache holding catalog snapshots.
        coordinator: Single-flight guard for rebuilds.
        cache_ttl: Catalog snapshot lifetime in seconds.
        package_types: Package types served by ``get_all_catalogs``.
    """

    def __init__(
        self,
        builder: CatalogBuilder,
        catalog_cache: CacheGateway,
        coordinator: RequestCoordinator,
        cache_ttl: float,
        package_types: tuple[PackageType, ...] = tuple(PackageType),
    ) -> None:
        self._builder = builder
        self._catalog_cache = catalog_cache
        self._coordinator = coordinator
        self._cache_ttl = cache_ttl
        self.package_types = package_types

    async def _build_and_cache(self, package_type: PackageType) -> Catalog:
        catalog = await self._builder.build(package_type)
        await self._catalog_cache.set(package_type.value, catalog, self._cache_ttl)
        return catalog

    async def refresh(self, package_type: PackageType) -> Catalog:
        """Rebuild and re-cache one catalog regardless of the cache state.

        Raises:
            AlreadyInProgressError: If a rebuild for the type is already running.
            UpstreamUnavailableError: If the search service response is unusable.
        """
        return await self._coordinator.run_exclusive(
            package_type.value,
            lambda: self._build_and_cache(package_type),
        )

    async def get_catalog(self, package_type: PackageType) -> Catalog:
        """Return the cached catalog of one type, building it on a cache miss.

        Raises:
            AlreadyInProgressError: If the cache is empty and a rebuild is already running.
            UpstreamUnavailableError: If the search service response is unusable.
        """
        cached = await self._catalog_cache.get(package_type.value)
        if cached is not None:
            return cached
        logger.debug("Catalog cache miss for {}", package_type)
        return await self.refresh(package_type)

    async def get_all_catalogs(self) -> Catalog:
        """Concatenate the catalogs of every configured type, in type order."""
        catalogs = await asyncio.gather(*(self.get_catalog(package_type) for package_type in self.package_types))
        return [package for catalog in catalogs for package in catalog]


def create_catalog_service(
    settings: Settings,
    client: httpx.AsyncClient,
    durable_cache: CacheGateway,
    coordinator: RequestCoordinator | None = None,
) -> CatalogService:
    """Wire a catalog service from settings.

    Args:
        settings: Application settings.
        client: Shared async HTTP client for all upstream calls.
        durable_cache: Cache for file counts and descriptors.
        coordinator: Single-flight registry; a fresh one when omitted.

    Returns:
        Ready-to-use CatalogService.
    """
    enricher = VersionEnricher(durable_cache, HttpFileCountClient(client, settings.file_service_url))
    builder = CatalogBuilder(
        search=SearchClient(client, settings.search_url_template),
        scheduler=BatchScheduler(enricher, batch_size=settings.catalog_batch_size),
        resolver=DescriptorResolver(client, durable_cache, settings.repo_base_url, settings.source_url_base),
        reserved_prefix=settings.reserved_prefix,
    )
    return CatalogService(
        builder=builder,
        catalog_cache=InMemoryCache(),
        coordinator=coordinator or RequestCoordinator(),
        cache_ttl=settings.catalog_cache_ttl,
    )


async def _refresh_one(service: CatalogService, package_type: PackageType) -> None:
    try:
        catalog = await service.refresh(package_type)
    except AlreadyInProgressError:
        logger.info("Skipping {} catalog refresh; a build is already running", package_type)
        return
    except Exception:
        logger.exception("Failed to refresh {} catalog", package_type)
        return
    logger.info("Refreshed {} catalog ({} packages)", package_type, len(catalog))


async def catalog_refresh_loop(service: CatalogService, interval: int) -> None:
    """Background asyncio loop that keeps every catalog warm.

    A failure for one package type does not stop the others from refreshing.

    Args:
        service: Catalog service whose catalogs are refreshed.
        interval: Seconds between refresh cycles.
    """
    logger.info("Catalog refresh loop started (interval={}s)", interval)

    while True:
        try:
            for package_type in service.package_types:
                await _refresh_one(service, package_type)
            await asyncio.sleep(interval)
        except asyncio.CancelledError:
            logger.info("Catalog refresh loop cancelled")
            break
