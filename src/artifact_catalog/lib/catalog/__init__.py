"""Catalog library — search, enrich, resolve and assemble package catalogs.

Public API:
    - CatalogBuilder: Full build pipeline for one package type
    - RequestCoordinator: Single-flight guard for rebuilds
    - BatchScheduler: Sequential batches of concurrent enrichment
    - VersionEnricher: Cached per-version file counts
    - DescriptorResolver: Name/URL resolution from build descriptors
    - SearchClient / HttpFileCountClient: Upstream HTTP collaborators
    - PackageType, ArtifactKey, VersionRecord, Package, Catalog: Data types
    - CatalogError and subclasses: Error taxonomy
"""

from artifact_catalog.lib.catalog.builder import CatalogBuilder, group_versions, sort_catalog
from artifact_catalog.lib.catalog.coordinator import RequestCoordinator
from artifact_catalog.lib.catalog.descriptor import Descriptor, DescriptorResolver, parse_descriptor
from artifact_catalog.lib.catalog.enricher import VersionEnricher
from artifact_catalog.lib.catalog.errors import (
    AlreadyInProgressError,
    CatalogError,
    DescriptorNotFoundError,
    DescriptorUnavailableError,
    FileCountError,
    UpstreamUnavailableError,
)
from artifact_catalog.lib.catalog.file_count import HttpFileCountClient
from artifact_catalog.lib.catalog.scheduler import DEFAULT_BATCH_SIZE, BatchScheduler, batches
from artifact_catalog.lib.catalog.search import SearchClient, parse_search_response
from artifact_catalog.lib.catalog.types import (
    UNKNOWN_FILE_COUNT,
    ArtifactKey,
    Catalog,
    Package,
    PackageType,
    SearchHit,
    VersionRecord,
)
from artifact_catalog.lib.catalog.versions import newest_first, version_key

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "UNKNOWN_FILE_COUNT",
    "AlreadyInProgressError",
    "ArtifactKey",
    "BatchScheduler",
    "Catalog",
    "CatalogBuilder",
    "CatalogError",
    "Descriptor",
    "DescriptorNotFoundError",
    "DescriptorResolver",
    "DescriptorUnavailableError",
    "FileCountError",
    "HttpFileCountClient",
    "Package",
    "PackageType",
    "RequestCoordinator",
    "SearchClient",
    "SearchHit",
    "UpstreamUnavailableError",
    "VersionEnricher",
    "VersionRecord",
    "batches",
    "group_versions",
    "newest_first",
    "parse_descriptor",
    "parse_search_response",
    "sort_catalog",
    "version_key",
]
