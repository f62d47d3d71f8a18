"""Per-artifact version enrichment.

Attaches a file count to every version of an artifact. Counts are immutable
facts about published versions, so they are cached forever. A failure for
one version is logged and recorded with ``UNKNOWN_FILE_COUNT``.
"""

import asyncio

from loguru import logger

from artifact_catalog.lib.cache.base import FOREVER, CacheGateway
from artifact_catalog.lib.catalog.file_count import FileCountSource
from artifact_catalog.lib.catalog.types import UNKNOWN_FILE_COUNT, ArtifactKey, VersionRecord
from artifact_catalog.lib.catalog.versions import newest_first


def file_count_cache_key(group_id: str, artifact_id: str, version: str) -> str:
    return f"numfiles-{group_id}-{artifact_id}-{version}"


class VersionEnricher:
    """Read-through file count lookup for all versions of an artifact.

    Args:
        cache: Durable cache for file counts.
        file_counts: File count collaborator consulted on cache misses.
    """

    def __init__(self, cache: CacheGateway, file_counts: FileCountSource) -> None:
        self._cache = cache
        self._file_counts = file_counts

    async def file_count(self, key: ArtifactKey, version: str) -> int:
        """Return the cached file count for one version, fetching it on a miss."""
        cache_key = file_count_cache_key(key.group_id, key.artifact_id, version)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return int(cached)

        num_files = await self._file_counts.get_file_count(key.group_id, key.artifact_id, version)
        try:
            await self._cache.set(cache_key, num_files, FOREVER)
        except Exception:
            logger.opt(exception=True).warning("Failed to cache file count {}", cache_key)
        return num_files

    async def _enrich_version(self, key: ArtifactKey, version: str) -> VersionRecord:
        try:
            return VersionRecord(version, await self.file_count(key, version))
        except Exception:
            logger.exception("Error fetching file list for {} {} {}", key.group_id, key.artifact_id, version)
            return VersionRecord(version, UNKNOWN_FILE_COUNT)

    async def enrich(self, key: ArtifactKey, versions: list[str]) -> list[VersionRecord]:
        """Enrich every version of one artifact.

        Args:
            key: Artifact identity.
            versions: Version strings of the artifact; duplicates are collapsed.

        Returns:
            One record per distinct version, newest first.
        """
        unique_versions = list(dict.fromkeys(versions))
        records = await asyncio.gather(*(self._enrich_version(key, version) for version in unique_versions))
        return newest_first(records)
