"""Batched concurrent enrichment.

Artifacts are split into consecutive batches. Batches run strictly one after
another; all artifacts within a batch are enriched concurrently. This bounds
the number of outstanding upstream calls to roughly
``batch_size * versions per artifact`` regardless of catalog size.
"""

import asyncio
from collections.abc import Iterator, Mapping
from itertools import islice
from typing import Protocol

from loguru import logger

from artifact_catalog.lib.catalog.types import UNKNOWN_FILE_COUNT, ArtifactKey, VersionRecord
from artifact_catalog.lib.catalog.versions import newest_first

DEFAULT_BATCH_SIZE = 100


class Enricher(Protocol):
    async def enrich(self, key: ArtifactKey, versions: list[str]) -> list[VersionRecord]: ...


def batches(
    artifacts_with_versions: Mapping[ArtifactKey, list[str]],
    batch_size: int,
) -> Iterator[dict[ArtifactKey, list[str]]]:
    """Yield consecutive batches of at most ``batch_size`` artifacts, in mapping order.

    Raises:
        ValueError: If ``batch_size`` is less than 1.
    """
    if batch_size < 1:
        msg = f"batch_size must be at least 1, got {batch_size}"
        raise ValueError(msg)
    items = iter(artifacts_with_versions.items())
    while batch := dict(islice(items, batch_size)):
        yield batch


class BatchScheduler:
    """Drives an enricher over all artifacts, one batch at a time.

    Args:
        enricher: Per-artifact version enricher.
        batch_size: Default number of artifacts per batch.
    """

    def __init__(self, enricher: Enricher, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self._enricher = enricher
        self._batch_size = batch_size

    async def _enrich_artifact(self, key: ArtifactKey, versions: list[str]) -> list[VersionRecord]:
        try:
            return await self._enricher.enrich(key, versions)
        except Exception:
            logger.exception("Unexpected error enriching {}", key)
            return newest_first(VersionRecord(version, UNKNOWN_FILE_COUNT) for version in dict.fromkeys(versions))

    async def _process_batch(self, batch: dict[ArtifactKey, list[str]]) -> dict[ArtifactKey, list[VersionRecord]]:
        keys = list(batch)
        results = await asyncio.gather(*(self._enrich_artifact(key, batch[key]) for key in keys))
        return dict(zip(keys, results, strict=True))

    async def process(
        self,
        artifacts_with_versions: Mapping[ArtifactKey, list[str]],
        batch_size: int | None = None,
    ) -> dict[ArtifactKey, list[VersionRecord]]:
        """Enrich every artifact, folding batch results into one mapping.

        Args:
            artifacts_with_versions: Version strings per artifact.
            batch_size: Overrides the scheduler's default batch size.

        Returns:
            Version records (newest first) per artifact, one key per input artifact.

        Raises:
            ValueError: If the batch size is less than 1.
        """
        size = self._batch_size if batch_size is None else batch_size
        results: dict[ArtifactKey, list[VersionRecord]] = {}
        for index, batch in enumerate(batches(artifacts_with_versions, size), start=1):
            logger.debug("Enriching batch {} ({} artifacts)", index, len(batch))
            results |= await self._process_batch(batch)
        return results
