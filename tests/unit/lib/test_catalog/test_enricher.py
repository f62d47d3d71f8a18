"""Unit tests for per-artifact version enrichment."""

from unittest.mock import AsyncMock

import pytest

from artifact_catalog.lib.cache.memory import InMemoryCache
from artifact_catalog.lib.catalog.enricher import VersionEnricher, file_count_cache_key
from artifact_catalog.lib.catalog.errors import FileCountError
from artifact_catalog.lib.catalog.types import UNKNOWN_FILE_COUNT, ArtifactKey

KEY = ArtifactKey("org.webjars", "jquery")


def _file_counts(counts: dict[str, int | Exception]) -> AsyncMock:
    async def get_file_count(group_id: str, artifact_id: str, version: str) -> int:
        value = counts[version]
        if isinstance(value, Exception):
            raise value
        return value

    source = AsyncMock()
    source.get_file_count = AsyncMock(side_effect=get_file_count)
    return source


class TestVersionEnricher:
    """Tests for VersionEnricher.enrich()."""

    @pytest.mark.asyncio
    async def test_versions_sorted_newest_first(self, cache: InMemoryCache) -> None:
        enricher = VersionEnricher(cache, _file_counts({"1.0": 1, "2.0": 2, "1.9": 3}))

        records = await enricher.enrich(KEY, ["1.0", "2.0", "1.9"])

        assert [r.number for r in records] == ["2.0", "1.9", "1.0"]
        assert [r.num_files for r in records] == [2, 3, 1]

    @pytest.mark.asyncio
    async def test_one_failure_degrades_only_that_version(self, cache: InMemoryCache) -> None:
        source = _file_counts({"1.0": 4, "1.1": FileCountError("HTTP 500"), "1.2": 6})
        enricher = VersionEnricher(cache, source)

        records = await enricher.enrich(KEY, ["1.0", "1.1", "1.2"])

        assert [(r.number, r.num_files) for r in records] == [("1.2", 6), ("1.1", UNKNOWN_FILE_COUNT), ("1.0", 4)]

    @pytest.mark.asyncio
    async def test_unexpected_exception_degrades(self, cache: InMemoryCache) -> None:
        enricher = VersionEnricher(cache, _file_counts({"1.0": RuntimeError("connection reset")}))

        records = await enricher.enrich(KEY, ["1.0"])

        assert records[0].num_files == UNKNOWN_FILE_COUNT

    @pytest.mark.asyncio
    async def test_fetched_counts_cached_forever(self, cache: InMemoryCache) -> None:
        source = _file_counts({"1.0": 12})
        enricher = VersionEnricher(cache, source)

        await enricher.enrich(KEY, ["1.0"])
        await enricher.enrich(KEY, ["1.0"])

        assert source.get_file_count.await_count == 1
        assert await cache.get(file_count_cache_key("org.webjars", "jquery", "1.0")) == 12

    @pytest.mark.asyncio
    async def test_cache_hit_skips_upstream(self, cache: InMemoryCache) -> None:
        await cache.set("numfiles-org.webjars-jquery-3.7.1", 40)
        source = _file_counts({})
        enricher = VersionEnricher(cache, source)

        records = await enricher.enrich(KEY, ["3.7.1"])

        assert records[0].num_files == 40
        source.get_file_count.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cached_zero_is_a_hit(self, cache: InMemoryCache) -> None:
        await cache.set(file_count_cache_key("org.webjars", "jquery", "1.0"), 0)
        source = _file_counts({})

        records = await VersionEnricher(cache, source).enrich(KEY, ["1.0"])

        assert records[0].num_files == 0
        source.get_file_count.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failures_not_cached(self, cache: InMemoryCache) -> None:
        enricher = VersionEnricher(cache, _file_counts({"1.0": FileCountError("down")}))

        await enricher.enrich(KEY, ["1.0"])

        assert await cache.get(file_count_cache_key("org.webjars", "jquery", "1.0")) is None

    @pytest.mark.asyncio
    async def test_duplicate_versions_collapsed(self, cache: InMemoryCache) -> None:
        enricher = VersionEnricher(cache, _file_counts({"1.0": 1}))

        records = await enricher.enrich(KEY, ["1.0", "1.0"])

        assert [r.number for r in records] == ["1.0"]

    @pytest.mark.asyncio
    async def test_cache_write_failure_keeps_fetched_count(self) -> None:
        broken_cache = AsyncMock()
        broken_cache.get = AsyncMock(return_value=None)
        broken_cache.set = AsyncMock(side_effect=RuntimeError("database is locked"))
        enricher = VersionEnricher(broken_cache, _file_counts({"1.0": 9}))

        records = await enricher.enrich(KEY, ["1.0"])

        assert records[0].num_files == 9
        broken_cache.set.assert_awaited_once()
