"""Shared test fixtures: settings, in-memory caches, and mock upstream services."""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest

from artifact_catalog.core.config import Settings
from artifact_catalog.lib.cache.memory import InMemoryCache

SEARCH_TEMPLATE = "https://search.test/select?q=g:{query}"
REPO_BASE = "https://repo.test/maven2"
FILE_SERVICE = "https://files.test"


def make_pom(
    artifact_id: str,
    name: str = "",
    scm_url: str = "",
    parent_artifact_id: str = "",
    namespace: bool = True,
) -> str:
    """Return a minimal build descriptor document."""
    xmlns = ' xmlns="http://maven.apache.org/POM/4.0.0"' if namespace else ""
    parent = f"<parent><artifactId>{parent_artifact_id}</artifactId></parent>" if parent_artifact_id else ""
    scm = f"<scm><url>{scm_url}</url></scm>" if scm_url else "<scm></scm>"
    return (
        f"<project{xmlns}><modelVersion>4.0.0</modelVersion>{parent}"
        f"<artifactId>{artifact_id}</artifactId><name>{name}</name>{scm}</project>"
    )


def make_search_json(rows: list[tuple[str, str, str]]) -> dict:
    """Return a search response body for ``(group, artifact, version)`` rows."""
    return {"response": {"numFound": len(rows), "docs": [{"g": g, "a": a, "v": v} for g, a, v in rows]}}


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,
        search_url_template=SEARCH_TEMPLATE,
        repo_base_url=REPO_BASE,
        file_service_url=FILE_SERVICE,
        catalog_batch_size=100,
    )


@pytest.fixture
def cache() -> InMemoryCache:
    """Fresh durable cache per test."""
    return InMemoryCache()


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for async HTTP clients backed by a mock transport handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
async def null_client() -> AsyncGenerator[httpx.AsyncClient]:
    """HTTP client whose every request answers 404."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(404))) as client:
        yield client


@pytest.fixture
def pom() -> Callable[..., str]:
    """Build descriptor document factory (see ``make_pom``)."""
    return make_pom


@pytest.fixture
def search_json() -> Callable[[list[tuple[str, str, str]]], dict]:
    """Search response body factory (see ``make_search_json``)."""
    return make_search_json
