"""Unit tests for the download statistics endpoints."""

from datetime import date
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from artifact_catalog.api.v1.stats import previous_month
from artifact_catalog.core.config import Settings
from artifact_catalog.core.dependencies import get_stats_client
from artifact_catalog.lib.catalog.types import PackageType
from artifact_catalog.lib.stats.client import DownloadCount, StatsUnavailableError
from artifact_catalog.main import create_app


@pytest.fixture
def app():
    with patch("artifact_catalog.main.get_settings", return_value=Settings(_env_file=None)):
        return create_app()


@pytest.fixture
def stats() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(app, stats: AsyncMock) -> TestClient:
    app.dependency_overrides[get_stats_client] = lambda: stats
    return TestClient(app, raise_server_exceptions=False)


class TestPreviousMonth:
    """Tests for previous_month()."""

    def test_mid_year(self) -> None:
        assert previous_month(date(2026, 10, 16)) == date(2026, 9, 1)

    def test_january_wraps(self) -> None:
        assert previous_month(date(2026, 1, 31)) == date(2025, 12, 1)


class TestMostDownloaded:
    """Tests for GET /api/v1/stats/most-downloaded."""

    def test_returns_counts(self, client: TestClient, stats: AsyncMock) -> None:
        stats.most_downloaded.return_value = [DownloadCount("org.webjars", "bootstrap", 900)]

        response = client.get(
            "/api/v1/stats/most-downloaded",
            params={"month": "2026-09", "num": 5, "package_type": "classic"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "month": "2026-09",
            "items": [{"group_id": "org.webjars", "artifact_id": "bootstrap", "count": 900}],
        }
        stats.most_downloaded.assert_awaited_once_with(date(2026, 9, 1), 5, PackageType.CLASSIC)

    def test_invalid_month_is_422(self, client: TestClient) -> None:
        assert client.get("/api/v1/stats/most-downloaded", params={"month": "September"}).status_code == 422

    def test_stats_unavailable_is_502(self, client: TestClient, stats: AsyncMock) -> None:
        stats.most_downloaded.side_effect = StatsUnavailableError("Stats were empty")

        response = client.get("/api/v1/stats/most-downloaded", params={"month": "2026-09"})

        assert response.status_code == 502
        assert response.json()["detail"] == "Stats were empty"

    def test_not_configured_is_503(self, app) -> None:
        app.state.stats_client = None
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/v1/stats/most-downloaded")

        assert response.status_code == 503
