"""Unit tests for the catalog endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from artifact_catalog.core.config import Settings
from artifact_catalog.core.dependencies import get_catalog_service
from artifact_catalog.lib.catalog.errors import AlreadyInProgressError, UpstreamUnavailableError
from artifact_catalog.lib.catalog.types import Package, PackageType, VersionRecord
from artifact_catalog.main import create_app

JQUERY = Package(
    PackageType.CLASSIC,
    "org.webjars",
    "jquery",
    "jQuery",
    "https://github.com/jquery/jquery",
    (VersionRecord("3.7.1", 12), VersionRecord("1.0", 0)),
)
REACT = Package(PackageType.NPM, "org.webjars.npm", "react", "react", "http://github.com/webjars/react", ())


@pytest.fixture
def service() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(service: AsyncMock) -> TestClient:
    with patch("artifact_catalog.main.get_settings", return_value=Settings(_env_file=None)):
        app = create_app()
    app.dependency_overrides[get_catalog_service] = lambda: service
    return TestClient(app, raise_server_exceptions=False)


class TestGetPackages:
    """Tests for GET /api/v1/catalog/{package_type}."""

    def test_returns_serialized_catalog(self, client: TestClient, service: AsyncMock) -> None:
        service.get_catalog.return_value = [JQUERY]

        response = client.get("/api/v1/catalog/classic")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["packages"][0] == {
            "package_type": "classic",
            "group_id": "org.webjars",
            "artifact_id": "jquery",
            "name": "jQuery",
            "source_url": "https://github.com/jquery/jquery",
            "versions": [{"number": "3.7.1", "num_files": 12}, {"number": "1.0", "num_files": 0}],
        }
        service.get_catalog.assert_awaited_once_with(PackageType.CLASSIC)

    def test_unknown_type_is_422(self, client: TestClient) -> None:
        assert client.get("/api/v1/catalog/pip").status_code == 422

    def test_in_progress_is_409(self, client: TestClient, service: AsyncMock) -> None:
        service.get_catalog.side_effect = AlreadyInProgressError("npm")

        response = client.get("/api/v1/catalog/npm")

        assert response.status_code == 409
        assert "npm" in response.json()["detail"]
        assert response.headers["Retry-After"] == "30"

    def test_upstream_unavailable_is_502(self, client: TestClient, service: AsyncMock) -> None:
        service.get_catalog.side_effect = UpstreamUnavailableError("<html>down</html>")

        response = client.get("/api/v1/catalog/bower")

        assert response.status_code == 502
        assert "<html>" not in response.json()["detail"]


class TestGetAllPackages:
    """Tests for GET /api/v1/catalog."""

    def test_returns_all_types(self, client: TestClient, service: AsyncMock) -> None:
        service.get_all_catalogs.return_value = [JQUERY, REACT]

        response = client.get("/api/v1/catalog")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [p["package_type"] for p in body["packages"]] == ["classic", "npm"]
