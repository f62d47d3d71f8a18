"""Unit tests for the HTTP file count client."""

import httpx
import pytest

from artifact_catalog.lib.catalog.errors import FileCountError
from artifact_catalog.lib.catalog.file_count import HttpFileCountClient


class TestHttpFileCountClient:
    """Tests for HttpFileCountClient.get_file_count()."""

    @pytest.mark.asyncio
    async def test_returns_integer_body(self, make_client) -> None:
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, text="42\n")

        async with make_client(handler) as http:
            count = await HttpFileCountClient(http, "https://files.test/").get_file_count(
                "org.webjars", "jquery", "3.7.1"
            )

        assert count == 42
        assert paths == ["/numfiles/org.webjars/jquery/3.7.1"]

    @pytest.mark.asyncio
    async def test_non_200_raises(self, make_client) -> None:
        async with make_client(lambda request: httpx.Response(500)) as http:
            with pytest.raises(FileCountError, match="HTTP 500") as exc_info:
                await HttpFileCountClient(http, "https://files.test").get_file_count("g", "a", "1")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_non_integer_body_raises(self, make_client) -> None:
        async with make_client(lambda request: httpx.Response(200, text="oops")) as http:
            with pytest.raises(FileCountError, match="Invalid file count"):
                await HttpFileCountClient(http, "https://files.test").get_file_count("g", "a", "1")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler) as http:
            with pytest.raises(FileCountError, match="HTTP error"):
                await HttpFileCountClient(http, "https://files.test").get_file_count("g", "a", "1")
