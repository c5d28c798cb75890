"""Tests for catalog discovery with retry"""

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from speclan_bridge.errors import CatalogFetchError, ConfigurationError
from speclan_bridge.services.catalog_fetcher import fetch_catalog


@pytest.fixture
def mock_sleep():
    with patch(
        "speclan_bridge.services.catalog_fetcher.asyncio.sleep", new_callable=AsyncMock
    ) as sleep:
        yield sleep


class TestFetchCatalog:
    """Test cases for fetch_catalog"""

    @pytest.mark.asyncio
    async def test_immediate_success(self, base_url, make_client, catalog_payload, mock_sleep):
        """First attempt succeeds and no delay happens"""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=catalog_payload)

        catalog = await fetch_catalog(base_url, client=make_client(handler))

        assert [tool.name for tool in catalog.tools] == ["create_feature", "list_specs", "get_spec"]
        assert len(requests) == 1
        assert requests[0].method == "GET"
        assert str(requests[0].url) == f"{base_url}/tools"
        mock_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_recovers_after_two_failures(
        self, base_url, make_client, catalog_payload, catalog, mock_sleep
    ):
        """Two failures then success is indistinguishable from immediate success"""
        attempts = 0

        def handler(request):
            nonlocal attempts
            attempts += 1
            if attempts < 3:
                return httpx.Response(503)
            return httpx.Response(200, json=catalog_payload)

        result = await fetch_catalog(base_url, client=make_client(handler))

        assert attempts == 3
        assert result == catalog
        assert mock_sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_exhaustion_raises_with_url(self, base_url, make_client, mock_sleep):
        """Always-failing endpoint is tried exactly max_attempts times"""
        attempts = 0

        def handler(request):
            nonlocal attempts
            attempts += 1
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(CatalogFetchError) as exc_info:
            await fetch_catalog(base_url, max_attempts=4, client=make_client(handler))

        assert attempts == 4
        assert base_url in str(exc_info.value)
        assert "Connection refused" in str(exc_info.value)
        assert exc_info.value.attempts == 4
        assert exc_info.value.error_code == "CATALOG_FETCH_ERROR"
        # No pause after the final attempt
        assert mock_sleep.await_count == 3

    @pytest.mark.asyncio
    async def test_delay_is_constant(self, base_url, make_client, mock_sleep):
        """Every pause uses the same delay; there is no backoff"""

        def handler(request):
            return httpx.Response(500)

        with pytest.raises(CatalogFetchError):
            await fetch_catalog(base_url, max_attempts=3, delay_ms=250, client=make_client(handler))

        assert [call.args[0] for call in mock_sleep.await_args_list] == [0.25, 0.25]

    @pytest.mark.asyncio
    async def test_status_failure_reason_reported(self, base_url, make_client, mock_sleep):
        """The last HTTP status appears in the terminal error"""

        def handler(request):
            return httpx.Response(404)

        with pytest.raises(CatalogFetchError) as exc_info:
            await fetch_catalog(base_url, max_attempts=1, client=make_client(handler))

        assert exc_info.value.reason == "HTTP 404: Not Found"

    @pytest.mark.asyncio
    async def test_malformed_body_counts_as_failure(
        self, base_url, make_client, catalog_payload, mock_sleep
    ):
        """Non-JSON bodies are retried like network errors"""
        attempts = 0

        def handler(request):
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                return httpx.Response(200, text="<html>starting up</html>")
            return httpx.Response(200, json=catalog_payload)

        catalog = await fetch_catalog(base_url, client=make_client(handler))

        assert attempts == 2
        assert len(catalog) == 3

    @pytest.mark.asyncio
    async def test_duplicate_tool_names_rejected(self, base_url, make_client, mock_sleep):
        """A catalog repeating a tool name is malformed"""

        def handler(request):
            return httpx.Response(200, json={"tools": [{"name": "a"}, {"name": "a"}]})

        with pytest.raises(CatalogFetchError) as exc_info:
            await fetch_catalog(base_url, max_attempts=2, client=make_client(handler))

        assert "Duplicate tool name" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_trailing_slash_in_base_url(self, make_client, catalog_payload, mock_sleep):
        urls = []

        def handler(request):
            urls.append(str(request.url))
            return httpx.Response(200, json=catalog_payload)

        await fetch_catalog("http://upstream.test:8085/", client=make_client(handler))

        assert urls == ["http://upstream.test:8085/tools"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_schema", [["title"], "zod-string", 5])
    async def test_malformed_tool_schema_still_loads(
        self, base_url, make_client, mock_sleep, bad_schema
    ):
        """One unreadable schema does not cost the rest of the catalog"""
        attempts = 0

        def handler(request):
            nonlocal attempts
            attempts += 1
            return httpx.Response(
                200,
                json={"tools": [{"name": "a", "schema": bad_schema, "description": 7}, {"name": "b"}]},
            )

        catalog = await fetch_catalog(base_url, client=make_client(handler))

        assert attempts == 1
        assert [tool.name for tool in catalog.tools] == ["a", "b"]
        assert catalog.tools[0].parameter_schema == bad_schema
        assert catalog.tools[0].description is None
        mock_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_owned_client_has_no_timeout(self, base_url, catalog_payload, mock_sleep):
        """Without a caller-supplied client, slow upstreams are waited on"""
        real_client = httpx.AsyncClient
        created = []

        def build_client(**kwargs):
            client = real_client(
                transport=httpx.MockTransport(lambda request: httpx.Response(200, json=catalog_payload)),
                **kwargs,
            )
            created.append(client)
            return client

        with patch(
            "speclan_bridge.services.catalog_fetcher.httpx.AsyncClient", side_effect=build_client
        ):
            catalog = await fetch_catalog(base_url)

        assert len(catalog) == 3
        assert len(created) == 1
        assert created[0].timeout == httpx.Timeout(None)
        assert created[0].is_closed

    @pytest.mark.asyncio
    async def test_invalid_attempt_count(self, base_url):
        with pytest.raises(ConfigurationError):
            await fetch_catalog(base_url, max_attempts=0)
