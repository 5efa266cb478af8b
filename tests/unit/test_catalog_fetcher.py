"""Unit tests for RemoteCatalogFetcher."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from menu_cache_service.exceptions import NetworkError, ParseError
from menu_cache_service.models.menu_models import MenuItem
from menu_cache_service.services.catalog_fetcher import DEFAULT_CATALOG_URL, RemoteCatalogFetcher


def _json_response(body: object) -> MagicMock:
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = body
    return response


@pytest.mark.unit
class TestRemoteCatalogFetcher:
    """Test suite for RemoteCatalogFetcher."""

    @pytest.fixture
    def fetcher(self) -> RemoteCatalogFetcher:
        """Create a fetcher pointing at a test URL."""
        return RemoteCatalogFetcher(catalog_url="https://catalog.test/menu.json", timeout_seconds=5)

    def test_fetcher_initialization(self) -> None:
        """Test that the fetcher defaults to the Little Lemon catalog."""
        fetcher = RemoteCatalogFetcher()
        assert fetcher.catalog_url == DEFAULT_CATALOG_URL
        assert fetcher.timeout_seconds == 10.0

    @pytest.mark.asyncio
    async def test_fetch_success(self, fetcher: RemoteCatalogFetcher, mock_catalog_payload: dict) -> None:
        """Test fetching and parsing the catalog."""
        with patch(
            "httpx.AsyncClient.get",
            new_callable=AsyncMock,
            return_value=_json_response(mock_catalog_payload),
        ):
            items = await fetcher.fetch()

        assert len(items) == 3
        assert all(isinstance(item, MenuItem) for item in items)
        assert [item.name for item in items] == ["Greek Salad", "Bruschetta", "Lemon Dessert"]
        assert items[0].price == Decimal("12.5")
        assert items[0].image == "greekSalad.jpg"
        assert all(item.id is None for item in items)

    @pytest.mark.asyncio
    async def test_fetch_requests_catalog_url(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that the configured URL is requested."""
        mock_get = AsyncMock(return_value=_json_response({"menu": []}))

        with patch("httpx.AsyncClient.get", mock_get):
            await fetcher.fetch()

        mock_get.assert_called_once()
        assert mock_get.call_args.args[0] == "https://catalog.test/menu.json"

    @pytest.mark.asyncio
    async def test_fetch_empty_menu(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that an empty catalog is returned as an empty list."""
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=_json_response({"menu": []})):
            items = await fetcher.fetch()

        assert items == []

    @pytest.mark.asyncio
    async def test_fetch_ignores_ids_in_payload(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that ids are left for the store to assign."""
        body = {"menu": [{"id": 99, "name": "Pasta", "price": 9, "description": "", "image": "pasta.jpg"}]}

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=_json_response(body)):
            items = await fetcher.fetch()

        assert items[0].id is None

    @pytest.mark.asyncio
    async def test_fetch_http_error_raises_network_error(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that an HTTP error status raises NetworkError."""
        mock_response = MagicMock()
        mock_response.status_code = 500
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Server error", request=MagicMock(), response=mock_response
        )

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=mock_response):
            with pytest.raises(NetworkError) as exc_info:
                await fetcher.fetch()

        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)
        assert exc_info.value.context == {"url": "https://catalog.test/menu.json"}

    @pytest.mark.asyncio
    async def test_fetch_transport_error_raises_network_error(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that a connection failure raises NetworkError."""
        with patch(
            "httpx.AsyncClient.get",
            new_callable=AsyncMock,
            side_effect=httpx.ConnectError("Connection refused", request=MagicMock()),
        ):
            with pytest.raises(NetworkError):
                await fetcher.fetch()

    @pytest.mark.asyncio
    async def test_fetch_timeout_raises_network_error(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that a timeout raises NetworkError."""
        with patch(
            "httpx.AsyncClient.get",
            new_callable=AsyncMock,
            side_effect=httpx.ReadTimeout("Timed out", request=MagicMock()),
        ):
            with pytest.raises(NetworkError):
                await fetcher.fetch()

    @pytest.mark.asyncio
    async def test_fetch_invalid_json_raises_parse_error(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that a non-JSON body raises ParseError."""
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.side_effect = ValueError("Expecting value")

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=mock_response):
            with pytest.raises(ParseError):
                await fetcher.fetch()

    @pytest.mark.asyncio
    async def test_fetch_missing_price_raises_parse_error(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that a record without a price raises ParseError."""
        body = {"menu": [{"name": "Greek Salad", "description": "...", "image": "greek.jpg"}]}

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=_json_response(body)):
            with pytest.raises(ParseError):
                await fetcher.fetch()

    @pytest.mark.asyncio
    async def test_fetch_overflowing_price_raises_parse_error(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that a JSON number too large for a float raises ParseError."""
        mock_response = httpx.Response(
            200,
            content=b'{"menu": [{"name": "Greek Salad", "price": 1e400}]}',
            request=httpx.Request("GET", DEFAULT_CATALOG_URL),
        )

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=mock_response):
            with pytest.raises(ParseError):
                await fetcher.fetch()


@pytest.mark.unit
class TestParse:
    """Test suite for payload validation."""

    @pytest.fixture
    def fetcher(self) -> RemoteCatalogFetcher:
        """Create a fetcher with default configuration."""
        return RemoteCatalogFetcher()

    @pytest.mark.parametrize(
        "body",
        [
            [],
            {"items": []},
            {"menu": "not a list"},
            {"menu": [{"price": 1.0}]},
            {"menu": [{"name": "Soup", "price": "free"}]},
            {"menu": [{"name": "Soup", "price": -2}]},
            {"menu": [{"name": "", "price": 2}]},
            {"menu": [{"name": "Soup", "price": "1e400"}]},
            {"menu": [{"name": "Soup", "price": "0.12345678901234567891"}]},
        ],
    )
    def test_parse_rejects_malformed_payloads(self, fetcher: RemoteCatalogFetcher, body: object) -> None:
        """Test that malformed envelopes and records raise ParseError."""
        with pytest.raises(ParseError):
            fetcher.parse(body)

    def test_parse_one_bad_record_rejects_whole_catalog(self, fetcher: RemoteCatalogFetcher) -> None:
        """Test that a single invalid record fails the whole payload."""
        body = {"menu": [{"name": "Soup", "price": 5}, {"name": "Stew"}]}

        with pytest.raises(ParseError) as exc_info:
            fetcher.parse(body)

        assert exc_info.value.context["error_count"] == 1
