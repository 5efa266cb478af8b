"""Client for fetching the menu catalog from its remote origin."""

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from menu_cache_service.exceptions import NetworkError, ParseError
from menu_cache_service.models.menu_models import CatalogResponse, MenuItem
from menu_cache_service.observability.decorators import traced
from menu_cache_service.observability.metrics import record_fetch_duration

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = (
    "https://github.com/Meta-Mobile-Developer-PC/Working-With-Data-API/blob/main/menu.json?raw=true"
)


class RemoteCatalogFetcher:
    """HTTP client that retrieves and parses the menu catalog.

    The catalog lives at a single fixed URL and is shaped
    ``{"menu": [{"name", "price", "description", "image"}, ...]}``.
    No retry is attempted here; callers decide the retry policy.
    """

    def __init__(self, catalog_url: str = DEFAULT_CATALOG_URL, timeout_seconds: float = 10.0) -> None:
        """Initialize the fetcher.

        Args:
            catalog_url: URL returning the catalog JSON
            timeout_seconds: Timeout applied to connecting and reading the response
        """
        self.catalog_url = catalog_url
        self.timeout_seconds = timeout_seconds

    @traced("catalog_fetcher.fetch")
    async def fetch(self) -> list[MenuItem]:
        """Fetch the catalog in the order the origin returned it.

        Returns:
            Unpersisted MenuItem objects (``id`` is None)

        Raises:
            NetworkError: On transport failure, timeout or a non-2xx response
            ParseError: On invalid JSON or a record with missing/invalid fields
        """
        started = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
                response = await client.get(self.catalog_url, headers={"Accept": "application/json"})
                response.raise_for_status()
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.error(f"Failed to fetch menu catalog from {self.catalog_url}: {e}")
            raise NetworkError(
                "Failed to fetch menu catalog",
                context={"url": self.catalog_url},
                cause=e,
            ) from e
        finally:
            record_fetch_duration(time.monotonic() - started)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Menu catalog from {self.catalog_url} is not valid JSON: {e}")
            raise ParseError(
                "Menu catalog is not valid JSON",
                context={"url": self.catalog_url},
                cause=e,
            ) from e

        items = self.parse(data)
        logger.info(f"Fetched {len(items)} menu items from remote catalog")
        return items

    def parse(self, data: Any) -> list[MenuItem]:
        """Validate a decoded catalog payload.

        Args:
            data: Decoded JSON body

        Returns:
            MenuItem objects in payload order

        Raises:
            ParseError: If the payload is not the expected catalog envelope
        """
        try:
            catalog = CatalogResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Menu catalog payload rejected: {e.error_count()} validation errors")
            raise ParseError(
                "Menu catalog payload is malformed",
                context={"error_count": e.error_count()},
                cause=e,
            ) from e

        # ids are assigned by the store, never taken from the payload
        return [item.model_copy(update={"id": None}) for item in catalog.menu]
