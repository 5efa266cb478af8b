"""Main application entry point for the menu cache service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os

from fastapi import FastAPI

from menu_cache_service.handlers.api_handler import create_app
from menu_cache_service.observability import configure_logging, setup_observability
from menu_cache_service.repositories.catalog_repository import LocalCatalogStore
from menu_cache_service.repositories.profile_repository import UserProfileStore
from menu_cache_service.services.catalog_cache import CatalogCacheManager
from menu_cache_service.services.catalog_fetcher import DEFAULT_CATALOG_URL, RemoteCatalogFetcher
from menu_cache_service.services.image_resolver import DEFAULT_IMAGE_BASE_URL
from menu_cache_service.services.onboarding_service import OnboardingService

logger = logging.getLogger(__name__)


def create_catalog_fetcher() -> RemoteCatalogFetcher:
    """Create the remote catalog fetcher from environment variables.

    Raises:
        ValueError: If MENU_FETCH_TIMEOUT_SECONDS is not a positive number
    """
    catalog_url = os.getenv("MENU_CATALOG_URL", DEFAULT_CATALOG_URL)
    timeout = float(os.getenv("MENU_FETCH_TIMEOUT_SECONDS", "10"))
    if timeout <= 0:
        raise ValueError("MENU_FETCH_TIMEOUT_SECONDS must be positive")

    logger.info(f"Catalog fetcher configured - URL: {catalog_url}, timeout: {timeout}s")
    return RemoteCatalogFetcher(catalog_url=catalog_url, timeout_seconds=timeout)


def get_admin_api_keys() -> list[str]:
    """Parse ADMIN_API_KEY (comma separated), falling back to a development key."""
    api_keys_str = os.getenv("ADMIN_API_KEY", "")
    api_keys = [key.strip() for key in api_keys_str.split(",") if key.strip()]

    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - admin endpoints will not be accessible")
        api_keys = ["dummy-key-for-development"]

    return api_keys


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    The store handles are created once here and injected; nothing else in
    the service opens the database on its own.

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing menu cache service...")

    database_path = os.getenv("MENU_DATABASE_PATH", "little_lemon.db")
    catalog_store = LocalCatalogStore(database_path)
    profile_store = UserProfileStore(database_path)
    logger.info(f"Local stores configured at {database_path}")

    cache_manager = CatalogCacheManager(store=catalog_store, fetcher=create_catalog_fetcher())
    onboarding_service = OnboardingService(profile_store=profile_store)

    app = create_app(
        cache_manager=cache_manager,
        onboarding_service=onboarding_service,
        api_keys=get_admin_api_keys(),
        image_base_url=os.getenv("MENU_IMAGE_BASE_URL", DEFAULT_IMAGE_BASE_URL),
    )

    setup_observability(app)

    logger.info("Menu cache service initialized successfully")
    return app


# Only build the real application outside of tests so collection stays side-effect free
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
