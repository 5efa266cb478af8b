"""Unit tests for main application entry point."""

import os
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI

from menu_cache_service.repositories.catalog_repository import LocalCatalogStore
from menu_cache_service.services.catalog_fetcher import DEFAULT_CATALOG_URL
from src.main import create_application, create_catalog_fetcher, get_admin_api_keys


@pytest.mark.unit
class TestCreateCatalogFetcher:
    """Tests for create_catalog_fetcher function."""

    @patch.dict(os.environ, {}, clear=True)
    def test_uses_defaults(self) -> None:
        """Test that the Little Lemon catalog and a 10s timeout are the defaults."""
        fetcher = create_catalog_fetcher()

        assert fetcher.catalog_url == DEFAULT_CATALOG_URL
        assert fetcher.timeout_seconds == 10.0

    @patch.dict(
        os.environ,
        {"MENU_CATALOG_URL": "https://catalog.test/menu.json", "MENU_FETCH_TIMEOUT_SECONDS": "2.5"},
        clear=True,
    )
    def test_reads_environment(self) -> None:
        """Test that URL and timeout come from the environment."""
        fetcher = create_catalog_fetcher()

        assert fetcher.catalog_url == "https://catalog.test/menu.json"
        assert fetcher.timeout_seconds == 2.5

    @patch.dict(os.environ, {"MENU_FETCH_TIMEOUT_SECONDS": "0"}, clear=True)
    def test_rejects_non_positive_timeout(self) -> None:
        """Test that a zero timeout is a configuration error."""
        with pytest.raises(ValueError, match="must be positive"):
            create_catalog_fetcher()


@pytest.mark.unit
class TestGetAdminApiKeys:
    """Tests for get_admin_api_keys function."""

    @patch.dict(os.environ, {"ADMIN_API_KEY": "key1, key2,,"}, clear=True)
    def test_parses_comma_separated_keys(self) -> None:
        """Test that keys are split and stripped."""
        assert get_admin_api_keys() == ["key1", "key2"]

    @patch.dict(os.environ, {}, clear=True)
    def test_falls_back_to_development_key(self) -> None:
        """Test the placeholder key when nothing is configured."""
        assert get_admin_api_keys() == ["dummy-key-for-development"]


@pytest.mark.unit
class TestCreateApplication:
    """Tests for create_application function."""

    @patch("src.main.setup_observability")
    @patch("src.main.configure_logging")
    def test_creates_configured_app(
        self, mock_configure_logging: Mock, mock_setup_observability: Mock, tmp_path: Path
    ) -> None:
        """Test that the app is wired with one store handle per file path."""
        database_path = str(tmp_path / "menu.db")
        with patch.dict(
            os.environ,
            {"MENU_DATABASE_PATH": database_path, "ADMIN_API_KEY": "admin", "ENVIRONMENT": "test"},
            clear=True,
        ):
            app = create_application()

        assert isinstance(app, FastAPI)
        assert isinstance(app.state.cache_manager.store, LocalCatalogStore)
        assert app.state.cache_manager.store.database_path == database_path
        assert app.state.onboarding_service.profile_store.database_path == database_path
        assert app.state.api_key_validator.validate("admin") is True
        mock_configure_logging.assert_called_once()
        mock_setup_observability.assert_called_once_with(app)

    @patch("src.main.setup_observability")
    @patch("src.main.configure_logging")
    def test_image_base_url_from_environment(
        self, mock_configure_logging: Mock, mock_setup_observability: Mock  # noqa: ARG002
    ) -> None:
        """Test that MENU_IMAGE_BASE_URL is passed to the app."""
        with patch.dict(
            os.environ, {"MENU_IMAGE_BASE_URL": "https://cdn.test/img/", "ENVIRONMENT": "test"}, clear=True
        ):
            app = create_application()

        assert app.state.image_base_url == "https://cdn.test/img/"
