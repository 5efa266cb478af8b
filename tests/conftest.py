"""Shared pytest fixtures and configuration for all tests."""

import os
from decimal import Decimal
from pathlib import Path

import pytest

# Keep src/main.py from building the real application at import time
os.environ.setdefault("ENVIRONMENT", "test")

from menu_cache_service.models.menu_models import MenuItem  # noqa: E402


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    """Fixture providing a fresh SQLite file location per test."""
    return tmp_path / "little_lemon.db"


@pytest.fixture
def mock_catalog_payload() -> dict:
    """Fixture providing a remote catalog response body."""
    return {
        "menu": [
            {
                "name": "Greek Salad",
                "price": 12.5,
                "description": "Crispy lettuce, peppers, olives and feta.",
                "image": "greekSalad.jpg",
            },
            {
                "name": "Bruschetta",
                "price": 7.99,
                "description": "Grilled bread rubbed with garlic.",
                "image": "bruschetta.jpg",
            },
            {
                "name": "Lemon Dessert",
                "price": 4.99,
                "description": "",
                "image": "lemonDessert.jpg",
            },
        ]
    }


@pytest.fixture
def sample_items() -> list[MenuItem]:
    """Fixture providing unpersisted menu items matching the catalog payload."""
    return [
        MenuItem(
            name="Greek Salad",
            price=Decimal("12.5"),
            description="Crispy lettuce, peppers, olives and feta.",
            image="greekSalad.jpg",
        ),
        MenuItem(
            name="Bruschetta",
            price=Decimal("7.99"),
            description="Grilled bread rubbed with garlic.",
            image="bruschetta.jpg",
        ),
        MenuItem(
            name="Lemon Dessert",
            price=Decimal("4.99"),
            description="",
            image="lemonDessert.jpg",
        ),
    ]
