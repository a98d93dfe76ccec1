"""
Pytest configuration for the checkout page tests.

This file adds the project root to the Python path so that tests can import
domain, repositories, services and api, and adds the tests directory so the
in-memory fakes (tests/fakes.py) can be imported as `fakes`.
"""

import sys
from pathlib import Path

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(Path(__file__).parent))

import pytest  # noqa: E402

from config import Settings  # noqa: E402
from fakes import FIXED_NOW, Catalog  # noqa: E402
from repositories.file_storage import StorageFileResolver  # noqa: E402
from services.show_checkout_service import ShowCheckoutService  # noqa: E402


@pytest.fixture
def catalog() -> Catalog:
    """A fully valid offer chain (offer, product, seller, company, format, config)."""
    return Catalog.seeded()


@pytest.fixture
def settings() -> Settings:
    return Settings(app_env="test", request_timeout_seconds=5.0, enrichment_workers=5)


@pytest.fixture
def file_storage() -> StorageFileResolver:
    return StorageFileResolver("https://cdn.example.com/media/")


@pytest.fixture
def service(catalog: Catalog, file_storage: StorageFileResolver, settings: Settings) -> ShowCheckoutService:
    return ShowCheckoutService(
        repositories=catalog.repositories(),
        file_storage=file_storage,
        settings=settings,
        clock=lambda: FIXED_NOW,
    )
