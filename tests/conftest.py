# tests/conftest.py
from decimal import Decimal
from unittest.mock import Mock

import pytest

from inventory_pos.common.persistence.local_json_store import LocalJsonStore
from inventory_pos.inventory_domain.application.inventory_service import InventoryApplicationService
from inventory_pos.inventory_domain.domain.entities.article import Article
from inventory_pos.inventory_domain.domain.entities.sale import PaymentMethod, Sale
from inventory_pos.inventory_domain.domain.repositories.image_storage import IImageStorage
from inventory_pos.inventory_domain.domain.repositories.inventory_repository import IInventoryRepository
from inventory_pos.inventory_domain.infrastructure.persistence.local_inventory_repository import (
    LocalInventoryRepository,
)
from inventory_pos.inventory_domain.infrastructure.storage.local_image_storage import LocalImageStorage
from inventory_pos.settings_domain.domain.entities.app_settings import AppSettings


@pytest.fixture
def app_settings() -> AppSettings:
    """Default settings shared by the services under test."""
    return AppSettings()


@pytest.fixture
def mock_inventory_repository() -> Mock:
    """Mock for IInventoryRepository."""
    return Mock(spec=IInventoryRepository)


@pytest.fixture
def mock_image_storage() -> Mock:
    """Mock for IImageStorage."""
    return Mock(spec=IImageStorage)


@pytest.fixture
def inventory_service(mock_inventory_repository, mock_image_storage, app_settings) -> InventoryApplicationService:
    """Instance of InventoryApplicationService with mocked dependencies."""
    return InventoryApplicationService(mock_inventory_repository, mock_image_storage, app_settings)


@pytest.fixture
def local_store(tmp_path) -> LocalJsonStore:
    """JSON store in a temporary directory."""
    return LocalJsonStore(str(tmp_path / "store"))


@pytest.fixture
def local_inventory_repository(local_store) -> LocalInventoryRepository:
    return LocalInventoryRepository(local_store)


@pytest.fixture
def local_inventory_service(local_inventory_repository, tmp_path, app_settings) -> InventoryApplicationService:
    """InventoryApplicationService running on the real local backend."""
    return InventoryApplicationService(
        local_inventory_repository, LocalImageStorage(str(tmp_path / "images")), app_settings
    )


@pytest.fixture
def sample_article() -> Article:
    """Article with 10 units at 5.00 each."""
    return Article(id="article-1", name="Notebook", price=Decimal("5.00"), stock=10)


@pytest.fixture
def other_article() -> Article:
    """Second article used for repointing sales."""
    return Article(id="article-2", name="Pencil", price=Decimal("2.50"), stock=4)


@pytest.fixture
def sample_sale(sample_article) -> Sale:
    """Sale of 3 units of sample_article, paid in cash."""
    return Sale(
        id="sale-1",
        article_id=sample_article.id,
        article_name=sample_article.name,
        unit_price=sample_article.price,
        quantity=3,
        total_price=Decimal("15.00"),
        buyer_name="Ana",
        payment_method=PaymentMethod.CASH,
        amount_paid=Decimal("15.00"),
    )
