"""Builds the application services for the storage backend chosen at startup."""

import logging
from dataclasses import dataclass

from inventory_pos.common.config.settings import Settings
from inventory_pos.common.exceptions.custom_exceptions import ConfigurationError
from inventory_pos.common.persistence.local_json_store import LocalJsonStore
from inventory_pos.inventory_domain.application.inventory_service import InventoryApplicationService
from inventory_pos.inventory_domain.infrastructure.persistence.local_inventory_repository import (
    LocalInventoryRepository,
)
from inventory_pos.inventory_domain.infrastructure.persistence.mysql_inventory_repository import (
    MySQLInventoryRepository,
)
from inventory_pos.inventory_domain.infrastructure.storage.http_image_storage_client import HttpImageStorageClient
from inventory_pos.inventory_domain.infrastructure.storage.local_image_storage import LocalImageStorage
from inventory_pos.settings_domain.application.settings_service import SettingsApplicationService
from inventory_pos.settings_domain.infrastructure.persistence.local_settings_repository import (
    LocalSettingsRepository,
)
from inventory_pos.settings_domain.infrastructure.persistence.mysql_settings_repository import (
    MySQLSettingsRepository,
)
from inventory_pos.user_domain.application.user_service import UserApplicationService
from inventory_pos.user_domain.infrastructure.persistence.local_user_repository import LocalUserRepository
from inventory_pos.user_domain.infrastructure.persistence.mysql_user_repository import MySQLUserRepository

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("mysql", "local")


@dataclass
class ApplicationContainer:
    backend: str
    settings_service: SettingsApplicationService
    inventory_service: InventoryApplicationService
    user_service: UserApplicationService


def create_mysql_tables() -> None:
    """Creates every table used by the MySQL backend (idempotent)."""
    MySQLInventoryRepository().create_tables()
    MySQLUserRepository().create_tables()
    MySQLSettingsRepository().create_tables()


def create_application(config: Settings) -> ApplicationContainer:
    """Initializes and wires up application dependencies for config.STORAGE_BACKEND."""
    backend = (config.STORAGE_BACKEND or "").strip().lower()

    if backend == "mysql":
        inventory_repo = MySQLInventoryRepository()
        user_repo = MySQLUserRepository()
        settings_repo = MySQLSettingsRepository()
        image_storage = HttpImageStorageClient()
    elif backend == "local":
        store = LocalJsonStore(config.LOCAL_STORE_DIR)
        inventory_repo = LocalInventoryRepository(store)
        user_repo = LocalUserRepository(store)
        settings_repo = LocalSettingsRepository(store)
        image_storage = LocalImageStorage(config.LOCAL_IMAGE_DIR)
    else:
        raise ConfigurationError(
            f"Unsupported STORAGE_BACKEND '{config.STORAGE_BACKEND}'. Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
        )

    settings_service = SettingsApplicationService(settings_repo)
    # The same AppSettings instance is shared so changes apply without a reload
    app_settings = settings_service.settings

    logger.info(f"Using '{backend}' storage backend")
    return ApplicationContainer(
        backend=backend,
        settings_service=settings_service,
        inventory_service=InventoryApplicationService(inventory_repo, image_storage, app_settings),
        user_service=UserApplicationService(user_repo, app_settings),
    )
