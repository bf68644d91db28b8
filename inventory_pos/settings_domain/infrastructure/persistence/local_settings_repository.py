"""Local JSON-file implementation of the Settings repository."""

from typing import Optional

from inventory_pos.common.persistence.local_json_store import LocalJsonStore
from inventory_pos.settings_domain.domain.entities.app_settings import AppSettings
from inventory_pos.settings_domain.domain.repositories.settings_repository import ISettingsRepository

SETTINGS_KEY = "inventory_settings"
ADMIN_CONFIG_KEY = "inventory_admin_config"


class LocalSettingsRepository(ISettingsRepository):
    def __init__(self, store: LocalJsonStore) -> None:
        self.store = store

    def load_settings(self) -> AppSettings:
        return AppSettings.from_dict(self.store.load(SETTINGS_KEY, {}))

    def save_settings(self, app_settings: AppSettings) -> None:
        self.store.save(SETTINGS_KEY, app_settings.to_dict())

    def get_admin_pin(self) -> Optional[str]:
        return self.store.load(ADMIN_CONFIG_KEY, {}).get("pin") or None

    def save_admin_pin(self, pin: str) -> None:
        self.store.save(ADMIN_CONFIG_KEY, {"pin": pin})
