"""Settings repository interface."""
from abc import ABC, abstractmethod
from typing import Optional

from inventory_pos.settings_domain.domain.entities.app_settings import AppSettings


class ISettingsRepository(ABC):

    @abstractmethod
    def load_settings(self) -> AppSettings:
        """Returns the stored settings, or defaults when none were saved."""
        pass

    @abstractmethod
    def save_settings(self, app_settings: AppSettings) -> None:
        """Persists the full settings struct."""
        pass

    @abstractmethod
    def get_admin_pin(self) -> Optional[str]:
        """Returns the stored admin PIN, or None if none was saved."""
        pass

    @abstractmethod
    def save_admin_pin(self, pin: str) -> None:
        """Persists the admin PIN."""
        pass
