# inventory_pos/settings_domain/application/settings_service.py
"""Application service for operational settings and the admin PIN."""

import logging

from inventory_pos.common.config.settings import settings as env_settings
from inventory_pos.common.exceptions.custom_exceptions import InvalidSettingError
from inventory_pos.settings_domain.domain.entities.app_settings import COLOR_THEMES, AppSettings
from inventory_pos.settings_domain.domain.repositories.settings_repository import ISettingsRepository

logger = logging.getLogger(__name__)


class SettingsApplicationService:
    """Loads settings once, then validates, applies and persists every change."""

    def __init__(self, settings_repo: ISettingsRepository) -> None:
        self.settings_repo = settings_repo
        self.settings: AppSettings = settings_repo.load_settings()
        logger.info(
            f"Settings loaded: {len(self.settings.product_categories)} categories, "
            f"low stock threshold {self.settings.low_stock_threshold}, "
            f"session timeout {self.settings.session_timeout_minutes} min"
        )

    def _save(self) -> None:
        self.settings_repo.save_settings(self.settings)

    def reload(self) -> AppSettings:
        """Re-reads stored settings into the shared instance."""
        self.settings.replace_with(self.settings_repo.load_settings())
        return self.settings

    # --- Inventory ---

    def add_category(self, category: str) -> list[str]:
        category = (category or "").strip()
        if not category:
            raise InvalidSettingError("Category name cannot be empty")
        if category.lower() in (c.lower() for c in self.settings.product_categories):
            raise InvalidSettingError(f"Category '{category}' already exists")
        self.settings.product_categories.append(category)
        self._save()
        logger.info(f"Category added: {category}")
        return self.settings.product_categories

    def delete_category(self, category: str) -> list[str]:
        if category not in self.settings.product_categories:
            logger.warning(f"Category '{category}' not found for deletion")
            return self.settings.product_categories
        self.settings.product_categories = [c for c in self.settings.product_categories if c != category]
        self._save()
        logger.info(f"Category deleted: {category}")
        return self.settings.product_categories

    def set_low_stock_threshold(self, threshold: int) -> None:
        if threshold < 0:
            raise InvalidSettingError(f"Low stock threshold cannot be negative: {threshold}")
        self.settings.low_stock_threshold = threshold
        self._save()

    def set_enable_lot_and_expiry(self, enabled: bool) -> None:
        self.settings.enable_lot_and_expiry = bool(enabled)
        self._save()

    # --- Security ---

    def set_session_timeout(self, minutes: int) -> None:
        if minutes <= 0:
            raise InvalidSettingError(f"Session timeout must be a positive number of minutes: {minutes}")
        self.settings.session_timeout_minutes = minutes
        self._save()

    def get_admin_pin(self) -> str:
        return self.settings_repo.get_admin_pin() or env_settings.DEFAULT_ADMIN_PIN

    def verify_admin_pin(self, pin: str) -> bool:
        # Plaintext comparison, no hashing or rate limiting
        is_valid = pin == self.get_admin_pin()
        if not is_valid:
            logger.warning("Admin login failed")
        return is_valid

    def update_admin_pin(self, new_pin: str) -> None:
        if not new_pin or not new_pin.isdigit():
            raise InvalidSettingError("Admin PIN must be a non-empty string of digits")
        self.settings_repo.save_admin_pin(new_pin)
        logger.info("Admin PIN updated")

    # --- Appearance ---

    def set_dark_mode(self, dark: bool) -> None:
        self.settings.dark_mode = bool(dark)
        self._save()

    def set_color_theme(self, theme: str) -> None:
        if theme not in COLOR_THEMES:
            raise InvalidSettingError(f"Unknown color theme '{theme}'. Expected one of: {', '.join(COLOR_THEMES)}")
        self.settings.color_theme = theme
        self._save()
