"""MySQL implementation of the Settings repository."""

import json
import logging
from typing import Optional

from mysql.connector import Error

from inventory_pos.common.exceptions.custom_exceptions import DatabaseError
from inventory_pos.common.persistence.mysql_repository_base import MySQLRepositoryBase
from inventory_pos.settings_domain.domain.entities.app_settings import AppSettings
from inventory_pos.settings_domain.domain.repositories.settings_repository import ISettingsRepository

logger = logging.getLogger(__name__)

ADMIN_CONFIG_ID = 1


class MySQLSettingsRepository(MySQLRepositoryBase, ISettingsRepository):
    """Settings live as key/JSON-value rows in pos_settings; the admin PIN in the single-row pos_admin_config."""

    def create_tables(self) -> None:
        create_settings_table_query = """
        CREATE TABLE IF NOT EXISTS pos_settings (
            setting_key VARCHAR(100) PRIMARY KEY,
            setting_value JSON NOT NULL,
            updated_at DATETIME DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
        """
        create_admin_config_table_query = """
        CREATE TABLE IF NOT EXISTS pos_admin_config (
            id TINYINT UNSIGNED PRIMARY KEY,
            pin VARCHAR(32) NOT NULL
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
        """
        self._create_table(create_settings_table_query, "pos_settings")
        self._create_table(create_admin_config_table_query, "pos_admin_config")

    def load_settings(self) -> AppSettings:
        rows = self._fetch_all("SELECT setting_key, setting_value FROM pos_settings", (), "Error loading settings")
        stored = {}
        for row in rows:
            try:
                stored[row["setting_key"]] = json.loads(row["setting_value"])
            except (json.JSONDecodeError, TypeError):
                logger.warning(f"Ignoring unreadable setting '{row['setting_key']}'")
        return AppSettings.from_dict(stored)

    def save_settings(self, app_settings: AppSettings) -> None:
        conn = self._get_connection()
        cursor = conn.cursor()
        upsert_query = """
        INSERT INTO pos_settings (setting_key, setting_value) VALUES (%s, %s)
        ON DUPLICATE KEY UPDATE setting_value = VALUES(setting_value)
        """
        params = [(key, json.dumps(value)) for key, value in app_settings.to_dict().items()]
        try:
            cursor.executemany(upsert_query, params)
            conn.commit()
        except Error as e:
            conn.rollback()
            raise DatabaseError(f"Error saving settings: {e}", original_exception=e)
        finally:
            cursor.close()

    def get_admin_pin(self) -> Optional[str]:
        row = self._fetch_one(
            "SELECT pin FROM pos_admin_config WHERE id = %s", (ADMIN_CONFIG_ID,), "Error loading admin configuration"
        )
        return row["pin"] if row else None

    def save_admin_pin(self, pin: str) -> None:
        self._execute_write(
            "INSERT INTO pos_admin_config (id, pin) VALUES (%s, %s) ON DUPLICATE KEY UPDATE pin = VALUES(pin)",
            (ADMIN_CONFIG_ID, pin),
            "Error saving admin PIN",
        )
