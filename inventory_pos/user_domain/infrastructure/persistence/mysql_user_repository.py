"""MySQL implementation of the User repository."""

import logging
from typing import Optional

from inventory_pos.common.persistence.mysql_repository_base import MySQLRepositoryBase
from inventory_pos.common.utils.date_utils import format_datetime_for_db, parse_db_datetime
from inventory_pos.user_domain.domain.entities.user import User
from inventory_pos.user_domain.domain.repositories.user_repository import IUserRepository

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, name, business_name, pin, logo_url, role, is_active, currency, language, created_at"


class MySQLUserRepository(MySQLRepositoryBase, IUserRepository):

    def create_tables(self) -> None:
        create_users_table_query = """
        CREATE TABLE IF NOT EXISTS pos_users (
            id CHAR(36) PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            business_name VARCHAR(255) NOT NULL,
            pin VARCHAR(32) NOT NULL,
            logo_url VARCHAR(1024),
            role VARCHAR(30) NOT NULL DEFAULT 'seller',
            is_active TINYINT(1) NOT NULL DEFAULT 1,
            currency VARCHAR(10),
            language VARCHAR(10),
            created_at DATETIME NOT NULL,
            UNIQUE KEY uk_business_name (business_name)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
        """
        self._create_table(create_users_table_query, "pos_users")

    @staticmethod
    def _row_to_user(row: dict) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            business_name=row["business_name"],
            pin=row["pin"],
            logo_url=row.get("logo_url"),
            role=row["role"],
            is_active=bool(row["is_active"]),
            currency=row.get("currency"),
            language=row.get("language"),
            created_at=parse_db_datetime(row["created_at"]),
        )

    def get_all_users(self) -> list[User]:
        rows = self._fetch_all(
            f"SELECT {USER_COLUMNS} FROM pos_users ORDER BY created_at DESC", (), "Error fetching users"
        )
        return [self._row_to_user(row) for row in rows]

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        row = self._fetch_one(f"SELECT {USER_COLUMNS} FROM pos_users WHERE id = %s", (user_id,), "Error fetching user")
        return self._row_to_user(row) if row else None

    def get_user_by_business_name(self, business_name: str) -> Optional[User]:
        row = self._fetch_one(
            f"SELECT {USER_COLUMNS} FROM pos_users WHERE business_name = %s",
            (business_name,),
            "Error fetching user by business name",
        )
        return self._row_to_user(row) if row else None

    def insert_user(self, user: User) -> User:
        insert_query = f"""
        INSERT INTO pos_users ({USER_COLUMNS})
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        """
        params = (
            user.id,
            user.name,
            user.business_name,
            user.pin,
            user.logo_url,
            user.role.value,
            int(user.is_active),
            user.currency,
            user.language,
            format_datetime_for_db(user.created_at),
        )
        self._execute_write(insert_query, params, f"Error creating user {user.business_name}")
        logger.info(f"User {user.id} ({user.business_name}) inserted.")
        return user

    def update_user(self, user: User) -> None:
        update_query = """
        UPDATE pos_users SET
            name = %s, business_name = %s, pin = %s, logo_url = %s, role = %s,
            is_active = %s, currency = %s, language = %s
        WHERE id = %s
        """
        params = (
            user.name,
            user.business_name,
            user.pin,
            user.logo_url,
            user.role.value,
            int(user.is_active),
            user.currency,
            user.language,
            user.id,
        )
        rowcount = self._execute_write(update_query, params, f"Error updating user {user.id}")
        if rowcount == 0:
            logger.warning(f"User with id {user.id} not found for update")

    def delete_user(self, user_id: str) -> None:
        rowcount = self._execute_write(
            "DELETE FROM pos_users WHERE id = %s", (user_id,), f"Error deleting user {user_id}"
        )
        if rowcount == 0:
            logger.warning(f"User with id {user_id} not found for deletion")
        else:
            logger.info(f"User {user_id} deleted successfully.")
