"""Shared connection handling for the MySQL repositories."""

import logging
from typing import Any, Sequence

import mysql.connector
from mysql.connector import Error

from inventory_pos.common.config.settings import settings
from inventory_pos.common.exceptions.custom_exceptions import DatabaseError

logger = logging.getLogger(__name__)


class MySQLRepositoryBase:
    """Lazily opens one MySQL connection per repository and runs single statements on it."""

    def __init__(self) -> None:
        """Initializes the repository."""
        self._connection = None

    def _get_connection(self):
        """Establishes or returns an active MySQL database connection."""
        if not self._connection or not self._connection.is_connected():
            try:
                self._connection = mysql.connector.connect(
                    host=settings.DB_HOST,
                    database=settings.DB_DATABASE,
                    user=settings.DB_USER,
                    password=settings.DB_PASSWORD,
                    autocommit=False,
                    charset="utf8mb4",
                    use_unicode=True,
                )
            except Error as e:
                raise DatabaseError(f"Failed to connect to MySQL: {e}", original_exception=e)
        return self._connection

    def _execute_write(self, query: str, params: Sequence[Any], error_message: str) -> int:
        """Executes an INSERT/UPDATE/DELETE, commits it and returns the affected row count."""
        conn = self._get_connection()
        cursor = conn.cursor()
        try:
            cursor.execute(query, params)
            conn.commit()
            return cursor.rowcount
        except Error as e:
            conn.rollback()
            raise DatabaseError(f"{error_message}: {e}", original_exception=e)
        finally:
            cursor.close()

    def _fetch_all(self, query: str, params: Sequence[Any], error_message: str) -> list[dict]:
        conn = self._get_connection()
        cursor = conn.cursor(dictionary=True)
        try:
            cursor.execute(query, params)
            rows = cursor.fetchall()
            conn.commit()  # end the read snapshot
            return rows
        except Error as e:
            raise DatabaseError(f"{error_message}: {e}", original_exception=e)
        finally:
            cursor.close()

    def _fetch_one(self, query: str, params: Sequence[Any], error_message: str) -> dict | None:
        conn = self._get_connection()
        cursor = conn.cursor(dictionary=True)
        try:
            cursor.execute(query, params)
            row = cursor.fetchone()
            conn.commit()
            return row
        except Error as e:
            raise DatabaseError(f"{error_message}: {e}", original_exception=e)
        finally:
            cursor.close()

    def _create_table(self, create_query: str, table_name: str) -> None:
        conn = self._get_connection()
        cursor = conn.cursor()
        try:
            cursor.execute(create_query)
            conn.commit()
            logger.info(f"Table {table_name} checked/created.")
        except Error as e:
            conn.rollback()
            raise DatabaseError(f"Error creating table {table_name}: {e}", original_exception=e)
        finally:
            cursor.close()

    def __del__(self) -> None:
        if self._connection and self._connection.is_connected():
            self._connection.close()
