from datetime import datetime
from unittest.mock import Mock

import pytest
from mysql.connector import Error

from inventory_pos.common.exceptions.custom_exceptions import DatabaseError
from inventory_pos.user_domain.domain.entities.user import User, UserRole
from inventory_pos.user_domain.infrastructure.persistence.local_user_repository import USERS_KEY, LocalUserRepository
from inventory_pos.user_domain.infrastructure.persistence.mysql_user_repository import MySQLUserRepository


@pytest.fixture
def user() -> User:
    return User(id="user-1", name="Maria", business_name="Corner Shop", pin="1234", currency="EUR")


class TestLocalUserRepository:
    def test_insert_and_lookup(self, local_store, user) -> None:
        repo = LocalUserRepository(local_store)

        repo.insert_user(user)

        assert repo.get_user_by_id("user-1").business_name == "Corner Shop"
        assert repo.get_user_by_business_name("Corner Shop").id == "user-1"
        assert repo.get_user_by_business_name("Kiosk") is None
        assert local_store.load(USERS_KEY, [])[0]["businessName"] == "Corner Shop"

    def test_update_and_delete(self, local_store, user) -> None:
        repo = LocalUserRepository(local_store)
        repo.insert_user(user)

        user.role = UserRole.VIEWER
        user.is_active = False
        repo.update_user(user)
        loaded = repo.get_user_by_id("user-1")

        assert loaded.role is UserRole.VIEWER
        assert loaded.is_active is False

        repo.delete_user("user-1")
        assert repo.get_all_users() == []

    def test_reads_records_without_role(self, local_store) -> None:
        local_store.save(USERS_KEY, [{"id": "u1", "name": "Old", "businessName": "Legacy", "pin": "1"}])

        loaded = LocalUserRepository(local_store).get_user_by_id("u1")

        assert loaded.role is UserRole.SELLER
        assert loaded.is_active is True


class TestMySQLUserRepository:
    @pytest.fixture(autouse=True)
    def _mysql(self, mocker) -> None:
        self.mock_connect = mocker.patch("mysql.connector.connect")
        self.mock_cursor = Mock()
        self.mock_connect.return_value.cursor.return_value = self.mock_cursor
        self.repo = MySQLUserRepository()
        self.repo._connection = None

    def test_create_tables(self) -> None:
        self.repo.create_tables()

        assert "CREATE TABLE IF NOT EXISTS pos_users" in self.mock_cursor.execute.call_args[0][0]
        self.mock_connect.return_value.commit.assert_called_once()

    def test_insert_user(self, user) -> None:
        self.repo.insert_user(user)

        query, params = self.mock_cursor.execute.call_args[0]
        assert query.strip().startswith("INSERT INTO pos_users")
        assert params[5] == "seller"
        assert params[6] == 1

    def test_get_user_by_business_name_maps_row(self) -> None:
        self.mock_cursor.fetchone.return_value = {
            "id": "user-1",
            "name": "Maria",
            "business_name": "Corner Shop",
            "pin": "1234",
            "logo_url": None,
            "role": "inventory_clerk",
            "is_active": 0,
            "currency": "EUR",
            "language": "es",
            "created_at": datetime(2024, 1, 1, 8, 0, 0),
        }

        loaded = self.repo.get_user_by_business_name("Corner Shop")

        assert self.mock_cursor.execute.call_args[0][1] == ("Corner Shop",)
        assert loaded.role is UserRole.INVENTORY_CLERK
        assert loaded.is_active is False

    def test_duplicate_insert_raises_database_error(self, user) -> None:
        self.mock_cursor.execute.side_effect = Error("Duplicate entry 'Corner Shop'")

        with pytest.raises(DatabaseError, match="Error creating user Corner Shop"):
            self.repo.insert_user(user)

        self.mock_connect.return_value.rollback.assert_called_once()
