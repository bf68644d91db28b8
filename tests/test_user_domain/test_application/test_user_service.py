from datetime import timedelta
from unittest.mock import Mock

import pytest

from inventory_pos.common.dtos.user_dtos import UserFormDTO
from inventory_pos.common.exceptions.custom_exceptions import (
    AuthenticationError,
    DuplicateBusinessError,
    UserNotFoundError,
    ValidationError,
)
from inventory_pos.common.utils.date_utils import utc_now
from inventory_pos.user_domain.application.user_service import UserApplicationService
from inventory_pos.user_domain.domain.entities.user import User, UserRole, UserSession
from inventory_pos.user_domain.domain.repositories.user_repository import IUserRepository
from inventory_pos.user_domain.infrastructure.persistence.local_user_repository import LocalUserRepository


@pytest.fixture
def user_service(local_store, app_settings) -> UserApplicationService:
    return UserApplicationService(LocalUserRepository(local_store), app_settings)


@pytest.fixture
def shop(user_service) -> User:
    return user_service.create_user(UserFormDTO(name="Maria", business_name="Corner Shop", pin="1234"))


class TestUserServiceAccounts:
    def test_create_user_defaults_to_active_seller(self, user_service, shop) -> None:
        assert shop.role is UserRole.SELLER
        assert shop.is_active is True
        assert user_service.get_user(shop.id).business_name == "Corner Shop"

    def test_duplicate_business_name_is_rejected(self, user_service, shop) -> None:
        with pytest.raises(DuplicateBusinessError):
            user_service.create_user(UserFormDTO(name="Other", business_name="Corner Shop", pin="9999"))

    @pytest.mark.parametrize(
        "form",
        [
            UserFormDTO(name=" ", business_name="Shop", pin="1"),
            UserFormDTO(name="Ana", business_name="", pin="1"),
            UserFormDTO(name="Ana", business_name="Shop", pin=""),
        ],
    )
    def test_create_user_requires_fields(self, user_service, form) -> None:
        with pytest.raises(ValidationError):
            user_service.create_user(form)

        assert user_service.get_users() == []

    def test_edit_user_requires_correct_pin(self, user_service, shop) -> None:
        with pytest.raises(AuthenticationError, match="Incorrect PIN"):
            user_service.edit_user(shop.id, "0000", name="Changed")

        updated = user_service.edit_user(shop.id, "1234", name="Maria Lopez", currency="EUR")

        assert updated.name == "Maria Lopez"
        assert user_service.get_user(shop.id).currency == "EUR"

    def test_update_user_rejects_pin_changes(self, user_service, shop) -> None:
        with pytest.raises(ValidationError, match="pin"):
            user_service.update_user(shop.id, pin="0000")

    def test_update_user_to_taken_business_name(self, user_service, shop) -> None:
        other = user_service.create_user(UserFormDTO(name="Luis", business_name="Kiosk", pin="5555"))

        with pytest.raises(DuplicateBusinessError):
            user_service.update_user(other.id, business_name="Corner Shop")

    def test_update_user_keeping_own_business_name(self, user_service, shop) -> None:
        updated = user_service.update_user(shop.id, business_name="Corner Shop", role=UserRole.ADMINISTRATOR)

        assert updated.role is UserRole.ADMINISTRATOR

    def test_delete_user_checks_pin(self, user_service, shop) -> None:
        with pytest.raises(AuthenticationError):
            user_service.delete_user(shop.id, "9999")

        user_service.delete_user(shop.id, "1234")

        with pytest.raises(UserNotFoundError):
            user_service.get_user(shop.id)

    def test_toggle_user_status(self, user_service, shop) -> None:
        assert user_service.toggle_user_status(shop.id).is_active is False
        assert user_service.toggle_user_status(shop.id).is_active is True


class TestUserServiceSessions:
    def test_login_returns_session(self, user_service, shop) -> None:
        session = user_service.login(shop.id, "1234")

        assert session.user.id == shop.id
        assert session.last_activity == session.started_at

    def test_login_wrong_pin(self, user_service, shop) -> None:
        with pytest.raises(AuthenticationError, match="Incorrect PIN"):
            user_service.login(shop.id, "4321")

    def test_login_disabled_account(self, user_service, shop) -> None:
        user_service.toggle_user_status(shop.id)

        with pytest.raises(AuthenticationError, match="disabled"):
            user_service.login(shop.id, "1234")

    def test_login_unknown_user(self, user_service) -> None:
        with pytest.raises(UserNotFoundError):
            user_service.login("missing", "1234")

    def test_session_expires_after_configured_timeout(self, user_service, shop, app_settings) -> None:
        # Arrange
        app_settings.session_timeout_minutes = 15
        start = utc_now()
        session = UserSession(user=shop, started_at=start)

        # Act & Assert
        assert user_service.is_session_expired(session, start + timedelta(minutes=14)) is False
        assert user_service.is_session_expired(session, start + timedelta(minutes=15)) is True

    def test_touch_extends_session(self, user_service, shop) -> None:
        start = utc_now()
        session = UserSession(user=shop, started_at=start)

        session.touch(start + timedelta(minutes=20))

        assert user_service.is_session_expired(session, start + timedelta(minutes=40)) is False


def test_create_user_does_not_insert_when_business_exists(app_settings) -> None:
    """Test that the uniqueness check runs before the insert."""
    # Arrange
    mock_repo = Mock(spec=IUserRepository)
    mock_repo.get_user_by_business_name.return_value = User(name="X", business_name="Shop", pin="1")
    service = UserApplicationService(mock_repo, app_settings)

    # Act & Assert
    with pytest.raises(DuplicateBusinessError):
        service.create_user(UserFormDTO(name="Y", business_name="Shop", pin="2"))

    mock_repo.insert_user.assert_not_called()
