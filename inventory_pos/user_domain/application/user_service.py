# inventory_pos/user_domain/application/user_service.py
"""Application service for sub-business users and their sessions."""

import logging
from dataclasses import replace

from inventory_pos.common.dtos.user_dtos import UserFormDTO
from inventory_pos.common.exceptions.custom_exceptions import (
    AuthenticationError,
    DuplicateBusinessError,
    UserNotFoundError,
    ValidationError,
)
from inventory_pos.settings_domain.domain.entities.app_settings import AppSettings
from inventory_pos.user_domain.domain.entities.user import User, UserRole, UserSession
from inventory_pos.user_domain.domain.repositories.user_repository import IUserRepository

logger = logging.getLogger(__name__)

# Fields a caller may change through update_user/edit_user; the PIN is not one of them
EDITABLE_FIELDS = {"name", "business_name", "logo_url", "role", "is_active", "currency", "language"}


class UserApplicationService:
    """
    Manages users and PIN login.

    PINs are compared in plaintext without hashing or rate limiting. This is
    the existing behaviour of the product and is not a real authentication
    mechanism.
    """

    def __init__(self, user_repo: IUserRepository, app_settings: AppSettings) -> None:
        self.user_repo = user_repo
        self.app_settings = app_settings

    def _require_user(self, user_id: str) -> User:
        user = self.user_repo.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def _check_pin(self, user: User, pin: str) -> None:
        if user.pin != pin:
            logger.warning(f"Incorrect PIN for user {user.business_name}")
            raise AuthenticationError("Incorrect PIN")

    def _ensure_business_name_free(self, business_name: str, user_id: str | None = None) -> None:
        existing = self.user_repo.get_user_by_business_name(business_name)
        if existing is not None and existing.id != user_id:
            raise DuplicateBusinessError(business_name)

    def get_users(self) -> list[User]:
        return self.user_repo.get_all_users()

    def get_user(self, user_id: str) -> User:
        return self._require_user(user_id)

    def create_user(self, form: UserFormDTO) -> User:
        if not form.name.strip() or not form.business_name.strip():
            raise ValidationError("Name and business name are required")
        if not form.pin:
            raise ValidationError("PIN is required")
        self._ensure_business_name_free(form.business_name)

        user = User(
            name=form.name,
            business_name=form.business_name,
            pin=form.pin,
            logo_url=form.logo_url,
            currency=form.currency,
            language=form.language,
            role=UserRole.SELLER,
            is_active=True,
        )
        self.user_repo.insert_user(user)
        logger.info(f"User created: {user.business_name}")
        return user

    def update_user(self, user_id: str, **changes) -> User:
        """Applies changes to a user without a PIN check (admin path)."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        user = self._require_user(user_id)
        if "business_name" in changes and changes["business_name"] != user.business_name:
            self._ensure_business_name_free(changes["business_name"], user_id)

        updated = replace(user, **changes)
        self.user_repo.update_user(updated)
        logger.info(f"User updated: {updated.business_name}")
        return updated

    def edit_user(self, user_id: str, pin: str, **changes) -> User:
        """Applies changes after checking the user's own PIN."""
        self._check_pin(self._require_user(user_id), pin)
        return self.update_user(user_id, **changes)

    def delete_user(self, user_id: str, pin: str) -> None:
        user = self._require_user(user_id)
        self._check_pin(user, pin)
        self.user_repo.delete_user(user_id)
        logger.info(f"User deleted: {user.business_name}")

    def toggle_user_status(self, user_id: str) -> User:
        user = self._require_user(user_id)
        updated = self.update_user(user_id, is_active=not user.is_active)
        logger.info(f"User {updated.business_name} is now {'active' if updated.is_active else 'inactive'}")
        return updated

    # --- Sessions ---

    def login(self, user_id: str, pin: str) -> UserSession:
        user = self._require_user(user_id)
        if not user.is_active:
            raise AuthenticationError(f"Account {user.business_name} is disabled")
        self._check_pin(user, pin)
        logger.info(f"Login successful for {user.business_name}")
        return UserSession(user=user)

    def is_session_expired(self, session: UserSession, now=None) -> bool:
        return session.is_expired(self.app_settings.session_timeout_minutes, now)
