"""Local JSON-file implementation of the User repository."""

import logging
from typing import Optional

from inventory_pos.common.persistence.local_json_store import LocalJsonStore
from inventory_pos.common.utils.date_utils import from_iso, to_iso
from inventory_pos.user_domain.domain.entities.user import User
from inventory_pos.user_domain.domain.repositories.user_repository import IUserRepository

logger = logging.getLogger(__name__)

USERS_KEY = "inventory_users"


class LocalUserRepository(IUserRepository):
    def __init__(self, store: LocalJsonStore) -> None:
        self.store = store

    @staticmethod
    def _user_to_dict(user: User) -> dict:
        return {
            "id": user.id,
            "name": user.name,
            "businessName": user.business_name,
            "pin": user.pin,
            "logoUrl": user.logo_url,
            "role": user.role.value,
            "isActive": user.is_active,
            "currency": user.currency,
            "language": user.language,
            "createdAt": to_iso(user.created_at),
        }

    @staticmethod
    def _dict_to_user(data: dict) -> User:
        return User(
            id=data["id"],
            name=data["name"],
            business_name=data["businessName"],
            pin=data["pin"],
            logo_url=data.get("logoUrl"),
            role=data.get("role", "seller"),
            is_active=data.get("isActive", True),
            currency=data.get("currency"),
            language=data.get("language"),
            created_at=from_iso(data.get("createdAt")),
        )

    def _load(self) -> list[dict]:
        return self.store.load(USERS_KEY, [])

    def get_all_users(self) -> list[User]:
        return [self._dict_to_user(item) for item in self._load()]

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        found = next((item for item in self._load() if item["id"] == user_id), None)
        return self._dict_to_user(found) if found else None

    def get_user_by_business_name(self, business_name: str) -> Optional[User]:
        found = next((item for item in self._load() if item["businessName"] == business_name), None)
        return self._dict_to_user(found) if found else None

    def insert_user(self, user: User) -> User:
        users = self._load()
        users.insert(0, self._user_to_dict(user))
        self.store.save(USERS_KEY, users)
        logger.info(f"User {user.id} ({user.business_name}) added to local store.")
        return user

    def update_user(self, user: User) -> None:
        users = self._load()
        for index, item in enumerate(users):
            if item["id"] == user.id:
                users[index] = self._user_to_dict(user)
                break
        else:
            logger.warning(f"User with id {user.id} not found for update")
            return
        self.store.save(USERS_KEY, users)

    def delete_user(self, user_id: str) -> None:
        users = self._load()
        remaining = [item for item in users if item["id"] != user_id]
        if len(remaining) == len(users):
            logger.warning(f"User with id {user_id} not found for deletion")
            return
        self.store.save(USERS_KEY, remaining)
        logger.info(f"User {user_id} deleted from local store.")
