"""User repository interface."""
from abc import ABC, abstractmethod
from typing import Optional

from inventory_pos.user_domain.domain.entities.user import User


class IUserRepository(ABC):

    @abstractmethod
    def get_all_users(self) -> list[User]:
        """Retrieves all users, newest first."""
        pass

    @abstractmethod
    def get_user_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_user_by_business_name(self, business_name: str) -> Optional[User]:
        pass

    @abstractmethod
    def insert_user(self, user: User) -> User:
        pass

    @abstractmethod
    def update_user(self, user: User) -> None:
        pass

    @abstractmethod
    def delete_user(self, user_id: str) -> None:
        pass
