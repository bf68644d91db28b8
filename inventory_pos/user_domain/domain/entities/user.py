"""User (sub-business) entity and session value object."""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from inventory_pos.common.utils.date_utils import utc_now


class UserRole(str, enum.Enum):
    ADMINISTRATOR = "administrator"
    SELLER = "seller"
    INVENTORY_CLERK = "inventory_clerk"
    VIEWER = "viewer"


@dataclass
class User:
    """A sub-business account. The PIN is stored and compared in plaintext."""

    name: str
    business_name: str
    pin: str
    role: UserRole = UserRole.SELLER
    is_active: bool = True
    logo_url: Optional[str] = None
    currency: Optional[str] = None
    language: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        self.role = UserRole(self.role)


@dataclass
class UserSession:
    """The logged-in user of one running application, with inactivity tracking."""

    user: User
    started_at: datetime = field(default_factory=utc_now)
    last_activity: datetime | None = None

    def __post_init__(self) -> None:
        if self.last_activity is None:
            self.last_activity = self.started_at

    def touch(self, now: datetime | None = None) -> None:
        self.last_activity = now or utc_now()

    def is_expired(self, timeout_minutes: int, now: datetime | None = None) -> bool:
        now = now or utc_now()
        return now - self.last_activity >= timedelta(minutes=timeout_minutes)
