"""Data Transfer Objects for user (sub-business) management."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class UserFormDTO:
    """DTO for creating a user; role and active flag are assigned by the service."""

    name: str
    business_name: str
    pin: str
    logo_url: Optional[str] = None
    currency: Optional[str] = None
    language: Optional[str] = None
