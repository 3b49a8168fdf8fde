"""Platform users (master domain owners and admins)."""

from enum import StrEnum

from app.models.base import BaseRecord


class UserRole(StrEnum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"


class User(BaseRecord):
    email: str
    name: str = ""
    role: UserRole = UserRole.ADMIN

    def is_owner(self) -> bool:
        return self.role is UserRole.OWNER

    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
