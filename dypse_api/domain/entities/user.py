"""Domain entity representing a platform account."""

from dataclasses import dataclass
from datetime import datetime

from .role import ROLE_ADMIN, ROLE_EMPLOYER, ROLE_YOUTH, Role


@dataclass
class User:
    """An account of any role; youth accounts additionally own a profile."""

    id: int | None
    role: Role
    first_name: str
    last_name: str
    email: str
    password: str
    phone: str | None
    last_login: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
    is_active: bool

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_role(self, alias: str) -> bool:
        return self.role.matches(alias)

    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)

    def is_employer(self) -> bool:
        return self.has_role(ROLE_EMPLOYER)

    def is_youth(self) -> bool:
        return self.has_role(ROLE_YOUTH)


__all__ = ["User"]
