"""User entity (read-only from this service's point of view)."""
from dataclasses import dataclass
from typing import Optional

from ..enums.user_role import UserRole


@dataclass
class User:
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER
    is_active: bool = True

    def has_role(self, *roles: str) -> bool:
        return self.role.value in roles
