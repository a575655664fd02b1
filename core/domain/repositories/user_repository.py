"""Repository interface for users and their push devices."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.user import User


class UserRepository(ABC):

    @abstractmethod
    async def get(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def active_device_tokens(self, user_id: str) -> List[str]:
        """Push tokens of all devices the user has not deactivated."""
        pass
