"""Repository interface for in-app notifications."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.notification import Notification


class NotificationRepository(ABC):

    @abstractmethod
    async def add(self, notification: Notification) -> None:
        pass

    @abstractmethod
    async def get(self, notification_id: str) -> Optional[Notification]:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[Notification]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Notification]:
        pass

    @abstractmethod
    async def save(self, notification: Notification) -> None:
        pass
