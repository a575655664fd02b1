"""In-app notification entity."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from ..enums.notification_type import NotificationType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Notification:
    id: str
    user_id: str
    title: str
    message: str
    type: NotificationType = NotificationType.EMAIL
    is_read: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        user_id: str,
        title: str,
        message: str,
        type: Optional[NotificationType] = None,
    ) -> "Notification":
        return cls(
            id=str(uuid4()),
            user_id=user_id,
            title=title,
            message=message,
            type=type or NotificationType.EMAIL,
        )

    def mark_read(self) -> None:
        self.is_read = True
        self.updated_at = _utcnow()
