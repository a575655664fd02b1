"""Application DTOs for notifications."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from core.domain.enums import NotificationType


class NotificationDTO(BaseModel):
    id: str
    user_id: str
    title: str
    message: str
    type: str
    is_read: bool
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}


class SendNotificationRequest(BaseModel):
    """Admin request to notify one user."""

    target_user_id: str = Field(..., alias="targetUserId", min_length=1)
    type: NotificationType
    title: str = Field(..., min_length=3, max_length=255)
    message: str = Field(..., min_length=3)

    model_config = {"populate_by_name": True}
