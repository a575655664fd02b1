"""SQLAlchemy implementation of NotificationRepository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities import Notification
from core.domain.repositories import NotificationRepository

from ..mappers import NotificationMapper
from ..models import NotificationModel


class SqlAlchemyNotificationRepository(NotificationRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, notification: Notification) -> None:
        self._session.add(NotificationMapper.to_persistence(notification))
        await self._session.flush()

    async def get(self, notification_id: str) -> Optional[Notification]:
        model = await self._session.get(NotificationModel, notification_id)
        return NotificationMapper.to_domain(model) if model else None

    async def list_for_user(self, user_id: str) -> List[Notification]:
        result = await self._session.execute(
            select(NotificationModel)
            .where(NotificationModel.targeted_user == user_id)
            .order_by(NotificationModel.created_at.desc())
        )
        return [NotificationMapper.to_domain(model) for model in result.scalars().all()]

    async def list_all(self) -> List[Notification]:
        result = await self._session.execute(
            select(NotificationModel).order_by(NotificationModel.created_at.desc())
        )
        return [NotificationMapper.to_domain(model) for model in result.scalars().all()]

    async def save(self, notification: Notification) -> None:
        model = await self._session.get(NotificationModel, notification.id)
        if model is None:
            raise LookupError(f"Notification {notification.id} does not exist")
        model.is_read = notification.is_read
        model.updated_at = notification.updated_at
        await self._session.flush()
