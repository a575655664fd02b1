"""Application service for in-app notifications and their relays."""

import logging
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.notification_dto import NotificationDTO
from core.application.interfaces import INotificationChannel, NotificationRecipient
from core.data.uow import create_uow
from core.domain.entities import Notification
from core.domain.enums import NotificationType
from core.domain.exceptions import NotFoundError


logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Records an in-app notification, then relays it best-effort.

    ``send`` never raises: missing input, storage failures and relay
    failures are all logged and reported as a ``None`` or a plain result.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        channels: Optional[Dict[NotificationType, INotificationChannel]] = None,
    ) -> None:
        """Initialize notification dispatcher.

        Args:
            session_factory: SQLAlchemy async session factory
            channels: Relay per notification type; types without one are stored only
        """
        self._session_factory = session_factory
        self._channels = dict(channels or {})

    async def send(
        self,
        user_id: Optional[str],
        title: Optional[str],
        message: Optional[str],
        channel: NotificationType = NotificationType.EMAIL,
    ) -> Optional[NotificationDTO]:
        """Store a notification for a user and relay it.

        Args:
            user_id: Target user
            title: Notification title
            message: Notification body
            channel: Relay channel

        Returns:
            The stored notification, or None if input was incomplete or
            the row could not be written
        """
        if not user_id or not title or not message:
            logger.warning(
                f"Notification skipped: user_id, title and message are required (user={user_id})"
            )
            return None

        notification = Notification.create(user_id, title, message, channel)
        try:
            uow = create_uow(self._session_factory)
            async with uow:
                await uow.notifications.add(notification)
                user = await uow.users.get(user_id)
                device_tokens = (
                    await uow.users.active_device_tokens(user_id)
                    if channel is NotificationType.PUSH
                    else []
                )
                await uow.commit()
        except Exception as e:
            logger.error(f"❌ Failed to store notification for user {user_id}: {e}", exc_info=True)
            return None

        if user is None:
            logger.warning(f"Notification {notification.id} stored but user {user_id} not found; relay skipped")
        else:
            recipient = NotificationRecipient(
                user_id=user.id,
                name=user.name,
                email=user.email,
                phone=user.phone,
                device_tokens=device_tokens,
            )
            await self._relay(recipient, channel, title, message)

        return self._to_dto(notification)

    async def _relay(
        self, recipient: NotificationRecipient, channel: NotificationType, title: str, message: str
    ) -> None:
        relay = self._channels.get(channel)
        if relay is None:
            logger.debug(f"No relay configured for {channel.value}")
            return
        try:
            delivered = await relay.send(recipient, title, message)
            if delivered:
                logger.info(f"🔔 {channel.value} notification relayed to user {recipient.user_id}")
        except Exception as e:
            logger.error(
                f"❌ {channel.value} relay failed for user {recipient.user_id}: {e}", exc_info=True
            )

    async def list_for_user(self, user_id: str) -> List[NotificationDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            notifications = await uow.notifications.list_for_user(user_id)
            return [self._to_dto(n) for n in notifications]

    async def list_all(self) -> List[NotificationDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            notifications = await uow.notifications.list_all()
            return [self._to_dto(n) for n in notifications]

    async def mark_read(self, notification_id: str, user_id: Optional[str] = None) -> NotificationDTO:
        """Mark a notification as read.

        Args:
            notification_id: Notification to update
            user_id: When given, the notification must belong to this user

        Raises:
            NotFoundError: If the notification does not exist (or is not the user's)
        """
        uow = create_uow(self._session_factory)
        async with uow:
            notification = await uow.notifications.get(notification_id)
            if notification is None or (user_id is not None and notification.user_id != user_id):
                raise NotFoundError("Notification not found")
            notification.mark_read()
            await uow.notifications.save(notification)
            await uow.commit()
            return self._to_dto(notification)

    @staticmethod
    def _to_dto(notification: Notification) -> NotificationDTO:
        return NotificationDTO(
            id=notification.id,
            user_id=notification.user_id,
            title=notification.title,
            message=notification.message,
            type=notification.type.value,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )
