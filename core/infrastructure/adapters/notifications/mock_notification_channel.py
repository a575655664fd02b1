"""
Mock Notification Channel Implementation.

This simulates notification relays for testing and demos.
"""
import logging
from typing import Optional

from core.application.interfaces import INotificationChannel, NotificationRecipient, RelayError


logger = logging.getLogger(__name__)


class MockNotificationChannel(INotificationChannel):
    """
    Mock implementation of a notification channel.

    Logs notifications instead of actually sending them.
    Useful for testing and demos.
    """

    def __init__(self, name: str = "email", fail_with: Optional[str] = None):
        """Initialize mock notification channel.

        Args:
            name: Channel name this mock stands in for
            fail_with: When set, every send raises RelayError with this message
        """
        self.name = name
        self.fail_with = fail_with
        self.notifications_sent = []
        logger.info(f"MockNotificationChannel[{name}] initialized (console logging)")

    async def send(self, recipient: NotificationRecipient, title: str, message: str) -> bool:
        if self.fail_with:
            raise RelayError(self.fail_with)

        self.notifications_sent.append(
            {
                "channel": self.name,
                "user_id": recipient.user_id,
                "email": recipient.email,
                "title": title,
                "message": message,
            }
        )
        logger.info(
            f"🔔 {self.name.upper()} NOTIFICATION:\n"
            f"   User: {recipient.user_id}\n"
            f"   Title: {title}\n"
            f"   Message: {message}"
        )
        return True

    def get_notifications(self) -> list:
        """Get all sent notifications (for testing)."""
        return self.notifications_sent

    def clear(self) -> None:
        """Clear notifications (for testing)."""
        self.notifications_sent.clear()
        logger.info("🗑️ Notifications cleared")
