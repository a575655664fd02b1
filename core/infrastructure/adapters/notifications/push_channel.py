"""
Push Notification Channel.

Multicasts to every active device token of the user through FCM.
"""
import logging

import aiohttp

from core.application.interfaces import INotificationChannel, NotificationRecipient, RelayError
from core.settings.sections.notifications import PushSettings


logger = logging.getLogger(__name__)


class PushChannel(INotificationChannel):
    """Relays notifications as push messages."""

    name = "push"

    def __init__(self, settings: PushSettings, timeout_seconds: float = 10.0):
        self.settings = settings
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        logger.info(f"PushChannel initialized (fcm={'on' if settings.configured else 'off'})")

    async def send(self, recipient: NotificationRecipient, title: str, message: str) -> bool:
        if not self.settings.enabled or not self.settings.configured:
            return False
        if not recipient.device_tokens:
            logger.warning(f"⚠️ Push skipped: No active device tokens for user {recipient.user_id}")
            return False

        payload = {
            "registration_ids": recipient.device_tokens,
            "notification": {"title": title, "body": message},
            "data": {"userId": recipient.user_id},
        }
        headers = {"Authorization": f"key={self.settings.server_key}"}

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(self.settings.endpoint, json=payload, headers=headers) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        raise RelayError(f"FCM error: {response.status} - {error_text}")
                    result = await response.json(content_type=None) or {}
        except aiohttp.ClientError as e:
            raise RelayError(f"FCM request failed: {e}") from e

        logger.info(
            f"📲 Push sent to user {recipient.user_id}: "
            f"{result.get('success', 0)} success, {result.get('failure', 0)} failure"
        )
        return True
