"""
SMS Notification Channel.

Sends through the Twilio REST API and falls back to email when Twilio is
unavailable or rejects the message.
"""
import logging
import re
from typing import Optional

import aiohttp

from core.application.interfaces import INotificationChannel, NotificationRecipient, RelayError
from core.settings.sections.notifications import SmsSettings

from .email_channel import EmailChannel


logger = logging.getLogger(__name__)

E164_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")
MAX_SMS_LENGTH = 1600


class SmsChannel(INotificationChannel):
    """Relays notifications by SMS."""

    name = "sms"

    def __init__(
        self,
        settings: SmsSettings,
        fallback: Optional[EmailChannel] = None,
        timeout_seconds: float = 10.0,
    ):
        self.settings = settings
        self.fallback = fallback
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        base = settings.base_url.rstrip("/")
        self.api_url = f"{base}/2010-04-01/Accounts/{settings.account_sid}/Messages.json"
        logger.info(f"SmsChannel initialized (twilio={'on' if settings.configured else 'off'})")

    async def send(self, recipient: NotificationRecipient, title: str, message: str) -> bool:
        if not self.settings.enabled:
            return False

        body = f"{title}: {message}"
        if len(body) > MAX_SMS_LENGTH:
            raise RelayError("SMS content is too long")

        phone = (recipient.phone or "").strip()
        if phone and E164_PATTERN.match(phone) and self.settings.configured:
            try:
                await self._send_twilio(phone, body)
                return True
            except RelayError as e:
                logger.warning(f"⚠️ Twilio SMS failed to {phone}: {e}")
        elif phone and not E164_PATTERN.match(phone):
            logger.warning(f"⚠️ Invalid phone number format for user {recipient.user_id}")
        else:
            logger.warning(f"⚠️ Twilio unavailable for user {recipient.user_id}, attempting fallback")

        if self.fallback is None or not recipient.email:
            raise RelayError("No available service to send SMS")

        await self.fallback.send_email(recipient.email, title, message)
        logger.info(f"✅ SMS for user {recipient.user_id} sent via email fallback")
        return True

    async def _send_twilio(self, to: str, body: str) -> None:
        form = {"To": to, "From": self.settings.from_number, "Body": body}
        auth = aiohttp.BasicAuth(self.settings.account_sid, self.settings.auth_token)
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(self.api_url, data=form, auth=auth) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        raise RelayError(f"Twilio API error: {response.status} - {error_text}")
                    result = await response.json(content_type=None) or {}
        except aiohttp.ClientError as e:
            raise RelayError(f"Twilio request failed: {e}") from e
        logger.info(f"✅ SMS sent via Twilio to {to}: {result.get('sid')}")
