"""
Email Notification Channel.

SendPulse first, SMTP (aiosmtplib) as fallback.
"""
import logging
from email.message import EmailMessage
from typing import Optional

import aiosmtplib

from core.application.interfaces import INotificationChannel, NotificationRecipient, RelayError
from core.settings.sections.notifications import EmailSettings

from .sendpulse_client import SendPulseClient


logger = logging.getLogger(__name__)


class EmailChannel(INotificationChannel):
    """Relays notifications by email."""

    name = "email"

    def __init__(self, settings: EmailSettings, sendpulse: Optional[SendPulseClient] = None):
        """
        Initialize email channel.

        Args:
            settings: Email settings (SendPulse and SMTP)
            sendpulse: SendPulse client; omitted when SendPulse is not configured
        """
        self.settings = settings
        self.sendpulse = sendpulse
        logger.info(
            f"EmailChannel initialized (sendpulse={'on' if sendpulse else 'off'}, "
            f"smtp={'on' if settings.smtp_configured else 'off'})"
        )

    async def send(self, recipient: NotificationRecipient, title: str, message: str) -> bool:
        if not self.settings.enabled:
            return False
        if not recipient.email:
            logger.warning(f"Email skipped: user {recipient.user_id} has no email address")
            return False
        await self.send_email(recipient.email, title, message)
        return True

    async def send_email(self, to: str, subject: str, text: str) -> None:
        """
        Send one email through the first provider that accepts it.

        Raises:
            RelayError: If no provider could send the message
        """
        if self.sendpulse is not None:
            try:
                await self.sendpulse.send_email(to, subject, text)
                return
            except Exception as e:
                logger.warning(f"⚠️ SendPulse failed, falling back to SMTP: {e}")

        if not self.settings.smtp_configured:
            raise RelayError("No available email service to send the message")

        email = EmailMessage()
        email["From"] = f"{self.settings.sender_name} <{self.settings.sender_email}>"
        email["To"] = to
        email["Subject"] = subject
        email.set_content(text)
        email.add_alternative(f"<p>{text}</p>", subtype="html")

        try:
            await aiosmtplib.send(
                email,
                hostname=self.settings.smtp_host,
                port=self.settings.smtp_port,
                username=self.settings.smtp_username or None,
                password=self.settings.smtp_password or None,
                start_tls=self.settings.smtp_start_tls,
            )
        except aiosmtplib.SMTPException as e:
            raise RelayError(f"SMTP email sending failed: {e}") from e
        logger.info(f"📧 SMTP email sent to {to}")
