"""
SendPulse SMTP API client.

The OAuth access token is kept in a TTLCache owned by the client and
refreshed 5 seconds before the provider says it expires.
"""
import base64
import logging
from typing import Any, Dict, Optional

import aiohttp

from core.infrastructure.cache import TTLCache
from core.settings.sections.notifications import EmailSettings


logger = logging.getLogger(__name__)

TOKEN_CACHE_KEY = "sendpulse:access_token"
TOKEN_EXPIRY_MARGIN_SECONDS = 5


class SendPulseError(Exception):
    """SendPulse rejected a request or could not be reached."""


class SendPulseClient:
    """Minimal SendPulse client: token retrieval and transactional email."""

    def __init__(
        self,
        settings: EmailSettings,
        cache: TTLCache,
        timeout_seconds: float = 10.0,
    ):
        """
        Initialize SendPulse client.

        Args:
            settings: Email settings with SendPulse credentials
            cache: Token cache (one per process)
            timeout_seconds: Total timeout per HTTP call
        """
        self.settings = settings
        self.cache = cache
        self.base_url = settings.sendpulse_base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def get_token(self) -> str:
        """Return a valid access token, fetching a new one when needed."""
        token = self.cache.get(TOKEN_CACHE_KEY)
        if token:
            return token

        body = await self._post(
            "/oauth/access_token",
            {
                "grant_type": "client_credentials",
                "client_id": self.settings.sendpulse_client_id,
                "client_secret": self.settings.sendpulse_client_secret,
            },
        )
        token = body.get("access_token")
        if not token:
            raise SendPulseError("SendPulse token retrieval failed")

        expires_in = float(body.get("expires_in") or 0)
        self.cache.set(TOKEN_CACHE_KEY, token, expires_in - TOKEN_EXPIRY_MARGIN_SECONDS)
        logger.info("✅ SendPulse token retrieved")
        return token

    async def send_email(self, to: str, subject: str, text: str, html: Optional[str] = None) -> Dict[str, Any]:
        """
        Send one transactional email.

        Raises:
            SendPulseError: If the token or the send call fails
        """
        token = await self.get_token()
        html = html or f"<p>{text}</p>"
        payload = {
            "email": {
                "subject": subject,
                "text": text,
                "html": base64.b64encode(html.encode("utf-8")).decode("ascii"),
                "from": {
                    "name": self.settings.sender_name,
                    "email": self.settings.sender_email,
                },
                "to": [{"email": to}],
            }
        }
        body = await self._post("/smtp/emails", payload, token=token)
        logger.info(f"📧 SendPulse email sent to {to}")
        return body

    async def _post(self, path: str, payload: Dict[str, Any], token: Optional[str] = None) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(f"{self.base_url}{path}", json=payload, headers=headers) as response:
                    if response.status == 401 and token:
                        self.cache.invalidate(TOKEN_CACHE_KEY)
                    if response.status >= 400:
                        error_text = await response.text()
                        raise SendPulseError(f"SendPulse API error: {response.status} - {error_text}")
                    return await response.json(content_type=None) or {}
        except aiohttp.ClientError as e:
            raise SendPulseError(f"SendPulse request failed: {e}") from e
