"""
Paystack REST client.

Implements:
- Bounded retry with exponential backoff for transient errors
- Idempotency key on transaction initialization
- Per-request total timeout
- Webhook signature verification (HMAC-SHA512)
"""
import asyncio
import hashlib
import hmac
from typing import Any, Dict, Optional, Tuple

import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fosten_sdk.logging import get_logger

from .errors import PaystackAPIError, PaystackError, PaystackTransientError

logger = get_logger("PaystackAPI")


def compute_signature(secret_key: str, raw_body: bytes) -> str:
    """HMAC-SHA512 hex digest of the raw request body."""
    return hmac.new(secret_key.encode("utf-8"), raw_body, hashlib.sha512).hexdigest()


class PaystackAPI:
    """
    Paystack transaction API adapter.

    Provides pure Paystack operations with no knowledge of orders or deliveries.
    """

    def __init__(
        self,
        secret_key: str,
        base_url: str = "https://api.paystack.co",
        timeout_seconds: float = 10.0,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
    ) -> None:
        """
        Initialize Paystack client.

        Args:
            secret_key: Paystack secret key (sk_live_... / sk_test_...)
            base_url: API root
            timeout_seconds: Total timeout for one HTTP attempt
            max_attempts: Attempts per logical call, first try included
            backoff_seconds: Base of the exponential backoff between attempts
        """
        self.secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds

    # ====================== 🔐 WEBHOOKS ======================

    def verify_signature(self, raw_body: bytes, signature: Optional[str]) -> bool:
        """
        Check a webhook signature header against the raw body.

        Args:
            raw_body: Exact bytes received
            signature: Value of the signature header

        Returns:
            True only if the header equals HMAC-SHA512(secret, body)
        """
        if not signature or not self.secret_key:
            return False
        expected = compute_signature(self.secret_key, raw_body)
        return hmac.compare_digest(expected, signature.strip().lower())

    # ====================== 💳 TRANSACTIONS ======================

    async def initialize_transaction(
        self, payload: Dict[str, Any], idempotency_key: str
    ) -> Dict[str, Any]:
        """
        POST /transaction/initialize.

        Args:
            payload: Paystack initialize body (email, amount, currency, reference, ...)
            idempotency_key: Sent as Idempotency-Key so retries reuse one transaction

        Returns:
            The ``data`` object (authorization_url, access_code, reference)

        Raises:
            PaystackError: If every attempt failed or Paystack rejected the request
        """
        body = await self._request(
            "POST",
            "/transaction/initialize",
            json=payload,
            headers={"Idempotency-Key": idempotency_key},
        )
        if not body.get("status") or not isinstance(body.get("data"), dict):
            raise PaystackAPIError(
                body.get("message") or "Transaction initialization rejected", body=body
            )
        logger.info(f"Paystack transaction initialized: {payload.get('reference')}")
        return body["data"]

    async def verify_transaction(self, reference: str) -> Dict[str, Any]:
        """
        GET /transaction/verify/{reference}.

        Returns:
            Full response body: {"status": bool, "message": str, "data": {...}}
        """
        return await self._request("GET", f"/transaction/verify/{reference}")

    # ====================== 🌐 HTTP ======================

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Send one logical request, retrying transient failures."""
        url = f"{self.base_url}{path}"
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(PaystackTransientError),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff_seconds, max=8),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                if attempt_number > 1:
                    logger.warning(f"Retrying Paystack {method} {path} (attempt {attempt_number})")
                status, body = await self._send(method, url, json=json, headers=headers)
                return self._check_response(status, body)
        raise PaystackError(f"Paystack {method} {path} failed")  # pragma: no cover

    @staticmethod
    def _check_response(status: int, body: Any) -> Dict[str, Any]:
        """Classify an HTTP response; only 2xx bodies are returned."""
        message = body.get("message") if isinstance(body, dict) else None
        if status == 429 or status >= 500:
            raise PaystackTransientError(
                message or f"Paystack returned HTTP {status}", status_code=status, body=body
            )
        if status >= 400:
            raise PaystackAPIError(
                message or f"Paystack returned HTTP {status}", status_code=status, body=body
            )
        if not isinstance(body, dict):
            raise PaystackAPIError("Unexpected Paystack response", status_code=status, body=body)
        return body

    async def _send(
        self,
        method: str,
        url: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Tuple[int, Any]:
        """One HTTP attempt. Network errors and timeouts become transient errors."""
        request_headers = {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }
        if headers:
            request_headers.update(headers)

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(
                    method, url, json=json, headers=request_headers
                ) as response:
                    try:
                        body = await response.json(content_type=None)
                    except ValueError:
                        body = None
                    return response.status, body
        except asyncio.TimeoutError as e:
            raise PaystackTransientError(f"Paystack request timed out: {url}") from e
        except aiohttp.ClientError as e:
            raise PaystackTransientError(f"Paystack request failed: {e}") from e
