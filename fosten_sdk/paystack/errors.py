"""Paystack client errors."""

from typing import Any, Optional


class PaystackError(Exception):
    """Base exception for Paystack API failures."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[Any] = None,
    ):
        """
        Initialize Paystack error.

        Args:
            message: Error message
            status_code: HTTP status returned by Paystack, if any
            body: Decoded response body, if any
        """
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class PaystackTransientError(PaystackError):
    """Network failure, timeout, rate limit or 5xx. Safe to retry."""


class PaystackAPIError(PaystackError):
    """Request rejected by Paystack (4xx other than 429). Not retried."""
