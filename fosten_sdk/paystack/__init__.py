"""Paystack SDK module."""

from .client import PaystackAPI, compute_signature
from .errors import PaystackAPIError, PaystackError, PaystackTransientError

__all__ = [
    "PaystackAPI",
    "PaystackAPIError",
    "PaystackError",
    "PaystackTransientError",
    "compute_signature",
]
