"""Notification channel enumeration."""

from enum import Enum


class NotificationType(str, Enum):
    """Relay channel used for a notification."""

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
