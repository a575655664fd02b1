"""Domain enumerations."""

from .delivery_status import DeliveryStatus
from .notification_type import NotificationType
from .payment import (
    CARD_CHANNELS,
    COD_CHANNELS,
    MOMO_CHANNELS,
    PaymentMethod,
    allowed_channels,
)
from .user_role import UserRole

__all__ = [
    "CARD_CHANNELS",
    "COD_CHANNELS",
    "MOMO_CHANNELS",
    "DeliveryStatus",
    "NotificationType",
    "PaymentMethod",
    "UserRole",
    "allowed_channels",
]
