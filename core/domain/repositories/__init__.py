"""Domain repository interfaces."""

from .delivery_repository import DeliveryRepository
from .notification_repository import NotificationRepository
from .order_repository import OrderRepository
from .user_repository import UserRepository

__all__ = [
    "DeliveryRepository",
    "NotificationRepository",
    "OrderRepository",
    "UserRepository",
]
