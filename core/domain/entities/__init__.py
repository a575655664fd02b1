"""Domain entities."""

from .delivery import DEFAULT_COURIER, NO_ADDRESS, Delivery, DeliveryOverview
from .notification import Notification
from .order import Order, OrderItem
from .user import User

__all__ = [
    "DEFAULT_COURIER",
    "NO_ADDRESS",
    "Delivery",
    "DeliveryOverview",
    "Notification",
    "Order",
    "OrderItem",
    "User",
]
