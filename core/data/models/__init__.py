"""Database models."""

from .base import Base
from .delivery_model import DeliveryModel
from .notification_model import NotificationModel
from .order_model import OrderItemModel, OrderModel
from .user_model import UserDeviceModel, UserModel

__all__ = [
    "Base",
    "DeliveryModel",
    "NotificationModel",
    "OrderItemModel",
    "OrderModel",
    "UserDeviceModel",
    "UserModel",
]
