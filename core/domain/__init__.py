"""Domain layer - pure domain models and interfaces."""

from .entities import Delivery, Notification, Order, OrderItem, User
from .exceptions import DomainError
from .repositories import (
    DeliveryRepository,
    NotificationRepository,
    OrderRepository,
    UserRepository,
)
from .value_objects import ExecutionID, Money, PaymentReference

__all__ = [
    "Delivery",
    "DeliveryRepository",
    "DomainError",
    "ExecutionID",
    "Money",
    "Notification",
    "NotificationRepository",
    "Order",
    "OrderItem",
    "OrderRepository",
    "PaymentReference",
    "User",
    "UserRepository",
]
