"""SQLAlchemy repository implementations."""

from .delivery_repository_impl import SqlAlchemyDeliveryRepository
from .notification_repository_impl import SqlAlchemyNotificationRepository
from .order_repository_impl import SqlAlchemyOrderRepository
from .user_repository_impl import SqlAlchemyUserRepository

__all__ = [
    "SqlAlchemyDeliveryRepository",
    "SqlAlchemyNotificationRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyUserRepository",
]
