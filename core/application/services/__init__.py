"""Application services."""
from .delivery_service import DeliveryService, OrderLocks
from .notification_service import NotificationDispatcher
from .order_service import OrderWorkflowService

__all__ = ["DeliveryService", "NotificationDispatcher", "OrderLocks", "OrderWorkflowService"]
