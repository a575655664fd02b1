"""Application layer - services, interfaces, and DTOs."""

from .dtos import (
    CreateOrderRequest,
    DeliveryDTO,
    NotificationDTO,
    OrderDTO,
    PaymentVerificationResult,
    PlaceOrderResult,
)
from .interfaces import INotificationChannel, IPaymentGateway, IRealtimePublisher

__all__ = [
    # DTOs
    "CreateOrderRequest",
    "DeliveryDTO",
    "NotificationDTO",
    "OrderDTO",
    "PaymentVerificationResult",
    "PlaceOrderResult",
    # Interfaces
    "INotificationChannel",
    "IPaymentGateway",
    "IRealtimePublisher",
]
