"""Application DTOs."""

from .delivery_dto import (
    AssignCourierRequest,
    CourierDTO,
    CreateDeliveryRequest,
    DeliveryDTO,
    DeliveryOverviewDTO,
    UpdateDeliveryStatusRequest,
)
from .notification_dto import NotificationDTO, SendNotificationRequest
from .order_dto import (
    CreateOrderRequest,
    OrderDTO,
    OrderItemDTO,
    OrderItemRequest,
    OrderTrackingDTO,
    PaymentHandoffDTO,
    PaymentVerificationResult,
    PlaceOrderResult,
    WebhookResult,
)
from .payment_dto import PaymentHandoff, PaymentInitialization, PaymentVerification

__all__ = [
    "AssignCourierRequest",
    "CourierDTO",
    "CreateDeliveryRequest",
    "CreateOrderRequest",
    "DeliveryDTO",
    "DeliveryOverviewDTO",
    "NotificationDTO",
    "OrderDTO",
    "OrderItemDTO",
    "OrderItemRequest",
    "OrderTrackingDTO",
    "PaymentHandoff",
    "PaymentHandoffDTO",
    "PaymentInitialization",
    "PaymentVerification",
    "PaymentVerificationResult",
    "PlaceOrderResult",
    "SendNotificationRequest",
    "UpdateDeliveryStatusRequest",
    "WebhookResult",
]
