"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from .delivery_dto import DeliveryDTO


class OrderItemRequest(BaseModel):
    """Line item as sent by the client."""

    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(..., ge=1, strict=True)
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)

    model_config = {"frozen": True, "populate_by_name": True}


class CreateOrderRequest(BaseModel):
    """Request DTO for placing an order."""

    items: List[OrderItemRequest] = Field(..., min_length=1)
    address: Optional[str] = Field(default=None, max_length=255)
    payment_method: str = Field(..., alias="paymentMethod")
    payment_channel: str = Field(..., alias="paymentChannel")
    total_amount: Decimal = Field(
        ..., alias="totalAmount", gt=0, max_digits=12, decimal_places=2
    )
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=20)
    is_premium: bool = Field(default=False, alias="isPremium")
    estimated_delivery: Optional[datetime] = Field(default=None, alias="estimatedDelivery")

    model_config = {"frozen": True, "populate_by_name": True}


class OrderItemDTO(BaseModel):
    """DTO for order item."""

    id: Optional[str] = None
    product_id: str
    quantity: int
    price: Decimal

    model_config = {"frozen": True}


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: str
    user_id: str
    items: List[OrderItemDTO] = Field(default_factory=list)
    total_amount: Decimal
    currency: str
    payment_method: str
    payment_channel: Optional[str] = None
    payment_reference: Optional[str] = None
    address: Optional[str] = None
    status: str
    is_premium: bool = False
    estimated_delivery: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}


class PaymentHandoffDTO(BaseModel):
    """Data the client needs to continue at the gateway (camelCase on the wire)."""

    method: str
    channel: str
    reference: str
    authorization_url: str
    access_code: Optional[str] = None
    callback_url: str

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class PlaceOrderResult(BaseModel):
    order: OrderDTO
    payment: Optional[PaymentHandoffDTO] = None
    delivery: Optional[DeliveryDTO] = None
    redirect_url: str = Field(..., serialization_alias="redirectUrl")

    model_config = {"frozen": True}


class PaymentVerificationResult(BaseModel):
    """Outcome of verifying a payment reference."""

    success: bool
    message: str
    reference: str
    order_id: Optional[str] = Field(default=None, serialization_alias="orderId")
    gateway_status: Optional[str] = Field(default=None, serialization_alias="gatewayStatus")
    delivery: Optional[DeliveryDTO] = None
    redirect_url: str = Field(..., serialization_alias="redirectUrl")

    model_config = {"frozen": True}


class OrderTrackingDTO(BaseModel):
    order_id: str
    status: str
    estimated_delivery: Optional[datetime] = None
    is_premium: bool = False
    delivery_status: Optional[str] = None
    courier: Optional[str] = None

    model_config = {"frozen": True}


class WebhookResult(BaseModel):
    received: bool = True
    event: Optional[str] = None
    processed: bool = False
    order_id: Optional[str] = Field(default=None, serialization_alias="orderId")

    model_config = {"frozen": True}
