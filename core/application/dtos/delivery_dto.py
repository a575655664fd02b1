"""Application DTOs for Delivery operations."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class DeliveryDTO(BaseModel):
    """Response DTO for a delivery."""

    id: str
    order_id: str
    address: str
    courier: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}


class DeliveryOverviewDTO(BaseModel):
    """Delivery joined with order total/status and customer contact."""

    delivery_id: str
    order_id: str
    address: str
    courier: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    total_amount: Decimal
    order_status: str
    customer_name: Optional[str] = None
    email: Optional[str] = None

    model_config = {"frozen": True}


class CourierDTO(BaseModel):
    name: str


class UpdateDeliveryStatusRequest(BaseModel):
    # Checked against DeliveryStatus by the service so the error shape is uniform
    status: str = ""


class AssignCourierRequest(BaseModel):
    courier: str = Field(default="", max_length=100)


class CreateDeliveryRequest(BaseModel):
    order_id: str = Field(..., alias="orderId", min_length=1)
    address: str = Field(..., min_length=1, max_length=255)
    courier: Optional[str] = Field(default=None, max_length=100)

    model_config = {"populate_by_name": True}
