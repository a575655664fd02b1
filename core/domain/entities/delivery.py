"""Delivery entity and its read model."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from ..enums.delivery_status import DeliveryStatus
from ..exceptions import ValidationError

DEFAULT_COURIER = "Default Courier"
NO_ADDRESS = "No address provided"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Delivery:
    """Fulfillment record; exactly one per order."""
    id: str
    order_id: str
    address: str
    courier: Optional[str] = DEFAULT_COURIER
    status: DeliveryStatus = DeliveryStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def provision(
        cls, order_id: str, address: Optional[str] = None, courier: Optional[str] = None
    ) -> "Delivery":
        return cls(
            id=str(uuid4()),
            order_id=order_id,
            address=(address or "").strip() or NO_ADDRESS,
            courier=courier or DEFAULT_COURIER,
            status=DeliveryStatus.PENDING,
        )

    def change_status(self, status: DeliveryStatus) -> None:
        self.status = status
        self.updated_at = _utcnow()

    def assign_courier(self, courier: str) -> None:
        if not courier or not courier.strip():
            raise ValidationError("Courier is required", param="courier")
        self.courier = courier.strip()
        self.updated_at = _utcnow()


@dataclass(frozen=True)
class DeliveryOverview:
    """Delivery joined with its order and customer for admin listings."""
    delivery_id: str
    order_id: str
    address: str
    courier: Optional[str]
    status: str
    created_at: datetime
    updated_at: datetime
    total_amount: Decimal
    order_status: str
    customer_name: Optional[str]
    email: Optional[str]
