"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from ..enums.payment import PaymentMethod
from ..exceptions import ValidationError
from ..value_objects import Money, PaymentSelection


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderItem:
    """Line item captured at order time. Immutable once persisted."""
    product_id: str
    quantity: int
    price: Money
    id: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValidationError("Quantity must be a positive integer", param="items.quantity")
        if not self.price.is_positive():
            raise ValidationError("Price must be greater than 0", param="items.price")


@dataclass
class Order:
    """
    Order aggregate root.

    The total is trusted from the caller and is not recomputed from the
    items. Only ``status`` and ``payment_reference`` change after creation.
    """
    id: str
    user_id: str
    items: List[OrderItem]
    total: Money
    payment_method: PaymentMethod
    payment_channel: str
    address: Optional[str] = None
    payment_reference: Optional[str] = None
    status: str = "pending"
    is_premium: bool = False
    estimated_delivery: Optional[datetime] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    INITIAL_STATUS = "pending"
    AWAITING_PAYMENT_STATUS = "awaiting_payment"

    @classmethod
    def place(
        cls,
        user_id: str,
        items: List[OrderItem],
        total: Money,
        payment: PaymentSelection,
        address: Optional[str] = None,
        payment_reference: Optional[str] = None,
        is_premium: bool = False,
        estimated_delivery: Optional[datetime] = None,
    ) -> "Order":
        """Create a new order from validated input.

        Raises:
            ValidationError: If items are empty or total is not positive
        """
        if not items:
            raise ValidationError("Order must have at least one item", param="items")
        if not total.is_positive():
            raise ValidationError("Invalid total amount", param="totalAmount")
        if payment.requires_gateway and not payment_reference:
            raise ValidationError("Payment reference is required", param="paymentReference")

        status = cls.AWAITING_PAYMENT_STATUS if payment.requires_gateway else cls.INITIAL_STATUS
        return cls(
            id=str(uuid4()),
            user_id=user_id,
            items=list(items),
            total=total,
            payment_method=payment.method,
            payment_channel=payment.channel,
            address=address,
            payment_reference=payment_reference,
            status=status,
            is_premium=is_premium,
            estimated_delivery=estimated_delivery,
        )

    def belongs_to(self, user_id: str) -> bool:
        return self.user_id == user_id
