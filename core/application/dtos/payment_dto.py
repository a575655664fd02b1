"""DTOs exchanged with the payment gateway."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PaymentInitialization(BaseModel):
    """Everything the gateway needs to open a transaction."""

    amount_minor: int = Field(..., gt=0, description="Amount in minor currency units")
    currency: str = Field(..., min_length=3, max_length=3)
    reference: str
    email: str
    callback_url: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    channels: List[str] = Field(default_factory=list)
    mobile_money: Optional[Dict[str, Optional[str]]] = None

    model_config = {"frozen": True}


class PaymentHandoff(BaseModel):
    """Gateway answer to an initialization: where to send the customer."""

    authorization_url: str
    access_code: Optional[str] = None
    reference: str

    model_config = {"frozen": True}


class PaymentVerification(BaseModel):
    """Normalized gateway verification result."""

    success: bool
    status: str = Field(..., description="Provider-native transaction status")
    reference: str
    amount_minor: Optional[int] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    message: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def order_id(self) -> Optional[str]:
        value = self.metadata.get("orderId")
        return str(value) if value else None
