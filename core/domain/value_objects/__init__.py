"""Domain value objects."""

from .payment import (
    REFERENCE_PATTERN,
    CardPayment,
    CodPayment,
    MomoPayment,
    PaymentReference,
    PaymentSelection,
    payment_from_request,
)
from .value_objects import ExecutionID, Money

__all__ = [
    "REFERENCE_PATTERN",
    "CardPayment",
    "CodPayment",
    "ExecutionID",
    "MomoPayment",
    "Money",
    "PaymentReference",
    "PaymentSelection",
    "payment_from_request",
]
