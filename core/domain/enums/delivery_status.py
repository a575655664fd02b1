"""Delivery status enumeration."""

from enum import Enum


class DeliveryStatus(str, Enum):
    """Fixed set of states a delivery can be in."""

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"
    RETURNED = "returned"
    REFUNDED = "refunded"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]

    @classmethod
    def parse(cls, value: object) -> "DeliveryStatus":
        """Parse a raw status string.

        Raises:
            ValueError: If value is not one of the known statuses
        """
        if not isinstance(value, str):
            raise ValueError(f"Invalid status: {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Invalid status. Must be one of: {', '.join(cls.values())}"
            ) from None
