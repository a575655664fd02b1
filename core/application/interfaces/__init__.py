"""Application layer interfaces."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.application.dtos.payment_dto import (
    PaymentHandoff,
    PaymentInitialization,
    PaymentVerification,
)


class IPaymentGateway(ABC):
    """
    Interface for payment gateway operations.

    One implementation is selected at startup from configuration; the
    order workflow never inspects which provider it talks to.
    """

    @abstractmethod
    async def initialize(self, request: PaymentInitialization) -> PaymentHandoff:
        """
        Open a transaction at the gateway.

        Args:
            request: Amount, currency, reference and routing metadata

        Returns:
            Authorization URL and access code for the customer

        Raises:
            PaymentGatewayError: If the transaction could not be opened
        """
        pass

    @abstractmethod
    async def verify(self, reference: str) -> PaymentVerification:
        """
        Ask the gateway for the final state of a transaction.

        Args:
            reference: Payment reference generated at order placement

        Returns:
            Normalized verification result. Gateway rejections are reported
            as ``success=False`` rather than raised.
        """
        pass

    @abstractmethod
    def verify_webhook_signature(self, raw_body: bytes, signature: Optional[str]) -> bool:
        """
        Check that a webhook body was signed with the shared secret.

        Args:
            raw_body: Exact request body bytes
            signature: Signature header value

        Returns:
            True if the signature matches
        """
        pass


@dataclass(frozen=True)
class NotificationRecipient:
    """Contact details a relay channel may need."""

    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    device_tokens: List[str] = field(default_factory=list)


class RelayError(Exception):
    """A notification channel could not hand the message to any provider."""


class INotificationChannel(ABC):
    """
    Interface for one notification relay (email, SMS, push).

    Implementations raise on failure; the dispatcher decides what to swallow.
    """

    name: str = "channel"

    @abstractmethod
    async def send(self, recipient: NotificationRecipient, title: str, message: str) -> bool:
        """
        Relay a notification.

        Returns:
            True if a provider accepted the message, False if the channel
            had nothing to do (not configured, no address, no devices)
        """
        pass


class IRealtimePublisher(ABC):
    """Interface for pushing events to connected clients."""

    @abstractmethod
    async def publish(self, room: str, event: str, data: Dict[str, Any]) -> None:
        """
        Publish an event to a room.

        Args:
            room: Room name, e.g. ``user_<id>``
            event: Event name, e.g. ``delivery_status_update``
            data: JSON-serializable payload
        """
        pass

    async def close(self) -> None:
        """Release connections. Default implementation does nothing."""
        pass


__all__ = [
    "INotificationChannel",
    "IPaymentGateway",
    "IRealtimePublisher",
    "NotificationRecipient",
    "RelayError",
]
