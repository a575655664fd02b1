"""
Payment value objects.

The method/channel pair sent by a client is parsed once into one of
``CodPayment``, ``CardPayment`` or ``MomoPayment``; everything downstream
dispatches on the type instead of re-checking strings.
"""
import re
import secrets
import time
from dataclasses import dataclass
from typing import Callable, ClassVar, List, Optional, Union

from ..enums.payment import PaymentMethod, allowed_channels
from ..exceptions import ValidationError

REFERENCE_PATTERN = re.compile(r"^ORD-\d+-\d+$")


@dataclass(frozen=True)
class PaymentReference:
    """String correlating an order with a gateway transaction."""

    value: str

    @classmethod
    def generate(cls, clock: Callable[[], float] = time.time) -> "PaymentReference":
        """Build ``ORD-<epoch millis>-<0..9999>``.

        Unique in practice, not guaranteed: two calls in the same millisecond
        collide with probability 1/10000.
        """
        millis = int(clock() * 1000)
        return cls(value=f"ORD-{millis}-{secrets.randbelow(10000)}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CodPayment:
    channel: str = "cod_pickup"

    method: ClassVar[PaymentMethod] = PaymentMethod.COD
    requires_gateway: ClassVar[bool] = False
    gateway_channels: ClassVar[List[str]] = []


@dataclass(frozen=True)
class CardPayment:
    channel: str

    method: ClassVar[PaymentMethod] = PaymentMethod.CARD
    requires_gateway: ClassVar[bool] = True
    gateway_channels: ClassVar[List[str]] = ["card"]


@dataclass(frozen=True)
class MomoPayment:
    channel: str
    phone: Optional[str] = None

    method: ClassVar[PaymentMethod] = PaymentMethod.MOMO
    requires_gateway: ClassVar[bool] = True
    gateway_channels: ClassVar[List[str]] = ["mobile_money"]

    @property
    def provider(self) -> str:
        return self.channel


PaymentSelection = Union[CodPayment, CardPayment, MomoPayment]


def payment_from_request(
    method: str, channel: str, phone: Optional[str] = None
) -> PaymentSelection:
    """Parse the raw method/channel pair.

    Raises:
        ValidationError: If the method is unknown or the channel does not belong to it
    """
    try:
        payment_method = PaymentMethod(method)
    except ValueError:
        raise ValidationError("Invalid payment method", param="paymentMethod") from None

    if channel not in allowed_channels(payment_method):
        raise ValidationError(
            f"Invalid payment channel for {payment_method.value}", param="paymentChannel"
        )

    if payment_method is PaymentMethod.COD:
        return CodPayment(channel=channel)
    if payment_method is PaymentMethod.CARD:
        return CardPayment(channel=channel)
    return MomoPayment(channel=channel, phone=phone)
