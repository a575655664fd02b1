"""Payment method and channel enumerations."""

from enum import Enum
from typing import FrozenSet


class PaymentMethod(str, Enum):
    """How the customer pays for an order."""

    COD = "cod"
    CARD = "card"
    MOMO = "momo"


COD_CHANNELS: FrozenSet[str] = frozenset({"cod_pickup"})
CARD_CHANNELS: FrozenSet[str] = frozenset({"visa", "mastercard", "verve"})
MOMO_CHANNELS: FrozenSet[str] = frozenset({"mtn", "vodafone", "airteltigo", "telecel"})

_CHANNELS = {
    PaymentMethod.COD: COD_CHANNELS,
    PaymentMethod.CARD: CARD_CHANNELS,
    PaymentMethod.MOMO: MOMO_CHANNELS,
}


def allowed_channels(method: PaymentMethod) -> FrozenSet[str]:
    """Return the payment channels accepted for a method."""
    return _CHANNELS[method]
