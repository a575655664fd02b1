"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID, uuid4

MINOR_UNITS_PER_MAJOR = 100


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary value with currency.

    Amounts are Decimal in major units (cedis, naira). Gateways take
    integer minor units, see ``to_minor_units``.
    """
    amount: Decimal
    currency: str = "GHS"

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if not isinstance(self.currency, str) or len(self.currency) != 3:
            raise ValueError(
                f"Currency must be 3-letter ISO code, got: {self.currency}"
            )
        object.__setattr__(self, 'currency', self.currency.upper())

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def is_positive(self) -> bool:
        return self.amount > 0

    def to_minor_units(self) -> int:
        """Amount in the smallest currency unit (pesewas, kobo), rounded half up."""
        minor = self.amount * MINOR_UNITS_PER_MAJOR
        return int(minor.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ExecutionID:
    """Correlation id shared by one unit of work and the events it emits."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)
