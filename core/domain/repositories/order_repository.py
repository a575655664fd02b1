"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order import Order


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> None:
        """Persist a new order together with its items.

        Args:
            order: Order aggregate to persist
        """
        pass

    @abstractmethod
    async def get(self, order_id: str, for_update: bool = False) -> Optional[Order]:
        """Retrieve order by identifier.

        Args:
            order_id: Order identifier
            for_update: Lock the row until the transaction ends

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_payment_reference(self, reference: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[Order]:
        pass

    @abstractmethod
    async def list_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        pass

    @abstractmethod
    async def update_status(self, order_id: str, status: str) -> None:
        """Overwrite the free-text status of an order."""
        pass
