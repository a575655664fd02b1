"""Repository interface for Delivery records."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.delivery import Delivery, DeliveryOverview


class DeliveryRepository(ABC):

    @abstractmethod
    async def get_by_order(self, order_id: str) -> Optional[Delivery]:
        pass

    @abstractmethod
    async def add(self, delivery: Delivery) -> None:
        """Insert a delivery.

        Raises:
            sqlalchemy.exc.IntegrityError: If the order already has a delivery
        """
        pass

    @abstractmethod
    async def save(self, delivery: Delivery) -> None:
        """Write status, courier and timestamps of an existing delivery."""
        pass

    @abstractmethod
    async def list_overview(self) -> List[DeliveryOverview]:
        pass

    @abstractmethod
    async def list_couriers(self) -> List[str]:
        pass
