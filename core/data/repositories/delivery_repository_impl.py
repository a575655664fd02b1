"""SQLAlchemy implementation of DeliveryRepository."""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities import Delivery, DeliveryOverview
from core.domain.repositories import DeliveryRepository

from ..mappers import DeliveryMapper
from ..models import DeliveryModel, OrderModel, UserModel


class SqlAlchemyDeliveryRepository(DeliveryRepository):
    """Concrete implementation of DeliveryRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_order(self, order_id: str) -> Optional[Delivery]:
        result = await self._session.execute(
            select(DeliveryModel).where(DeliveryModel.order_id == order_id).limit(1)
        )
        model = result.scalar_one_or_none()
        return DeliveryMapper.to_domain(model) if model else None

    async def add(self, delivery: Delivery) -> None:
        self._session.add(DeliveryMapper.to_persistence(delivery))
        await self._session.flush()

    async def save(self, delivery: Delivery) -> None:
        model = await self._session.get(DeliveryModel, delivery.id)
        if model is None:
            raise LookupError(f"Delivery {delivery.id} does not exist")
        DeliveryMapper.update_persistence(delivery, model)
        await self._session.flush()

    async def list_overview(self) -> List[DeliveryOverview]:
        """Deliveries joined with order totals and customer contact, newest first."""
        result = await self._session.execute(
            select(
                DeliveryModel,
                OrderModel.total_amount,
                OrderModel.status,
                UserModel.name,
                UserModel.email,
            )
            .join(OrderModel, DeliveryModel.order_id == OrderModel.id)
            .join(UserModel, OrderModel.user_id == UserModel.id)
            .order_by(DeliveryModel.created_at.desc())
        )
        return [
            DeliveryOverview(
                delivery_id=delivery.id,
                order_id=delivery.order_id,
                address=delivery.address,
                courier=delivery.courier,
                status=delivery.status,
                created_at=delivery.created_at,
                updated_at=delivery.updated_at,
                total_amount=Decimal(str(total_amount)),
                order_status=order_status,
                customer_name=name,
                email=email,
            )
            for delivery, total_amount, order_status, name, email in result.all()
        ]

    async def list_couriers(self) -> List[str]:
        result = await self._session.execute(
            select(DeliveryModel.courier)
            .where(DeliveryModel.courier.is_not(None))
            .distinct()
            .order_by(DeliveryModel.courier.asc())
        )
        return list(result.scalars().all())
