"""SQLAlchemy implementation of OrderRepository."""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities import Order
from core.domain.repositories import OrderRepository

from ..mappers import OrderMapper
from ..models import OrderModel
from ..models.base import utcnow


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def add(self, order: Order) -> None:
        """Persist order aggregate with its items.

        Args:
            order: Order domain aggregate
        """
        self._session.add(OrderMapper.to_persistence(order))
        await self._session.flush()  # Propagate to DB without committing

    async def get(self, order_id: str, for_update: bool = False) -> Optional[Order]:
        """Retrieve order by identifier.

        Args:
            order_id: Order identifier
            for_update: Take a row lock (SELECT ... FOR UPDATE); ignored by SQLite

        Returns:
            Order if found, None otherwise
        """
        stmt = select(OrderModel).where(OrderModel.id == order_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def find_by_payment_reference(self, reference: str) -> Optional[Order]:
        result = await self._session.execute(
            select(OrderModel).where(OrderModel.payment_reference == reference)
        )
        model = result.scalar_one_or_none()
        return OrderMapper.to_domain(model) if model else None

    async def list_for_user(self, user_id: str) -> List[Order]:
        result = await self._session.execute(
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc())
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def list_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        """List orders with pagination, newest first.

        Args:
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            List of Order aggregates
        """
        result = await self._session.execute(
            select(OrderModel)
            .order_by(OrderModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def update_status(self, order_id: str, status: str) -> None:
        await self._session.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(status=status, updated_at=utcnow())
        )
        await self._session.flush()
