"""Application service for Delivery provisioning and updates."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application import events
from core.application.dtos.delivery_dto import CourierDTO, DeliveryDTO, DeliveryOverviewDTO
from core.data.uow import UnitOfWork, create_uow
from core.domain.entities import Delivery, Order
from core.domain.enums import DeliveryStatus
from core.domain.exceptions import NotFoundError, ValidationError
from orchestration.bus import EventBusProtocol


logger = logging.getLogger(__name__)

# One retry after losing an insert race to another writer
PROVISION_ATTEMPTS = 2

DeliveryWork = Callable[[UnitOfWork, Order, Delivery], Awaitable[None]]


class OrderLocks:
    """Per-order asyncio locks, dropped when nobody holds or waits for them."""

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        self._holders: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, order_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(order_id, asyncio.Lock())
        self._holders[order_id] = self._holders.get(order_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[order_id] -= 1
            if self._holders[order_id] == 0:
                del self._holders[order_id]
                del self._locks[order_id]


class DeliveryService:
    """
    Single entry point for delivery state.

    Every flow that needs a delivery (order placement, payment verification,
    admin status/courier updates) goes through ``get_or_create``, which
    guarantees exactly one delivery row per order:

    - in-process, calls for the same order are serialized by ``OrderLocks``
    - in the store, the order row is locked FOR UPDATE before the lookup
    - the unique constraint on ``deliveries.order_id`` catches anything
      that still races; the loser rolls back and re-reads the winner's row
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        event_bus: EventBusProtocol,
        locks: Optional[OrderLocks] = None,
    ) -> None:
        """Initialize delivery service.

        Args:
            session_factory: SQLAlchemy async session factory
            event_bus: Bus used for fire-and-forget side effects
            locks: Shared per-order locks (a private set when omitted)
        """
        self._session_factory = session_factory
        self._event_bus = event_bus
        self._locks = locks or OrderLocks()

    # =========================================================================
    # PROVISIONING
    # =========================================================================

    async def get_or_create(
        self,
        order_id: str,
        address: Optional[str] = None,
        courier: Optional[str] = None,
    ) -> DeliveryDTO:
        """Return the order's delivery, creating it on first need.

        Args:
            order_id: Order identifier
            address: Address for a new delivery (defaults to the order's address)
            courier: Courier for a new delivery (defaults to "Default Courier")

        Returns:
            DeliveryDTO (existing rows are returned unchanged)

        Raises:
            NotFoundError: If the order does not exist
        """
        _, delivery, _ = await self._in_delivery_transaction(order_id, address=address, courier=courier)
        return self._to_dto(delivery)

    async def _in_delivery_transaction(
        self,
        order_id: str,
        work: Optional[DeliveryWork] = None,
        address: Optional[str] = None,
        courier: Optional[str] = None,
    ) -> Tuple[Order, Delivery, bool]:
        """Run ``work`` on the order's delivery inside one transaction.

        Returns:
            (order, delivery, created)
        """
        async with self._locks.hold(order_id):
            for attempt in range(1, PROVISION_ATTEMPTS + 1):
                uow = create_uow(self._session_factory)
                try:
                    async with uow:
                        order, delivery, created = await self._get_or_create(
                            uow, order_id, address, courier
                        )
                        if work is not None:
                            await work(uow, order, delivery)
                        await uow.commit()
                        return order, delivery, created
                except IntegrityError:
                    if attempt == PROVISION_ATTEMPTS:
                        raise
                    logger.warning(
                        f"Delivery for order {order_id} was created concurrently; re-reading"
                    )
        raise RuntimeError("unreachable")  # pragma: no cover

    async def _get_or_create(
        self,
        uow: UnitOfWork,
        order_id: str,
        address: Optional[str],
        courier: Optional[str],
    ) -> Tuple[Order, Delivery, bool]:
        order = await uow.orders.get(order_id, for_update=True)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")

        existing = await uow.deliveries.get_by_order(order_id)
        if existing is not None:
            return order, existing, False

        delivery = Delivery.provision(order_id, address or order.address, courier)
        await uow.deliveries.add(delivery)
        logger.info(f"📦 Delivery auto-created for order {order_id} with courier {delivery.courier}")
        return order, delivery, True

    # =========================================================================
    # UPDATES
    # =========================================================================

    async def update_status(self, order_id: str, status: str) -> DeliveryDTO:
        """Set the delivery status and mirror it onto the order.

        Both rows change in one transaction. The customer is notified
        afterwards, in the background.

        Raises:
            ValidationError: If status is not a DeliveryStatus value
            NotFoundError: If the order does not exist
        """
        try:
            new_status = DeliveryStatus.parse(status)
        except ValueError as e:
            raise ValidationError(str(e), param="status") from None

        execution_ids: List[str] = []

        async def apply(uow: UnitOfWork, order: Order, delivery: Delivery) -> None:
            delivery.change_status(new_status)
            await uow.deliveries.save(delivery)
            await uow.orders.update_status(order.id, new_status.value)
            execution_ids.append(str(uow.execution_id))

        order, delivery, _ = await self._in_delivery_transaction(order_id, apply)
        logger.info(f"🚚 Delivery and order #{order_id} status updated to '{new_status.value}'")

        self._event_bus.emit(
            events.delivery_status_updated(
                execution_ids[-1], order_id, order.user_id, new_status.value
            )
        )
        return self._to_dto(delivery)

    async def assign_courier(self, order_id: str, courier: Optional[str]) -> DeliveryDTO:
        """Assign a courier to the order's delivery.

        Raises:
            ValidationError: If courier is empty
            NotFoundError: If the order does not exist
        """
        if not courier or not courier.strip():
            raise ValidationError("Courier is required", param="courier")

        execution_ids: List[str] = []

        async def apply(uow: UnitOfWork, order: Order, delivery: Delivery) -> None:
            delivery.assign_courier(courier)
            await uow.deliveries.save(delivery)
            execution_ids.append(str(uow.execution_id))

        order, delivery, _ = await self._in_delivery_transaction(order_id, apply)
        logger.info(f"👤 Courier '{delivery.courier}' assigned to delivery for order #{order_id}")

        self._event_bus.emit(
            events.courier_assigned(execution_ids[-1], order_id, order.user_id, delivery.courier)
        )
        return self._to_dto(delivery)

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_delivery(self, order_id: str) -> DeliveryDTO:
        """Get the delivery of an order without creating one.

        Raises:
            NotFoundError: If the order has no delivery
        """
        uow = create_uow(self._session_factory)
        async with uow:
            delivery = await uow.deliveries.get_by_order(order_id)
            if delivery is None:
                raise NotFoundError("Delivery not found for this order")
            return self._to_dto(delivery)

    async def list_deliveries(self) -> List[DeliveryOverviewDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            overviews = await uow.deliveries.list_overview()
            return [
                DeliveryOverviewDTO(
                    delivery_id=o.delivery_id,
                    order_id=o.order_id,
                    address=o.address,
                    courier=o.courier,
                    status=o.status,
                    created_at=o.created_at,
                    updated_at=o.updated_at,
                    total_amount=o.total_amount,
                    order_status=o.order_status,
                    customer_name=o.customer_name,
                    email=o.email,
                )
                for o in overviews
            ]

    async def list_couriers(self) -> List[CourierDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            return [CourierDTO(name=name) for name in await uow.deliveries.list_couriers()]

    @staticmethod
    def _to_dto(delivery: Delivery) -> DeliveryDTO:
        return DeliveryDTO(
            id=delivery.id,
            order_id=delivery.order_id,
            address=delivery.address,
            courier=delivery.courier,
            status=delivery.status.value,
            created_at=delivery.created_at,
            updated_at=delivery.updated_at,
        )
