"""Application tests for DeliveryService: provisioning, updates and their side effects."""

import asyncio

import pytest

from core.application.services import DeliveryService
from core.data.models import DeliveryModel, OrderModel
from core.data.repositories import SqlAlchemyDeliveryRepository
from core.domain.enums import NotificationType
from core.domain.exceptions import NotFoundError, ValidationError
from tests.support import CUSTOMER_ID, count_rows


async def _momo_order_id(container, order_request) -> str:
    """An order that has no delivery yet."""
    placed = await container.orders.place_order(
        CUSTOMER_ID, order_request(paymentMethod="momo", paymentChannel="mtn")
    )
    await container.event_bus.drain()
    return placed.order.id


async def _order_status(container, order_id: str) -> str:
    async with container.session_factory() as session:
        return (await session.get(OrderModel, order_id)).status


# =============================================================================
# PROVISIONING
# =============================================================================


@pytest.mark.asyncio
async def test_concurrent_get_or_create_makes_one_row(container, order_request):
    order_id = await _momo_order_id(container, order_request)

    results = await asyncio.gather(
        *[container.deliveries.get_or_create(order_id) for _ in range(10)]
    )

    assert len({delivery.id for delivery in results}) == 1
    assert await count_rows(container.session_factory, DeliveryModel) == 1


@pytest.mark.asyncio
async def test_independent_services_still_make_one_row(container, order_request):
    order_id = await _momo_order_id(container, order_request)
    # Separate lock sets, as two worker processes would have
    first = DeliveryService(container.session_factory, container.event_bus)
    second = DeliveryService(container.session_factory, container.event_bus)

    results = await asyncio.gather(
        *[service.get_or_create(order_id) for service in (first, second) * 3]
    )

    assert len({delivery.id for delivery in results}) == 1
    assert await count_rows(container.session_factory, DeliveryModel) == 1


@pytest.mark.asyncio
async def test_lost_insert_race_returns_existing_row(container, order_request, monkeypatch):
    order_id = await _momo_order_id(container, order_request)
    existing = await container.deliveries.get_or_create(order_id, courier="First Courier")

    original = SqlAlchemyDeliveryRepository.get_by_order
    reads = []

    async def stale_first_read(self, order_id):
        reads.append(order_id)
        if len(reads) == 1:
            return None
        return await original(self, order_id)

    monkeypatch.setattr(SqlAlchemyDeliveryRepository, "get_by_order", stale_first_read)

    delivery = await container.deliveries.get_or_create(order_id, courier="Second Courier")

    assert delivery.id == existing.id
    assert delivery.courier == "First Courier"
    assert len(reads) == 2
    assert await count_rows(container.session_factory, DeliveryModel) == 1


@pytest.mark.asyncio
async def test_existing_delivery_is_returned_unchanged(container, order_request):
    order_id = await _momo_order_id(container, order_request)
    created = await container.deliveries.get_or_create(order_id, address="Kumasi", courier="Ace")

    again = await container.deliveries.get_or_create(order_id, address="Tamale", courier="Other")

    assert again.id == created.id
    assert again.address == "Kumasi"
    assert again.courier == "Ace"


@pytest.mark.asyncio
async def test_get_or_create_for_missing_order(container):
    with pytest.raises(NotFoundError):
        await container.deliveries.get_or_create("no-such-order")

    assert await count_rows(container.session_factory, DeliveryModel) == 0


@pytest.mark.asyncio
async def test_get_delivery_does_not_create(container, order_request):
    order_id = await _momo_order_id(container, order_request)

    with pytest.raises(NotFoundError):
        await container.deliveries.get_delivery(order_id)

    assert await count_rows(container.session_factory, DeliveryModel) == 0


# =============================================================================
# STATUS UPDATES
# =============================================================================


@pytest.mark.asyncio
async def test_invalid_status_leaves_rows_untouched(container, order_request):
    placed = await container.orders.place_order(CUSTOMER_ID, order_request())

    with pytest.raises(ValidationError) as exc_info:
        await container.deliveries.update_status(placed.order.id, "teleported")

    assert exc_info.value.param == "status"
    assert "Must be one of" in exc_info.value.message
    delivery = await container.deliveries.get_delivery(placed.order.id)
    assert delivery.status == "pending"
    assert await _order_status(container, placed.order.id) == "pending"


@pytest.mark.asyncio
async def test_shipped_auto_creates_delivery_and_mirrors_order(container, order_request):
    order_id = await _momo_order_id(container, order_request)

    delivery = await container.deliveries.update_status(order_id, "shipped")

    assert delivery.status == "shipped"
    assert await _order_status(container, order_id) == "shipped"
    assert await count_rows(container.session_factory, DeliveryModel) == 1


@pytest.mark.asyncio
async def test_status_update_notifies_customer(container, realtime, channels, order_request):
    placed = await container.orders.place_order(CUSTOMER_ID, order_request())
    await container.event_bus.drain()
    channels[NotificationType.EMAIL].clear()

    await container.deliveries.update_status(placed.order.id, "processing")
    await container.event_bus.drain()

    pushes = realtime.events_for(f"user_{CUSTOMER_ID}")
    assert pushes == [
        (
            "delivery_status_update",
            {
                "orderId": placed.order.id,
                "status": "processing",
                "message": f"Your delivery for order #{placed.order.id} is now processing.",
            },
        )
    ]
    emails = channels[NotificationType.EMAIL].get_notifications()
    assert [email["title"] for email in emails] == ["Delivery Status Updated"]


@pytest.mark.asyncio
async def test_update_status_for_missing_order(container):
    with pytest.raises(NotFoundError):
        await container.deliveries.update_status("no-such-order", "shipped")


# =============================================================================
# COURIER ASSIGNMENT
# =============================================================================


@pytest.mark.asyncio
@pytest.mark.parametrize("courier", ["", "   ", None])
async def test_empty_courier_is_rejected_without_mutation(container, order_request, courier):
    placed = await container.orders.place_order(CUSTOMER_ID, order_request())

    with pytest.raises(ValidationError):
        await container.deliveries.assign_courier(placed.order.id, courier)

    delivery = await container.deliveries.get_delivery(placed.order.id)
    assert delivery.courier == "Default Courier"


@pytest.mark.asyncio
async def test_assign_courier_pushes_realtime_event(container, realtime, order_request):
    placed = await container.orders.place_order(CUSTOMER_ID, order_request())

    delivery = await container.deliveries.assign_courier(placed.order.id, "Kwame Express")
    await container.event_bus.drain()

    assert delivery.courier == "Kwame Express"
    event, data = realtime.events_for(f"user_{CUSTOMER_ID}")[-1]
    assert event == "courier_assigned"
    assert data["courier"] == "Kwame Express"
    assert data["message"] == (
        f"A courier (Kwame Express) has been assigned to your order #{placed.order.id}."
    )


# =============================================================================
# LISTINGS
# =============================================================================


@pytest.mark.asyncio
async def test_listings_join_order_and_customer(container, order_request):
    first = await container.orders.place_order(CUSTOMER_ID, order_request())
    second = await container.orders.place_order(CUSTOMER_ID, order_request())
    await container.deliveries.assign_courier(first.order.id, "Ace Riders")
    await container.deliveries.assign_courier(second.order.id, "Ace Riders")

    overviews = await container.deliveries.list_deliveries()
    couriers = await container.deliveries.list_couriers()

    assert {o.order_id for o in overviews} == {first.order.id, second.order.id}
    assert overviews[0].customer_name == "Ama Mensah"
    assert overviews[0].email == "ama@example.com"
    assert [c.name for c in couriers] == ["Ace Riders"]
