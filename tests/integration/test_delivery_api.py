"""Integration tests for Delivery API endpoints."""

import pytest

from core.data.models import DeliveryModel
from tests.support import count_rows


async def _place(client, headers, payload) -> str:
    response = await client.post("/api/v1/orders", json=payload, headers=headers)
    return response.json()["data"]["order"]["id"]


@pytest.fixture
def momo_payload(order_payload):
    order_payload.update(paymentMethod="momo", paymentChannel="mtn")
    return order_payload


@pytest.mark.asyncio
async def test_update_status(client, container, customer_headers, manager_headers, order_payload):
    order_id = await _place(client, customer_headers, order_payload)

    response = await client.patch(
        f"/api/v1/delivery/{order_id}/status", json={"status": "shipped"}, headers=manager_headers
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "shipped"
    order = await container.orders.get_order(order_id)
    assert order.status == "shipped"


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_value(client, customer_headers, admin_headers, order_payload):
    order_id = await _place(client, customer_headers, order_payload)

    response = await client.patch(
        f"/api/v1/delivery/{order_id}/status", json={"status": "lost"}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "status"


@pytest.mark.asyncio
async def test_assign_courier(client, customer_headers, admin_headers, order_payload):
    order_id = await _place(client, customer_headers, order_payload)

    empty = await client.patch(
        f"/api/v1/delivery/{order_id}/courier", json={"courier": "  "}, headers=admin_headers
    )
    assigned = await client.patch(
        f"/api/v1/delivery/{order_id}/courier", json={"courier": "Ace Riders"}, headers=admin_headers
    )

    assert empty.status_code == 400
    assert assigned.status_code == 200
    assert assigned.json()["data"]["courier"] == "Ace Riders"


@pytest.mark.asyncio
async def test_staff_routes_reject_customers(client, customer_headers, order_payload):
    order_id = await _place(client, customer_headers, order_payload)

    listing = await client.get("/api/v1/delivery", headers=customer_headers)
    status = await client.patch(
        f"/api/v1/delivery/{order_id}/status", json={"status": "shipped"}, headers=customer_headers
    )

    assert listing.status_code == 403
    assert status.status_code == 403


@pytest.mark.asyncio
async def test_get_delivery_does_not_provision(
    client, container, customer_headers, other_customer_headers, momo_payload
):
    order_id = await _place(client, customer_headers, momo_payload)

    own = await client.get(f"/api/v1/delivery/{order_id}", headers=customer_headers)
    foreign = await client.get(f"/api/v1/delivery/{order_id}", headers=other_customer_headers)

    assert own.status_code == 404
    assert foreign.status_code == 403
    assert await count_rows(container.session_factory, DeliveryModel) == 0


@pytest.mark.asyncio
async def test_create_delivery_is_idempotent(client, container, customer_headers, admin_headers, momo_payload):
    order_id = await _place(client, customer_headers, momo_payload)
    body = {"orderId": order_id, "address": "Airport Residential", "courier": "Ace Riders"}

    first = await client.post("/api/v1/delivery", json=body, headers=admin_headers)
    second = await client.post("/api/v1/delivery", json=body, headers=admin_headers)
    fetched = await client.get(f"/api/v1/delivery/{order_id}", headers=customer_headers)

    assert first.status_code == 201
    assert second.json()["data"]["id"] == first.json()["data"]["id"]
    assert fetched.json()["data"]["address"] == "Airport Residential"
    assert await count_rows(container.session_factory, DeliveryModel) == 1


@pytest.mark.asyncio
async def test_listings(client, customer_headers, manager_headers, order_payload):
    order_id = await _place(client, customer_headers, order_payload)
    await client.patch(
        f"/api/v1/delivery/{order_id}/courier", json={"courier": "Ace Riders"}, headers=manager_headers
    )

    deliveries = await client.get("/api/v1/delivery", headers=manager_headers)
    couriers = await client.get("/api/v1/delivery/couriers/all", headers=manager_headers)

    rows = deliveries.json()["data"]
    assert [row["order_id"] for row in rows] == [order_id]
    assert rows[0]["customer_name"] == "Ama Mensah"
    assert couriers.json()["data"] == [{"name": "Ace Riders"}]


@pytest.mark.asyncio
async def test_assign_courier_rejects_overlong_name(client, container, customer_headers, admin_headers, order_payload):
    order_id = await _place(client, customer_headers, order_payload)

    response = await client.patch(
        f"/api/v1/delivery/{order_id}/courier", json={"courier": "C" * 101}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "courier"
    delivery = await container.deliveries.get_delivery(order_id)
    assert delivery.courier == "Default Courier"
